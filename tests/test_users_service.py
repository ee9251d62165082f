"""
Credential service and persistence gateway against an in-memory database.
"""

from datetime import date, datetime

import pytest
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import PyMongoError

from app.core.exceptions import AuthenticationError, ConflictError, PersistenceError, ValidationError
from app.core.security import PasswordHasher, SessionSigner
from app.db import UserStore, init_database
from app.models.user import User
from app.schemas.auth import LoginRequest
from app.schemas.user import UserRegister
from app.services.users import login_user, register_user


def _form(**overrides):
    data = {
        "username": "Bob",
        "name": "Bob",
        "email": "Bob@X.com",
        "phone": "555",
        "dob": date(1990, 1, 1),
        "password": "p1",
        "confirm_password": "p1",
    }
    data.update(overrides)
    return UserRegister(**data)


async def test_register_persists_hashed_user(store):
    user = await register_user(store, _form(bio="hello"))

    stored = await store.find_one_by_field("email", "bob@x.com")
    assert stored is not None
    assert stored.id == user.id
    assert stored.username == "bob"
    assert stored.bio == "hello"
    assert stored.dob.date() == date(1990, 1, 1)
    assert stored.password_hash != "p1"
    assert PasswordHasher.verify("p1", stored.password_hash)


async def test_register_twice_with_same_email(store):
    await register_user(store, _form())

    with pytest.raises(ConflictError):
        await register_user(store, _form(username="other"))


async def test_register_mismatch(store):
    with pytest.raises(ValidationError, match="Passwords do not match"):
        await register_user(store, _form(confirm_password="p2"))

    assert await store.find_one_by_field("email", "bob@x.com") is None


async def test_login_token_carries_user_id_and_expiry(store, settings):
    user = await register_user(store, _form())
    signer = SessionSigner(settings)

    token = await login_user(store, LoginRequest(email="bob@x.com", password="p1"), signer)

    payload = signer.loads(token)
    assert payload["sub"] == str(user.id)
    assert payload["exp"] == payload["iat"] + 30 * 24 * 60 * 60


async def test_login_email_lookup_is_case_insensitive(store, settings):
    await register_user(store, _form())

    token = await login_user(store, LoginRequest(email=" BOB@x.com", password="p1"), SessionSigner(settings))

    assert token


async def test_login_failures_share_one_message(store, settings):
    await register_user(store, _form())
    signer = SessionSigner(settings)

    with pytest.raises(AuthenticationError) as unknown:
        await login_user(store, LoginRequest(email="nobody@x.com", password="p1"), signer)
    with pytest.raises(AuthenticationError) as wrong:
        await login_user(store, LoginRequest(email="bob@x.com", password="wrong"), signer)

    assert str(unknown.value) == str(wrong.value) == "Invalid credentials"


async def test_login_requires_both_fields(store, settings):
    with pytest.raises(ValidationError):
        await login_user(store, LoginRequest(email="bob@x.com"), SessionSigner(settings))

def _user(**overrides):
    data = {
        "username": "bob",
        "name": "Bob",
        "email": "bob@x.com",
        "phone": "555",
        "dob": datetime(1990, 1, 1),
        "password_hash": PasswordHasher.hash("p1"),
    }
    data.update(overrides)
    return User(**data)


class _BrokenCollection:
    async def find_one(self, *args, **kwargs):
        raise PyMongoError("connection reset")

    async def insert_one(self, *args, **kwargs):
        raise PyMongoError("disk full")


async def test_insert_same_email_hits_unique_index(store):
    await store.insert(_user())

    with pytest.raises(ConflictError):
        await store.insert(_user(username="other"))


async def test_insert_same_username_hits_unique_index(store):
    await store.insert(_user())

    with pytest.raises(ConflictError):
        await store.insert(_user(email="other@x.com"))


async def test_insert_assigns_id(store):
    user = await store.insert(_user())

    assert user.id is not None
    assert (await store.find_one_by_field("username", "bob")).id == user.id


async def test_stores_on_different_databases_are_isolated():
    client = AsyncMongoMockClient()
    first = UserStore(await init_database(client, "signup_a"))
    second = UserStore(await init_database(client, "signup_b"))

    await first.insert(_user())

    assert await first.find_one_by_field("email", "bob@x.com") is not None
    assert await second.find_one_by_field("email", "bob@x.com") is None
    assert await client["signup_a"]["users"].count_documents({}) == 1
    assert await client["signup_b"]["users"].count_documents({}) == 0


async def test_lookup_failure_is_persistence_error(store, monkeypatch):
    monkeypatch.setattr(store, "collection", _BrokenCollection())

    with pytest.raises(PersistenceError):
        await store.find_one_by_field("email", "bob@x.com")


async def test_insert_failure_is_persistence_error(store, monkeypatch):
    monkeypatch.setattr(store, "collection", _BrokenCollection())

    with pytest.raises(PersistenceError, match="Failed to save user"):
        await store.insert(_user())


async def test_unknown_email_still_runs_password_check(store, settings, monkeypatch):
    calls = []
    real_verify = PasswordHasher.verify

    def counting_verify(password, hashed):
        calls.append(password)
        return real_verify(password, hashed)

    monkeypatch.setattr(PasswordHasher, "verify", staticmethod(counting_verify))

    with pytest.raises(AuthenticationError):
        await login_user(store, LoginRequest(email="nobody@x.com", password="p1"), SessionSigner(settings))

    assert calls == ["p1"]
