"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from fastapi import Request

from app.core.security import SessionSigner
from app.db.users import UserStore


async def get_user_store(request: Request) -> UserStore:
    return UserStore(request.app.state.database)


async def get_session_signer(request: Request) -> SessionSigner:
    return SessionSigner(request.app.state.settings)
