"""Registration and login endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_session_signer, get_user_store
from app.core.security import SessionSigner
from app.db.users import UserStore
from app.schemas.auth import LoginRequest, LoginResponse
from app.schemas.user import MessageResponse, UserRegister
from app.services.users import login_user, register_user

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, store: UserStore = Depends(get_user_store)) -> MessageResponse:
    await register_user(store, payload)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    store: UserStore = Depends(get_user_store),
    signer: SessionSigner = Depends(get_session_signer),
) -> LoginResponse:
    token = await login_user(store, payload, signer)
    return LoginResponse(message="Login successful", token=token)
