"""Auth endpoints — register, login, logout, current session."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.deps import get_accounts
from app.core.exceptions import DuplicateAccountError, InvalidCredentialsError
from app.schemas.account import ActiveSession, LoginRequest, RegisterRequest
from app.services.account_directory import AccountDirectory

router = APIRouter()


@router.post("/register", response_model=ActiveSession, status_code=201)
async def register(payload: RegisterRequest, accounts: AccountDirectory = Depends(get_accounts)):
    """Create an account and make it the active session."""
    try:
        return await accounts.register(payload.name, payload.email, payload.password)
    except DuplicateAccountError:
        raise HTTPException(status_code=409, detail="Email is already registered.")


@router.post("/login", response_model=ActiveSession)
async def login(payload: LoginRequest, accounts: AccountDirectory = Depends(get_accounts)):
    try:
        return await accounts.login(payload.email, payload.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Invalid credentials.")


@router.post("/logout", status_code=204)
async def logout(accounts: AccountDirectory = Depends(get_accounts)):
    """Idempotent: logging out with no active session is fine."""
    await accounts.logout()
    return Response(status_code=204)


@router.get("/session", response_model=Optional[ActiveSession])
async def current_session(accounts: AccountDirectory = Depends(get_accounts)):
    """Active session, or null when logged out."""
    return accounts.get_active_session()
