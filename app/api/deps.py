"""Shared FastAPI dependencies."""

from fastapi import Depends, HTTPException, Request

from app.schemas.account import ActiveSession
from app.services.account_directory import AccountDirectory
from app.services.container import AppServices
from app.services.profile_store import ProfileStore


def get_services(request: Request) -> AppServices:
    return request.app.state.services


def get_accounts(services: AppServices = Depends(get_services)) -> AccountDirectory:
    return services.accounts


def get_profiles(services: AppServices = Depends(get_services)) -> ProfileStore:
    return services.profiles


def require_session(accounts: AccountDirectory = Depends(get_accounts)) -> ActiveSession:
    """Gate for application endpoints: no active session means sign in first."""
    session = accounts.get_active_session()
    if session is None:
        raise HTTPException(status_code=401, detail="Sign in to continue.")
    return session
