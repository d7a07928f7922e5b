"""Profile endpoints — read and save the signed-in account's profile."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_profiles, require_session
from app.schemas.account import ActiveSession
from app.schemas.profile import Profile, ProfileUpdate
from app.services.profile_store import ProfileStore

router = APIRouter()


@router.get("", response_model=Profile)
async def get_profile(
    session: ActiveSession = Depends(require_session),
    profiles: ProfileStore = Depends(get_profiles),
):
    """Stored profile, or an unsaved draft seeded from the account on first visit."""
    profile = await profiles.get_profile(session.id)
    if profile is None:
        return Profile(id=session.id, name=session.name, email=session.email)
    return profile


@router.put("", response_model=Profile)
async def save_profile(
    payload: ProfileUpdate,
    session: ActiveSession = Depends(require_session),
    profiles: ProfileStore = Depends(get_profiles),
):
    """Merge the update and return the record with recomputed BMI and calories.

    On first save, name and email default to the account's.
    """
    seed = ProfileUpdate(name=session.name, email=session.email)
    return await profiles.save_profile(session.id, payload, seed=seed)
