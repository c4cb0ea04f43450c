"""
User Endpoints
==============
Read-only access to reporters and their profile summaries.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from parkwatch.models.store import JsonStore, get_sighting_store, get_user_store
from parkwatch.schemas.wildlife import Sighting, User, UserProfile
from parkwatch.services.profile import build_profile

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/", response_model=list[User])
def list_users(users: JsonStore[User] = Depends(get_user_store)):
    return users.read_all()


@router.get("/{user_id}/profile", response_model=UserProfile)
def user_profile(
    user_id: str,
    users: JsonStore[User] = Depends(get_user_store),
    sightings: JsonStore[Sighting] = Depends(get_sighting_store),
):
    """Recent reports, per-type counts and verification rate for one user."""
    user = next((u for u in users.read_all() if u.id == user_id), None)
    if user is None:
        raise HTTPException(404, "User not found")
    return build_profile(user, sightings.read_all())
