"""Saved profile endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from cravesmart.api.auth import get_container, require_session
from cravesmart.api.schemas import ProfileCreateRequest
from cravesmart.domain.profiles import SavedProfile, UserProfile
from cravesmart.services.sessions import SessionContext

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("")
async def list_profiles(
    request: Request, session: SessionContext = Depends(require_session)
) -> dict[str, object]:
    """Return the account's saved profiles."""
    profiles = get_container(request).account_service.list_profiles(
        session.account_id
    )
    return {"profiles": [_serialize(profile) for profile in profiles]}


@router.get("/{profile_id}")
async def get_profile(
    profile_id: UUID,
    request: Request,
    session: SessionContext = Depends(require_session),
) -> dict[str, object]:
    """Return one saved profile."""
    profile = get_container(request).account_service.get_profile(
        session.account_id, profile_id
    )
    return {"profile": _serialize(profile)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_profile(
    body: ProfileCreateRequest,
    request: Request,
    session: SessionContext = Depends(require_session),
) -> dict[str, object]:
    """Save the submitted profile under a new name."""
    saved = get_container(request).account_service.save_new_profile(
        session.account_id, body.profile_name, body.profile
    )
    return {"profile": _serialize(saved)}


@router.put("/{profile_id}")
async def update_profile(
    profile_id: UUID,
    body: UserProfile,
    request: Request,
    session: SessionContext = Depends(require_session),
) -> dict[str, object]:
    """Overwrite a saved profile, keeping its name."""
    saved = get_container(request).account_service.update_profile(
        session.account_id, profile_id, body
    )
    return {"profile": _serialize(saved)}


@router.delete("/{profile_id}")
async def delete_profile(
    profile_id: UUID,
    request: Request,
    session: SessionContext = Depends(require_session),
) -> dict[str, str]:
    """Delete a saved profile."""
    get_container(request).account_service.delete_profile(
        session.account_id, profile_id
    )
    return {"status": "ok"}


def _serialize(profile: SavedProfile) -> dict[str, object]:
    return profile.model_dump(mode="json")
