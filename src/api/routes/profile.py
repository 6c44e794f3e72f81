"""Profile routes.

Every authenticated caller can read all profiles; a caller can only update
their own, which the profile policy enforces.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.auth import get_current_account
from core.dependencies import ProfileManagerDep
from core.exceptions import ProfileNotFoundError
from models.account import AccountModel
from schemas.profile import Profile, ProfileUpdate

router = APIRouter(
    prefix="/api/profiles",
    tags=["Profile"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=List[Profile], summary="List profiles")
def list_profiles(profile_manager: ProfileManagerDep) -> List[Profile]:
    return [Profile.model_validate(m) for m in profile_manager.list_profiles()]


@router.get("/me", response_model=Profile, summary="Own profile")
def get_own_profile(
    profile_manager: ProfileManagerDep,
    current_account: AccountModel = Depends(get_current_account),
) -> Profile:
    try:
        return Profile.model_validate(profile_manager.get_profile(current_account.id))
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{profile_id}", response_model=Profile, summary="Get a profile")
def get_profile(profile_id: str, profile_manager: ProfileManagerDep) -> Profile:
    try:
        return Profile.model_validate(profile_manager.get_profile(profile_id))
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{profile_id}", response_model=Profile, summary="Update a profile")
def update_profile(
    profile_id: str,
    req: ProfileUpdate,
    profile_manager: ProfileManagerDep,
) -> Profile:
    """Update a profile. Updating somebody else's profile is rejected with 403."""
    try:
        model = profile_manager.update_profile(profile_id, req.model_dump(exclude_unset=True))
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Profile.model_validate(model)
