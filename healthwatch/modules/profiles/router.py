from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from healthwatch.modules.profiles.models import Profile
from healthwatch.modules.profiles.schemas import ProfileCreate, ProfileListQuery, ProfileRead
from healthwatch.modules.profiles.service import ProfileService

router = APIRouter()


@router.post(
    "",
    response_model=ProfileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user profile",
)
async def create_profile(
    profile_in: ProfileCreate,
    service: ProfileService = Depends(ProfileService),
) -> Profile:
    try:
        return await service.create(profile_in)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.get("", response_model=List[ProfileRead], summary="List profiles")
async def list_profiles(
    params: ProfileListQuery = Depends(),
    service: ProfileService = Depends(ProfileService),
) -> List[Profile]:
    return await service.get_multi(role=params.role, village=params.village)
