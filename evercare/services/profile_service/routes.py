from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from evercare.services.profile_service.dependencies import (
    get_caregiver_profile_service,
    get_careseeker_profile_service,
)
from evercare.services.profile_service.service import CaregiverProfileService, CareseekerProfileService
from evercare.shared.models.common import MessageResponse, PaginationParams
from evercare.shared.models.profile_dto import (
    CaregiverProfileDTO,
    CaregiverProfileFields,
    CaregiverProfilePageResponse,
    CareseekerProfileDTO,
    CareseekerProfileFields,
    CareseekerProfileRequest,
    CareseekerProfileResponse,
    CreateCaregiverProfileRequest,
    PhotoUploadResponse,
    UploadPhotoRequest,
)

router = APIRouter(prefix="/caregiverProfile", tags=["Caregiver profiles"])
careseeker_router = APIRouter(prefix="/careseeker-profile", tags=["Careseeker profiles"])

PROFILE_NOT_FOUND = "Profile not found"


# =============================================================================
# CAREGIVER
# =============================================================================

@router.get("", response_model=CaregiverProfilePageResponse)
async def list_caregiver_profiles(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    service: CaregiverProfileService = Depends(get_caregiver_profile_service)
):
    return await service.list_profiles(PaginationParams(page=page, limit=limit))


@router.get("/{caregiver_id}", response_model=CaregiverProfileDTO)
async def get_caregiver_profile(
    caregiver_id: int,
    service: CaregiverProfileService = Depends(get_caregiver_profile_service)
):
    profile = await service.get_profile(caregiver_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND)
    return profile


@router.post("", response_model=CaregiverProfileDTO, status_code=status.HTTP_201_CREATED)
async def create_caregiver_profile(
    request: CreateCaregiverProfileRequest,
    service: CaregiverProfileService = Depends(get_caregiver_profile_service)
):
    profile = await service.create_profile(request)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Profile already exists for this caregiver",
        )
    return profile


@router.put("/{caregiver_id}", response_model=CaregiverProfileDTO)
async def update_caregiver_profile(
    caregiver_id: int,
    request: CaregiverProfileFields,
    service: CaregiverProfileService = Depends(get_caregiver_profile_service)
):
    profile = await service.update_profile(caregiver_id, request)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND)
    return profile


@router.delete("/{caregiver_id}", response_model=MessageResponse)
async def delete_caregiver_profile(
    caregiver_id: int,
    service: CaregiverProfileService = Depends(get_caregiver_profile_service)
):
    deleted = await service.delete_profile(caregiver_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND)
    return MessageResponse(message="Profile deleted successfully")


@router.post("/{caregiver_id}/upload-photo", response_model=PhotoUploadResponse)
async def upload_profile_photo(
    caregiver_id: int,
    request: UploadPhotoRequest,
    service: CaregiverProfileService = Depends(get_caregiver_profile_service)
):
    profile = await service.upload_photo(caregiver_id, request.profile_photo)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND)
    return PhotoUploadResponse(
        message="Profile photo uploaded successfully",
        profile_photo=request.profile_photo,
        profile=profile,
    )


# =============================================================================
# CARESEEKER
# =============================================================================

def _saved(profile: CareseekerProfileDTO, created: bool, response: Response) -> CareseekerProfileResponse:
    if created:
        return CareseekerProfileResponse(message="Profile created successfully", profile=profile)
    response.status_code = status.HTTP_200_OK
    return CareseekerProfileResponse(message="Profile updated successfully", profile=profile)


@careseeker_router.get("/{careseeker_id}", response_model=CareseekerProfileResponse)
async def get_careseeker_profile(
    careseeker_id: int,
    service: CareseekerProfileService = Depends(get_careseeker_profile_service)
):
    profile = await service.get_profile(careseeker_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND)
    return CareseekerProfileResponse(message="Profile retrieved successfully", profile=profile)


@careseeker_router.post("", response_model=CareseekerProfileResponse, status_code=status.HTTP_201_CREATED)
async def save_careseeker_profile(
    request: CareseekerProfileRequest,
    response: Response,
    service: CareseekerProfileService = Depends(get_careseeker_profile_service)
):
    profile, created = await service.save_profile(request.careseeker_id, request)
    return _saved(profile, created, response)


@careseeker_router.put("/{careseeker_id}", response_model=CareseekerProfileResponse, status_code=status.HTTP_201_CREATED)
async def replace_careseeker_profile(
    careseeker_id: int,
    request: CareseekerProfileFields,
    response: Response,
    service: CareseekerProfileService = Depends(get_careseeker_profile_service)
):
    profile, created = await service.save_profile(careseeker_id, request)
    return _saved(profile, created, response)
