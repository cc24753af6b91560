from datetime import datetime
from typing import Optional, List

from pydantic import Field

from evercare.shared.models.common import CamelModel
from evercare.shared.models.enums import PreferredGender, Urgency


# =============================================================================
# CAREGIVER
# =============================================================================

class CaregiverProfileDTO(CamelModel):
    profile_id: int
    caregiver_id: int
    display_name: Optional[str] = None
    age: Optional[int] = None
    experience_years: Optional[int] = None
    specialization: Optional[str] = None
    description: Optional[str] = None
    profile_photo: Optional[str] = None
    average_rating: Optional[float] = 0
    reviews_count: Optional[int] = 0
    clients_count: Optional[int] = 0
    completed_jobs: Optional[int] = 0
    created_at: datetime
    updated_at: datetime


class CaregiverProfileFields(CamelModel):
    """Изменяемые поля профиля caregiver. При обновлении пишутся только переданные."""
    display_name: Optional[str] = Field(default=None, max_length=255)
    age: Optional[int] = Field(default=None, ge=0)
    experience_years: Optional[int] = Field(default=None, ge=0)
    specialization: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    profile_photo: Optional[str] = None
    average_rating: Optional[float] = Field(default=None, ge=0, le=5)
    reviews_count: Optional[int] = Field(default=None, ge=0)
    clients_count: Optional[int] = Field(default=None, ge=0)
    completed_jobs: Optional[int] = Field(default=None, ge=0)


class CreateCaregiverProfileRequest(CaregiverProfileFields):
    caregiver_id: int = Field(gt=0)


class CaregiverProfilePageResponse(CamelModel):
    profiles: List[CaregiverProfileDTO]
    total: int
    page: int
    limit: int
    total_pages: int


class UploadPhotoRequest(CamelModel):
    profile_photo: str = Field(min_length=1, description="URL или base64 изображения")


class PhotoUploadResponse(CamelModel):
    message: str
    profile_photo: str
    profile: CaregiverProfileDTO


# =============================================================================
# CARESEEKER
# =============================================================================

class CareseekerProfileDTO(CamelModel):
    profile_id: int
    careseeker_id: int
    about: Optional[str] = None
    care_type: Optional[str] = None
    care_experience: Optional[str] = None
    budget_range: Optional[str] = None
    location: Optional[str] = None
    urgency: Optional[Urgency] = None
    health_conditions: Optional[List[str]] = None
    care_requirements: Optional[List[str]] = None
    care_tasks_needed: Optional[List[str]] = None
    preferred_gender: Optional[PreferredGender] = None
    languages: Optional[List[str]] = None
    overall_rating: Optional[float] = 0
    total_reviews: Optional[int] = 0
    created_at: datetime
    updated_at: datetime


class CareseekerProfileFields(CamelModel):
    """Поля профиля careseeker; непереданные при обновлении сохраняют прежнее значение."""
    about: Optional[str] = None
    care_type: Optional[str] = Field(default=None, max_length=100)
    care_experience: Optional[str] = None
    budget_range: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = Field(default=None, max_length=255)
    urgency: Optional[Urgency] = None
    health_conditions: Optional[List[str]] = None
    care_requirements: Optional[List[str]] = None
    care_tasks_needed: Optional[List[str]] = None
    preferred_gender: Optional[PreferredGender] = None
    languages: Optional[List[str]] = None


class CareseekerProfileRequest(CareseekerProfileFields):
    careseeker_id: int = Field(gt=0)


class CareseekerProfileResponse(CamelModel):
    message: str
    profile: CareseekerProfileDTO
