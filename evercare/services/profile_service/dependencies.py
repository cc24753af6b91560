from evercare.infra.database import DatabaseManager
from evercare.services.profile_service.repository import (
    CaregiverProfileRepository,
    CareseekerProfileRepository,
)
from evercare.services.profile_service.service import CaregiverProfileService, CareseekerProfileService


def get_database() -> DatabaseManager:
    return DatabaseManager()


def get_caregiver_profile_service() -> CaregiverProfileService:
    return CaregiverProfileService(CaregiverProfileRepository(get_database()))


def get_careseeker_profile_service() -> CareseekerProfileService:
    return CareseekerProfileService(CareseekerProfileRepository(get_database()))
