from typing import Optional, Tuple

from evercare.common.logger import log_info
from evercare.common.constants import TypeMsg
from evercare.services.profile_service.repository import (
    CaregiverProfileRepository,
    CareseekerProfileRepository,
)
from evercare.shared.models.common import PaginationParams, total_pages
from evercare.shared.models.profile_dto import (
    CaregiverProfileDTO,
    CaregiverProfileFields,
    CaregiverProfilePageResponse,
    CareseekerProfileDTO,
    CareseekerProfileFields,
    CreateCaregiverProfileRequest,
)

LOGGER_NAME = "profile_service"


class CaregiverProfileService:
    def __init__(self, repository: CaregiverProfileRepository):
        self.repository = repository

    async def list_profiles(self, pagination: PaginationParams) -> CaregiverProfilePageResponse:
        profiles, total = await self.repository.get_page(pagination.limit, pagination.offset)
        return CaregiverProfilePageResponse(
            profiles=profiles,
            total=total,
            page=pagination.page,
            limit=pagination.limit,
            total_pages=total_pages(total, pagination.limit),
        )

    async def get_profile(self, caregiver_id: int) -> Optional[CaregiverProfileDTO]:
        return await self.repository.get_by_caregiver(caregiver_id)

    async def create_profile(self, request: CreateCaregiverProfileRequest) -> Optional[CaregiverProfileDTO]:
        """
        Один профиль на caregiver.

        Returns:
            None если профиль уже существует
        """
        fields = request.model_dump(mode="json", exclude={"caregiver_id"}, exclude_none=True)
        profile = await self.repository.create_profile(request.caregiver_id, fields)
        if profile is not None:
            await log_info(
                f"Профиль caregiver {request.caregiver_id} создан",
                type_msg=TypeMsg.INFO,
                logger_name=LOGGER_NAME,
            )
        return profile

    async def update_profile(self, caregiver_id: int, request: CaregiverProfileFields) -> Optional[CaregiverProfileDTO]:
        # Явный null в теле очищает поле, отсутствующее поле не трогается
        updates = request.model_dump(mode="json", exclude_unset=True)
        return await self.repository.update_profile(caregiver_id, updates)

    async def upload_photo(self, caregiver_id: int, photo: str) -> Optional[CaregiverProfileDTO]:
        return await self.repository.update_profile(caregiver_id, {"profile_photo": photo})

    async def delete_profile(self, caregiver_id: int) -> bool:
        deleted = await self.repository.delete_profile(caregiver_id)
        if deleted:
            await log_info(
                f"Профиль caregiver {caregiver_id} удалён",
                type_msg=TypeMsg.INFO,
                logger_name=LOGGER_NAME,
            )
        return deleted


class CareseekerProfileService:
    def __init__(self, repository: CareseekerProfileRepository):
        self.repository = repository

    async def get_profile(self, careseeker_id: int) -> Optional[CareseekerProfileDTO]:
        return await self.repository.get_by_careseeker(careseeker_id)

    async def save_profile(
        self,
        careseeker_id: int,
        request: CareseekerProfileFields,
    ) -> Tuple[CareseekerProfileDTO, bool]:
        """
        Создаёт профиль или дополняет существующий переданными полями.

        Returns:
            (профиль, True если создан новый)
        """
        fields = request.model_dump(mode="json", include=set(CareseekerProfileFields.model_fields))
        profile, created = await self.repository.upsert_profile(careseeker_id, fields)
        action = "создан" if created else "обновлён"
        await log_info(
            f"Профиль careseeker {careseeker_id} {action}",
            type_msg=TypeMsg.INFO,
            logger_name=LOGGER_NAME,
        )
        return profile, created
