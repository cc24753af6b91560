from enum import Enum


class BookingStatus(str, Enum):
    """Статусы бронирования."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value


class NotificationType(str, Enum):
    """Типы уведомлений для careseeker."""
    INTEREST = "interest"

    def __str__(self) -> str:
        return self.value


class Urgency(str, Enum):
    """Срочность ухода в профиле careseeker."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def __str__(self) -> str:
        return self.value


class PreferredGender(str, Enum):
    """Предпочтительный пол caregiver."""
    MALE = "male"
    FEMALE = "female"
    ANY = "any"

    def __str__(self) -> str:
        return self.value
