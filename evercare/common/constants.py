# evercare/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class UserType(str, Enum):
    """Роли пользователей маркетплейса."""
    CAREGIVER = "caregiver"
    CARESEEKER = "careseeker"


class ClientEvent(str, Enum):
    """События, которые клиент отправляет по WebSocket."""
    USER_ONLINE = "user_online"
    JOIN_CHAT = "join_chat"
    LEAVE_CHAT = "leave_chat"
    SEND_MESSAGE = "send_message"
    TYPING = "typing"


class ServerEvent(str, Enum):
    """События, которые сервер рассылает клиентам."""
    USER_STATUS_CHANGE = "user_status_change"
    NEW_MESSAGE = "new_message"
    USER_TYPING = "user_typing"
    ERROR = "error"
