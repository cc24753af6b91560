# evercare/services/chat_service/realtime/__init__.py
"""
Realtime-слой чата.

- ConnectionRegistry: соединения и присутствие пользователей
- RoomMembership: подписки соединений на комнаты чатов
- ChatHub: координатор: presence, рассылка сообщений, typing
"""

from evercare.services.chat_service.realtime.connection import ClientConnection
from evercare.services.chat_service.realtime.registry import ConnectionRegistry, PresenceEntry
from evercare.services.chat_service.realtime.rooms import RoomMembership, chat_id_for
from evercare.services.chat_service.realtime.hub import ChatHub

__all__ = [
    "ClientConnection",
    "ConnectionRegistry",
    "PresenceEntry",
    "RoomMembership",
    "chat_id_for",
    "ChatHub",
]
