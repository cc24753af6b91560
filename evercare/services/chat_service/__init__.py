# evercare/services/chat_service/__init__.py
"""
Сервис чата: REST для истории сообщений и WebSocket для realtime.
"""
