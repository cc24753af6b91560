# evercare/services/profile_service/__init__.py
"""
Сервис профилей caregiver и careseeker.
"""
