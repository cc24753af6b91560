# evercare/services/booking_service/__init__.py
"""
Сервис бронирований caregiver.
"""
