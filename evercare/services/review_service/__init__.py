# evercare/services/review_service/__init__.py
"""
Сервис отзывов и рейтингов caregiver.
"""
