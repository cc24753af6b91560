# evercare/services/jobposting_service/__init__.py
"""
Сервис объявлений careseeker и уведомлений об интересе caregiver.
"""
