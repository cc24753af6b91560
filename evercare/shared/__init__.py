# evercare/shared/__init__.py
"""
Общие модели и утилиты для всех сервисов.
"""
