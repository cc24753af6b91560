# evercare/__init__.py
"""
Evercare: бэкенд маркетплейса услуг по уходу (caregiver / careseeker).
"""
