# evercare/infra/__init__.py
"""
Инфраструктурный слой.
Работа с PostgreSQL.
"""

from evercare.infra.database import DatabaseManager, get_db, init_db, close_db

__all__ = [
    "DatabaseManager",
    "get_db",
    "init_db",
    "close_db",
]
