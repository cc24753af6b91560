# evercare/common/__init__.py
"""
Общие утилиты, константы и логгер.
"""

from evercare.common.logger import get_logger, log_info, log_error, log_warning, log_debug
from evercare.common.constants import TypeMsg

__all__ = [
    "get_logger",
    "log_info",
    "log_error",
    "log_warning",
    "log_debug",
    "TypeMsg",
]
