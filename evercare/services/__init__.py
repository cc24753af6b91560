# evercare/services/__init__.py
"""
Микросервисы: chat, booking, review, jobposting.
"""
