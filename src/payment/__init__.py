"""
Модуль контекста оплаты (Payment Context).

Имитирует подтверждение оплаты бронирований: выставление счета
по событию бронирования и его оплату через платежный шлюз-заглушку.
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
