"""
Модуль контекста бронирования (Booking Context).

Отвечает за бронирование номеров в филиалах отеля, включая:
- Проверку доступности номеров по флагу и по датам
- Расчет стоимости с учетом скидок
- Журнал подтвержденных бронирований
"""

from . import application, domain, infrastructure, interfaces

__all__ = [
    "domain",
    "application",
    "infrastructure",
    "interfaces",
]
