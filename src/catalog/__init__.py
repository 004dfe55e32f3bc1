"""
Модуль каталога номеров (Catalog Context).

Хранит филиалы отеля и их фиксированный набор номеров:
- Поиск филиала по адресу
- Выборку свободных номеров по типу
"""

from . import domain, infrastructure, interfaces

__all__ = [
    "domain",
    "infrastructure",
    "interfaces",
]
