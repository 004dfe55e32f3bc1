"""
Общее ядро (Shared Kernel) движка бронирования.

Содержит общие типы данных и утилиты, используемые в различных ограниченных контекстах.
"""

from .config import EngineConfig
from .domain import (
    DATE_FORMAT,
    DISCOUNT_FRACTIONS,
    ROOM_TYPE_SPECS,
    AvailabilityPolicy,
    BookingErrorKind,
    BookingException,
    BookingId,
    BranchNotFound,
    CapacityExceeded,
    DateFormatError,
    DateRange,
    DiscountType,
    DomainEvent,
    # Исключения
    DomainException,
    InvalidDateRange,
    NoRoomAvailable,
    PaymentException,
    PaymentStatus,
    # Перечисления
    RoomType,
    RoomTypeSpec,
    format_price,
    # Утилиты
    now,
    parse_date,
    parse_room_type,
)

__all__ = [
    # Базовые типы
    "BookingId",
    # Основные классы
    "DateRange",
    "DomainEvent",
    "EngineConfig",
    "RoomTypeSpec",
    # Перечисления
    "RoomType",
    "DiscountType",
    "AvailabilityPolicy",
    "PaymentStatus",
    "BookingErrorKind",
    # Таблицы
    "ROOM_TYPE_SPECS",
    "DISCOUNT_FRACTIONS",
    "DATE_FORMAT",
    # Исключения
    "DomainException",
    "BookingException",
    "BranchNotFound",
    "NoRoomAvailable",
    "CapacityExceeded",
    "DateFormatError",
    "InvalidDateRange",
    "PaymentException",
    # Утилиты
    "now",
    "parse_date",
    "parse_room_type",
    "format_price",
]
