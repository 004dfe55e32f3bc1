"""
Основные доменные типы и утилиты общего ядра.
"""

import re
from datetime import date, datetime
from enum import Enum
from typing import Dict, NamedTuple, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Общие типы идентификаторов
BookingId = int

DATE_FORMAT = "yyyy-MM-dd"
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


# Общие перечисления
class RoomType(str, Enum):
    """Типы номеров в отеле."""

    SINGLE = "Single"
    DOUBLE = "Double"


class RoomTypeSpec(NamedTuple):
    """Тариф и вместимость типа номера."""

    nightly_rate: float
    capacity: int


ROOM_TYPE_SPECS: Dict[RoomType, RoomTypeSpec] = {
    RoomType.SINGLE: RoomTypeSpec(nightly_rate=100.0, capacity=1),
    RoomType.DOUBLE: RoomTypeSpec(nightly_rate=150.0, capacity=3),
}


class DiscountType(str, Enum):
    """Промо-скидки, доступные при бронировании."""

    NONE = "None"
    BIRTHDAY = "Birthday 10%"
    NEW_YEAR = "New Year 20%"
    CORPORATE = "Corporate 15%"


DISCOUNT_FRACTIONS: Dict[DiscountType, float] = {
    DiscountType.NONE: 0.0,
    DiscountType.BIRTHDAY: 0.10,
    DiscountType.NEW_YEAR: 0.20,
    DiscountType.CORPORATE: 0.15,
}


class AvailabilityPolicy(str, Enum):
    """Источник истины для доступности номера."""

    FLAG = "flag"  # номер исключается после первой брони
    DATE_RANGE = "date_range"  # только пересечение периодов


class PaymentStatus(str, Enum):
    """Статусы платежей."""

    PENDING = "pending"
    PAID = "paid"


class BookingErrorKind(str, Enum):
    """Виды ошибок бронирования."""

    BRANCH_NOT_FOUND = "BranchNotFound"
    NO_ROOM_AVAILABLE = "NoRoomAvailable"
    CAPACITY_EXCEEDED = "CapacityExceeded"
    DATE_FORMAT_ERROR = "DateFormatError"
    INVALID_DATE_RANGE = "InvalidDateRange"


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class BookingException(DomainException):
    """Ошибка во входных данных бронирования."""

    kind: BookingErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BranchNotFound(BookingException):
    kind = BookingErrorKind.BRANCH_NOT_FOUND


class NoRoomAvailable(BookingException):
    kind = BookingErrorKind.NO_ROOM_AVAILABLE


class CapacityExceeded(BookingException):
    kind = BookingErrorKind.CAPACITY_EXCEEDED


class DateFormatError(BookingException):
    kind = BookingErrorKind.DATE_FORMAT_ERROR


class InvalidDateRange(BookingException):
    kind = BookingErrorKind.INVALID_DATE_RANGE


class PaymentException(DomainException):
    """Ошибка при подтверждении оплаты."""

    pass


def parse_date(value: Union[str, date]) -> date:
    """
    Разбирает дату в формате yyyy-MM-dd.

    Raises:
        DateFormatError: если строка не является календарной датой в этом формате
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
        raise DateFormatError(f"Неверный формат даты: {value!r}. Используйте {DATE_FORMAT}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise DateFormatError(f"Несуществующая дата: {value!r}") from None


def parse_room_type(value: Union[str, RoomType]) -> Optional[RoomType]:
    """Возвращает тип номера или None для неизвестного значения."""
    try:
        return RoomType(value)
    except ValueError:
        return None


class DateRange(BaseModel):
    """Полуоткрытый диапазон дат [check_in, check_out)."""

    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @model_validator(mode="after")
    def check_out_after_check_in(self) -> "DateRange":
        if self.check_out <= self.check_in:
            raise ValueError("Дата выезда должна быть позже даты заезда")
        return self

    @classmethod
    def parse(cls, check_in: Union[str, date], check_out: Union[str, date]) -> "DateRange":
        """
        Создает диапазон из строк yyyy-MM-dd.

        Raises:
            DateFormatError: если одна из дат не разбирается
            InvalidDateRange: если дата выезда не позже даты заезда
        """
        start = parse_date(check_in)
        end = parse_date(check_out)
        if end <= start:
            raise InvalidDateRange(
                f"Дата выезда {end.isoformat()} должна быть позже даты заезда {start.isoformat()}"
            )
        return cls(check_in=start, check_out=end)

    @property
    def nights(self) -> int:
        """Количество ночей в бронировании."""
        return (self.check_out - self.check_in).days

    def overlaps(self, other: "DateRange") -> bool:
        """Проверяет пересечение двух полуоткрытых периодов."""
        return self.check_in < other.check_out and self.check_out > other.check_in


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=lambda: now())
    event_type: str


# Общие утилиты
def now() -> datetime:
    """Возвращает текущую дату и время."""
    return datetime.now()


def format_price(amount: float) -> str:
    """Форматирует сумму так, как она выводится гостю."""
    return f"${float(amount)}"
