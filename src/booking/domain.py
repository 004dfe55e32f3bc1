"""
Доменная модель контекста бронирования.

Содержит бронирование, расчет стоимости и проверку доступности
номеров по флагу и по пересечению периодов.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Optional, Union

from catalog.domain import Branch, Room
from pydantic import BaseModel, ConfigDict, Field
from shared_kernel import (
    DISCOUNT_FRACTIONS,
    ROOM_TYPE_SPECS,
    AvailabilityPolicy,
    BookingId,
    CapacityExceeded,
    DateRange,
    DiscountType,
    DomainEvent,
    RoomType,
    format_price,
    now,
)

if TYPE_CHECKING:
    from .interfaces import IBookingLedger


class PriceQuote(BaseModel):
    """Рассчитанная стоимость проживания."""

    model_config = ConfigDict(frozen=True)

    nights: int
    base_price: float = Field(..., ge=0)
    total_price: float = Field(..., ge=0)


class RoomBooked(DomainEvent):
    """Событие подтверждения бронирования номера."""

    event_type: str = "room_booked"
    booking_id: BookingId
    branch_address: str
    room_number: str
    guest_name: str
    base_price: float
    total_price: float


class Booking(BaseModel):
    """Подтвержденное бронирование. После создания не изменяется."""

    model_config = ConfigDict(frozen=True)

    id: Optional[BookingId] = None  # присваивается журналом
    branch_address: str
    room_number: str
    room_type: RoomType
    guest_name: str
    discount_type: str
    guest_count: int = Field(..., gt=0)
    period: DateRange
    base_price: float = Field(..., ge=0)
    total_price: float = Field(..., ge=0)
    created_at: datetime = Field(default_factory=now)

    @classmethod
    def create(
        cls,
        room: Room,
        guest_name: str,
        discount_type: str,
        period: DateRange,
        guest_count: int,
        quote: PriceQuote,
    ) -> Booking:
        """Создает бронирование номера по рассчитанной цене."""
        return cls(
            branch_address=room.branch_address,
            room_number=room.number,
            room_type=room.type,
            guest_name=guest_name,
            discount_type=discount_type,
            guest_count=guest_count,
            period=period,
            base_price=quote.base_price,
            total_price=quote.total_price,
        )

    @property
    def room_key(self):
        return (self.branch_address, self.room_number)

    @property
    def nights(self) -> int:
        return self.period.nights

    @property
    def summary(self) -> str:
        """Строка для списка бронирований гостя."""
        return (
            f"Hotel: {self.branch_address}, Room: {self.room_number} "
            f"({self.room_type.value}), Guest: {self.guest_name}, "
            f"Check-in: {self.period.check_in.isoformat()}, "
            f"Check-out: {self.period.check_out.isoformat()}, "
            f"Total Price: {format_price(self.total_price)}"
        )

    @property
    def details(self) -> str:
        """Подробности бронирования для экрана оплаты."""
        return (
            "Booking Details:\n"
            f"Guest: {self.guest_name}\n"
            f"Room Type: {self.room_type.value}\n"
            f"Check-in Date: {self.period.check_in.isoformat()}\n"
            f"Check-out Date: {self.period.check_out.isoformat()}"
        )


class PricingEngine:
    """
    Расчет стоимости проживания.

    Не хранит состояния: создается один раз и передается
    в сервис бронирования при сборке приложения.
    """

    def nightly_rate(self, room_type: RoomType) -> float:
        return ROOM_TYPE_SPECS[room_type].nightly_rate

    def base_price(self, room_type: RoomType, nights: int, guest_count: int) -> float:
        """Тариф за ночь * количество ночей * количество гостей."""
        return self.nightly_rate(room_type) * nights * guest_count

    def discount_fraction(self, discount_type: Union[str, DiscountType]) -> float:
        """Доля скидки; неизвестная скидка считается нулевой."""
        try:
            return DISCOUNT_FRACTIONS[DiscountType(discount_type)]
        except ValueError:
            return 0.0

    def apply_discount(self, discount_type: Union[str, DiscountType], price: float) -> float:
        return price * (1 - self.discount_fraction(discount_type))

    def quote(
        self,
        room_type: RoomType,
        nights: int,
        guest_count: int,
        discount_type: Union[str, DiscountType],
    ) -> PriceQuote:
        base = self.base_price(room_type, nights, guest_count)
        total = self.apply_discount(discount_type, base)
        return PriceQuote(
            nights=nights, base_price=round(base, 2), total_price=round(total, 2)
        )


class BookingPolicy:
    """Политики и бизнес-правила для бронирований."""

    MIN_GUESTS = 1

    @classmethod
    def validate_guest_count(cls, room_type: RoomType, guest_count: int) -> None:
        """Проверяет, что гости помещаются в номер выбранного типа."""
        capacity = ROOM_TYPE_SPECS[room_type].capacity
        if guest_count < cls.MIN_GUESTS:
            raise CapacityExceeded(
                f"Количество гостей должно быть не меньше {cls.MIN_GUESTS}"
            )
        if guest_count > capacity:
            raise CapacityExceeded(
                f"Превышена вместимость номера {room_type.value} (макс. {capacity} чел.)"
            )


class AvailabilityIndex:
    """Доменный сервис проверки доступности номеров."""

    def __init__(
        self,
        ledger: "IBookingLedger",
        policy: AvailabilityPolicy = AvailabilityPolicy.FLAG,
    ):
        self._ledger = ledger
        self.policy = policy

    def first_available(
        self,
        branch: Branch,
        room_type: RoomType,
        period: Optional[DateRange] = None,
    ) -> Optional[Room]:
        """
        Первый свободный номер типа в порядке каталога.

        При политике FLAG учитывается только флаг доступности,
        при DATE_RANGE - пересечение с существующими бронированиями.
        """
        if self.policy == AvailabilityPolicy.FLAG or period is None:
            candidates = branch.rooms_of_type(room_type)
            return candidates[0] if candidates else None

        for room in branch.all_rooms_of_type(room_type):
            if not self._conflicts(room, period):
                return room
        return None

    def has_conflict(
        self,
        room: Room,
        start: Union[str, date],
        end: Union[str, date],
    ) -> bool:
        """
        Проверяет, пересекается ли [start, end) с бронированиями номера.

        Raises:
            DateFormatError: если одна из дат не разбирается
            InvalidDateRange: если end не позже start
        """
        return self._conflicts(room, DateRange.parse(start, end))

    def is_room_available(self, room: Room, period: DateRange) -> bool:
        if self.policy == AvailabilityPolicy.FLAG and not room.is_available:
            return False
        return not self._conflicts(room, period)

    def _conflicts(self, room: Room, period: DateRange) -> bool:
        return any(
            booking.period.overlaps(period) for booking in self._ledger.bookings_for(room)
        )
