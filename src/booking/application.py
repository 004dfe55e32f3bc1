"""
Прикладной слой контекста бронирования.

Содержит фасад бронирования, через который внешний слой представления
выбирает филиал, бронирует номер и получает список бронирований.
"""

import threading
from datetime import date
from typing import List, Optional

from catalog.domain import Room
from pydantic import BaseModel, Field
from shared_kernel import (
    AvailabilityPolicy,
    BookingErrorKind,
    BookingException,
    BookingId,
    DateRange,
    NoRoomAvailable,
    RoomType,
    parse_room_type,
)

from . import interfaces as ports
from .domain import (
    AvailabilityIndex,
    Booking,
    BookingPolicy,
    PricingEngine,
    RoomBooked,
)

# DTO (Data Transfer Objects) для входящих данных


class BookRoomRequest(BaseModel):
    """Запрос на бронирование номера."""

    branch_address: str
    room_type: str
    guest_name: str
    discount_type: str = "None"
    check_in: str
    check_out: str
    guest_count: int = 1


# DTO для исходящих данных


class BookingConfirmation(BaseModel):
    """Результат успешного бронирования."""

    booking_id: BookingId
    branch_address: str
    room_number: str
    room_type: RoomType
    guest_name: str
    nights: int
    base_price: float
    total_price: float
    summary: str
    details: str

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingConfirmation":
        """Создает DTO из доменной модели."""
        return cls(
            booking_id=booking.id,
            branch_address=booking.branch_address,
            room_number=booking.room_number,
            room_type=booking.room_type,
            guest_name=booking.guest_name,
            nights=booking.nights,
            base_price=booking.base_price,
            total_price=booking.total_price,
            summary=booking.summary,
            details=booking.details,
        )


class BookingError(BaseModel):
    """Описание отказа в бронировании."""

    kind: BookingErrorKind
    message: str

    @classmethod
    def from_exception(cls, exc: BookingException) -> "BookingError":
        return cls(kind=exc.kind, message=exc.message)


class BookingResult(BaseModel):
    """Либо подтверждение, либо ошибка бронирования."""

    confirmation: Optional[BookingConfirmation] = None
    error: Optional[BookingError] = None

    @classmethod
    def success(cls, confirmation: BookingConfirmation) -> "BookingResult":
        return cls(confirmation=confirmation)

    @classmethod
    def failure(cls, exc: BookingException) -> "BookingResult":
        return cls(error=BookingError.from_exception(exc))

    @property
    def ok(self) -> bool:
        return self.error is None


class BookingDTO(BaseModel):
    """DTO для представления бронирования."""

    id: BookingId
    branch_address: str
    room_number: str
    room_type: RoomType
    guest_name: str
    discount_type: str
    guest_count: int
    check_in: date
    check_out: date
    nights: int
    base_price: float
    total_price: float
    created_at: str

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=booking.id,
            branch_address=booking.branch_address,
            room_number=booking.room_number,
            room_type=booking.room_type,
            guest_name=booking.guest_name,
            discount_type=booking.discount_type,
            guest_count=booking.guest_count,
            check_in=booking.period.check_in,
            check_out=booking.period.check_out,
            nights=booking.nights,
            base_price=booking.base_price,
            total_price=booking.total_price,
            created_at=booking.created_at.isoformat(),
        )


class RoomDTO(BaseModel):
    """DTO для представления номера."""

    branch_address: str
    number: str
    type: RoomType
    nightly_price: float
    capacity: int
    is_available: bool = Field(..., description="Флаг доступности для поиска по типу")

    @classmethod
    def from_domain(cls, room: Room) -> "RoomDTO":
        """Создает DTO из доменной модели."""
        return cls(
            branch_address=room.branch_address,
            number=room.number,
            type=room.type,
            nightly_price=room.nightly_price,
            capacity=room.capacity,
            is_available=room.is_available,
        )


# Сервисы приложения


class BookingApplicationService:
    """
    Фасад бронирования.

    Единственная точка входа для слоя представления. Все проверки и
    изменение состояния выполняются под одной блокировкой, поэтому
    параллельные вызовы book не могут забронировать один номер дважды.
    """

    def __init__(
        self,
        uow: ports.IBookingUnitOfWork,
        pricing: PricingEngine,
        policy: AvailabilityPolicy = AvailabilityPolicy.FLAG,
    ):
        """Инициализирует сервис."""
        self._uow = uow
        self._pricing = pricing
        self._availability = AvailabilityIndex(uow.ledger, policy)
        self._lock = threading.RLock()

    def list_branches(self) -> List[str]:
        """Адреса филиалов в порядке создания."""
        with self._lock:
            return self._uow.catalog.list_branches()

    def book(
        self,
        branch_address: str,
        room_type: str,
        guest_name: str,
        discount_type: str,
        check_in: str,
        check_out: str,
        guest_count: int,
    ) -> BookingResult:
        """Бронирует первый свободный номер указанного типа."""
        with self._lock:
            try:
                with self._uow:
                    booking = self._book(
                        branch_address,
                        room_type,
                        guest_name,
                        discount_type,
                        check_in,
                        check_out,
                        guest_count,
                    )
            except BookingException as exc:
                return BookingResult.failure(exc)
            return BookingResult.success(BookingConfirmation.from_domain(booking))

    def book_request(self, request: BookRoomRequest) -> BookingResult:
        """Бронирует номер по DTO запроса."""
        return self.book(**request.model_dump())

    def _book(
        self,
        branch_address: str,
        room_type: str,
        guest_name: str,
        discount_type: str,
        check_in: str,
        check_out: str,
        guest_count: int,
    ) -> Booking:
        # Проверки: до их прохождения состояние не меняется
        branch = self._uow.catalog.find_branch(branch_address)

        known_type = parse_room_type(room_type)
        if known_type is not None:
            BookingPolicy.validate_guest_count(known_type, guest_count)

        period = DateRange.parse(check_in, check_out)

        room = None
        if known_type is not None:
            room = self._availability.first_available(branch, known_type, period)
        if room is None:
            raise NoRoomAvailable(
                f"Нет свободных номеров типа {room_type!r} в филиале {branch_address}"
            )

        quote = self._pricing.quote(room.type, period.nights, guest_count, discount_type)
        draft = Booking.create(
            room=room,
            guest_name=guest_name,
            discount_type=discount_type,
            period=period,
            guest_count=guest_count,
            quote=quote,
        )

        # Изменение состояния: флаг снимается только после записи в журнал
        booking_id = self._uow.ledger.append(draft)
        if self._availability.policy == AvailabilityPolicy.FLAG:
            room.mark_as_booked()
        booking = self._uow.ledger.get(booking_id)
        self._uow.collect(
            RoomBooked(
                booking_id=booking_id,
                branch_address=booking.branch_address,
                room_number=booking.room_number,
                guest_name=booking.guest_name,
                base_price=booking.base_price,
                total_price=booking.total_price,
            )
        )
        return booking

    def list_my_bookings(self) -> List[str]:
        """Строки бронирований в порядке их создания."""
        with self._lock:
            return [booking.summary for booking in self._uow.ledger.all()]

    def list_bookings(self) -> List[BookingDTO]:
        with self._lock:
            return [BookingDTO.from_domain(b) for b in self._uow.ledger.all()]

    def get_booking(self, booking_id: BookingId) -> Optional[BookingDTO]:
        with self._lock:
            booking = self._uow.ledger.get(booking_id)
            return BookingDTO.from_domain(booking) if booking else None

    def rooms_of_type(self, branch_address: str, room_type: RoomType) -> List[RoomDTO]:
        """
        Свободные номера типа в филиале.

        Для неизвестного типа номера возвращает пустой список.

        Raises:
            BranchNotFound: если филиала нет в каталоге
        """
        with self._lock:
            branch = self._uow.catalog.find_branch(branch_address)
            known_type = parse_room_type(room_type)
            if known_type is None:
                return []
            rooms = self._uow.catalog.rooms_of_type(branch, known_type)
            return [RoomDTO.from_domain(room) for room in rooms]

    def is_room_available_for_dates(
        self,
        branch_address: str,
        room_number: str,
        check_in: str,
        check_out: str,
    ) -> bool:
        """
        Проверяет отсутствие пересечений с бронированиями номера.

        Raises:
            BranchNotFound: если филиала нет в каталоге
            DateFormatError: если одна из дат не разбирается
            InvalidDateRange: если дата выезда не позже даты заезда
            KeyError: если в филиале нет такого номера
        """
        with self._lock:
            branch = self._uow.catalog.find_branch(branch_address)
            room = branch.find_room(room_number)
            if room is None:
                raise KeyError(f"Номер {room_number} не найден в филиале {branch_address}")
            return not self._availability.has_conflict(room, check_in, check_out)
