"""
Интерфейсы (порты) для контекста бронирования.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Protocol, Type, TypeVar

from catalog.domain import Room
from catalog.interfaces import IRoomCatalog
from shared_kernel import BookingId, DomainEvent

from .domain import Booking

T_Event = TypeVar("T_Event", bound=DomainEvent)


class ILogger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class IEventBus(Protocol):
    """Интерфейс для шины событий."""

    def publish(self, event: DomainEvent) -> None: ...
    def subscribe(
        self, event_type: Type[T_Event], handler: Callable[[T_Event], None]
    ) -> None: ...


class IBookingLedger(Protocol):
    """Журнал подтвержденных бронирований (только добавление)."""

    def append(self, booking: Booking) -> BookingId: ...
    def all(self) -> List[Booking]: ...
    def bookings_for(self, room: Room) -> List[Booking]: ...
    def get(self, booking_id: BookingId) -> Optional[Booking]: ...


class IBookingUnitOfWork(Protocol):
    """Интерфейс Unit of Work для контекста Booking."""

    @property
    def catalog(self) -> IRoomCatalog: ...
    @property
    def ledger(self) -> IBookingLedger: ...
    @property
    def event_bus(self) -> IEventBus: ...

    def collect(self, event: DomainEvent) -> None: ...
    def __enter__(self) -> IBookingUnitOfWork: ...
    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...
