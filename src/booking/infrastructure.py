"""
Инфраструктурный слой контекста бронирования.

Содержит реализации журнала бронирований, шины событий и логгера,
работающие в памяти процесса.
"""
import itertools
import json
import sys
from typing import Callable, Dict, List, Optional, Type

from catalog.domain import Room
from catalog.infrastructure import InMemoryRoomCatalog
from catalog.interfaces import IRoomCatalog
from shared_kernel import BookingException, BookingId, DomainEvent

from . import interfaces as ports
from .domain import Booking

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}


class InMemoryBookingLedger(ports.IBookingLedger):
    """Журнал бронирований в памяти. Записи только добавляются."""

    def __init__(self):
        self._bookings: List[Booking] = []
        self._ids = itertools.count(1)

    def append(self, booking: Booking) -> BookingId:
        booking_id = next(self._ids)
        self._bookings.append(booking.model_copy(update={"id": booking_id}))
        return booking_id

    def all(self) -> List[Booking]:
        return list(self._bookings)

    def bookings_for(self, room: Room) -> List[Booking]:
        return [booking for booking in self._bookings if booking.room_key == room.key]

    def get(self, booking_id: BookingId) -> Optional[Booking]:
        return next((b for b in self._bookings if b.id == booking_id), None)

    def __len__(self) -> int:
        return len(self._bookings)


class ConsoleLogger(ports.ILogger):
    """Простая реализация логгера, выводящая сообщения в консоль."""

    def __init__(self, level: str = "INFO"):
        self._threshold = _LEVELS[level.upper()]

    def _emit(self, level: str, message: str, stream, **kwargs) -> None:
        if _LEVELS[level] < self._threshold:
            return
        print(f"[{level}] {message}", file=stream, flush=True)
        if kwargs:
            print("  Context:", json.dumps(kwargs, default=str, indent=2), file=stream, flush=True)

    def debug(self, message: str, **kwargs) -> None:
        self._emit("DEBUG", message, sys.stdout, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._emit("INFO", message, sys.stdout, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._emit("WARNING", message, sys.stderr, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._emit("ERROR", message, sys.stderr, **kwargs)


class InMemoryEventBus(ports.IEventBus):
    """Реализация шины событий в памяти."""

    def __init__(self, logger: Optional[ports.ILogger] = None):
        self._subscribers: Dict[Type[DomainEvent], List[Callable]] = {}
        self._logger = logger or ConsoleLogger()

    def publish(self, event: DomainEvent) -> None:
        """Публикует событие."""
        event_type = type(event)
        if event_type not in self._subscribers:
            self._logger.debug(f"No subscribers for event type {event_type.__name__}")
            return

        self._logger.info(f"Publishing event: {event_type.__name__}", event=event.model_dump())

        for handler in self._subscribers[event_type]:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(
                    f"Error in event handler for {event_type.__name__}",
                    error=str(e),
                    event=event.model_dump(),
                )

    def subscribe(self, event_type: Type[DomainEvent], handler: Callable) -> None:
        """Подписывает обработчик на события указанного типа."""
        self._subscribers.setdefault(event_type, []).append(handler)
        self._logger.debug(f"Subscribed handler to {event_type.__name__} events")


class BookingUnitOfWork(ports.IBookingUnitOfWork):
    """Единица работы для контекста бронирования."""

    def __init__(
        self,
        catalog: Optional[IRoomCatalog] = None,
        ledger: Optional[ports.IBookingLedger] = None,
        event_bus: Optional[ports.IEventBus] = None,
        logger: Optional[ports.ILogger] = None,
    ):
        self._logger = logger or ConsoleLogger()
        self._catalog = catalog or InMemoryRoomCatalog()
        self._ledger = ledger if ledger is not None else InMemoryBookingLedger()
        self._event_bus = event_bus or InMemoryEventBus(self._logger)
        self._pending_events: List[DomainEvent] = []
        self._committed = False

    @property
    def catalog(self) -> IRoomCatalog:
        return self._catalog

    @property
    def ledger(self) -> ports.IBookingLedger:
        return self._ledger

    @property
    def event_bus(self) -> ports.IEventBus:
        return self._event_bus

    @property
    def committed(self) -> bool:
        return self._committed

    def collect(self, event: DomainEvent) -> None:
        """Откладывает событие до фиксации."""
        self._pending_events.append(event)

    def commit(self) -> None:
        """Фиксирует изменения и публикует накопленные события."""
        events, self._pending_events = self._pending_events, []
        self._committed = True
        self._logger.info("BookingUnitOfWork committed", events=len(events))
        for event in events:
            self._event_bus.publish(event)

    def rollback(self) -> None:
        """Отбрасывает накопленные события."""
        self._pending_events = []
        self._committed = False
        self._logger.debug("BookingUnitOfWork rolled back")

    def __enter__(self):
        self._committed = False
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
            # Отказ по входным данным - обычный результат, а не сбой
            if not issubclass(exc_type, BookingException):
                self._logger.warning(
                    "BookingUnitOfWork aborted", error=f"{exc_type.__name__}: {exc_val}"
                )
        return False  # Пробрасываем исключение дальше, если оно было
