from functools import partial
from typing import Optional

from booking.application import BookingApplicationService
from booking.domain import PricingEngine, RoomBooked
from booking.infrastructure import BookingUnitOfWork, ConsoleLogger
from catalog.infrastructure import InMemoryRoomCatalog
from payment.application import PaymentApplicationService
from payment.event_handlers import on_room_booked
from payment.infrastructure import DummyPaymentGateway, InMemoryInvoiceRepository
from shared_kernel import EngineConfig


def bootstrap_app(config: Optional[EngineConfig] = None):
    """Создает и настраивает все компоненты приложения."""
    config = config or EngineConfig.from_env()
    logger = ConsoleLogger(level=config.log_level)

    # 1. Создаем Unit of Work для контекста бронирования
    booking_uow = BookingUnitOfWork(
        catalog=InMemoryRoomCatalog(config),
        logger=logger,
    )

    # 2. Создаем сервисы, передавая им зависимости
    booking_service = BookingApplicationService(
        uow=booking_uow,
        pricing=PricingEngine(),
        policy=config.availability_policy,
    )
    payment_service = PaymentApplicationService(
        invoices=InMemoryInvoiceRepository(),
        gateway=DummyPaymentGateway(),
        logger=logger,
    )

    # 3. Подписываем обработчики на события
    handler = partial(on_room_booked, service=payment_service)
    booking_uow.event_bus.subscribe(RoomBooked, handler)

    return {
        "config": config,
        "booking_uow": booking_uow,
        "booking_service": booking_service,
        "payment_service": payment_service,
    }
