"""
Конфигурация тестов для pytest.
Добавляет каталог src в PYTHONPATH и общие фикстуры.
"""
import sys
from pathlib import Path

import pytest

# Добавляем каталог с исходниками в PYTHONPATH
root_dir = str(Path(__file__).parent.parent / "src")
if root_dir not in sys.path:
    sys.path.insert(0, root_dir)

from booking.application import BookingApplicationService  # noqa: E402
from booking.domain import PricingEngine  # noqa: E402
from booking.infrastructure import BookingUnitOfWork, ConsoleLogger  # noqa: E402
from catalog.infrastructure import InMemoryRoomCatalog  # noqa: E402
from shared_kernel import AvailabilityPolicy, EngineConfig  # noqa: E402


def make_service(
    policy: AvailabilityPolicy = AvailabilityPolicy.FLAG, rooms_per_type: int = 5
) -> BookingApplicationService:
    config = EngineConfig(rooms_per_type=rooms_per_type, availability_policy=policy)
    uow = BookingUnitOfWork(
        catalog=InMemoryRoomCatalog(config), logger=ConsoleLogger(level="ERROR")
    )
    return BookingApplicationService(uow=uow, pricing=PricingEngine(), policy=policy)


@pytest.fixture
def booking_service() -> BookingApplicationService:
    """Фасад бронирования с каталогом по умолчанию."""
    return make_service()


@pytest.fixture
def pricing() -> PricingEngine:
    return PricingEngine()


@pytest.fixture
def service_factory():
    """Фабрика фасадов с заданной политикой и размером каталога."""
    return make_service
