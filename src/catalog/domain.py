"""
Доменная модель каталога номеров.

Филиалы и номера создаются один раз при инициализации и
больше не добавляются и не удаляются.
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from shared_kernel import ROOM_TYPE_SPECS, DomainException, RoomType


class Room(BaseModel):
    """Номер в филиале отеля."""

    branch_address: str
    number: str  # Номер комнаты (например, "Room 1")
    type: RoomType
    nightly_price: float = Field(..., gt=0)
    is_available: bool = True

    @property
    def key(self) -> Tuple[str, str]:
        """Идентичность номера: (адрес филиала, номер комнаты)."""
        return (self.branch_address, self.number)

    @property
    def capacity(self) -> int:
        return ROOM_TYPE_SPECS[self.type].capacity

    def mark_as_booked(self) -> None:
        """Исключает номер из поиска по типу."""
        if not self.is_available:
            raise DomainException(f"Номер {self.number} уже забронирован")
        self.is_available = False


class Branch(BaseModel):
    """Филиал отеля с фиксированным набором номеров."""

    model_config = ConfigDict(frozen=True)

    address: str
    rooms: Tuple[Room, ...] = ()

    @classmethod
    def create(cls, address: str, rooms_per_type: int) -> "Branch":
        """
        Создает филиал с N одноместными и N двухместными номерами.

        Номера создаются парами: Room i (Single), Room i+N (Double).
        """
        rooms: List[Room] = []
        for i in range(1, rooms_per_type + 1):
            rooms.append(cls._make_room(address, f"Room {i}", RoomType.SINGLE))
            rooms.append(
                cls._make_room(address, f"Room {i + rooms_per_type}", RoomType.DOUBLE)
            )
        return cls(address=address, rooms=tuple(rooms))

    @staticmethod
    def _make_room(address: str, number: str, room_type: RoomType) -> Room:
        return Room(
            branch_address=address,
            number=number,
            type=room_type,
            nightly_price=ROOM_TYPE_SPECS[room_type].nightly_rate,
        )

    def rooms_of_type(self, room_type: RoomType) -> List[Room]:
        """Свободные номера указанного типа в порядке создания."""
        return [
            room for room in self.rooms if room.is_available and room.type == room_type
        ]

    def all_rooms_of_type(self, room_type: RoomType) -> List[Room]:
        """Все номера указанного типа, без учета флага доступности."""
        return [room for room in self.rooms if room.type == room_type]

    def find_room(self, number: str) -> Optional[Room]:
        return next((room for room in self.rooms if room.number == number), None)
