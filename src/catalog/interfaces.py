"""
Интерфейсы (порты) каталога номеров.
"""

from __future__ import annotations

from typing import List, Protocol

from shared_kernel import RoomType

from .domain import Branch, Room


class IRoomCatalog(Protocol):
    """Интерфейс каталога филиалов и номеров."""

    def find_branch(self, address: str) -> Branch: ...
    def list_branches(self) -> List[str]: ...
    def branches(self) -> List[Branch]: ...
    def rooms_of_type(self, branch: Branch, room_type: RoomType) -> List[Room]: ...
