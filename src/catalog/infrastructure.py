"""
Инфраструктурный слой каталога номеров.
"""

from typing import Dict, List, Optional

from shared_kernel import BranchNotFound, EngineConfig, RoomType

from . import interfaces as ports
from .domain import Branch, Room


class InMemoryRoomCatalog(ports.IRoomCatalog):
    """Каталог филиалов в памяти, заполняемый из конфигурации."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()
        self._branches: Dict[str, Branch] = {}
        self._initialize_branches()

    def _initialize_branches(self) -> None:
        """Создает филиалы и их номера."""
        for address in self._config.branch_addresses:
            self._branches[address] = Branch.create(
                address, rooms_per_type=self._config.rooms_per_type
            )

    def find_branch(self, address: str) -> Branch:
        if address not in self._branches:
            raise BranchNotFound(f"Филиал по адресу {address!r} не найден")
        return self._branches[address]

    def list_branches(self) -> List[str]:
        return list(self._branches)

    def branches(self) -> List[Branch]:
        return list(self._branches.values())

    def rooms_of_type(self, branch: Branch, room_type: RoomType) -> List[Room]:
        return branch.rooms_of_type(room_type)
