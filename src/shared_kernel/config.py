"""
Конфигурация движка бронирования.
"""

import os
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain import AvailabilityPolicy

DEFAULT_BRANCHES = ("123 Main St", "456 Central Ave", "789 Park Blvd")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

ENV_PREFIX = "HOTEL_"


class EngineConfig(BaseModel):
    """Настройки каталога, политики доступности и логирования."""

    model_config = ConfigDict(frozen=True)

    branch_addresses: Tuple[str, ...] = Field(default=DEFAULT_BRANCHES, min_length=1)
    rooms_per_type: int = Field(default=5, gt=0)
    availability_policy: AvailabilityPolicy = AvailabilityPolicy.FLAG
    log_level: str = "WARNING"

    @field_validator("branch_addresses")
    @classmethod
    def addresses_unique(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        if len(set(v)) != len(v):
            raise ValueError("Адреса филиалов должны быть уникальными")
        if any(not address.strip() for address in v):
            raise ValueError("Адрес филиала не может быть пустым")
        return v

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Неизвестный уровень логирования: {v}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Читает настройки из переменных окружения HOTEL_*.

        Отсутствующие переменные заменяются значениями по умолчанию.
        """
        env = os.environ if environ is None else environ
        values = {}

        branches = env.get(f"{ENV_PREFIX}BRANCHES")
        if branches:
            values["branch_addresses"] = tuple(
                address.strip() for address in branches.split(",") if address.strip()
            )
        if f"{ENV_PREFIX}ROOMS_PER_TYPE" in env:
            values["rooms_per_type"] = env[f"{ENV_PREFIX}ROOMS_PER_TYPE"]
        if f"{ENV_PREFIX}AVAILABILITY_POLICY" in env:
            values["availability_policy"] = env[f"{ENV_PREFIX}AVAILABILITY_POLICY"]
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            values["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"]

        return cls.model_validate(values)
