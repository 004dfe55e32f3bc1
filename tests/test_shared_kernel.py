"""
Тесты общего ядра: разбор дат, диапазоны, конфигурация.
"""

from datetime import date

import pytest
from pydantic import ValidationError
from shared_kernel import (
    AvailabilityPolicy,
    BookingErrorKind,
    DateFormatError,
    DateRange,
    EngineConfig,
    InvalidDateRange,
    RoomType,
    format_price,
    parse_date,
    parse_room_type,
)


class TestParseDate:
    def test_parses_iso_date(self):
        assert parse_date("2025-03-01") == date(2025, 3, 1)

    def test_passes_date_through(self):
        assert parse_date(date(2025, 3, 1)) == date(2025, 3, 1)

    @pytest.mark.parametrize(
        "value", ["2025-3-1", "01-03-2025", "20250301", "2025/03/01", "", "tomorrow"]
    )
    def test_rejects_other_formats(self, value):
        with pytest.raises(DateFormatError) as exc_info:
            parse_date(value)
        assert exc_info.value.kind == BookingErrorKind.DATE_FORMAT_ERROR

    def test_rejects_impossible_calendar_date(self):
        with pytest.raises(DateFormatError, match="Несуществующая дата"):
            parse_date("2025-02-30")

    @pytest.mark.parametrize(
        "value", ["\uff12\uff10\uff12\uff15-03-01", "2025-03-01\n", "\u0662025-03-01"]
    )
    def test_only_ascii_digits_without_trailing_newline(self, value):
        """Полноширинные цифры и перевод строки - это неверный формат."""
        with pytest.raises(DateFormatError, match="Неверный формат даты"):
            parse_date(value)


class TestDateRange:
    def test_nights_use_calendar_days(self):
        """Ночи считаются по календарю, а не сравнением строк."""
        period = DateRange.parse("2025-01-30", "2025-02-02")
        assert period.nights == 3

    def test_check_out_must_be_after_check_in(self):
        with pytest.raises(InvalidDateRange):
            DateRange.parse("2025-03-05", "2025-03-01")

    def test_same_day_is_invalid(self):
        with pytest.raises(InvalidDateRange):
            DateRange.parse("2025-03-01", "2025-03-01")

    def test_format_checked_before_order(self):
        with pytest.raises(DateFormatError):
            DateRange.parse("2025-03-05", "bad")

    def test_direct_construction_validates_order(self):
        with pytest.raises(ValidationError):
            DateRange(check_in=date(2025, 3, 5), check_out=date(2025, 3, 1))

    def test_half_open_overlap(self):
        first = DateRange.parse("2025-03-01", "2025-03-04")
        assert first.overlaps(DateRange.parse("2025-03-03", "2025-03-06"))
        assert first.overlaps(DateRange.parse("2025-02-27", "2025-03-02"))
        assert first.overlaps(DateRange.parse("2025-03-02", "2025-03-03"))
        # Выезд в день заезда следующего гостя - не конфликт
        assert not first.overlaps(DateRange.parse("2025-03-04", "2025-03-06"))
        assert not first.overlaps(DateRange.parse("2025-02-25", "2025-03-01"))


def test_parse_room_type():
    assert parse_room_type("Single") == RoomType.SINGLE
    assert parse_room_type("Double") == RoomType.DOUBLE
    assert parse_room_type("Suite") is None


def test_format_price():
    assert format_price(300) == "$300.0"
    assert format_price(270.5) == "$270.5"


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.branch_addresses == ("123 Main St", "456 Central Ave", "789 Park Blvd")
        assert config.rooms_per_type == 5
        assert config.availability_policy == AvailabilityPolicy.FLAG
        assert config.log_level == "WARNING"

    def test_from_env(self):
        config = EngineConfig.from_env(
            {
                "HOTEL_BRANCHES": "1 First St, 2 Second St",
                "HOTEL_ROOMS_PER_TYPE": "2",
                "HOTEL_AVAILABILITY_POLICY": "date_range",
                "HOTEL_LOG_LEVEL": "debug",
            }
        )
        assert config.branch_addresses == ("1 First St", "2 Second St")
        assert config.rooms_per_type == 2
        assert config.availability_policy == AvailabilityPolicy.DATE_RANGE
        assert config.log_level == "DEBUG"

    def test_from_empty_env_uses_defaults(self):
        assert EngineConfig.from_env({}) == EngineConfig()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"rooms_per_type": 0},
            {"branch_addresses": ("A", "A")},
            {"branch_addresses": ()},
            {"log_level": "LOUD"},
            {"availability_policy": "whenever"},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            EngineConfig(**overrides)
