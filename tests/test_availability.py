"""
Тесты журнала бронирований и индекса доступности.
"""

import pytest
from pydantic import ValidationError
from booking.domain import AvailabilityIndex, Booking, PriceQuote
from booking.infrastructure import InMemoryBookingLedger
from catalog.domain import Branch
from shared_kernel import AvailabilityPolicy, DateFormatError, DateRange, InvalidDateRange, RoomType


@pytest.fixture
def branch() -> Branch:
    return Branch.create("123 Main St", rooms_per_type=2)


@pytest.fixture
def ledger() -> InMemoryBookingLedger:
    return InMemoryBookingLedger()


def make_booking(room, check_in, check_out, guest="Alice") -> Booking:
    period = DateRange.parse(check_in, check_out)
    return Booking.create(
        room=room,
        guest_name=guest,
        discount_type="None",
        period=period,
        guest_count=1,
        quote=PriceQuote(nights=period.nights, base_price=100, total_price=100),
    )


class TestInMemoryBookingLedger:
    def test_append_assigns_sequential_ids(self, ledger, branch):
        room = branch.rooms[0]
        assert ledger.append(make_booking(room, "2025-03-01", "2025-03-02")) == 1
        assert ledger.append(make_booking(room, "2025-03-05", "2025-03-06")) == 2
        assert [b.id for b in ledger.all()] == [1, 2]

    def test_all_keeps_insertion_order(self, ledger, branch):
        for guest in ("Alice", "Bob", "Carol"):
            ledger.append(make_booking(branch.rooms[1], "2025-03-01", "2025-03-02", guest))
        assert [b.guest_name for b in ledger.all()] == ["Alice", "Bob", "Carol"]

    def test_all_returns_copy(self, ledger, branch):
        ledger.append(make_booking(branch.rooms[0], "2025-03-01", "2025-03-02"))
        ledger.all().clear()
        assert len(ledger) == 1

    def test_bookings_for_filters_by_room(self, ledger, branch):
        first, second = branch.rooms[0], branch.rooms[2]
        ledger.append(make_booking(first, "2025-03-01", "2025-03-02"))
        ledger.append(make_booking(second, "2025-03-01", "2025-03-02"))
        ledger.append(make_booking(first, "2025-04-01", "2025-04-02"))

        assert [b.id for b in ledger.bookings_for(first)] == [1, 3]
        assert [b.id for b in ledger.bookings_for(second)] == [2]

    def test_bookings_for_distinguishes_branches(self, ledger, branch):
        other = Branch.create("456 Central Ave", rooms_per_type=2)
        ledger.append(make_booking(branch.rooms[0], "2025-03-01", "2025-03-02"))
        assert ledger.bookings_for(other.rooms[0]) == []

    def test_get(self, ledger, branch):
        ledger.append(make_booking(branch.rooms[0], "2025-03-01", "2025-03-02"))
        assert ledger.get(1).guest_name == "Alice"
        assert ledger.get(42) is None

    def test_stored_booking_is_immutable(self, ledger, branch):
        ledger.append(make_booking(branch.rooms[0], "2025-03-01", "2025-03-02"))
        with pytest.raises(ValidationError):
            ledger.get(1).guest_name = "Mallory"


class TestHasConflict:
    @pytest.fixture
    def index(self, ledger, branch) -> AvailabilityIndex:
        ledger.append(make_booking(branch.rooms[0], "2025-03-01", "2025-03-04"))
        return AvailabilityIndex(ledger)

    @pytest.mark.parametrize(
        "start, end, expected",
        [
            ("2025-03-02", "2025-03-03", True),  # внутри
            ("2025-02-28", "2025-03-05", True),  # охватывает
            ("2025-03-03", "2025-03-06", True),
            ("2025-02-27", "2025-03-02", True),
            ("2025-03-01", "2025-03-04", True),  # совпадает
            ("2025-03-04", "2025-03-06", False),  # заезд в день выезда
            ("2025-02-25", "2025-03-01", False),  # выезд в день заезда
            ("2025-05-01", "2025-05-03", False),
        ],
    )
    def test_half_open_overlap(self, index, branch, start, end, expected):
        assert index.has_conflict(branch.rooms[0], start, end) is expected

    def test_other_room_has_no_conflict(self, index, branch):
        assert index.has_conflict(branch.rooms[2], "2025-03-01", "2025-03-04") is False

    def test_bad_date_is_not_swallowed(self, index, branch):
        with pytest.raises(DateFormatError):
            index.has_conflict(branch.rooms[0], "03/01/2025", "2025-03-04")

    def test_inverted_range_is_rejected(self, index, branch):
        with pytest.raises(InvalidDateRange):
            index.has_conflict(branch.rooms[0], "2025-03-04", "2025-03-01")

    def test_agrees_with_date_range_overlaps(self, index, branch):
        booked = DateRange.parse("2025-03-01", "2025-03-04")
        for start, end in [("2025-03-03", "2025-03-05"), ("2025-03-04", "2025-03-05")]:
            expected = booked.overlaps(DateRange.parse(start, end))
            assert index.has_conflict(branch.rooms[0], start, end) is expected


class TestFirstAvailable:
    def test_flag_policy_returns_first_flagged_room(self, ledger, branch):
        index = AvailabilityIndex(ledger, AvailabilityPolicy.FLAG)
        assert index.first_available(branch, RoomType.SINGLE).number == "Room 1"

        branch.rooms[0].mark_as_booked()
        assert index.first_available(branch, RoomType.SINGLE).number == "Room 2"

        branch.rooms[2].mark_as_booked()
        assert index.first_available(branch, RoomType.SINGLE) is None
        assert index.first_available(branch, RoomType.DOUBLE).number == "Room 3"

    def test_date_range_policy_checks_overlap(self, ledger, branch):
        index = AvailabilityIndex(ledger, AvailabilityPolicy.DATE_RANGE)
        room = branch.rooms[0]
        ledger.append(make_booking(room, "2025-03-01", "2025-03-04"))

        overlapping = DateRange.parse("2025-03-02", "2025-03-05")
        later = DateRange.parse("2025-03-04", "2025-03-06")

        assert index.first_available(branch, RoomType.SINGLE, overlapping).number == "Room 2"
        assert index.first_available(branch, RoomType.SINGLE, later).number == "Room 1"

    def test_is_room_available(self, ledger, branch):
        room = branch.rooms[0]
        ledger.append(make_booking(room, "2025-03-01", "2025-03-04"))
        later = DateRange.parse("2025-03-10", "2025-03-12")

        assert AvailabilityIndex(ledger, AvailabilityPolicy.DATE_RANGE).is_room_available(room, later)
        room.mark_as_booked()
        assert not AvailabilityIndex(ledger, AvailabilityPolicy.FLAG).is_room_available(room, later)
