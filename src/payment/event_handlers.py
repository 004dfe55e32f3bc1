from booking.domain import RoomBooked

from .application import PaymentApplicationService


def on_room_booked(event: RoomBooked, service: "PaymentApplicationService") -> None:
    """Обработчик события бронирования номера."""
    service.create_invoice_for_booking(event)
