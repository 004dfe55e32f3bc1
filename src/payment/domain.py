"""
Доменная модель контекста оплаты.

Оплата имитируется: счет создается при бронировании и
переводится в статус PAID после подтверждения гостем.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from shared_kernel import BookingId, PaymentException, PaymentStatus, format_price, now


class Invoice(BaseModel):
    """Счет на оплату бронирования."""

    booking_id: BookingId
    guest_name: str
    base_price: float = Field(..., ge=0)
    total_price: float = Field(..., ge=0)
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: Optional[str] = None
    issued_at: datetime = Field(default_factory=now)
    paid_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID

    def mark_as_paid(self, transaction_id: str) -> None:
        """Отмечает счет оплаченным."""
        if self.is_paid:
            raise PaymentException(f"Бронирование #{self.booking_id} уже оплачено")
        self.status = PaymentStatus.PAID
        self.transaction_id = transaction_id
        self.paid_at = now()

    def price_lines(self):
        return [
            f"Base Price: {format_price(self.base_price)}",
            f"Total Price (after discount): {format_price(self.total_price)}",
        ]
