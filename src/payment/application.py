"""
Прикладной слой контекста оплаты.
"""

from typing import List, Optional

from booking.domain import RoomBooked
from booking.interfaces import ILogger
from pydantic import BaseModel, Field
from shared_kernel import BookingId, PaymentException

from .domain import Invoice
from .interfaces import IInvoiceRepository, IPaymentGateway

PAYMENT_SUCCESS_MESSAGE = "Payment Successful! Thank you for your booking."
VOUCHER_SENT_MESSAGE = "Payment successful. Voucher sent!"


class PaymentReceipt(BaseModel):
    """Квитанция об оплате одного или нескольких бронирований."""

    booking_ids: List[BookingId] = Field(default_factory=list)
    transaction_ids: List[str] = Field(default_factory=list)
    amount: float = 0.0
    message: str


class PaymentApplicationService:
    """Сервис приложения для подтверждения оплаты."""

    def __init__(
        self,
        invoices: IInvoiceRepository,
        gateway: IPaymentGateway,
        logger: Optional[ILogger] = None,
    ):
        self._invoices = invoices
        self._gateway = gateway
        self._logger = logger

    def create_invoice_for_booking(self, event: RoomBooked) -> Invoice:
        """Выставляет счет по событию бронирования."""
        invoice = Invoice(
            booking_id=event.booking_id,
            guest_name=event.guest_name,
            base_price=event.base_price,
            total_price=event.total_price,
        )
        self._invoices.add(invoice)
        return invoice

    def payment_summary(self, booking_id: BookingId) -> List[str]:
        """Строки с базовой и итоговой ценой для экрана оплаты."""
        return self._get_invoice(booking_id).price_lines()

    def pay(self, booking_id: BookingId) -> PaymentReceipt:
        """
        Оплачивает одно бронирование.

        Raises:
            PaymentException: если счета нет или он уже оплачен
        """
        invoice = self._get_invoice(booking_id)
        transaction_id = self._charge(invoice)
        return PaymentReceipt(
            booking_ids=[booking_id],
            transaction_ids=[transaction_id],
            amount=invoice.total_price,
            message=PAYMENT_SUCCESS_MESSAGE,
        )

    def pay_all(self) -> PaymentReceipt:
        """Оплачивает все неоплаченные бронирования."""
        receipt = PaymentReceipt(message=VOUCHER_SENT_MESSAGE)
        for invoice in self._invoices.list_pending():
            receipt.transaction_ids.append(self._charge(invoice))
            receipt.booking_ids.append(invoice.booking_id)
            receipt.amount = round(receipt.amount + invoice.total_price, 2)
        return receipt

    def _get_invoice(self, booking_id: BookingId) -> Invoice:
        invoice = self._invoices.get_by_booking(booking_id)
        if invoice is None:
            raise PaymentException(f"Счет для бронирования #{booking_id} не найден")
        return invoice

    def _charge(self, invoice: Invoice) -> str:
        if invoice.is_paid:
            raise PaymentException(f"Бронирование #{invoice.booking_id} уже оплачено")
        result = self._gateway.process_payment(
            invoice.total_price, metadata={"booking_id": invoice.booking_id}
        )
        invoice.mark_as_paid(result["transaction_id"])
        if self._logger is not None:
            self._logger.info(
                "Payment processed",
                booking_id=invoice.booking_id,
                transaction_id=result["transaction_id"],
            )
        return result["transaction_id"]
