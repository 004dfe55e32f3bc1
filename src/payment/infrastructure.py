"""
Инфраструктурный слой контекста оплаты.
"""

from typing import Any, Dict, List, Optional
from uuid import uuid4

from shared_kernel import BookingId, now

from .domain import Invoice
from .interfaces import IInvoiceRepository, IPaymentGateway


class InMemoryInvoiceRepository(IInvoiceRepository):
    """Реализация репозитория счетов в памяти."""

    def __init__(self) -> None:
        self._invoices: Dict[BookingId, Invoice] = {}

    def add(self, invoice: Invoice) -> None:
        if invoice.booking_id in self._invoices:
            raise ValueError(f"Счет для бронирования #{invoice.booking_id} уже существует")
        self._invoices[invoice.booking_id] = invoice

    def get_by_booking(self, booking_id: BookingId) -> Optional[Invoice]:
        return self._invoices.get(booking_id)

    def list_pending(self) -> List[Invoice]:
        return [invoice for invoice in self._invoices.values() if not invoice.is_paid]


class DummyPaymentGateway(IPaymentGateway):
    """Заглушка платежного шлюза: любой платеж проходит успешно."""

    def __init__(self) -> None:
        self.processed_payments: Dict[str, Dict[str, Any]] = {}

    def process_payment(
        self, amount: float, metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        transaction_id = f"TXN-{uuid4().hex[:8].upper()}"
        result = {
            "transaction_id": transaction_id,
            "status": "completed",
            "amount": amount,
            "processed_at": now().isoformat(),
            "metadata": metadata or {},
        }
        self.processed_payments[transaction_id] = result
        return result
