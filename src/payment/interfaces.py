"""
Интерфейсы (порты) для контекста оплаты.
"""

from typing import Any, Dict, List, Optional, Protocol

from shared_kernel import BookingId

from .domain import Invoice


class IInvoiceRepository(Protocol):
    """Интерфейс репозитория счетов."""

    def add(self, invoice: Invoice) -> None: ...
    def get_by_booking(self, booking_id: BookingId) -> Optional[Invoice]: ...
    def list_pending(self) -> List[Invoice]: ...


class IPaymentGateway(Protocol):
    """Интерфейс платежного шлюза."""

    def process_payment(self, amount: float, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]: ...
