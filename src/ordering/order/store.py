"""Order store port and its protean-backed adapter.

The checkout orchestrator and the confirmation view only see ``OrderStore``.
``DomainOrderStore`` runs the ``PlaceOrder`` command through the ordering
domain and translates failures into ``OrderPersistError`` kinds.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import structlog
from protean.exceptions import ValidationError

from ordering.domain import ordering
from ordering.errors import DuplicateOrderError, OrderPersistError, PersistFailureKind
from ordering.order.creation import PlaceOrder
from ordering.order.order import Order
from ordering.order.record import OrderRecord

logger = structlog.get_logger(__name__)


@dataclass
class OrderFields:
    """Everything the checkout submits for a new order."""

    name: str
    email: str
    phone: str
    address: str
    city: str
    country: str
    zip_code: str
    payment_method: str
    items: list[dict]
    subtotal: float
    shipping: float
    taxes: float
    total: float
    submission_id: str | None = field(default=None)


class OrderStore(ABC):
    """Persistence boundary for orders."""

    @abstractmethod
    def create_order(self, fields: OrderFields) -> str:
        """Store a new pending order and return its identifier.

        Raises:
            DuplicateOrderError: an order already exists for the submission.
            OrderPersistError: the order could not be stored.
        """
        ...

    @abstractmethod
    def get_order(self, order_id: str) -> OrderRecord | None:
        """Return the stored order, or None if there is no such order."""
        ...


class DomainOrderStore(OrderStore):
    def __init__(self, domain=ordering) -> None:
        self.domain = domain

    def create_order(self, fields: OrderFields) -> str:
        error: Exception | None = None
        with self.domain.domain_context():
            try:
                command = PlaceOrder(
                    name=fields.name,
                    email=fields.email,
                    phone=fields.phone,
                    address=fields.address,
                    city=fields.city,
                    country=fields.country,
                    zip_code=fields.zip_code,
                    payment_method=fields.payment_method,
                    items=json.dumps(fields.items),
                    subtotal=fields.subtotal,
                    shipping=fields.shipping,
                    taxes=fields.taxes,
                    total=fields.total,
                    submission_id=fields.submission_id,
                )
                order_id = self.domain.process(command, asynchronous=False)
            except Exception as exc:
                error = exc

        # Raised outside the context, which re-raises as exc_type(value, tb).
        if isinstance(error, DuplicateOrderError):
            raise error
        if error is not None:
            raise self._translate(error) from error
        return order_id

    @staticmethod
    def _translate(exc: Exception) -> OrderPersistError:
        if isinstance(exc, ValidationError):
            logger.warning("Order rejected by domain validation", errors=exc.messages)
            return OrderPersistError(f"Order rejected: {exc.messages}", kind=PersistFailureKind.UNKNOWN)
        if isinstance(exc, (ConnectionError, TimeoutError)):
            logger.error("Order store unavailable", error=str(exc))
            return OrderPersistError(str(exc), kind=PersistFailureKind.TRANSIENT)
        logger.error("Order could not be stored", error=str(exc))
        return OrderPersistError(str(exc), kind=PersistFailureKind.UNKNOWN)

    def get_order(self, order_id: str) -> OrderRecord | None:
        if not order_id:
            return None

        with self.domain.domain_context():
            order = self.domain.repository_for(Order).find(order_id)

        if order is None:
            return None
        return OrderRecord.from_aggregate(order)
