"""Confirmation view: what the shopper sees after a successful checkout.

The order id arrives through navigation state. Line items are rehydrated from
the ``savedCart`` snapshot when it was taken for the requested order (it
carries product images, the order does not), otherwise from the order itself;
the grand total always comes from the stored order.
"""

from dataclasses import dataclass, field
from enum import Enum

import structlog

from ordering.cart.formatting import format_price
from ordering.cart.store import CartStore
from ordering.order.store import OrderStore

logger = structlog.get_logger(__name__)


class ConfirmationState(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SummaryLine:
    id: str
    name: str
    price: float
    quantity: int
    image: str = ""

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "quantity": self.quantity,
            "price": format_price(self.price),
            "line_total": format_price(self.line_total),
        }


@dataclass(frozen=True)
class ConfirmationSummary:
    state: ConfirmationState
    order_id: str | None = None
    heading: str = ""
    message: str = ""
    items: list[SummaryLine] = field(default_factory=list)
    grand_total: float | None = None

    @property
    def first_item(self) -> SummaryLine | None:
        return self.items[0] if self.items else None

    @property
    def other_items_count(self) -> int:
        return max(len(self.items) - 1, 0)

    def to_dict(self) -> dict:
        if self.state == ConfirmationState.NOT_FOUND:
            return {"state": self.state.value, "order_id": self.order_id, "message": self.message}

        return {
            "state": self.state.value,
            "order_id": self.order_id,
            "heading": self.heading,
            "message": self.message,
            "items": [line.to_dict() for line in self.items],
            "other_items_count": self.other_items_count,
            "grand_total": format_price(self.grand_total),
        }


class ConfirmationView:
    def __init__(self, order_store: OrderStore, cart_store: CartStore) -> None:
        self.order_store = order_store
        self.cart_store = cart_store

    def render(self, order_id: str | None) -> ConfirmationSummary:
        if not order_id:
            return self._not_found(order_id)

        order = self.order_store.get_order(order_id)
        if order is None:
            logger.info("Confirmation requested for unknown order", order_id=order_id)
            return self._not_found(order_id)

        snapshot = self.cart_store.load_snapshot(order_id)
        if snapshot:
            lines = [
                SummaryLine(id=i.id, name=i.name, price=i.price, quantity=i.quantity, image=i.image) for i in snapshot
            ]
        else:
            lines = [SummaryLine(id=i.id, name=i.name, price=i.price, quantity=i.quantity) for i in order.items]

        return ConfirmationSummary(
            state=ConfirmationState.FOUND,
            order_id=order.id,
            heading="Thank you for your order",
            message="You will receive an email confirmation shortly.",
            items=lines,
            grand_total=order.total,
        )

    @staticmethod
    def _not_found(order_id: str | None) -> ConfirmationSummary:
        return ConfirmationSummary(
            state=ConfirmationState.NOT_FOUND,
            order_id=order_id,
            message="Order not found",
        )
