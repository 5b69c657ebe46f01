"""Checkout error taxonomy.

Errors raised before persistence (``EmptyCartError``, ``InvalidQuantityError``)
and at the persistence boundary (``OrderPersistError`` and its
``DuplicateOrderError`` kind) abort the submission. Each carries the blocking
notice shown to the shopper.
"""

from enum import Enum


class PersistFailureKind(Enum):
    DUPLICATE = "duplicate"
    TRANSIENT = "transient"
    UNKNOWN = "unknown"


class CheckoutError(Exception):
    """Base class for errors that block a checkout submission."""

    user_message = "Something went wrong! Please try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.user_message)


class EmptyCartError(CheckoutError):
    user_message = "Your cart is empty!"


class InvalidQuantityError(CheckoutError):
    user_message = "Invalid item quantities detected!"

    def __init__(self, item_ids: list[str]):
        self.item_ids = item_ids
        super().__init__(f"Invalid quantity for cart items: {', '.join(item_ids)}")


class OrderPersistError(CheckoutError):
    """The order could not be stored. The cart is left untouched."""

    def __init__(self, message: str | None = None, kind: PersistFailureKind = PersistFailureKind.UNKNOWN):
        self.kind = kind
        super().__init__(message)


class DuplicateOrderError(OrderPersistError):
    user_message = "This order has already been submitted. Please check your email for confirmation."

    def __init__(self, submission_id: str):
        self.submission_id = submission_id
        super().__init__(
            f"An order was already placed for submission {submission_id}",
            kind=PersistFailureKind.DUPLICATE,
        )
