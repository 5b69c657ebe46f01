"""Ordering bounded context: Shopping Cart, Checkout and Order records.

Handles the cart slots kept for a shopper, the checkout flow that turns a
cart into a persisted order, and the confirmation view read back after
checkout.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
