"""Order confirmation payload: one canonical shape for every sender.

Clients post the confirmation request in several shapes:

- flat, with an address object under ``shippingAddress`` and the fee under
  ``shippingCost``;
- flat, with the address object under ``shipping`` (or ``shippingDetails``);
- nested, with ``customer``, ``shipping`` and ``totals`` objects.

``normalize_payload`` maps all of them onto ``EmailPayload`` using the alias
tables below. Missing numbers become 0 and missing strings become "".
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from notifications.errors import NotificationError, NotificationFailure

# Address objects are merged in this order; the last non-empty sub-field wins.
ADDRESS_SOURCES = ("shippingAddress", "shippingDetails", "shipping")

ADDRESS_FIELDS = {
    "address": ("address", "street"),
    "city": ("city",),
    "country": ("country",),
    "zip": ("zipCode", "zip", "zip_code", "postalCode", "postal_code"),
}

CONTACT_FIELDS = ("name", "email", "phone")

# Key paths tried in order; the first numeric value wins.
SHIPPING_COST_PATHS = (
    ("shippingCost",),
    ("shipping_cost",),
    ("shipping",),
    ("totals", "shipping"),
    ("totals", "shippingCost"),
)

TOTAL_PATHS = {
    "subtotal": (("subtotal",), ("totals", "subtotal")),
    "taxes": (("taxes",), ("tax",), ("totals", "taxes")),
    "grand_total": (("total",), ("grandTotal",), ("totals", "grandTotal"), ("totals", "total")),
}

ORDER_ID_PATHS = (("orderId",), ("order_id",))


@dataclass(frozen=True)
class Customer:
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class ShippingAddress:
    address: str = ""
    city: str = ""
    country: str = ""
    zip: str = ""


@dataclass(frozen=True)
class EmailItem:
    name: str = ""
    price: float = 0.0
    quantity: int = 0

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass(frozen=True)
class EmailTotals:
    subtotal: float = 0.0
    shipping: float = 0.0
    taxes: float = 0.0
    grand_total: float = 0.0


@dataclass(frozen=True)
class EmailPayload:
    order_id: str = ""
    customer: Customer = field(default_factory=Customer)
    shipping_address: ShippingAddress = field(default_factory=ShippingAddress)
    items: tuple[EmailItem, ...] = ()
    totals: EmailTotals = field(default_factory=EmailTotals)

    def validate(self) -> None:
        if not self.customer.email:
            raise NotificationError(NotificationFailure.INVALID_PAYLOAD, "Missing required fields: email")


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------
def _is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def _number(value) -> float:
    return float(value.strip() if isinstance(value, str) else value) if _is_number(value) else 0.0


def _text(value) -> str:
    if value is None or isinstance(value, (Mapping, list, tuple, bool)):
        return ""
    return str(value)


def _lookup(data: Mapping, path: tuple[str, ...]):
    value = data
    for key in path:
        if not isinstance(value, Mapping):
            return None
        value = value.get(key)
    return value


def _first_number(data: Mapping, paths) -> float:
    for path in paths:
        value = _lookup(data, path)
        if _is_number(value):
            return _number(value)
    return 0.0


def _first_text(data: Mapping, paths) -> str:
    for path in paths:
        value = _text(_lookup(data, path))
        if value:
            return value
    return ""


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
def _normalize_address(data: Mapping) -> ShippingAddress:
    merged = dict.fromkeys(ADDRESS_FIELDS, "")

    for source in ADDRESS_SOURCES:
        candidate = data.get(source)
        if not isinstance(candidate, Mapping):
            continue
        for name, aliases in ADDRESS_FIELDS.items():
            value = _first_text(candidate, [(alias,) for alias in aliases])
            if value:
                merged[name] = value

    return ShippingAddress(**merged)


def _normalize_customer(data: Mapping) -> Customer:
    nested = data.get("customer") if isinstance(data.get("customer"), Mapping) else {}
    contact = {}
    for name in CONTACT_FIELDS:
        contact[name] = _text(data.get(name)) or _text(nested.get(name))
    return Customer(**contact)


def _normalize_items(data: Mapping) -> tuple[EmailItem, ...]:
    raw_items = data.get("items")
    if not isinstance(raw_items, (list, tuple)):
        return ()

    return tuple(
        EmailItem(
            name=_text(entry.get("name")),
            price=_number(entry.get("price")),
            quantity=int(_number(entry.get("quantity"))),
        )
        for entry in raw_items
        if isinstance(entry, Mapping)
    )


def normalize_payload(data: Mapping) -> EmailPayload:
    """Map any accepted request shape onto the canonical ``EmailPayload``."""
    if not isinstance(data, Mapping):
        raise NotificationError(NotificationFailure.INVALID_PAYLOAD, "Payload must be a JSON object")

    return EmailPayload(
        order_id=_first_text(data, ORDER_ID_PATHS),
        customer=_normalize_customer(data),
        shipping_address=_normalize_address(data),
        items=_normalize_items(data),
        totals=EmailTotals(
            subtotal=_first_number(data, TOTAL_PATHS["subtotal"]),
            shipping=_first_number(data, SHIPPING_COST_PATHS),
            taxes=_first_number(data, TOTAL_PATHS["taxes"]),
            grand_total=_first_number(data, TOTAL_PATHS["grand_total"]),
        ),
    )
