"""Order totals.

Amounts are computed with ``Decimal`` so that the grand total is exactly the
sum of its parts. Taxes are charged on the pre-shipping subtotal and rounded
half-up to whole currency units.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ordering.cart.models import CartItem


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Decimal
    shipping: Decimal
    taxes: Decimal
    total: Decimal

    def as_floats(self) -> dict[str, float]:
        return {
            "subtotal": float(self.subtotal),
            "shipping": float(self.shipping),
            "taxes": float(self.taxes),
            "total": float(self.total),
        }


def _amount(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def round_half_up(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def compute_totals(items: Iterable[CartItem], shipping_cost, tax_rate) -> OrderTotals:
    """Compute subtotal, shipping, taxes and the grand total for cart items."""
    subtotal = sum((_amount(item.price) * item.quantity for item in items), Decimal("0"))
    shipping = _amount(shipping_cost)
    taxes = round_half_up(subtotal * _amount(tax_rate))

    return OrderTotals(
        subtotal=subtotal,
        shipping=shipping,
        taxes=taxes,
        total=subtotal + shipping + taxes,
    )
