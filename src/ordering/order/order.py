"""Order aggregate: the persisted record of a checkout submission.

An order is created exactly once, at checkout, and is not modified afterwards
in this context. Identity, status and creation time are always assigned here,
never taken from the submitting client.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String

from ordering.domain import ordering
from ordering.order.events import OrderPlaced


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@ordering.entity(part_of="Order")
class OrderItem:
    """A line of the order, copied from the cart at checkout."""

    product_id = String(required=True, max_length=100)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


@ordering.aggregate
class Order:
    # Customer contact
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=50)

    # Shipping address
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    country = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)

    payment_method = String(required=True, max_length=50)
    items = HasMany(OrderItem)

    # Amounts, locked at checkout
    subtotal = Float(required=True, min_value=0.0)
    shipping = Float(required=True, min_value=0.0)
    taxes = Float(required=True, min_value=0.0)
    total = Float(required=True, min_value=0.0)

    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    submission_id = String(max_length=100)
    created_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, contact, shipping_address, payment_method, items_data, totals, submission_id=None):
        """Create a pending order from checkout data.

        Args:
            contact: Dict with name, email, phone.
            shipping_address: Dict with address, city, country, zip_code.
            payment_method: Payment method chosen on the checkout form.
            items_data: List of dicts with id, name, price, quantity.
            totals: Dict with subtotal, shipping, taxes, total.
            submission_id: Optional client submission key used to refuse duplicates.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)

        order = cls(
            name=contact.get("name"),
            email=contact.get("email"),
            phone=contact.get("phone"),
            address=shipping_address.get("address"),
            city=shipping_address.get("city"),
            country=shipping_address.get("country"),
            zip_code=shipping_address.get("zip_code"),
            payment_method=payment_method,
            items=[
                OrderItem(
                    product_id=str(item["id"]),
                    name=item["name"],
                    price=item["price"],
                    quantity=item["quantity"],
                )
                for item in items_data
            ],
            subtotal=totals["subtotal"],
            shipping=totals["shipping"],
            taxes=totals["taxes"],
            total=totals["total"],
            status=OrderStatus.PENDING.value,
            submission_id=submission_id,
            created_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                email=order.email,
                item_count=sum(item.quantity for item in order.items),
                total=order.total,
                placed_at=now,
            )
        )

        return order
