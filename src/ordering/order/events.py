"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A shopper submitted checkout and the order was stored as pending."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    email = String(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)
