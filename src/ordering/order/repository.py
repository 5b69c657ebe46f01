"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def find(self, order_id: str) -> Order | None:
        """Return the order with this identifier, or None."""
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            return None

    def find_by_submission(self, submission_id: str) -> Order | None:
        """Return the order placed for a checkout submission key, if any."""
        orders = self._dao.query.filter(submission_id=submission_id).all().items
        return orders[0] if orders else None
