"""Cart line items as they are kept in the cart slots."""

from pydantic import BaseModel, ConfigDict, Field


class CartItem(BaseModel):
    """A product the shopper intends to buy.

    Quantity is not constrained here. Checkout rejects non-positive quantities
    before anything is persisted.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    price: float = Field(ge=0)
    quantity: int
    image: str = ""

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_order_line(self) -> dict:
        """Snapshot sent to the order repository (images are not part of an order)."""
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }
