"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field

from ordering.cart.models import CartItem


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1, default=1)
    image: str = ""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "zx9-speaker",
                    "name": "ZX9 Speaker",
                    "price": 4500,
                    "quantity": 1,
                    "image": "/assets/cart/image-zx9-speaker.jpg",
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartResponse(BaseModel):
    items: list[CartItem]
    item_count: int


class CheckoutResponse(BaseModel):
    order_id: str
    redirect_url: str
    subtotal: float
    shipping: float
    taxes: float
    total: float
    email_sent: bool


class StatusResponse(BaseModel):
    status: str = "ok"
