"""Read model handed out by the order store."""

from datetime import datetime

from pydantic import BaseModel

from ordering.order.order import Order


class OrderLine(BaseModel):
    id: str
    name: str
    price: float
    quantity: int


class OrderRecord(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    address: str
    city: str
    country: str
    zip_code: str
    payment_method: str
    items: list[OrderLine]
    subtotal: float
    shipping: float
    taxes: float
    total: float
    status: str
    created_at: datetime

    @classmethod
    def from_aggregate(cls, order: Order) -> "OrderRecord":
        return cls(
            id=str(order.id),
            name=order.name,
            email=order.email,
            phone=order.phone,
            address=order.address,
            city=order.city,
            country=order.country,
            zip_code=order.zip_code,
            payment_method=order.payment_method,
            items=[
                OrderLine(
                    id=item.product_id,
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                )
                for item in order.items
            ],
            subtotal=order.subtotal,
            shipping=order.shipping,
            taxes=order.taxes,
            total=order.total,
            status=order.status,
            created_at=order.created_at,
        )
