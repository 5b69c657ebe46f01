"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.errors import DuplicateOrderError
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    phone = String(required=True, max_length=50)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    country = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    payment_method = String(required=True, max_length=50)
    items = Text(required=True)  # JSON: list of {id, name, price, quantity}
    subtotal = Float(required=True)
    shipping = Float(required=True)
    taxes = Float(required=True)
    total = Float(required=True)
    submission_id = String(max_length=100)


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(Order)

        if command.submission_id and repo.find_by_submission(command.submission_id):
            raise DuplicateOrderError(command.submission_id)

        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        order = Order.place(
            contact={
                "name": command.name,
                "email": command.email,
                "phone": command.phone,
            },
            shipping_address={
                "address": command.address,
                "city": command.city,
                "country": command.country,
                "zip_code": command.zip_code,
            },
            payment_method=command.payment_method,
            items_data=items_data,
            totals={
                "subtotal": command.subtotal,
                "shipping": command.shipping,
                "taxes": command.taxes,
                "total": command.total,
            },
            submission_id=command.submission_id,
        )
        repo.add(order)
        return str(order.id)
