import pytest
from notifications.channel import reset_channels
from notifications.gateway import reset_gateway


@pytest.fixture(autouse=True)
def _reset_adapters():
    yield
    reset_channels()
    reset_gateway()


@pytest.fixture
def checkout_payload():
    """Confirmation request as posted by the checkout page."""
    return {
        "orderId": "ord-001",
        "email": "alexei@mail.com",
        "name": "Alexei Ward",
        "phone": "+1 202-555-0136",
        "shippingAddress": {
            "address": "1137 Williams Avenue",
            "city": "New York",
            "country": "United States",
            "zipCode": "10001",
        },
        "items": [{"id": "a", "name": "Speaker", "price": 100, "quantity": 2}],
        "subtotal": 200,
        "shippingCost": 50,
        "taxes": 40,
        "total": 290,
    }
