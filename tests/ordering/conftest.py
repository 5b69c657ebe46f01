"""Shared fixtures for the Ordering domain tests."""

import pytest
from notifications.errors import NotificationError, NotificationFailure
from notifications.gateway import NotificationGateway, SendResult
from ordering.cart.models import CartItem
from ordering.cart.storage import InMemoryStorage
from ordering.cart.store import CartStore
from ordering.checkout.form import CheckoutForm
from ordering.errors import OrderPersistError
from ordering.order.store import OrderFields, OrderStore


@pytest.fixture(scope="session")
def ordering_domain():
    from ordering.domain import ordering

    ordering.init()
    return ordering


@pytest.fixture(autouse=True)
def _ctx(ordering_domain):
    with ordering_domain.domain_context():
        yield

        # Clear all databases and drain the event store
        for _, provider in ordering_domain.providers.items():
            provider._data_reset()
        ordering_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------
class RecordingOrderStore(OrderStore):
    """Order store that keeps calls in memory and can be told to fail."""

    def __init__(self):
        self.created: list[OrderFields] = []
        self.error: OrderPersistError | None = None

    def create_order(self, fields: OrderFields) -> str:
        if self.error is not None:
            raise self.error
        self.created.append(fields)
        return f"order-{len(self.created)}"

    def get_order(self, order_id):
        return None


class FakeNotifier(NotificationGateway):
    """Notification gateway that records payloads and can fail or raise."""

    def __init__(self):
        self.payloads: list[dict] = []
        self.should_succeed = True
        self.raise_error: Exception | None = None

    def send(self, payload) -> SendResult:
        self.payloads.append(payload)
        if self.raise_error is not None:
            raise self.raise_error
        if not self.should_succeed:
            return SendResult.failed(NotificationError(NotificationFailure.HTTP_ERROR, "Email endpoint responded 500"))
        return SendResult.sent("msg-001")


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def cart_store(storage):
    store = CartStore(storage)
    yield store
    store.close()


@pytest.fixture
def order_store():
    return RecordingOrderStore()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def speaker():
    return CartItem(id="a", name="Speaker", price=100, quantity=2, image="/assets/speaker.jpg")


@pytest.fixture
def checkout_form():
    return CheckoutForm(
        billing={"name": "Alexei Ward", "email": "alexei@mail.com", "phone": "+1 202-555-0136"},
        shipping={
            "address": "1137 Williams Avenue",
            "zip_code": "10001",
            "city": "New York",
            "country": "United States",
        },
        payment={"method": "cash"},
    )
