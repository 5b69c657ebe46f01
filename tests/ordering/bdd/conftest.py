"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.gateway.email_gateway import EmailNotificationGateway
from ordering.cart.models import CartItem
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.order.store import DomainOrderStore
from pytest_bdd import given, parsers, then


@pytest.fixture()
def email_channel():
    return FakeEmailAdapter()


@pytest.fixture()
def visited():
    return []


@pytest.fixture()
def checkout(ordering_domain, cart_store, email_channel, visited):
    return CheckoutOrchestrator(
        cart_store=cart_store,
        order_store=DomainOrderStore(ordering_domain),
        notifier=EmailNotificationGateway(email_channel),
        navigate=visited.append,
    )


@pytest.fixture()
def outcome():
    """Mutable holder for the result or error of the When step."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a cart with {quantity:d} "{name}" at {price:d} each'))
def _(cart_store, quantity, name, price):
    cart_store.add_item(CartItem(id=name.lower(), name=name, price=price, quantity=quantity))


@given("the email service is failing")
def _(email_channel):
    email_channel.configure(should_succeed=False)


@given(parsers.cfparse('the "{name}" quantity is set to {quantity:d}'))
def _(cart_store, name, quantity):
    items = cart_store.load()
    for item in items:
        if item.name == name:
            item.quantity = quantity
    cart_store.save(items)


@given("the cart is cleared")
def _(cart_store):
    cart_store.clear()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart still holds {count:d} line"))
def _(cart_store, count):
    assert len(cart_store.load()) == count
