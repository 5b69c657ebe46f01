"""BDD tests for checkout."""

from ordering.checkout.orchestrator import confirmation_url
from ordering.errors import CheckoutError
from ordering.order.order import Order
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/checkout.feature")


def _orders():
    return current_domain.repository_for(Order)._dao.query.all().items


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the shopper submits the checkout form")
def _(checkout, checkout_form, outcome):
    try:
        outcome["result"] = checkout.submit(checkout_form)
    except CheckoutError as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('an order is stored with status "{status}"'))
def _(outcome, status):
    order = current_domain.repository_for(Order).get(outcome["result"].order_id)
    assert order.status == status


@then(parsers.cfparse("the order total is {amount:f}"))
def _(outcome, amount):
    assert current_domain.repository_for(Order).get(outcome["result"].order_id).total == amount


@then(parsers.cfparse("the order taxes are {amount:f}"))
def _(outcome, amount):
    assert current_domain.repository_for(Order).get(outcome["result"].order_id).taxes == amount


@then("the cart is empty")
def _(cart_store):
    assert cart_store.load() == []


@then(parsers.cfparse("the saved cart holds {count:d} line"))
def _(cart_store, count):
    assert len(cart_store.load_snapshot()) == count


@then("the shopper is sent to the confirmation page")
def _(outcome, visited):
    assert visited == [confirmation_url(outcome["result"].order_id)]


@then(parsers.cfparse('checkout is refused with "{message}"'))
def _(outcome, message):
    assert outcome["error"].user_message == message


@then("no order is stored")
def _():
    assert _orders() == []
