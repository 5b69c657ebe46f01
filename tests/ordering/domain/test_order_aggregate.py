"""Tests for Order aggregate placement."""

from datetime import datetime

import pytest
from ordering.order.events import OrderPlaced
from ordering.order.order import Order, OrderStatus
from protean.exceptions import ValidationError


def _place_order(**overrides):
    defaults = {
        "contact": {"name": "Alexei Ward", "email": "alexei@mail.com", "phone": "+1 202-555-0136"},
        "shipping_address": {
            "address": "1137 Williams Avenue",
            "city": "New York",
            "country": "United States",
            "zip_code": "10001",
        },
        "payment_method": "cash",
        "items_data": [{"id": "a", "name": "Speaker", "price": 100, "quantity": 2}],
        "totals": {"subtotal": 200.0, "shipping": 50.0, "taxes": 40.0, "total": 290.0},
    }
    defaults.update(overrides)
    return Order.place(**defaults)


class TestOrderPlacement:
    def test_place_sets_pending_status(self):
        order = _place_order()
        assert order.status == OrderStatus.PENDING.value

    def test_place_assigns_identity(self):
        order = _place_order()
        assert order.id is not None

    def test_place_sets_created_at(self):
        order = _place_order()
        assert isinstance(order.created_at, datetime)

    def test_place_copies_contact_and_address(self):
        order = _place_order()
        assert order.name == "Alexei Ward"
        assert order.email == "alexei@mail.com"
        assert order.city == "New York"
        assert order.zip_code == "10001"

    def test_place_copies_items(self):
        order = _place_order()
        assert len(order.items) == 1
        item = order.items[0]
        assert item.product_id == "a"
        assert item.name == "Speaker"
        assert item.price == 100.0
        assert item.quantity == 2

    def test_place_locks_totals(self):
        order = _place_order()
        assert order.subtotal == 200.0
        assert order.shipping == 50.0
        assert order.taxes == 40.0
        assert order.total == 290.0

    def test_place_keeps_submission_id(self):
        order = _place_order(submission_id="sub-001")
        assert order.submission_id == "sub-001"

    def test_each_order_gets_a_distinct_id(self):
        assert _place_order().id != _place_order().id


class TestOrderPlacementValidation:
    def test_no_items(self):
        with pytest.raises(ValidationError) as exc:
            _place_order(items_data=[])
        assert "items" in exc.value.messages

    def test_zero_quantity_item(self):
        with pytest.raises(ValidationError):
            _place_order(items_data=[{"id": "a", "name": "Speaker", "price": 100, "quantity": 0}])

    def test_missing_email(self):
        with pytest.raises(ValidationError):
            _place_order(contact={"name": "Alexei Ward", "phone": "+1 202-555-0136"})


class TestOrderPlacedEvent:
    def test_place_raises_order_placed(self):
        order = _place_order()

        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.email == "alexei@mail.com"
        assert event.item_count == 2
        assert event.total == 290.0
