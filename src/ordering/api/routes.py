"""FastAPI routes for the Ordering domain: carts, checkout, orders and confirmation."""

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, HTTPException, Query
from notifications.gateway import get_gateway

from ordering.api.schemas import (
    AddToCartRequest,
    CartResponse,
    CheckoutResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from ordering.cart.models import CartItem
from ordering.cart.storage import InMemoryStorage, KeyValueStorage
from ordering.cart.store import CartStore
from ordering.checkout.form import CheckoutForm
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.config import CheckoutSettings
from ordering.confirmation.view import ConfirmationView
from ordering.domain import ordering
from ordering.errors import (
    DuplicateOrderError,
    EmptyCartError,
    InvalidQuantityError,
    OrderPersistError,
    PersistFailureKind,
)
from ordering.order.record import OrderRecord
from ordering.order.store import DomainOrderStore, OrderStore

_cart_storage: KeyValueStorage = InMemoryStorage()
_order_store: OrderStore = DomainOrderStore(ordering)


def set_cart_storage(storage: KeyValueStorage) -> None:
    """Swap the storage backing cart slots (useful for tests)."""
    global _cart_storage
    _cart_storage = storage


def set_order_store(store: OrderStore) -> None:
    global _order_store
    _order_store = store


@contextmanager
def _cart(session_id: str) -> Iterator[CartStore]:
    store = CartStore(_cart_storage, namespace=session_id)
    try:
        yield store
    finally:
        store.close()


def _cart_response(store: CartStore) -> CartResponse:
    return CartResponse(items=store.load(), item_count=store.item_count())


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/{session_id}", response_model=CartResponse)
def get_cart(session_id: str) -> CartResponse:
    with _cart(session_id) as store:
        return _cart_response(store)


@cart_router.post("/{session_id}/items", response_model=CartResponse)
def add_cart_item(session_id: str, body: AddToCartRequest) -> CartResponse:
    with _cart(session_id) as store:
        store.add_item(CartItem(**body.model_dump()))
        return _cart_response(store)


@cart_router.put("/{session_id}/items/{item_id}", response_model=CartResponse)
def update_cart_item_quantity(session_id: str, item_id: str, body: UpdateCartQuantityRequest) -> CartResponse:
    with _cart(session_id) as store:
        try:
            store.update_quantity(item_id, body.quantity)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Item {item_id} is not in the cart")
        return _cart_response(store)


@cart_router.delete("/{session_id}/items/{item_id}", response_model=CartResponse)
def remove_cart_item(session_id: str, item_id: str) -> CartResponse:
    with _cart(session_id) as store:
        try:
            store.remove_item(item_id)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Item {item_id} is not in the cart")
        return _cart_response(store)


@cart_router.delete("/{session_id}", response_model=StatusResponse)
def clear_cart(session_id: str) -> StatusResponse:
    with _cart(session_id) as store:
        store.clear()
    return StatusResponse()


@cart_router.post("/{session_id}/checkout", status_code=201, response_model=CheckoutResponse)
def checkout_cart(session_id: str, body: CheckoutForm) -> CheckoutResponse:
    """Place an order for the session's cart.

    1. Validate the cart and compute totals
    2. Store the order
    3. Send the confirmation email (best effort)
    4. Snapshot and clear the cart
    """
    with _cart(session_id) as store:
        orchestrator = CheckoutOrchestrator(
            cart_store=store,
            order_store=_order_store,
            notifier=get_gateway(),
            settings=CheckoutSettings.load(ordering),
        )
        try:
            result = orchestrator.submit(body)
        except (EmptyCartError, InvalidQuantityError) as exc:
            raise HTTPException(status_code=400, detail=exc.user_message)
        except DuplicateOrderError as exc:
            raise HTTPException(status_code=409, detail=exc.user_message)
        except OrderPersistError as exc:
            status_code = 503 if exc.kind == PersistFailureKind.TRANSIENT else 500
            raise HTTPException(status_code=status_code, detail=exc.user_message)

    amounts = result.totals.as_floats()
    return CheckoutResponse(
        order_id=result.order_id,
        redirect_url=result.redirect_url,
        subtotal=amounts["subtotal"],
        shipping=amounts["shipping"],
        taxes=amounts["taxes"],
        total=amounts["total"],
        email_sent=bool(result.notification and result.notification.success),
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("/{order_id}", response_model=OrderRecord)
def get_order(order_id: str) -> OrderRecord:
    order = _order_store.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


# ---------------------------------------------------------------------------
# Confirmation Router
# ---------------------------------------------------------------------------
confirmation_router = APIRouter(prefix="/order-confirmation", tags=["confirmation"])


@confirmation_router.get("")
def order_confirmation(
    order_id: str | None = Query(default=None, alias="orderId"),
    session_id: str | None = Query(default=None),
) -> dict:
    with _cart(session_id) as store:
        summary = ConfirmationView(_order_store, store).render(order_id)
    return summary.to_dict()
