"""Checkout orchestrator: turns the shopper's cart into a stored order.

Flow:
    1. Load the cart; an empty cart aborts the submission.
    2. Compute subtotal, shipping, taxes and total.
    3. Reject carts holding a non-positive quantity.
    4. Store the order (durability boundary; failures abort, the cart is kept).
    5. Send the confirmation email, best effort: the outcome is only logged.
    6. Snapshot the cart into ``savedCart``, tagged with the order id, and
       clear the live cart.
    7. Navigate to the confirmation view with the new order id and the
       cart session it was placed from.

Steps 1-4 raise ``CheckoutError`` subclasses. Nothing after step 4 can make
the submission fail.
"""

from collections.abc import Callable
from dataclasses import dataclass
from urllib.parse import urlencode

import structlog
from notifications.gateway import NotificationGateway, SendResult

from ordering.cart.models import CartItem
from ordering.cart.store import CartStore
from ordering.checkout.form import CheckoutForm
from ordering.checkout.pricing import OrderTotals, compute_totals
from ordering.config import CheckoutSettings
from ordering.errors import EmptyCartError, InvalidQuantityError, OrderPersistError
from ordering.order.store import OrderFields, OrderStore

logger = structlog.get_logger(__name__)

Navigator = Callable[[str], None]


@dataclass(frozen=True)
class CheckoutResult:
    order_id: str
    redirect_url: str
    totals: OrderTotals
    notification: SendResult | None = None


def confirmation_url(order_id: str, path: str = "/order-confirmation", session_id: str | None = None) -> str:
    """Confirmation link. ``session_id`` points the view at the cart that was checked out."""
    query = {"orderId": order_id}
    if session_id:
        query["session_id"] = session_id
    return f"{path}?{urlencode(query)}"


def build_confirmation_payload(order_id: str, form: CheckoutForm, items: list[CartItem], totals: OrderTotals) -> dict:
    """Request body for the confirmation email, as posted to ``/api/send-email``."""
    amounts = totals.as_floats()
    return {
        "orderId": order_id,
        "email": form.billing.email,
        "name": form.billing.name,
        "phone": form.billing.phone,
        "shippingAddress": {
            "address": form.shipping.address,
            "city": form.shipping.city,
            "country": form.shipping.country,
            "zipCode": form.shipping.zip_code,
        },
        "items": [item.to_order_line() for item in items],
        "subtotal": amounts["subtotal"],
        "shippingCost": amounts["shipping"],
        "taxes": amounts["taxes"],
        "total": amounts["total"],
    }


class CheckoutOrchestrator:
    def __init__(
        self,
        cart_store: CartStore,
        order_store: OrderStore,
        notifier: NotificationGateway,
        settings: CheckoutSettings | None = None,
        navigate: Navigator | None = None,
    ) -> None:
        self.cart_store = cart_store
        self.order_store = order_store
        self.notifier = notifier
        self.settings = settings or CheckoutSettings()
        self.navigate = navigate or (lambda url: None)

    def submit(self, form: CheckoutForm) -> CheckoutResult:
        """Place an order for the current cart. Called once per user submission."""
        cart = self.cart_store.load()
        if not cart:
            logger.info("Checkout refused: cart is empty")
            raise EmptyCartError()

        totals = compute_totals(cart, self.settings.shipping_cost, self.settings.tax_rate)

        invalid = [item.id for item in cart if item.quantity <= 0]
        if invalid:
            logger.info("Checkout refused: invalid quantities", item_ids=invalid)
            raise InvalidQuantityError(invalid)

        order_id = self._store_order(form, cart, totals)
        logger.info("Order created", order_id=order_id, total=str(totals.total))

        notification = self._notify(order_id, form, cart, totals)

        self.cart_store.save_snapshot(cart, order_id=order_id)
        self.cart_store.clear()

        redirect_url = confirmation_url(order_id, self.settings.confirmation_path, session_id=self.cart_store.namespace)
        self.navigate(redirect_url)

        return CheckoutResult(
            order_id=order_id,
            redirect_url=redirect_url,
            totals=totals,
            notification=notification,
        )

    def _store_order(self, form: CheckoutForm, cart: list[CartItem], totals: OrderTotals) -> str:
        amounts = totals.as_floats()
        fields = OrderFields(
            name=form.billing.name,
            email=form.billing.email,
            phone=form.billing.phone,
            address=form.shipping.address,
            city=form.shipping.city,
            country=form.shipping.country,
            zip_code=form.shipping.zip_code,
            payment_method=form.payment.method.value,
            items=[item.to_order_line() for item in cart],
            subtotal=amounts["subtotal"],
            shipping=amounts["shipping"],
            taxes=amounts["taxes"],
            total=amounts["total"],
            submission_id=form.submission_id,
        )

        try:
            return self.order_store.create_order(fields)
        except OrderPersistError as exc:
            logger.error("Checkout failed", kind=exc.kind.value, error=str(exc))
            raise

    def _notify(
        self, order_id: str, form: CheckoutForm, cart: list[CartItem], totals: OrderTotals
    ) -> SendResult | None:
        payload = build_confirmation_payload(order_id, form, cart, totals)

        try:
            result = self.notifier.send(payload)
        except Exception:
            logger.exception("Email sending failed", order_id=order_id)
            return None

        if result.success:
            logger.info("Confirmation email sent", order_id=order_id, message_id=result.message_id)
        else:
            logger.warning(
                "Confirmation email not sent",
                order_id=order_id,
                failure=result.failure.value if result.failure else None,
                error=result.error,
            )
        return result
