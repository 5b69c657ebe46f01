"""Audiophile storefront FastAPI application.

Serves the cart, checkout, order and confirmation endpoints of the ordering
domain, and the confirmation email endpoint of the notifications context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from notifications.api.routes import router as notifications_router
from notifications.channel import reset_channels
from notifications.config import NotificationSettings
from notifications.gateway import reset_gateway
from ordering.api.routes import cart_router, confirmation_router, order_router
from ordering.config import CheckoutSettings
from ordering.domain import ordering
from ordering.utils.logging import bind_checkout_context, clear_checkout_context, configure_logging

# PROTEAN_ENV selects the config overlay from ordering/domain.toml.
configure_logging()
ordering.init()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown: close HTTP clients held by the notification transports.
    reset_gateway()
    reset_channels()


app = FastAPI(
    title="Audiophile Storefront API",
    description="Cart, checkout and order confirmation",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_context(request: Request, call_next):
    """Tag every log line emitted while serving a request with its id and path."""
    request_id = request.headers.get("X-Request-ID") or uuid4().hex
    clear_checkout_context()
    bind_checkout_context(request_id=request_id, path=request.url.path, method=request.method)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(cart_router)
app.include_router(order_router)
app.include_router(confirmation_router)
app.include_router(notifications_router)


@app.get("/health")
def health() -> dict:
    checkout = CheckoutSettings.load(ordering)
    notifications = NotificationSettings.from_env()
    return {
        "status": "ok",
        "domain": ordering.name,
        "checkout": {
            "currency": checkout.currency,
            "shipping_cost": float(checkout.shipping_cost),
            "tax_rate": float(checkout.tax_rate),
        },
        "notifications": {
            "email_provider": notifications.email_provider,
            "remote_endpoint": notifications.send_email_endpoint is not None,
        },
    }
