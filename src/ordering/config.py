"""Checkout settings.

Values come from the ``[custom]`` table of the ordering ``domain.toml`` and
can be overridden per deployment with environment variables.
"""

import os
from dataclasses import dataclass, replace
from decimal import Decimal

import structlog

logger = structlog.get_logger(__name__)

_ENV_OVERRIDES = {
    "shipping_cost": ("CHECKOUT_SHIPPING_COST", Decimal),
    "tax_rate": ("CHECKOUT_TAX_RATE", Decimal),
    "currency": ("CHECKOUT_CURRENCY", str),
    "confirmation_path": ("CHECKOUT_CONFIRMATION_PATH", str),
}


@dataclass(frozen=True)
class CheckoutSettings:
    """Constants used by the checkout pipeline."""

    shipping_cost: Decimal = Decimal("50")
    tax_rate: Decimal = Decimal("0.20")
    currency: str = "USD"
    confirmation_path: str = "/order-confirmation"

    @classmethod
    def load(cls, domain=None) -> "CheckoutSettings":
        """Build settings from the domain's custom config, then the environment."""
        settings = cls()

        if domain is not None:
            custom = domain.config.get("custom", {}) or {}
            values = {}
            for key, (_, cast) in _ENV_OVERRIDES.items():
                if key in custom:
                    values[key] = cast(str(custom[key]))
            settings = replace(settings, **values)

        values = {}
        for key, (env_var, cast) in _ENV_OVERRIDES.items():
            raw = os.getenv(env_var)
            if raw:
                values[key] = cast(raw)
        if values:
            logger.debug("Checkout settings overridden from environment", keys=sorted(values))
            settings = replace(settings, **values)

        return settings
