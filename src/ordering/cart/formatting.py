"""Display helpers for cart and order amounts."""


def format_price(amount: float) -> str:
    """Format an amount with thousands separators, e.g. ``2999`` -> ``"2,999"``."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"
