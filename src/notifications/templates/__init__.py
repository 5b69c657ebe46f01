"""Message templates for customer notifications.

Templates render a canonical payload into ``subject``, ``body`` (plain text)
and ``html_body``. Every value interpolated into HTML goes through ``escape``.
"""

import html


def escape(value) -> str:
    """Escape ``& < > " '`` for safe interpolation into HTML."""
    return html.escape("" if value is None else str(value), quote=True)


def format_money(amount: float) -> str:
    return f"${amount:,.2f}"
