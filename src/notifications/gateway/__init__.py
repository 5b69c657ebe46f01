"""Notification gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- EmailNotificationGateway sending through the configured email channel
- HttpNotificationGateway when SEND_EMAIL_ENDPOINT points at a remote sender
"""

from notifications.config import NotificationSettings
from notifications.gateway.port import NotificationGateway, SendResult

_current_gateway: NotificationGateway | None = None


def build_gateway(settings: NotificationSettings) -> NotificationGateway:
    if settings.send_email_endpoint:
        from notifications.gateway.http_gateway import HttpNotificationGateway

        return HttpNotificationGateway(settings.send_email_endpoint, timeout=settings.timeout)

    from notifications.channel import get_email_channel
    from notifications.gateway.email_gateway import EmailNotificationGateway

    return EmailNotificationGateway(
        get_email_channel(settings),
        app_url=settings.app_url,
        store_name=settings.from_name,
    )


def get_gateway() -> NotificationGateway:
    """Return the current notification gateway, built from the environment on first use."""
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = build_gateway(NotificationSettings.from_env())
    return _current_gateway


def set_gateway(gateway: NotificationGateway) -> None:
    """Override the active notification gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Close the current gateway and reset to the default."""
    global _current_gateway
    if _current_gateway is not None:
        _current_gateway.close()
    _current_gateway = None


__all__ = ["NotificationGateway", "SendResult", "build_gateway", "get_gateway", "set_gateway", "reset_gateway"]
