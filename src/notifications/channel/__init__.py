"""Email channel registry.

Provides singleton access to the email adapter. Uses the fake adapter by
default; ``EMAIL_PROVIDER=smtp`` or ``EMAIL_PROVIDER=resend`` selects a real
transport configured from the environment.
"""

from notifications.channel.email_port import EmailPort
from notifications.config import NotificationSettings

_email_channel: EmailPort | None = None


def _build_channel(settings: NotificationSettings) -> EmailPort:
    if settings.email_provider == "fake":
        from notifications.channel.fake_email import FakeEmailAdapter

        return FakeEmailAdapter()
    elif settings.email_provider == "smtp":
        from notifications.channel.smtp_email import SmtpEmailAdapter

        return SmtpEmailAdapter(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_password,
            secure=settings.smtp_secure,
            from_name=settings.from_name,
            timeout=settings.timeout,
        )
    elif settings.email_provider == "resend":
        from notifications.channel.resend_email import ResendEmailAdapter

        return ResendEmailAdapter(
            api_key=settings.resend_api_key,
            from_address=settings.resend_from,
            timeout=settings.timeout,
        )
    else:
        raise ValueError(f"Unknown email provider: {settings.email_provider}")


def get_email_channel(settings: NotificationSettings | None = None) -> EmailPort:
    """Return the configured email adapter (singleton)."""
    global _email_channel
    if _email_channel is None:
        _email_channel = _build_channel(settings or NotificationSettings.from_env())
    return _email_channel


def set_email_channel(channel: EmailPort) -> None:
    """Override the active email adapter (useful for tests)."""
    global _email_channel
    _email_channel = channel


def reset_channels() -> None:
    """Close and reset the channel singleton."""
    global _email_channel
    if _email_channel is not None:
        _email_channel.close()
    _email_channel = None
