"""Notification settings, read from the environment."""

import os
from dataclasses import dataclass


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class NotificationSettings:
    email_provider: str = "fake"
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_secure: bool = False
    smtp_user: str | None = None
    smtp_password: str | None = None
    from_name: str = "Audiophile"
    resend_api_key: str | None = None
    resend_from: str = "onboarding@resend.dev"
    app_url: str = "https://audiophile.com"
    send_email_endpoint: str | None = None
    timeout: float = 8.0

    @classmethod
    def from_env(cls) -> "NotificationSettings":
        return cls(
            email_provider=os.getenv("EMAIL_PROVIDER", "fake").lower(),
            smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
            smtp_port=int(os.getenv("SMTP_PORT", "587")),
            smtp_secure=_flag(os.getenv("SMTP_SECURE")),
            smtp_user=os.getenv("SMTP_USER"),
            smtp_password=os.getenv("SMTP_PASSWORD"),
            from_name=os.getenv("SMTP_FROM_NAME", "Audiophile"),
            resend_api_key=os.getenv("RESEND_API_KEY"),
            resend_from=os.getenv("RESEND_FROM", "onboarding@resend.dev"),
            app_url=(os.getenv("APP_URL") or os.getenv("NEXT_PUBLIC_APP_URL") or "https://audiophile.com").rstrip("/"),
            send_email_endpoint=os.getenv("SEND_EMAIL_ENDPOINT") or None,
            timeout=float(os.getenv("NOTIFICATION_TIMEOUT", "8.0")),
        )
