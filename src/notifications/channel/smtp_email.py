"""SMTP email adapter.

Sends a multipart (plain text + HTML) message through the configured SMTP
server. Port 465 style implicit TLS is used when ``secure`` is set, otherwise
the connection is upgraded with STARTTLS.
"""

import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

import structlog

from notifications.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    def __init__(
        self,
        host: str,
        port: int,
        user: str | None,
        password: str | None,
        secure: bool = False,
        from_name: str = "Audiophile",
        timeout: float = 8.0,
        smtp_factory=None,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.secure = secure
        self.from_name = from_name
        self.timeout = timeout
        self._smtp_factory = smtp_factory or (smtplib.SMTP_SSL if secure else smtplib.SMTP)

    def _build_message(self, to: str, subject: str, body: str, html_body: str | None) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self.from_name, self.user))
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain=self.user.split("@")[-1] if "@" in self.user else None)
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        if not self.user:
            return self.failed("SMTP_USER environment variable is required")

        message = self._build_message(to, subject, body, html_body)

        try:
            with self._smtp_factory(self.host, self.port, timeout=self.timeout) as client:
                if not self.secure:
                    client.starttls(context=ssl.create_default_context())
                if self.password:
                    client.login(self.user, self.password)
                client.send_message(message)
        except TimeoutError as exc:
            logger.warning("SMTP send timed out", host=self.host, error=str(exc))
            return self.failed("SMTP send timed out", timed_out=True)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("SMTP send failed", host=self.host, error=str(exc))
            return self.failed(str(exc))

        return self.sent(message["Message-ID"])
