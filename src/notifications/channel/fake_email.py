"""In-memory email adapter, the default when no provider is configured."""

from uuid import uuid4

from notifications.channel.email_port import EmailPort


class FakeEmailAdapter(EmailPort):
    """Keeps messages in ``sent_emails`` instead of delivering them.

    ``configure`` makes the next sends fail, optionally as a timeout.
    """

    def __init__(self):
        self.sent_emails: list[dict] = []
        self.configure()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        timed_out: bool = False,
    ):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.timed_out = timed_out

    @property
    def last_email(self) -> dict | None:
        return self.sent_emails[-1] if self.sent_emails else None

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        if not self.should_succeed:
            return self.failed(self.failure_reason, timed_out=self.timed_out)

        message_id = f"email-{uuid4().hex[:12]}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        return self.sent(message_id)

    def reset(self):
        self.sent_emails.clear()
        self.configure()
