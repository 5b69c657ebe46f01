"""Resend email adapter: transactional email over the Resend HTTP API."""

import httpx
import structlog

from notifications.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailAdapter(EmailPort):
    def __init__(
        self,
        api_key: str | None,
        from_address: str,
        timeout: float = 8.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.from_address = from_address
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        if not self.api_key:
            return self.failed("RESEND_API_KEY is not configured")

        request = {
            "from": self.from_address,
            "to": [to],
            "subject": subject,
            "text": body,
        }
        if html_body:
            request["html"] = html_body

        try:
            response = self.client.post(
                RESEND_API_URL,
                json=request,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.TimeoutException as exc:
            logger.warning("Resend request timed out", error=str(exc))
            return self.failed("Resend request timed out", timed_out=True)
        except httpx.HTTPError as exc:
            logger.error("Resend request failed", error=str(exc))
            return self.failed(str(exc))

        if response.is_error:
            logger.error("Resend rejected the message", status_code=response.status_code, body=response.text)
            return self.failed(f"Resend responded {response.status_code}: {response.text}")

        try:
            body = response.json()
        except ValueError:
            body = None

        message_id = body.get("id") if isinstance(body, dict) else None
        if message_id is None:
            logger.warning("Resend accepted the message without an id", status_code=response.status_code)
        return self.sent(message_id)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
