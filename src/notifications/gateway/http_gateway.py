"""HTTP notification gateway: posts the confirmation request to the email endpoint.

Used by the checkout when the email sender runs as a separate service. The
request is bounded by ``timeout``; a timeout, a network error or any non-200
response is reported as a failed ``SendResult``.
"""

from collections.abc import Mapping

import httpx
import structlog

from notifications.errors import NotificationError, NotificationFailure
from notifications.gateway.port import NotificationGateway, SendResult

logger = structlog.get_logger(__name__)


class HttpNotificationGateway(NotificationGateway):
    def __init__(self, endpoint: str, timeout: float = 8.0, client: httpx.Client | None = None):
        self.endpoint = endpoint
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout)

    def send(self, payload: Mapping) -> SendResult:
        try:
            response = self.client.post(self.endpoint, json=dict(payload))
        except httpx.TimeoutException as exc:
            logger.warning("Email endpoint timed out", endpoint=self.endpoint, error=str(exc))
            return SendResult.failed(NotificationError(NotificationFailure.TIMEOUT, "Email endpoint timed out"))
        except httpx.HTTPError as exc:
            logger.error("Email endpoint unreachable", endpoint=self.endpoint, error=str(exc))
            return SendResult.failed(NotificationError(NotificationFailure.DELIVERY_FAILED, str(exc)))

        try:
            body = response.json()
        except ValueError:
            logger.warning("Failed to parse email response JSON", status_code=response.status_code)
            body = {}

        if response.status_code != 200:
            error = body.get("error") if isinstance(body, dict) else None
            logger.error("Email sending failed", status_code=response.status_code, error=error)
            return SendResult.failed(
                NotificationError(
                    NotificationFailure.HTTP_ERROR,
                    error or f"Email endpoint responded {response.status_code}",
                )
            )

        result = body.get("result") if isinstance(body, dict) else None
        message_id = None
        if isinstance(result, dict):
            message_id = result.get("message_id") or result.get("messageId")

        logger.info("Email API responded OK", message_id=message_id)
        return SendResult.sent(message_id)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
