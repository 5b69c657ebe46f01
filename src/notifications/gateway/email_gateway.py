"""Email notification gateway: renders and sends the confirmation itself.

This is the server side of ``POST /api/send-email``: the raw request body is
normalized, validated, rendered and handed to the email channel adapter.
"""

from collections.abc import Mapping

import structlog

from notifications.channel.email_port import EmailPort
from notifications.errors import NotificationError, NotificationFailure
from notifications.gateway.port import NotificationGateway, SendResult
from notifications.payload import EmailPayload, normalize_payload
from notifications.templates.order_confirmation import OrderConfirmationTemplate

logger = structlog.get_logger(__name__)


class EmailNotificationGateway(NotificationGateway):
    def __init__(self, channel: EmailPort, app_url: str = "https://audiophile.com", store_name: str = "Audiophile"):
        self.channel = channel
        self.app_url = app_url
        self.store_name = store_name

    def send(self, payload: Mapping | EmailPayload) -> SendResult:
        try:
            email_payload = payload if isinstance(payload, EmailPayload) else normalize_payload(payload)
            email_payload.validate()

            rendered = OrderConfirmationTemplate.render(
                email_payload,
                app_url=self.app_url,
                store_name=self.store_name,
            )
            response = self.channel.send(
                to=email_payload.customer.email,
                subject=rendered["subject"],
                body=rendered["body"],
                html_body=rendered["html_body"],
            )
        except NotificationError as exc:
            logger.warning("Order confirmation not sent", failure=exc.failure.value, error=exc.message)
            return SendResult.failed(exc)
        except Exception as exc:
            logger.exception("Email channel raised while sending order confirmation")
            return SendResult.failed(NotificationError(NotificationFailure.DELIVERY_FAILED, str(exc)))

        if response.get("status") == "sent":
            logger.info(
                "Order confirmation sent",
                order_id=email_payload.order_id,
                message_id=response.get("message_id"),
            )
            return SendResult.sent(response.get("message_id"))

        failure = NotificationFailure.TIMEOUT if response.get("timed_out") else NotificationFailure.DELIVERY_FAILED
        error = NotificationError(failure, response.get("error") or "Unknown dispatch error")
        logger.warning("Order confirmation delivery failed", order_id=email_payload.order_id, error=error.message)
        return SendResult.failed(error)
