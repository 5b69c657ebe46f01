"""FastAPI route for sending order confirmation emails.

The request body is accepted as-is: every client shape is normalized by the
gateway rather than rejected by a strict schema.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from notifications.api.schemas import SendEmailResponse, SendEmailResult
from notifications.channel import get_email_channel
from notifications.config import NotificationSettings
from notifications.gateway.email_gateway import EmailNotificationGateway

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["notifications"])


@router.post("/send-email", response_model=SendEmailResponse)
def send_email(payload: dict[str, Any] = Body(...)):
    settings = NotificationSettings.from_env()
    gateway = EmailNotificationGateway(
        get_email_channel(settings),
        app_url=settings.app_url,
        store_name=settings.from_name,
    )

    logger.info("Send email requested", order_id=payload.get("orderId"))
    result = gateway.send(payload)

    if result.success:
        return SendEmailResponse(success=True, result=SendEmailResult(message_id=result.message_id))

    return JSONResponse(
        status_code=500,
        content=SendEmailResponse(success=False, error=result.error).model_dump(),
    )
