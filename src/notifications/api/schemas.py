"""Pydantic response schemas for the Notifications API."""

from pydantic import BaseModel


class SendEmailResult(BaseModel):
    message_id: str | None = None


class SendEmailResponse(BaseModel):
    success: bool
    result: SendEmailResult | None = None
    error: str | None = None
