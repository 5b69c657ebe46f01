"""Notification failures.

A notification failure never blocks checkout. Gateways catch
``NotificationError`` and report it as a failed ``SendResult`` instead of
raising it to their caller.
"""

from enum import Enum


class NotificationFailure(Enum):
    INVALID_PAYLOAD = "invalid_payload"
    DELIVERY_FAILED = "delivery_failed"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"


class NotificationError(Exception):
    def __init__(self, failure: NotificationFailure, message: str):
        self.failure = failure
        self.message = message
        super().__init__(f"{failure.value}: {message}")
