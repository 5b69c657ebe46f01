"""Notification gateway port (abstract interface).

A gateway takes an order confirmation request in any accepted shape and
reports the outcome as a ``SendResult``. Gateways never raise delivery
problems to their caller.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

from notifications.errors import NotificationError, NotificationFailure


@dataclass(frozen=True)
class SendResult:
    """Result of an order confirmation attempt."""

    success: bool
    message_id: str | None = None
    error: str | None = None
    failure: NotificationFailure | None = None

    @classmethod
    def sent(cls, message_id: str | None) -> "SendResult":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failed(cls, error: NotificationError) -> "SendResult":
        return cls(success=False, error=error.message, failure=error.failure)

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.message_id is not None:
            result["message_id"] = self.message_id
        if self.error is not None:
            result["error"] = self.error
            result["failure"] = self.failure.value if self.failure else None
        return result


class NotificationGateway(ABC):
    """Abstract order confirmation gateway."""

    @abstractmethod
    def send(self, payload: Mapping) -> SendResult:
        """Send the order confirmation described by ``payload``."""
        ...

    def close(self) -> None:
        """Release transport resources held by the gateway."""
