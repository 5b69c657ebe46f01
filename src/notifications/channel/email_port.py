"""Email channel port.

Adapters deliver one rendered message and describe the outcome in a plain
dict. Delivery problems are reported in that dict, never raised.
"""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        """Deliver a message with a plain text body and an optional HTML alternative.

        Returns:
            ``{"message_id": str, "status": "sent"}`` on success, otherwise
            ``{"message_id": None, "status": "failed", "error": str}`` plus
            ``"timed_out": True`` when the transport gave up waiting.
        """
        ...

    def close(self) -> None:
        """Release transport resources held by the adapter."""

    @staticmethod
    def sent(message_id: str | None) -> dict:
        return {"message_id": message_id, "status": "sent"}

    @staticmethod
    def failed(error: str, timed_out: bool = False) -> dict:
        result = {"message_id": None, "status": "failed", "error": error}
        if timed_out:
            result["timed_out"] = True
        return result
