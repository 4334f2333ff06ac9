from __future__ import annotations

from typing import Protocol


class EmailPort(Protocol):
    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> None:
        """Deliver one message. Raise EmailDeliveryError if the gateway refuses it."""


class EmailDeliveryError(RuntimeError):
    """The mail gateway could not be reached or rejected the message."""
