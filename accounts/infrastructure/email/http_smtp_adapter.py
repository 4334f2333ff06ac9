from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from accounts.domain.ports.email_port import EmailDeliveryError, EmailPort

logger = logging.getLogger(__name__)


class HttpSmtpEmailAdapter(EmailPort):
    """Posts messages as JSON to an HTTP mail gateway (`POST <base_url>/send`)."""

    def __init__(
        self,
        base_url: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 5.0,
        send_path: str = "/send",
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._send_path = send_path if send_path.startswith("/") else f"/{send_path}"
        self._owns_client: bool = client is None
        self._client: httpx.AsyncClient = client or httpx.AsyncClient(timeout=timeout)

    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        idempotency_key: str | None = None,
    ) -> None:
        headers: Dict[str, str] = {}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        url = f"{self._base_url}{self._send_path}"
        payload = {"to": to, "subject": subject, "body": body}

        try:
            resp = await self._client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise EmailDeliveryError(f"mail gateway unreachable: {type(e).__name__}") from e
        if not (200 <= resp.status_code < 300):
            # the body may echo the message (activation link); keep it out of errors
            logger.warning(
                "mail gateway rejected message", extra={"status": resp.status_code}
            )
            raise EmailDeliveryError(f"mail gateway responded {resp.status_code}")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
