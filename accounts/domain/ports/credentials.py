from __future__ import annotations

from typing import Literal, Protocol


class CredentialsPort(Protocol):
    def hash(
        self, secret: str, cost_mode: Literal["fast", "strong"] | None = None
    ) -> str:
        """Return a salted digest of secret. Raise InvalidInput if it cannot be hashed."""

    def new_token(self) -> str:
        """Return a fresh URL-safe random token."""

    def verify(self, presented: str | None, digest: str | None) -> bool:
        """True if presented matches digest; False for a missing or malformed digest."""
