from typing import Optional, Protocol


class SessionStorePort(Protocol):
    async def create(self, user_id: str) -> str:
        """Open a short-lived session for user_id and return its token."""

    async def get(self, token: str) -> Optional[str]:
        """Return the user id behind a live session token, else None."""

    async def revoke(self, token: str) -> None:
        """Drop the session (no-op if already gone)."""
