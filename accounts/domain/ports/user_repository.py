from __future__ import annotations

from typing import Any, Optional, Protocol

from accounts.domain.entities import User


class UserRepositoryPort(Protocol):
    async def create(self, user: User) -> User:
        """
        Insert a new user with its digests already computed.
        Raise UserAlreadyExists if the email is taken (case-insensitive).
        Return the stored User with id and created_at filled in.
        """

    async def get_by_email(self, email: str) -> Optional[User]:
        """Fetch user by (normalized) email. Return None if not found."""

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Fetch user by id. Return None if not found."""

    async def update_fields(self, user_id: str, fields: dict[str, Any]) -> None:
        """
        Write the given columns for one user.
        Raise UserNotFound if no row matches, UserAlreadyExists if an email
        change collides with another user.
        """
