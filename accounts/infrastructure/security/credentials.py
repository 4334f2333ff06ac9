from __future__ import annotations

import enum
import secrets

from passlib.context import CryptContext
from passlib.hash import bcrypt as bcrypt_handler

from accounts.domain.errors import EntropySourceUnavailable, InvalidInput
from accounts.settings import Settings

# One global context; bcrypt is the only scheme we use.
_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt only looks at the first 72 bytes of its input.
MAX_SECRET_BYTES = 72
TOKEN_BYTES = 32


class CostMode(str, enum.Enum):
    FAST = "fast"
    STRONG = "strong"


class CredentialManager:
    """
    Hashes secrets (passwords, remember and activation tokens) into bcrypt
    digests, issues random URL-safe tokens and checks presented secrets
    against stored digests.

    Holds only immutable configuration, so one instance can be shared across
    requests and threads.
    """

    def __init__(
        self,
        *,
        strong_rounds: int = 12,
        default_cost_mode: CostMode = CostMode.STRONG,
    ) -> None:
        if not bcrypt_handler.min_rounds <= strong_rounds <= bcrypt_handler.max_rounds:
            raise ValueError(
                f"bcrypt rounds must be between {bcrypt_handler.min_rounds} "
                f"and {bcrypt_handler.max_rounds}"
            )
        self._strong_rounds = strong_rounds
        self._default_cost_mode = CostMode(default_cost_mode)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialManager":
        return cls(
            strong_rounds=settings.bcrypt_rounds,
            default_cost_mode=CostMode(settings.hash_cost_mode),
        )

    def rounds_for(self, cost_mode: CostMode) -> int:
        if CostMode(cost_mode) is CostMode.FAST:
            return bcrypt_handler.min_rounds
        return self._strong_rounds

    def hash(self, secret: str, cost_mode: CostMode | None = None) -> str:
        """
        Hash `secret` with bcrypt. The salt and cost are embedded in the
        returned digest, so two calls on the same secret give different
        strings that both verify.
        """
        if not isinstance(secret, str) or not secret:
            raise InvalidInput("secret must be a non-empty string")
        if len(secret.encode("utf-8")) > MAX_SECRET_BYTES:
            raise InvalidInput(f"secret exceeds {MAX_SECRET_BYTES} bytes")
        if "\x00" in secret:
            raise InvalidInput("secret must not contain NUL characters")

        rounds = self.rounds_for(cost_mode or self._default_cost_mode)
        try:
            return _pwd.hash(secret, rounds=rounds)
        except ValueError as e:
            # passlib raises ValueError for inputs bcrypt cannot take
            raise InvalidInput("secret cannot be hashed") from e

    def new_token(self) -> str:
        try:
            return secrets.token_urlsafe(TOKEN_BYTES)
        except (OSError, NotImplementedError) as e:
            raise EntropySourceUnavailable("secure random source unavailable") from e

    def verify(self, presented: str | None, digest: str | None) -> bool:
        """
        Constant-time check of `presented` against a stored digest. A missing
        or malformed digest is a non-match, never an error.
        """
        if not digest or presented is None:
            return False
        try:
            return _pwd.verify(presented, digest)
        except (ValueError, TypeError):
            return False
