from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    id: str | None = None
    name: str = ""
    email: str | None = None
    password_digest: str | None = field(default=None, repr=False)
    remember_digest: str | None = field(default=None, repr=False)
    activation_digest: str | None = field(default=None, repr=False)
    activated: bool = False
    activated_at: datetime | None = None
    created_at: datetime | None = None

    # Plaintext tokens handed back to the caller once; never persisted.
    remember_token: str | None = field(default=None, repr=False, compare=False)
    activation_token: str | None = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self.email:
            self.email = self.email.strip().lower()
            if not self.email:
                raise ValueError("email cannot be empty")
        else:
            raise ValueError("email is required")

    def activate(self, now: datetime) -> bool:
        """
        One-way transition to activated. Returns False (and keeps the first
        activated_at) when the user was already active.
        """
        if self.activated:
            return False
        self.activated = True
        self.activated_at = now
        return True

    def set_remember(self, token: str, digest: str) -> None:
        self.remember_token = token
        self.remember_digest = digest

    def clear_remember(self) -> None:
        self.remember_token = None
        self.remember_digest = None

    def is_user(self, other: "User | None") -> bool:
        return other is not None and self.id is not None and self.id == other.id
