class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class InvalidInput(DomainError):
    """A secret handed to the credential manager cannot be hashed (empty or too long)."""

    pass


class EntropySourceUnavailable(DomainError):
    """The OS secure random source could not be read."""

    pass


class InvalidUserData(DomainError):
    """Profile fields failed validation. `errors` maps field name to messages."""

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("invalid user data: " + ", ".join(sorted(errors)))
        self.errors = errors


class UserNotFound(DomainError):
    """No user matches the lookup criteria (e.g., email)."""

    pass


class UserAlreadyExists(DomainError):
    """Another user already holds this email (compared case-insensitively)."""

    pass


class InvalidCredentials(DomainError):
    """Email/password pair does not match a user."""

    pass


class InvalidActivationToken(DomainError):
    """Activation link does not match any pending activation."""

    pass


class AccountNotActivated(DomainError):
    """Login attempted before the account was activated."""

    pass


class NotAllowed(DomainError):
    """The acting user may not touch this record."""

    pass
