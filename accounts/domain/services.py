# accounts/domain/services.py
from __future__ import annotations

import re
from dataclasses import dataclass

from accounts.domain.errors import InvalidUserData

VALID_EMAIL_REGEX = re.compile(
    r"\A[\w+\-.]+@[a-z\d\-.]+\.[a-z]+\Z", re.IGNORECASE | re.ASCII
)


@dataclass(frozen=True)
class ProfileRules:
    name_max_length: int = 50
    email_max_length: int = 255
    password_min_length: int = 6


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_profile(
    *,
    name: str | None,
    email: str | None,
    password: str | None,
    rules: ProfileRules,
    password_required: bool = True,
) -> None:
    """
    Check name/email/password against `rules`, collecting every violation.

    `password=None` is accepted when `password_required` is False (profile
    edits that keep the current password). An empty or blank password is
    always rejected.
    """
    errors: dict[str, list[str]] = {}

    if name is None or not name.strip():
        errors.setdefault("name", []).append("can't be blank")
    elif len(name) > rules.name_max_length:
        errors.setdefault("name", []).append(
            f"is too long (maximum is {rules.name_max_length} characters)"
        )

    if email is None or not email.strip():
        errors.setdefault("email", []).append("can't be blank")
    else:
        email = email.strip()
        if len(email) > rules.email_max_length:
            errors.setdefault("email", []).append(
                f"is too long (maximum is {rules.email_max_length} characters)"
            )
        if not VALID_EMAIL_REGEX.match(email):
            errors.setdefault("email", []).append("is invalid")

    if password is None:
        if password_required:
            errors.setdefault("password", []).append("can't be blank")
    elif not password.strip():
        errors.setdefault("password", []).append("can't be blank")
    elif len(password) < rules.password_min_length:
        errors.setdefault("password", []).append(
            f"is too short (minimum is {rules.password_min_length} characters)"
        )

    if errors:
        raise InvalidUserData(errors)
