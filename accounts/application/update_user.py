import logging
from typing import Any

import accounts.domain.services as domain_services
from accounts.domain.entities import User
from accounts.domain.errors import NotAllowed, UserNotFound
from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)


async def update_user(
    uow: UnitOfWorkPort,
    credentials: CredentialsPort,
    current: User,
    user_id: str,
    rules: domain_services.ProfileRules,
    name: str | None = None,
    email: str | None = None,
    password: str | None = None,
) -> User:
    """
    Edit name, email and/or password of `user_id` on behalf of `current`.
    Fields left as None keep their stored value; the password digest is only
    replaced when a new password is given.
    """
    async with uow as transaction:
        user = await transaction.users.get_by_id(user_id)
        if not user:
            raise UserNotFound()
        if not user.is_user(current):
            raise NotAllowed()

        new_name = user.name if name is None else name
        new_email = user.email if email is None else email
        domain_services.validate_profile(
            name=new_name,
            email=new_email,
            password=password,
            rules=rules,
            password_required=False,
        )

        fields: dict[str, Any] = {}
        if new_name.strip() != user.name:
            fields["name"] = new_name.strip()
        normalized_email = domain_services.normalize_email(new_email)
        if normalized_email != user.email:
            fields["email"] = normalized_email
        if password is not None:
            fields["password_digest"] = credentials.hash(password)

        if fields:
            await transaction.users.update_fields(user.id, fields)
            for key, value in fields.items():
                setattr(user, key, value)
            logger.info(
                "user updated", extra={"user_id": user.id, "fields": sorted(fields)}
            )
        await transaction.commit()
    return user
