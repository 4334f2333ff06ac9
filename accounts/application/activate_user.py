import logging
from datetime import datetime, timezone

from accounts.domain.entities import User
from accounts.domain.errors import InvalidActivationToken
from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort
from accounts.domain.services import normalize_email

logger = logging.getLogger(__name__)


async def activate_user(
    uow: UnitOfWorkPort,
    credentials: CredentialsPort,
    email: str,
    token: str,
) -> User:
    normalized_email = normalize_email(email)

    async with uow as transaction:
        user = await transaction.users.get_by_email(normalized_email)
        if not user or not credentials.verify(token, user.activation_digest):
            raise InvalidActivationToken()

        if user.activate(datetime.now(timezone.utc)):
            await transaction.users.update_fields(
                user.id,
                {"activated": True, "activated_at": user.activated_at},
            )
            logger.info("user activated", extra={"user_id": user.id})
        await transaction.commit()
    return user
