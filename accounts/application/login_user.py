import logging
from dataclasses import dataclass

from accounts.application.remember_user import forget_user, remember_user
from accounts.domain.entities import User
from accounts.domain.errors import AccountNotActivated, InvalidCredentials
from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.session_store import SessionStorePort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort
from accounts.domain.services import normalize_email

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    user: User
    session_token: str
    remember_token: str | None = None


async def login_user(
    uow: UnitOfWorkPort,
    credentials: CredentialsPort,
    sessions: SessionStorePort,
    email: str,
    password: str,
    remember_me: bool = False,
) -> LoginResult:
    async with uow as transaction:
        user = await transaction.users.get_by_email(normalize_email(email))
    if not user or not credentials.verify(password, user.password_digest):
        raise InvalidCredentials()
    if not user.activated:
        raise AccountNotActivated()

    session_token = await sessions.create(user.id)
    if remember_me:
        remember_token = await remember_user(uow, credentials, user)
    else:
        await forget_user(uow, user)
        remember_token = None

    logger.info(
        "user logged in", extra={"user_id": user.id, "remember_me": remember_me}
    )
    return LoginResult(
        user=user, session_token=session_token, remember_token=remember_token
    )


async def logout_user(
    uow: UnitOfWorkPort,
    sessions: SessionStorePort,
    user: User,
    session_token: str | None = None,
) -> None:
    if session_token:
        await sessions.revoke(session_token)
    await forget_user(uow, user)
    logger.info("user logged out", extra={"user_id": user.id})
