from dataclasses import dataclass

from accounts.domain.entities import User
from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.session_store import SessionStorePort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort


@dataclass
class CurrentUser:
    user: User
    # Set when the user was restored from remember cookies and a new session opened.
    new_session_token: str | None = None


async def resolve_current_user(
    uow: UnitOfWorkPort,
    credentials: CredentialsPort,
    sessions: SessionStorePort,
    session_token: str | None = None,
    user_id: str | None = None,
    remember_token: str | None = None,
) -> CurrentUser | None:
    """
    Find the acting user: a live session wins; otherwise fall back to the
    persistent (user_id, remember_token) cookie pair and open a new session.
    """
    if session_token:
        session_user_id = await sessions.get(session_token)
        if session_user_id:
            async with uow as tx:
                user = await tx.users.get_by_id(session_user_id)
            if user:
                return CurrentUser(user=user)

    if user_id and remember_token:
        async with uow as tx:
            user = await tx.users.get_by_id(user_id)
        if user and credentials.verify(remember_token, user.remember_digest):
            return CurrentUser(user=user, new_session_token=await sessions.create(user.id))

    return None
