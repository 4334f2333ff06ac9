from accounts.domain.entities import User
from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort


async def remember_user(
    uow: UnitOfWorkPort, credentials: CredentialsPort, user: User
) -> str:
    """
    Issue a fresh remember token for `user` and store its digest. Any token
    issued earlier stops verifying once the digest is overwritten.
    """
    token = credentials.new_token()
    digest = credentials.hash(token)

    async with uow as transaction:
        await transaction.users.update_fields(user.id, {"remember_digest": digest})
        await transaction.commit()
    user.set_remember(token, digest)
    return token


async def forget_user(uow: UnitOfWorkPort, user: User) -> None:
    async with uow as transaction:
        await transaction.users.update_fields(user.id, {"remember_digest": None})
        await transaction.commit()
    user.clear_remember()
