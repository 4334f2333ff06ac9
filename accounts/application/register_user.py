import logging
from dataclasses import dataclass
from urllib.parse import quote

import accounts.domain.services as domain_services
from accounts.domain.entities import User
from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.email_port import EmailDeliveryError, EmailPort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)


@dataclass
class RegisterResult:
    user: User
    email_sent: bool


def activation_link(base_url: str, token: str, email: str) -> str:
    return (
        f"{base_url.rstrip('/')}/v1/users/activate/{token}"
        f"?email={quote(email, safe='')}"
    )


def _activation_body(name: str, link: str) -> str:
    return (
        f"Hi {name},\n\n"
        "Welcome! Click on the link below to activate your account:\n\n"
        f"{link}\n"
    )


async def register_user(
    uow: UnitOfWorkPort,
    credentials: CredentialsPort,
    email_port: EmailPort,
    name: str,
    email: str,
    password: str,
    rules: domain_services.ProfileRules,
    base_url: str,
) -> RegisterResult:
    domain_services.validate_profile(
        name=name, email=email, password=password, rules=rules
    )
    normalized_email = domain_services.normalize_email(email)

    # Digests are built here, before the row exists; the repository stores them as-is.
    activation_token = credentials.new_token()
    user = User(
        name=name.strip(),
        email=normalized_email,
        password_digest=credentials.hash(password),
        activation_digest=credentials.hash(activation_token),
    )

    async with uow as transaction:
        user = await transaction.users.create(user)
        await transaction.commit()
    user.activation_token = activation_token
    logger.info("user registered", extra={"user_id": user.id})

    link = activation_link(base_url, activation_token, normalized_email)
    try:
        await email_port.send(
            to=normalized_email,
            subject="Account activation",
            body=_activation_body(user.name, link),
            idempotency_key=f"activation-{user.id}",
        )
    except EmailDeliveryError:
        logger.warning("activation email not sent", extra={"user_id": user.id})
        return RegisterResult(user=user, email_sent=False)

    return RegisterResult(user=user, email_sent=True)
