from functools import lru_cache

from fastapi import Request

from accounts.domain.ports.credentials import CredentialsPort
from accounts.domain.ports.email_port import EmailPort
from accounts.domain.ports.session_store import SessionStorePort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort
from accounts.domain.services import ProfileRules
from accounts.infrastructure.db.pool import get_pool
from accounts.infrastructure.db.uow import PgUnitOfWork
from accounts.infrastructure.redis_cache.pool import get_redis
from accounts.infrastructure.redis_cache.sessions import RedisSessions
from accounts.infrastructure.security.credentials import CredentialManager
from accounts.settings import Settings, get_settings


def get_uow() -> UnitOfWorkPort:
    return PgUnitOfWork(get_pool())


@lru_cache(maxsize=1)
def get_credentials() -> CredentialsPort:
    return CredentialManager.from_settings(get_settings())


def get_sessions() -> SessionStorePort:
    return RedisSessions(get_redis(), ttl_seconds=get_settings().session_ttl_seconds)


def get_email_port(request: Request) -> EmailPort:
    # This is set in accounts.main lifespan()
    return request.app.state.email_adapter


def get_app_settings() -> Settings:
    return get_settings()


def get_profile_rules() -> ProfileRules:
    settings = get_settings()
    return ProfileRules(
        name_max_length=settings.name_max_length,
        email_max_length=settings.email_max_length,
        password_min_length=settings.password_min_length,
    )
