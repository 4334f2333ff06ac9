from datetime import datetime, timezone

import pytest

from accounts.domain.entities import User
from accounts.domain.services import ProfileRules
from accounts.infrastructure.security.credentials import CostMode, CredentialManager
from tests.fakes import FakeEmailDown, FakeEmailOK, FakeSessions, FakeUoW


@pytest.fixture(scope="session")
def credentials():
    # Minimum bcrypt cost keeps the suite fast.
    return CredentialManager(strong_rounds=4, default_cost_mode=CostMode.FAST)


@pytest.fixture()
def uow():
    return FakeUoW()


@pytest.fixture()
def sessions():
    return FakeSessions()


@pytest.fixture()
def email_ok():
    return FakeEmailOK()


@pytest.fixture()
def email_down():
    return FakeEmailDown()


@pytest.fixture()
def rules():
    return ProfileRules(name_max_length=50, email_max_length=255, password_min_length=6)


@pytest.fixture()
def seed_user(uow, credentials):
    """Store a user with password 'Secret123!' and return it."""

    def _seed(
        email: str = "jeremy@example.com",
        password: str = "Secret123!",
        activated: bool = True,
        name: str = "Jeremy",
    ) -> User:
        return uow.users.seed(
            User(
                name=name,
                email=email,
                password_digest=credentials.hash(password),
                activation_digest=credentials.hash(credentials.new_token()),
                activated=activated,
                activated_at=datetime.now(timezone.utc) if activated else None,
            )
        )

    return _seed
