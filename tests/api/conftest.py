import base64

import pytest
from fastapi.testclient import TestClient

from accounts.main import create_app
from accounts.presentation.dependencies import (
    get_credentials,
    get_email_port,
    get_sessions,
    get_uow,
)


@pytest.fixture()
def app_and_deps(uow, credentials, sessions, email_ok):
    app = create_app()

    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_credentials] = lambda: credentials
    app.dependency_overrides[get_sessions] = lambda: sessions
    app.dependency_overrides[get_email_port] = lambda: email_ok

    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    return TestClient(app_and_deps, raise_server_exceptions=False)


def basic_auth(email: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
