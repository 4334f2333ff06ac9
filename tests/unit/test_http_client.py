import pytest
import pytest_asyncio

from accounts.infrastructure.http import client as http_client_mod


@pytest_asyncio.fixture(autouse=True)
async def reset_http_client():
    """Each test starts and ends without a shared client."""
    await http_client_mod.close_http_client()
    yield
    await http_client_mod.close_http_client()


@pytest.mark.asyncio
async def test_get_before_open_raises():
    with pytest.raises(RuntimeError):
        http_client_mod.get_http_client()


@pytest.mark.asyncio
async def test_open_returns_singleton_with_timeout():
    c1 = await http_client_mod.open_http_client(timeout=3.0)
    c2 = await http_client_mod.open_http_client()

    assert c1 is c2
    assert http_client_mod.get_http_client() is c1
    assert float(c1.timeout.connect) == pytest.approx(3.0)
    assert float(c1.timeout.read) == pytest.approx(3.0)


@pytest.mark.asyncio
async def test_close_is_idempotent_and_reopen_creates_new_client():
    c1 = await http_client_mod.open_http_client()
    await http_client_mod.close_http_client()
    await http_client_mod.close_http_client()
    assert c1.is_closed

    c2 = await http_client_mod.open_http_client()
    assert c2 is not c1
    assert not c2.is_closed
