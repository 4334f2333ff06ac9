import pytest

from accounts.application.register_user import activation_link, register_user
from accounts.domain.errors import InvalidInput, InvalidUserData, UserAlreadyExists


async def _register(uow, credentials, email_port, rules, **overrides):
    kwargs = dict(
        uow=uow,
        credentials=credentials,
        email_port=email_port,
        name="Jeremy",
        email=" Jeremy@Example.COM ",
        password="Secret123!",
        rules=rules,
        base_url="http://localhost:8000/",
    )
    kwargs.update(overrides)
    return await register_user(**kwargs)


@pytest.mark.asyncio
async def test_register_user_happy_path(uow, credentials, email_ok, rules):
    result = await _register(uow, credentials, email_ok, rules)

    user = result.user
    assert result.email_sent is True
    assert user.id == "u1"
    assert user.email == "jeremy@example.com"
    assert user.activated is False
    assert uow.committed is True

    stored = uow.users.rows["u1"]
    assert stored.password_digest != "Secret123!"
    assert credentials.verify("Secret123!", stored.password_digest)
    assert not credentials.verify("wrongpass", stored.password_digest)

    # activation token handed back once, only its digest is stored
    assert user.activation_token
    assert stored.activation_token is None
    assert credentials.verify(user.activation_token, stored.activation_digest)

    assert len(email_ok.calls) == 1
    mail = email_ok.calls[0]
    assert mail["to"] == "jeremy@example.com"
    assert mail["idempotency_key"] == "activation-u1"
    assert (
        activation_link("http://localhost:8000", user.activation_token, user.email)
        in mail["body"]
    )


def test_activation_link_escapes_email():
    link = activation_link("http://h/", "tok", "a+b@x.com")
    assert link == "http://h/v1/users/activate/tok?email=a%2Bb%40x.com"


@pytest.mark.asyncio
async def test_register_user_mail_failure_keeps_account(
    uow, credentials, email_down, rules
):
    result = await _register(uow, credentials, email_down, rules)

    assert result.email_sent is False
    assert email_down.calls == 1
    assert "u1" in uow.users.rows
    assert uow.committed is True


@pytest.mark.asyncio
async def test_register_user_invalid_data_touches_nothing(
    uow, credentials, email_ok, rules
):
    with pytest.raises(InvalidUserData) as ei:
        await _register(uow, credentials, email_ok, rules, name="", password="abc")

    assert set(ei.value.errors) == {"name", "password"}
    assert uow.users.rows == {}
    assert email_ok.calls == []


@pytest.mark.asyncio
async def test_register_user_password_too_long_for_bcrypt(
    uow, credentials, email_ok, rules
):
    with pytest.raises(InvalidInput):
        await _register(uow, credentials, email_ok, rules, password="p" * 73)
    assert uow.users.rows == {}


@pytest.mark.asyncio
async def test_register_user_duplicate_email_case_insensitive(
    uow, credentials, email_ok, rules, seed_user
):
    seed_user(email="jeremy@example.com")

    with pytest.raises(UserAlreadyExists):
        await _register(uow, credentials, email_ok, rules, email="JEREMY@example.com")

    assert uow.committed is False
    assert uow.rolled_back is True
    assert email_ok.calls == []
