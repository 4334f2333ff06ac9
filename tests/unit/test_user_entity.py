from datetime import datetime, timedelta, timezone

import pytest

from accounts.domain.entities import User


def test_email_normalized_and_defaults():
    u = User(id=None, name="Alice", email=" Alice@Example.COM ")
    assert u.email == "alice@example.com"
    assert u.activated is False
    assert u.activated_at is None
    assert u.remember_digest is None


def test_email_required():
    with pytest.raises(ValueError):
        User(id=None, name="Alice", email=None)
    with pytest.raises(ValueError):
        User(id=None, name="Alice", email="   ")


def test_activate_sets_flag_and_timestamp_together():
    u = User(id="u1", email="a@x.com")
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert u.activate(now) is True
    assert u.activated is True
    assert u.activated_at == now


def test_activate_twice_keeps_first_timestamp():
    u = User(id="u1", email="a@x.com")
    first = datetime(2026, 1, 1, tzinfo=timezone.utc)
    u.activate(first)
    assert u.activate(first + timedelta(days=1)) is False
    assert u.activated is True
    assert u.activated_at == first


def test_remember_and_clear_move_together():
    u = User(id="u1", email="a@x.com")
    u.set_remember("tok", "digest")
    assert (u.remember_token, u.remember_digest) == ("tok", "digest")
    u.clear_remember()
    assert (u.remember_token, u.remember_digest) == (None, None)


def test_secrets_not_in_repr():
    u = User(id="u1", email="a@x.com", password_digest="$2b$secret")
    u.set_remember("plain-token", "$2b$digest")
    text = repr(u)
    assert "plain-token" not in text
    assert "$2b$" not in text


def test_is_user():
    a = User(id="u1", email="a@x.com")
    assert a.is_user(User(id="u1", email="a@x.com"))
    assert not a.is_user(User(id="u2", email="b@x.com"))
    assert not a.is_user(None)
    assert not User(id=None, email="a@x.com").is_user(User(id=None, email="a@x.com"))
