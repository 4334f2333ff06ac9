import pytest

from accounts.domain.errors import InvalidUserData
from accounts.domain.services import validate_profile


def _errors(rules, **kwargs) -> dict[str, list[str]]:
    with pytest.raises(InvalidUserData) as ei:
        validate_profile(rules=rules, **kwargs)
    return ei.value.errors


def test_valid_profile_passes(rules):
    validate_profile(
        name="Example User", email="user@example.com", password="foobar", rules=rules
    )


def test_blank_fields_reported_together(rules):
    errors = _errors(rules, name=" ", email="", password="      ")
    assert errors == {
        "name": ["can't be blank"],
        "email": ["can't be blank"],
        "password": ["can't be blank"],
    }


def test_name_and_email_length_limits(rules):
    errors = _errors(
        rules,
        name="a" * 51,
        email="a" * 244 + "@example.com",
        password="foobar",
    )
    assert errors["name"] == ["is too long (maximum is 50 characters)"]
    assert errors["email"] == ["is too long (maximum is 255 characters)"]


@pytest.mark.parametrize(
    "email",
    [
        "user@example.com",
        "USER@foo.COM",
        "A_US-ER@foo.bar.org",
        "first.last@foo.jp",
        "alice+bob@baz.cn",
    ],
)
def test_accepts_valid_addresses(rules, email):
    validate_profile(name="x", email=email, password="foobar", rules=rules)


@pytest.mark.parametrize(
    "email",
    [
        "user@example,com",
        "user_at_foo.org",
        "user.name@example.",
        "foo@bar_baz.com",
        "foo@bar+baz.com",
        "user@example.com\n",
        "jöe@example.com",
        "joe@exämple.com",
    ],
)
def test_rejects_invalid_addresses(rules, email):
    assert _errors(rules, name="x", email=email, password="foobar") == {
        "email": ["is invalid"]
    }


def test_password_minimum_length(rules):
    assert _errors(rules, name="x", email="a@b.co", password="a" * 5) == {
        "password": ["is too short (minimum is 6 characters)"]
    }


def test_password_may_be_omitted_on_update(rules):
    validate_profile(
        name="x", email="a@b.co", password=None, rules=rules, password_required=False
    )
    assert _errors(rules, name="x", email="a@b.co", password=None) == {
        "password": ["can't be blank"]
    }
    # an explicit empty password is still rejected on update
    assert _errors(
        rules, name="x", email="a@b.co", password="", password_required=False
    ) == {"password": ["can't be blank"]}
