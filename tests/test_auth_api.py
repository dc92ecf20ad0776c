"""Tests for signup and signin."""

import pytest
from pydantic import ValidationError

from tasklists.api import auth_api
from tasklists.api.auth_api import signin, signup
from tasklists.auth.credentials import resolve_token, verify_password
from tasklists.database.schema import User
from tasklists.database.user_repo import find_user_by_id
from tasklists.errors import InvalidCredentials


def test_signup_stores_hashed_password_and_returns_token(anon_ctx, session, auth_settings):
    payload = signup(anon_ctx, "a@x.com", "pw", "A")

    stored = find_user_by_id(session, payload.user.id)
    assert stored.password_hash != "pw"
    assert verify_password("pw", stored.password_hash)
    assert resolve_token(payload.token, auth_settings["secret_key"]) == payload.user.id
    assert payload.user.email == "a@x.com"
    assert payload.user.avatar is None
    assert "password" not in payload.user.model_dump()
    assert "password_hash" not in payload.user.model_dump()


def test_signup_keeps_avatar(anon_ctx):
    payload = signup(anon_ctx, "a@x.com", "pw", "A", avatar="https://img/a.png")
    assert payload.user.avatar == "https://img/a.png"


def test_signin_returns_token_for_same_user(anon_ctx, auth_settings):
    created = signup(anon_ctx, "a@x.com", "pw", "A")

    payload = signin(anon_ctx, "a@x.com", "pw")

    assert payload.user.id == created.user.id
    assert resolve_token(payload.token, auth_settings["secret_key"]) == created.user.id


def test_signin_errors_are_indistinguishable(anon_ctx):
    signup(anon_ctx, "a@x.com", "pw", "A")

    with pytest.raises(InvalidCredentials) as wrong_password:
        signin(anon_ctx, "a@x.com", "nope")
    with pytest.raises(InvalidCredentials) as unknown_email:
        signin(anon_ctx, "b@x.com", "pw")

    assert str(wrong_password.value) == str(unknown_email.value)


def test_duplicate_email_signup_is_allowed(anon_ctx, session):
    signup(anon_ctx, "a@x.com", "pw", "A")
    signup(anon_ctx, "a@x.com", "pw2", "A2")
    assert session.query(User).filter(User.email == "a@x.com").count() == 2


@pytest.mark.parametrize(
    "email,password,name",
    [
        ("not-an-email", "pw", "A"),
        ("a@x.com", "", "A"),
        ("a@x.com", "pw", "   "),
    ],
)
def test_signup_rejects_malformed_input(anon_ctx, session, email, password, name):
    with pytest.raises(ValidationError):
        signup(anon_ctx, email, password, name)
    assert session.query(User).count() == 0


def test_unknown_email_still_checks_a_password_hash(anon_ctx, monkeypatch):
    """Unknown emails go through bcrypt too, so timing does not reveal accounts."""
    checked = []
    real_verify = auth_api.verify_password

    def recording_verify(password, password_hash):
        checked.append(password_hash)
        return real_verify(password, password_hash)

    monkeypatch.setattr(auth_api, "verify_password", recording_verify)

    with pytest.raises(InvalidCredentials):
        signin(anon_ctx, "nobody@x.com", "pw")

    assert len(checked) == 1
    assert checked[0].startswith("$2")


def test_dummy_hash_never_matches_a_real_signin(anon_ctx):
    with pytest.raises(InvalidCredentials):
        signin(anon_ctx, "nobody@x.com", "unused-placeholder-password")
