"""Auth API: signup and signin. Neither requires a caller identity."""

from typing import Optional

from ..auth.credentials import dummy_password_hash, hash_password, issue_token, verify_password
from ..auth.guard import OperationContext
from ..database.user_repo import find_user_by_email, insert_user
from ..errors import InvalidCredentials
from ..utils.logging import get_logger
from .models import AuthPayload, SignInInput, SignUpInput
from .resolvers import user_to_model

logger = get_logger(__name__)


def _issue(ctx: OperationContext, user_id: str) -> str:
    return issue_token(
        user_id,
        ctx.auth["secret_key"],
        ttl_days=ctx.auth.get("token_ttl_days", 30),
    )


def signup(
    ctx: OperationContext,
    email: str,
    password: str,
    name: str,
    avatar: Optional[str] = None,
) -> AuthPayload:
    """
    Create a user and sign them in.

    Duplicate emails are not rejected.

    Raises:
        pydantic.ValidationError: If the input is malformed
    """
    data = SignUpInput(email=email, password=password, name=name, avatar=avatar)
    password_hash = hash_password(data.password, rounds=ctx.auth.get("bcrypt_rounds", 12))
    user_row = insert_user(
        ctx.session,
        name=data.name,
        email=data.email,
        password_hash=password_hash,
        avatar=data.avatar,
    )
    logger.info(f"User signed up: {user_row.id}")
    return AuthPayload(user=user_to_model(user_row), token=_issue(ctx, user_row.id))


def signin(ctx: OperationContext, email: str, password: str) -> AuthPayload:
    """
    Exchange email and password for a token.

    Raises:
        InvalidCredentials: Unknown email or wrong password (indistinguishable)
    """
    data = SignInInput(email=email, password=password)
    user_row = find_user_by_email(ctx.session, data.email)
    if user_row is None:
        password_hash = dummy_password_hash(ctx.auth.get("bcrypt_rounds", 12))
    else:
        password_hash = user_row.password_hash
    password_ok = verify_password(data.password, password_hash)
    if user_row is None or not password_ok:
        logger.warning("Signin rejected")
        raise InvalidCredentials()
    logger.info(f"User signed in: {user_row.id}")
    return AuthPayload(user=user_to_model(user_row), token=_issue(ctx, user_row.id))
