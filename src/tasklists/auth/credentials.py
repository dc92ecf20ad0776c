"""Password hashing and identity tokens."""

import hashlib
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from tasklists.utils.logging import get_logger

logger = get_logger(__name__)

TOKEN_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL_DAYS = 30
DEFAULT_BCRYPT_ROUNDS = 12


def _prehash(password: str) -> bytes:
    """SHA-256 digest so bcrypt's 72-byte input limit never truncates a password."""
    return hashlib.sha256(password.encode("utf-8")).digest()


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")


@lru_cache(maxsize=None)
def dummy_password_hash(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash to verify against when no user matches, so both paths pay for bcrypt."""
    return hash_password("unused-placeholder-password", rounds=rounds)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash. Malformed hashes count as a mismatch."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def issue_token(
    user_id: str,
    secret_key: str,
    ttl_days: float = DEFAULT_TOKEN_TTL_DAYS,
    now: Optional[datetime] = None,
) -> str:
    """
    Issue a signed token for user_id.

    Args:
        user_id: Identifier stored in the ``sub`` claim
        secret_key: HMAC signing key
        ttl_days: Lifetime of the token (default 30 days)
        now: Issuance time, timezone-aware (defaults to the current UTC time)

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=ttl_days),
    }
    return jwt.encode(payload, secret_key, algorithm=TOKEN_ALGORITHM)


def resolve_token(token: Optional[str], secret_key: str) -> Optional[str]:
    """
    Resolve a token to its user id.

    Missing, malformed, expired or wrongly signed tokens resolve to None;
    callers treat None as "unauthenticated", never as a failure.
    """
    if not token or not isinstance(token, str):
        return None
    try:
        payload = jwt.decode(token, secret_key, algorithms=[TOKEN_ALGORITHM])
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired token")
        return None
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected invalid token: {e}")
        return None

    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        return None
    return user_id
