"""Operation context and the authentication guard."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from tasklists.auth.credentials import resolve_token
from tasklists.database.schema import User
from tasklists.database.user_repo import find_user_by_id
from tasklists.errors import Unauthenticated
from tasklists.utils.logging import get_logger

logger = get_logger(__name__)

BEARER_SCHEME = "bearer"


@dataclass
class OperationContext:
    """Everything an operation may touch: its session, auth settings and the caller."""
    session: Session
    auth: Dict[str, Any] = field(default_factory=dict)
    user: Optional[User] = None

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user is not None else None


def extract_bearer(header_value: Optional[str]) -> Optional[str]:
    """Accept either ``Bearer <token>`` or a bare token."""
    if not header_value:
        return None
    parts = header_value.split(None, 1)
    if not parts:
        return None
    if parts[0].lower() == BEARER_SCHEME:
        return parts[1].strip() if len(parts) > 1 else None
    return header_value.strip()


def build_context(session: Session, auth: Dict[str, Any], token: Optional[str]) -> OperationContext:
    """
    Resolve the caller once per request.

    A token whose user no longer exists gives an anonymous context.
    """
    user = None
    user_id = resolve_token(extract_bearer(token), auth["secret_key"])
    if user_id is not None:
        user = find_user_by_id(session, user_id)
        if user is None:
            logger.debug(f"Token subject {user_id} has no user")
    return OperationContext(session=session, auth=auth, user=user)


def require_user(ctx: OperationContext) -> User:
    """Return the caller or raise Unauthenticated. Call before any repository access."""
    if ctx.user is None:
        logger.warning("Rejected unauthenticated call")
        raise Unauthenticated()
    return ctx.user
