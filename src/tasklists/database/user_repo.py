"""Repository functions for the users table."""

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from tasklists.database.schema import User
from tasklists.utils.id_generator import new_id
from tasklists.utils.logging import get_logger

logger = get_logger(__name__)


def insert_user(
    session: Session,
    *,
    name: str,
    email: str,
    password_hash: str,
    avatar: Optional[str] = None,
) -> User:
    """
    Insert a user row and commit.

    Email uniqueness is not checked here; two signups with the same email
    both succeed.

    Returns:
        Created User row
    """
    user = User(
        id=new_id(),
        name=name,
        email=email,
        avatar=avatar,
        password_hash=password_hash,
    )
    session.add(user)
    session.commit()
    logger.debug(f"Created user {user.id}")
    return user


def find_user_by_email(session: Session, email: str) -> Optional[User]:
    """First user with the given email, or None."""
    return session.query(User).filter(User.email == email).first()


def find_user_by_id(session: Session, user_id: str) -> Optional[User]:
    return session.get(User, user_id)


def find_users_by_ids(session: Session, user_ids: Iterable[str]) -> List[User]:
    """Users matching the ids; unknown ids are omitted, order unspecified."""
    ids = list(set(user_ids))
    if not ids:
        return []
    return session.query(User).filter(User.id.in_(ids)).all()
