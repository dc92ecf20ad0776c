"""Repository functions for task lists and their membership sets."""

from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from tasklists.database.schema import TaskList, TaskListMember
from tasklists.utils.id_generator import new_id
from tasklists.utils.logging import get_logger
from tasklists.utils.time import utc_now_z

logger = get_logger(__name__)


def insert_task_list(
    session: Session,
    *,
    title: str,
    member_ids: Iterable[str],
) -> TaskList:
    """
    Insert a task list with its initial members and commit.

    Args:
        session: SQLAlchemy session
        title: Task list title
        member_ids: Initial members; must not be empty

    Returns:
        Created TaskList row

    Raises:
        ValueError: If member_ids is empty
    """
    members = list(dict.fromkeys(member_ids))
    if not members:
        raise ValueError("Task list must have at least one member")

    task_list = TaskList(id=new_id(), title=title, created_at=utc_now_z())
    session.add(task_list)
    for user_id in members:
        session.add(TaskListMember(task_list_id=task_list.id, user_id=user_id))
    session.commit()
    logger.debug(f"Created task list {task_list.id} with {len(members)} member(s)")
    return task_list


def find_task_list_by_id(session: Session, task_list_id: str) -> Optional[TaskList]:
    return session.get(TaskList, task_list_id)


def load_member_ids(session: Session, task_list_id: str) -> List[str]:
    """Member user ids of a task list (order not meaningful)."""
    rows = (
        session.query(TaskListMember.user_id)
        .filter(TaskListMember.task_list_id == task_list_id)
        .all()
    )
    return [row.user_id for row in rows]


def update_task_list_title(session: Session, task_list_id: str, title: str) -> Optional[TaskList]:
    """Set a new title. Returns the updated row, or None if the id is unknown."""
    task_list = find_task_list_by_id(session, task_list_id)
    if task_list is None:
        return None
    task_list.title = title
    session.commit()
    logger.debug(f"Renamed task list {task_list_id}")
    return task_list


def delete_task_list_by_id(session: Session, task_list_id: str) -> bool:
    """
    Delete a task list and its membership rows.

    To-dos pointing at the list are left in place.

    Returns:
        True if a row was deleted, False if the id is unknown
    """
    task_list = find_task_list_by_id(session, task_list_id)
    if task_list is None:
        return False
    session.query(TaskListMember).filter(TaskListMember.task_list_id == task_list_id).delete(
        synchronize_session=False
    )
    session.delete(task_list)
    session.commit()
    logger.debug(f"Deleted task list {task_list_id}")
    return True


def add_member_to_task_list(session: Session, task_list_id: str, user_id: str) -> Optional[TaskList]:
    """
    Add a user to a task list's members. Adding an existing member is a no-op.

    Returns:
        The TaskList row, or None if the id is unknown
    """
    task_list = find_task_list_by_id(session, task_list_id)
    if task_list is None:
        return None
    existing = session.get(TaskListMember, (task_list_id, user_id))
    if existing is None:
        session.add(TaskListMember(task_list_id=task_list_id, user_id=user_id))
        session.commit()
        logger.debug(f"Added member {user_id} to task list {task_list_id}")
    return task_list


def find_task_lists_containing_member(session: Session, user_id: str) -> List[TaskList]:
    """All task lists whose members include user_id."""
    return (
        session.query(TaskList)
        .join(TaskListMember, TaskListMember.task_list_id == TaskList.id)
        .filter(TaskListMember.user_id == user_id)
        .order_by(TaskList.created_at)
        .all()
    )
