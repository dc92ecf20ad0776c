"""Repository functions for the todos table."""

from typing import Any, List, Optional

from sqlalchemy.orm import Session

from tasklists.database.schema import ToDo
from tasklists.utils.id_generator import new_id
from tasklists.utils.logging import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("content", "is_completed")


def insert_todo(
    session: Session,
    *,
    content: str,
    task_list_id: str,
    is_completed: bool = False,
) -> ToDo:
    """Insert a to-do and commit. The parent list is not checked here."""
    todo = ToDo(
        id=new_id(),
        content=content,
        is_completed=is_completed,
        task_list_id=task_list_id,
    )
    session.add(todo)
    session.commit()
    logger.debug(f"Created to-do {todo.id} in task list {task_list_id}")
    return todo


def find_todo_by_id(session: Session, todo_id: str) -> Optional[ToDo]:
    return session.get(ToDo, todo_id)


def find_todos_by_task_list_id(session: Session, task_list_id: str) -> List[ToDo]:
    return session.query(ToDo).filter(ToDo.task_list_id == task_list_id).all()


def update_todo(session: Session, todo_id: str, **fields: Any) -> Optional[ToDo]:
    """
    Apply a partial update to a to-do.

    Only ``content`` and ``is_completed`` may change; fields passed as None
    are skipped. ``task_list_id`` is immutable.

    Returns:
        Updated ToDo row, or None if the id is unknown

    Raises:
        ValueError: If an unknown or immutable field is passed
    """
    unknown = set(fields) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update to-do field(s): {', '.join(sorted(unknown))}")

    todo = find_todo_by_id(session, todo_id)
    if todo is None:
        return None
    for key, value in fields.items():
        if value is not None:
            setattr(todo, key, value)
    session.commit()
    logger.debug(f"Updated to-do {todo_id}")
    return todo


def delete_todo_by_id(session: Session, todo_id: str) -> bool:
    todo = find_todo_by_id(session, todo_id)
    if todo is None:
        return False
    session.delete(todo)
    session.commit()
    logger.debug(f"Deleted to-do {todo_id}")
    return True
