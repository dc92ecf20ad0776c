"""Read-time resolution of derived and relational fields.

Nothing here is cached: every call re-reads the repositories, so a
result always reflects the rows as they are now.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy.orm import Session

from ..database.task_list_repo import find_task_list_by_id, load_member_ids
from ..database.todo_repo import find_todos_by_task_list_id
from ..database.user_repo import find_users_by_ids
from .models import TaskListModel, ToDoModel, UserModel

if TYPE_CHECKING:
    from ..database.schema import TaskList, ToDo, User


def compute_progress(completed: int, total: int) -> int:
    """
    Percentage of completed to-dos, rounded half up.

    Returns 0 when there are no to-dos.

    Example:
        >>> compute_progress(1, 3), compute_progress(2, 3), compute_progress(1, 8)
        (33, 67, 13)
    """
    if total <= 0:
        return 0
    ratio = Decimal(100 * completed) / Decimal(total)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def todos(session: Session, task_list: "TaskList") -> List["ToDo"]:
    return find_todos_by_task_list_id(session, task_list.id)


def progress(session: Session, task_list: "TaskList") -> int:
    items = todos(session, task_list)
    completed = sum(1 for item in items if item.is_completed)
    return compute_progress(completed, len(items))


def members(session: Session, task_list: "TaskList") -> List["User"]:
    """Member users; ids that no longer resolve are dropped."""
    return find_users_by_ids(session, load_member_ids(session, task_list.id))


def parent_task_list(session: Session, todo: "ToDo") -> Optional["TaskList"]:
    """Parent list of a to-do, or None when it has been deleted."""
    return find_task_list_by_id(session, todo.task_list_id)


def user_to_model(user_row: "User") -> UserModel:
    return UserModel(
        id=user_row.id,
        name=user_row.name,
        email=user_row.email,
        avatar=user_row.avatar,
    )


def _todo_fields(todo_row: "ToDo") -> dict:
    return {
        "id": todo_row.id,
        "content": todo_row.content,
        "is_completed": bool(todo_row.is_completed),
        "task_list_id": todo_row.task_list_id,
    }


def task_list_to_model(session: Session, task_list_row: "TaskList") -> TaskListModel:
    """Build a TaskListModel with progress, users and todos resolved now."""
    items = todos(session, task_list_row)
    completed = sum(1 for item in items if item.is_completed)
    return TaskListModel(
        id=task_list_row.id,
        title=task_list_row.title,
        created_at=task_list_row.created_at,
        member_ids=load_member_ids(session, task_list_row.id),
        # Same scan feeds both progress and todos
        progress=compute_progress(completed, len(items)),
        users=[user_to_model(u) for u in members(session, task_list_row)],
        todos=[ToDoModel(**_todo_fields(item)) for item in items],
    )


def todo_to_model(session: Session, todo_row: "ToDo") -> ToDoModel:
    """Build a standalone ToDoModel, including its parent list if it still exists."""
    parent = parent_task_list(session, todo_row)
    return ToDoModel(
        **_todo_fields(todo_row),
        task_list=task_list_to_model(session, parent) if parent is not None else None,
    )
