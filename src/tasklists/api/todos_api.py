"""To-dos API: create, update and delete to-dos."""

from typing import Optional

from ..auth.guard import OperationContext, require_user
from ..database.task_list_repo import find_task_list_by_id
from ..database.todo_repo import delete_todo_by_id, insert_todo, update_todo as update_todo_row
from ..errors import NotFound
from .models import ToDoModel
from .resolvers import todo_to_model


def create_todo(ctx: OperationContext, content: str, task_list_id: str) -> ToDoModel:
    """
    Add a to-do to an existing task list.

    Raises:
        NotFound: If the task list does not exist
    """
    require_user(ctx)
    if find_task_list_by_id(ctx.session, task_list_id) is None:
        raise NotFound("TaskList", task_list_id)
    row = insert_todo(ctx.session, content=content, task_list_id=task_list_id)
    return todo_to_model(ctx.session, row)


def update_todo(
    ctx: OperationContext,
    todo_id: str,
    is_completed: bool,
    content: Optional[str] = None,
) -> ToDoModel:
    """Set the completion flag and, when given, the content."""
    require_user(ctx)
    row = update_todo_row(ctx.session, todo_id, content=content, is_completed=is_completed)
    if row is None:
        raise NotFound("ToDo", todo_id)
    return todo_to_model(ctx.session, row)


def delete_todo(ctx: OperationContext, todo_id: str) -> bool:
    require_user(ctx)
    if not delete_todo_by_id(ctx.session, todo_id):
        raise NotFound("ToDo", todo_id)
    return True
