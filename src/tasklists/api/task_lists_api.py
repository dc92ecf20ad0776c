"""Task lists API: queries and mutations on task lists.

Any authenticated caller may read, rename, delete or share any task list
by id. Membership only scopes my_task_lists.
"""

from typing import List, Optional

from ..auth.guard import OperationContext, require_user
from ..database.task_list_repo import (
    add_member_to_task_list,
    delete_task_list_by_id,
    find_task_list_by_id,
    find_task_lists_containing_member,
    insert_task_list,
    update_task_list_title,
)
from ..errors import NotFound
from ..utils.logging import get_logger
from .models import TaskListModel
from .resolvers import task_list_to_model

logger = get_logger(__name__)


def my_task_lists(ctx: OperationContext) -> List[TaskListModel]:
    """Task lists the caller is a member of."""
    user = require_user(ctx)
    rows = find_task_lists_containing_member(ctx.session, user.id)
    return [task_list_to_model(ctx.session, row) for row in rows]


def get_task_list(ctx: OperationContext, task_list_id: str) -> Optional[TaskListModel]:
    """Any task list by id, or None if it does not exist."""
    require_user(ctx)
    row = find_task_list_by_id(ctx.session, task_list_id)
    if row is None:
        return None
    return task_list_to_model(ctx.session, row)


def create_task_list(ctx: OperationContext, title: str) -> TaskListModel:
    """Create a task list with the caller as its only member."""
    user = require_user(ctx)
    row = insert_task_list(ctx.session, title=title, member_ids=[user.id])
    logger.info(f"Task list {row.id} created by {user.id}")
    return task_list_to_model(ctx.session, row)


def update_task_list(ctx: OperationContext, task_list_id: str, title: str) -> TaskListModel:
    require_user(ctx)
    row = update_task_list_title(ctx.session, task_list_id, title)
    if row is None:
        raise NotFound("TaskList", task_list_id)
    return task_list_to_model(ctx.session, row)


def delete_task_list(ctx: OperationContext, task_list_id: str) -> bool:
    require_user(ctx)
    if not delete_task_list_by_id(ctx.session, task_list_id):
        raise NotFound("TaskList", task_list_id)
    return True


def add_user_to_task_list(
    ctx: OperationContext,
    task_list_id: str,
    user_id: str,
) -> Optional[TaskListModel]:
    """
    Share a task list with a user. Sharing twice changes nothing.

    The user id is not checked; unknown ids are dropped when users resolve.

    Returns:
        Updated TaskListModel, or None if the task list does not exist
    """
    require_user(ctx)
    row = add_member_to_task_list(ctx.session, task_list_id, user_id)
    if row is None:
        return None
    return task_list_to_model(ctx.session, row)
