"""Tests for to-do operations."""

import pytest

from tasklists.api.task_lists_api import create_task_list, delete_task_list, get_task_list
from tasklists.api.todos_api import create_todo, delete_todo, update_todo
from tasklists.database.schema import ToDo
from tasklists.errors import NotFound, Unauthenticated


def test_completing_only_todo_sets_progress_to_100(signed_in):
    ctx = signed_in()
    task_list = create_task_list(ctx, "Groceries")

    todo = create_todo(ctx, "Milk", task_list.id)
    assert todo.is_completed is False
    assert todo.task_list.progress == 0

    updated = update_todo(ctx, todo.id, is_completed=True)

    assert updated.is_completed is True
    assert updated.task_list.progress == 100
    assert get_task_list(ctx, task_list.id).progress == 100


def test_partial_progress(signed_in):
    ctx = signed_in()
    task_list = create_task_list(ctx, "Chores")
    items = [create_todo(ctx, name, task_list.id) for name in ("Dishes", "Laundry", "Trash")]

    update_todo(ctx, items[0].id, is_completed=True)
    assert get_task_list(ctx, task_list.id).progress == 33

    update_todo(ctx, items[1].id, is_completed=True)
    assert get_task_list(ctx, task_list.id).progress == 67


def test_update_content_and_flag(signed_in):
    ctx = signed_in()
    task_list = create_task_list(ctx, "List")
    todo = create_todo(ctx, "Milk", task_list.id)

    updated = update_todo(ctx, todo.id, is_completed=False, content="Oat milk")

    assert updated.content == "Oat milk"
    assert updated.is_completed is False
    assert updated.task_list_id == task_list.id


def test_create_todo_requires_existing_list(signed_in, session):
    ctx = signed_in()
    with pytest.raises(NotFound, match="TaskList not found"):
        create_todo(ctx, "Milk", "missing")
    assert session.query(ToDo).count() == 0


def test_update_and_delete_unknown_todo_raise_not_found(signed_in):
    ctx = signed_in()
    with pytest.raises(NotFound, match="ToDo not found: missing"):
        update_todo(ctx, "missing", is_completed=True)
    with pytest.raises(NotFound):
        delete_todo(ctx, "missing")


def test_delete_todo(signed_in):
    ctx = signed_in()
    task_list = create_task_list(ctx, "List")
    todo = create_todo(ctx, "Milk", task_list.id)

    assert delete_todo(ctx, todo.id) is True
    assert get_task_list(ctx, task_list.id).todos == []


def test_orphaned_todo_can_still_be_updated(signed_in):
    ctx = signed_in()
    task_list = create_task_list(ctx, "List")
    todo = create_todo(ctx, "Milk", task_list.id)
    delete_task_list(ctx, task_list.id)

    updated = update_todo(ctx, todo.id, is_completed=True)

    assert updated.task_list is None
    assert updated.task_list_id == task_list.id


def test_other_user_may_update_todo(signed_in):
    alice = signed_in("alice@x.com", "pw", "Alice")
    bob = signed_in("bob@x.com", "pw", "Bob")
    task_list = create_task_list(alice, "Alice's")
    todo = create_todo(alice, "Milk", task_list.id)

    assert update_todo(bob, todo.id, is_completed=True).is_completed is True


def test_anonymous_caller_has_no_side_effects(signed_in, anon_ctx, session):
    ctx = signed_in()
    task_list = create_task_list(ctx, "List")
    todo = create_todo(ctx, "Milk", task_list.id)

    with pytest.raises(Unauthenticated):
        create_todo(anon_ctx, "Eggs", task_list.id)
    with pytest.raises(Unauthenticated):
        update_todo(anon_ctx, todo.id, is_completed=True, content="Changed")
    with pytest.raises(Unauthenticated):
        delete_todo(anon_ctx, todo.id)

    rows = session.query(ToDo).all()
    assert len(rows) == 1
    assert rows[0].content == "Milk"
    assert rows[0].is_completed is False
