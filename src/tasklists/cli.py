"""CLI gateway for the task list operations.

Every command opens its own session, resolves the caller token once and
prints the result as JSON.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError

from tasklists.api import auth_api, task_lists_api, todos_api
from tasklists.auth.guard import OperationContext, build_context
from tasklists.config.loader import get_auth_settings, get_sqlite_path, load_config
from tasklists.database.sqlite_client import get_engine, session_context
from tasklists.errors import TaskListsError
from tasklists.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

ENV_TOKEN = "TASKLISTS_TOKEN"


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump()
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def _run(args: argparse.Namespace, operation: Callable[[OperationContext], Any]) -> int:
    """Open a session, build the caller context, run one operation and print its result."""
    token = args.token or os.environ.get(ENV_TOKEN)

    try:
        config = load_config(args.config)
        auth = get_auth_settings(config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        with session_context(get_sqlite_path(config)) as session:
            ctx = build_context(session, auth, token)
            result = operation(ctx)
    except TaskListsError as e:
        print(f"Error: {e} ({e.code})", file=sys.stderr)
        return 1
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][-1]) for err in e.errors() if err.get("loc"))
        print(f"Error: Invalid input ({fields})", file=sys.stderr)
        return 1
    except SQLAlchemyError as e:
        logger.error(f"Storage error: {e}", exc_info=True)
        print(f"Error: {TaskListsError.default_message}", file=sys.stderr)
        return 1

    print(json.dumps(_to_jsonable(result), indent=2))
    return 0


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create the SQLite tables."""
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    sqlite_path = get_sqlite_path(config)
    get_engine(sqlite_path).dispose()
    print(f"Initialized database at {sqlite_path}")
    return 0


def cmd_signup(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: auth_api.signup(
        ctx, args.email, args.password, args.name, avatar=args.avatar,
    ))


def cmd_signin(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: auth_api.signin(ctx, args.email, args.password))


def cmd_lists(args: argparse.Namespace) -> int:
    return _run(args, task_lists_api.my_task_lists)


def cmd_show(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: task_lists_api.get_task_list(ctx, args.task_list_id))


def cmd_create_list(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: task_lists_api.create_task_list(ctx, args.title))


def cmd_rename_list(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: task_lists_api.update_task_list(ctx, args.task_list_id, args.title))


def cmd_delete_list(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: task_lists_api.delete_task_list(ctx, args.task_list_id))


def cmd_share(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: task_lists_api.add_user_to_task_list(
        ctx, args.task_list_id, args.user_id,
    ))


def cmd_add_todo(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: todos_api.create_todo(ctx, args.content, args.task_list_id))


def cmd_update_todo(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: todos_api.update_todo(
        ctx, args.todo_id, is_completed=args.completed, content=args.content,
    ))


def cmd_delete_todo(args: argparse.Namespace) -> int:
    return _run(args, lambda ctx: todos_api.delete_todo(ctx, args.todo_id))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasklists",
        description="Collaborative task lists",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to tasklists.config.yaml (default: ./tasklists.config.yaml if present)",
    )
    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help=f"Identity token (default: ${ENV_TOKEN})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create database tables")
    init_parser.set_defaults(func=cmd_init_db)

    signup_parser = subparsers.add_parser("signup", help="Create an account and print a token")
    signup_parser.add_argument("email")
    signup_parser.add_argument("password")
    signup_parser.add_argument("name")
    signup_parser.add_argument("--avatar", type=str, default=None, help="Avatar URL")
    signup_parser.set_defaults(func=cmd_signup)

    signin_parser = subparsers.add_parser("signin", help="Sign in and print a token")
    signin_parser.add_argument("email")
    signin_parser.add_argument("password")
    signin_parser.set_defaults(func=cmd_signin)

    lists_parser = subparsers.add_parser("lists", help="List task lists you are a member of")
    lists_parser.set_defaults(func=cmd_lists)

    show_parser = subparsers.add_parser("show", help="Show a task list")
    show_parser.add_argument("task_list_id")
    show_parser.set_defaults(func=cmd_show)

    create_list_parser = subparsers.add_parser("create-list", help="Create a task list")
    create_list_parser.add_argument("title")
    create_list_parser.set_defaults(func=cmd_create_list)

    rename_list_parser = subparsers.add_parser("rename-list", help="Change a task list's title")
    rename_list_parser.add_argument("task_list_id")
    rename_list_parser.add_argument("title")
    rename_list_parser.set_defaults(func=cmd_rename_list)

    delete_list_parser = subparsers.add_parser("delete-list", help="Delete a task list")
    delete_list_parser.add_argument("task_list_id")
    delete_list_parser.set_defaults(func=cmd_delete_list)

    share_parser = subparsers.add_parser("share", help="Add a user to a task list")
    share_parser.add_argument("task_list_id")
    share_parser.add_argument("user_id")
    share_parser.set_defaults(func=cmd_share)

    add_todo_parser = subparsers.add_parser("add-todo", help="Add a to-do to a task list")
    add_todo_parser.add_argument("task_list_id")
    add_todo_parser.add_argument("content")
    add_todo_parser.set_defaults(func=cmd_add_todo)

    update_todo_parser = subparsers.add_parser("update-todo", help="Update a to-do")
    update_todo_parser.add_argument("todo_id")
    update_todo_parser.add_argument("--content", type=str, default=None, help="New content")
    done_group = update_todo_parser.add_mutually_exclusive_group(required=True)
    done_group.add_argument("--done", dest="completed", action="store_true", help="Mark completed")
    done_group.add_argument("--undone", dest="completed", action="store_false", help="Mark not completed")
    update_todo_parser.set_defaults(func=cmd_update_todo)

    delete_todo_parser = subparsers.add_parser("delete-todo", help="Delete a to-do")
    delete_todo_parser.add_argument("todo_id")
    delete_todo_parser.set_defaults(func=cmd_delete_todo)

    return parser


def main(argv: Optional[list] = None) -> None:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
