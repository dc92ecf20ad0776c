"""Errors surfaced to callers of the task list operations."""

from typing import Optional


class TaskListsError(Exception):
    """Base class; the message is safe to show to the caller."""

    code = "INTERNAL"
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class Unauthenticated(TaskListsError):
    code = "UNAUTHENTICATED"
    default_message = "Authentication required"


class NotFound(TaskListsError):
    code = "NOT_FOUND"
    default_message = "Not found"

    def __init__(self, entity: Optional[str] = None, entity_id: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        message = None
        if entity and entity_id:
            message = f"{entity} not found: {entity_id}"
        super().__init__(message)


class InvalidCredentials(TaskListsError):
    # Same message for unknown email and wrong password
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"
