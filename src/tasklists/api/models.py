"""Pydantic models for operation inputs and results.

``id`` accepts either ``id`` or ``_id`` on input so documents from any
origin normalize to one identifier field.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


def _id_field():
    return Field(validation_alias=AliasChoices("id", "_id"))


class UserModel(BaseModel):
    id: str = _id_field()
    name: str
    email: str
    avatar: Optional[str] = None


class ToDoModel(BaseModel):
    id: str = _id_field()
    content: str
    is_completed: bool = False
    task_list_id: str
    # Only set on standalone to-do results; None when the parent was deleted
    task_list: Optional["TaskListModel"] = None


class TaskListModel(BaseModel):
    id: str = _id_field()
    title: str
    created_at: str
    member_ids: List[str]
    progress: int = 0
    users: List[UserModel] = []
    todos: List[ToDoModel] = []


ToDoModel.model_rebuild()
TaskListModel.model_rebuild()


class AuthPayload(BaseModel):
    user: UserModel
    token: str


class SignUpInput(BaseModel):
    email: str
    password: str = Field(min_length=1)
    name: str
    avatar: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        value = value.strip()
        if "@" not in value:
            raise ValueError("email must contain '@'")
        return value

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class SignInInput(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _strip_email(cls, value: str) -> str:
        return value.strip()
