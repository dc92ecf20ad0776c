from sqlalchemy import (
    Boolean,
    Column,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# No foreign keys: references are plain ids and may dangle after a delete.


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)  # not unique at this layer
    avatar = Column(String, nullable=True)
    password_hash = Column(String, nullable=False)


class TaskList(Base):
    __tablename__ = "task_lists"

    id = Column(String, primary_key=True)
    title = Column(Text, nullable=False)
    created_at = Column(String, nullable=False)  # ISO 8601 string


class TaskListMember(Base):
    """Membership set of a task list, one row per (list, user)."""
    __tablename__ = "task_list_members"

    task_list_id = Column(String, primary_key=True)
    user_id = Column(String, primary_key=True)

    __table_args__ = (
        Index("idx_task_list_members_user", "user_id"),
    )


class ToDo(Base):
    __tablename__ = "todos"

    id = Column(String, primary_key=True)
    content = Column(Text, nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    task_list_id = Column(String, nullable=False, index=True)


def create_all(engine) -> None:
    Base.metadata.create_all(engine)
