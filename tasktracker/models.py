from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel


class TaskStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserLogin(BaseModel):
    email: str
    password: str


class UserUpdate(BaseModel):
    name: str
    email: str


class UserPublic(BaseModel):
    """User fields safe to send to clients (never the password hash)."""

    id: str
    name: Optional[str] = None
    email: str

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "UserPublic":
        return cls(id=str(doc["_id"]), name=doc.get("name"), email=doc["email"])


class TaskCreate(BaseModel):
    userId: str
    title: str
    thingstodo: Optional[str] = None
    dueDate: Optional[str] = None


class TaskUpdate(BaseModel):
    # Only fields present in the request body are written
    title: Optional[str] = None
    thingstodo: Optional[str] = None
    dueDate: Optional[str] = None
    completed: Optional[bool] = None
    status: Optional[TaskStatus] = None


class Task(BaseModel):
    id: str
    userId: Optional[str] = None
    title: Optional[str] = None
    thingstodo: Optional[str] = None
    dueDate: Optional[str] = None
    completed: bool = False
    status: TaskStatus = TaskStatus.NOT_STARTED

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Task":
        data = dict(doc)
        data["id"] = str(data.pop("_id"))
        if data.get("userId") is not None:
            data["userId"] = str(data["userId"])
        return cls.model_validate(data)
