"""
Request and response messages of the TodoService RPC.

Messages follow the protobuf JSON mapping: camelCase field names on output
(snake_case also accepted on input), absent fields read as their zero value,
unknown fields ignored, and 64-bit integers written as decimal strings.
"""
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Optional

from todolist.store import Task as StoredTask

# int64 fields travel as JSON strings; pydantic's lax mode parses either form.
Int64 = Annotated[int, PlainSerializer(lambda v: str(v), return_type=str, when_used="json")]


class Message(BaseModel):
    """Base for all RPC messages."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        """JSON-ready dict with camelCase keys; unset message fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Task(Message):
    """
    Wire form of a task.
    """
    id: str = ""
    text: str = ""
    created_at: Int64 = Field(default=0, description="Unix seconds")
    completed: bool = False

    @classmethod
    def from_record(cls, record: StoredTask) -> "Task":
        return cls(
            id=record.id,
            text=record.text,
            created_at=record.created_at_unix,
            completed=record.completed,
        )


class AddTaskRequest(Message):
    text: str = ""


class AddTaskResponse(Message):
    task: Optional[Task] = None
    success: bool = False


class GetTasksRequest(Message):
    pass


class GetTasksResponse(Message):
    tasks: List[Task] = Field(default_factory=list)


class DeleteTaskRequest(Message):
    id: str = ""


class DeleteTaskResponse(Message):
    success: bool = False


class UpdateTaskRequest(Message):
    id: str = ""
    completed: bool = False


class UpdateTaskResponse(Message):
    task: Optional[Task] = None
    success: bool = False
