# task_manager/schemas/task.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Optional

from task_manager.models.task import TaskPriority, TaskStatus

# Width of the tasks.title column
MAX_TITLE_LENGTH = 255


def _clean_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title is required")
    return value


class TaskCreate(BaseModel):
    title: str = Field(max_length=MAX_TITLE_LENGTH)
    description: Optional[str] = None
    due_date: date
    priority: Optional[TaskPriority] = None  # LOW when omitted
    status: Optional[TaskStatus] = None      # PENDING when omitted

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v):
        return _clean_title(v)


class TaskUpdate(BaseModel):
    """Partial update.

    Use ``model_dump(exclude_unset=True)`` so that an omitted field is left
    untouched while ``"description": null`` clears the description. The other
    fields are mandatory on the task and may not be set to null.
    """
    title: Optional[str] = Field(default=None, max_length=MAX_TITLE_LENGTH)
    description: Optional[str] = None
    due_date: Optional[date] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None

    @field_validator("title", "due_date", "priority", "status")
    @classmethod
    def not_null_when_given(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if info.field_name == "title":
            return _clean_title(v)
        return v


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    due_date: date
    priority: TaskPriority
    status: TaskStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class TaskDetailOut(BaseModel):
    task: TaskOut


class TaskMutationOut(BaseModel):
    message: str
    task: TaskOut


class TaskListOut(BaseModel):
    tasks: List[TaskOut]
    total: int
    page: int
    limit: int
    total_pages: int = Field(serialization_alias="totalPages")
