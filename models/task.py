from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .enums import TaskStatus


# -------------------------------------------------
# Assignee snapshot stored on the task row
# -------------------------------------------------
class TaskAssignee(BaseModel):
    uid: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None


# -------------------------------------------------
# Shared Fields
# -------------------------------------------------
class TaskBase(BaseModel):
    title: str = Field(..., min_length=3, description="Title must be at least 3 characters")
    description: str = Field(..., min_length=5, description="Description must be at least 5 characters")
    team_id: str = Field(..., min_length=1, description="Owning team")
    deadline: date
    status: TaskStatus = TaskStatus.pending

    @field_validator("title", "description", mode="before")
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


# -------------------------------------------------
# Create Task
# -------------------------------------------------
class TaskCreate(TaskBase):
    """
    Client sends the assignee uid; the backend snapshots
    name/avatar from the assignee's profile.
    """
    assignee_id: str = Field(..., min_length=1, description="Assignee is required")


# -------------------------------------------------
# Update Task (partial)
# -------------------------------------------------
class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3)
    description: Optional[str] = Field(None, min_length=5)
    team_id: Optional[str] = Field(None, min_length=1)
    assignee_id: Optional[str] = Field(None, min_length=1)
    deadline: Optional[date] = None
    status: Optional[TaskStatus] = None


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


class TaskAssign(BaseModel):
    team_id: str = Field(..., min_length=1)
    assignee_id: str = Field(..., min_length=1)
