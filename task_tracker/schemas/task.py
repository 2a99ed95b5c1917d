from pydantic import AliasChoices, BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Optional, Union

from ..config import DESCRIPTION_MAX_LENGTH, TAG_MAX_LENGTH, TITLE_MAX_LENGTH
from ..models import TaskPriority, TaskStatus

# Request bodies accept the camelCase key as well as the field name.
DUE_DATE_ALIASES = AliasChoices("dueDate", "due_date")


def parse_tags(value: Union[str, List[str], None]) -> List[str]:
    """Normalise tags given as a list or a comma-separated string.

    Entries are trimmed and blanks dropped, so ``"work, urgent"`` becomes
    ``["work", "urgent"]`` and ``""`` becomes ``[]``.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        raise ValueError("Tags must be a list or a comma-separated string")

    tags = []
    for tag in value:
        if not isinstance(tag, str):
            raise ValueError("Tags must be strings")
        tag = tag.strip()
        if not tag:
            continue
        if len(tag) > TAG_MAX_LENGTH:
            raise ValueError(f"Tags cannot exceed {TAG_MAX_LENGTH} characters")
        tags.append(tag)
    return tags


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = Field(None, validation_alias=DUE_DATE_ALIASES)
    tags: List[str] = Field(default_factory=list)

    class Config:
        str_strip_whitespace = True


class TaskCreate(TaskBase):
    """Schema for creating new tasks. Any owner field in the body is ignored."""

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return parse_tags(value)


class TaskUpdate(BaseModel):
    """Schema for partial task updates."""
    title: Optional[str] = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX_LENGTH)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = Field(None, validation_alias=DUE_DATE_ALIASES)
    tags: Optional[List[str]] = None

    class Config:
        str_strip_whitespace = True

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        return parse_tags(value)


class Task(TaskBase):
    """Complete task schema with all fields."""
    id: str
    due_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    user_id: str

    class Config:
        from_attributes = True


class TaskStats(BaseModel):
    """Per-status counts over all of the caller's tasks."""
    total: int
    pending: int
    in_progress: int = Field(..., alias="in-progress")
    completed: int

    class Config:
        populate_by_name = True
