"""
Task entity, its enumerations and request models.

Also holds the text-to-enum parsers used wherever loosely typed input
(tool arguments, oracle replies, URI segments) meets the closed sets.
"""
import re
from datetime import datetime
from enum import Enum
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskmind.exceptions import DueDateParseError, InvalidEnumValueError


class TaskStatus(str, Enum):
    """Task status enumeration."""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    CANCELLED = "CANCELLED"


class TaskPriority(str, Enum):
    """Task priority enumeration, ordered LOW < MEDIUM < HIGH < URGENT."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
    TaskPriority.URGENT: 4,
}

ACTIVE_STATUSES = (TaskStatus.TODO, TaskStatus.IN_PROGRESS)


class Task(BaseModel):
    """A stored task. Serialized with camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    tags: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    def tag_list(self):
        """Split the comma-separated tags field into trimmed, non-empty tags."""
        if not self.tags:
            return []
        return [tag.strip() for tag in self.tags.split(",") if tag.strip()]


class TaskCreate(BaseModel):
    """Request model for creating a task over the REST binding."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Task title", min_length=1)
    description: Optional[str] = Field(None, description="Detailed description")
    priority: Optional[str] = Field("MEDIUM", description="Priority: LOW, MEDIUM, HIGH, or URGENT")
    due_date: Optional[str] = Field(None, alias="dueDate", description="Due date (ISO local date-time)")
    tags: Optional[str] = Field(None, description="Comma-separated tags")

    @field_validator('title')
    @classmethod
    def validate_not_empty_or_whitespace(cls, v: str) -> str:
        """Validate that the title is not empty or only whitespace."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty or contain only whitespace")
        return v.strip()


class TaskUpdate(BaseModel):
    """Request model for a partial task update. Unset fields are left untouched."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[str] = Field(None, alias="dueDate")
    tags: Optional[str] = None


E = TypeVar("E", bound=Enum)

_EDGE_NOISE = re.compile(r"^[\s'\"`]+|[\s'\"`.,;:!?]+$")
_SEPARATORS = re.compile(r"[\s\-]+")


def _normalize_enum_text(value: str) -> str:
    text = _EDGE_NOISE.sub("", value.strip())
    return _SEPARATORS.sub("_", text).upper()


def parse_enum(enum_cls: Type[E], value: Optional[str], default: Optional[E] = None) -> Optional[E]:
    """
    Leniently map free text onto an enum member.

    Surrounding whitespace and quotes and trailing punctuation are dropped,
    case is ignored and spaces/hyphens count as underscores. Digits and
    other symbols are kept, so "HIGH2" names no member. Anything that does
    not then name a member exactly yields ``default``.
    """
    if value is None:
        return default
    if isinstance(value, enum_cls):
        return value
    normalized = _normalize_enum_text(str(value))
    if not normalized:
        return default
    try:
        return enum_cls[normalized]
    except KeyError:
        return default


def parse_priority(value: Optional[str], default: Optional[TaskPriority] = None) -> Optional[TaskPriority]:
    return parse_enum(TaskPriority, value, default)


def parse_status(value: Optional[str], default: Optional[TaskStatus] = None) -> Optional[TaskStatus]:
    return parse_enum(TaskStatus, value, default)


def require_priority(value: str) -> TaskPriority:
    """Parse a priority or raise InvalidEnumValueError."""
    priority = parse_priority(value)
    if priority is None:
        raise InvalidEnumValueError("priority", value, [p.value for p in TaskPriority])
    return priority


def require_status(value: str) -> TaskStatus:
    """Parse a status or raise InvalidEnumValueError."""
    status = parse_status(value)
    if status is None:
        raise InvalidEnumValueError("status", value, [s.value for s in TaskStatus])
    return status


_ISO_LOCAL_DATE_TIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d{1,6})?)?$"
)


def parse_due_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 local date-time.

    Args:
        value: Text such as '2024-01-01T09:00:00'; None or blank means "not supplied"

    Returns:
        Naive datetime, or None when no value was supplied

    Raises:
        DueDateParseError: If the text is not a valid local date-time
    """
    if value is None or not str(value).strip():
        return None
    text = str(value).strip()
    if not _ISO_LOCAL_DATE_TIME.match(text):
        raise DueDateParseError(text)
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise DueDateParseError(text)
