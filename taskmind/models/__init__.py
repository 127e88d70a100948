"""
Task entity and request models.
"""
from .task_models import (
    Task,
    TaskStatus,
    TaskPriority,
    TaskCreate,
    TaskUpdate,
    ACTIVE_STATUSES,
    parse_enum,
    parse_priority,
    parse_status,
    require_priority,
    require_status,
    parse_due_date,
)

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "TaskCreate",
    "TaskUpdate",
    "ACTIVE_STATUSES",
    "parse_enum",
    "parse_priority",
    "parse_status",
    "require_priority",
    "require_status",
    "parse_due_date",
]
