"""
Task service - business logic for task operations.
This layer contains no HTTP framework or MCP dependencies.
"""
import logging
from typing import Optional, List, Union

from taskmind.exceptions import TaskNotFoundError
from taskmind.models import (
    Task,
    TaskStatus,
    TaskPriority,
    parse_priority,
    parse_due_date,
    require_priority,
    require_status,
)
from taskmind.storage import TaskStore

logger = logging.getLogger(__name__)

PriorityInput = Union[TaskPriority, str, None]
StatusInput = Union[TaskStatus, str, None]


def _require_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValueError("Title cannot be empty or contain only whitespace")
    return title.strip()


class TaskService:
    """Service for task business logic."""

    def __init__(self, store: TaskStore):
        """Initialize task service with its store dependency."""
        self.store = store

    def create_task(
        self,
        title: str,
        description: Optional[str] = None,
        priority: PriorityInput = None,
        due_date: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> Task:
        """
        Create a new task. Status always starts as TODO.

        Args:
            title: Task title (required, not blank)
            description: Optional description
            priority: Priority text; unknown or missing values fall back to MEDIUM
            due_date: Optional ISO-8601 local date-time
            tags: Optional comma-separated tags; blank means none

        Returns:
            The created task with its id and createdAt

        Raises:
            ValueError: If the title is blank
            DueDateParseError: If due_date cannot be parsed
        """
        title = _require_title(title)
        resolved_priority = parse_priority(priority, TaskPriority.MEDIUM)
        due = parse_due_date(due_date)

        logger.info(f"Creating new task: {title}")
        return self.store.create(
            title=title,
            description=description,
            status=TaskStatus.TODO,
            priority=resolved_priority,
            due_date=due,
            tags=tags if tags else None,
        )

    def get_task(self, task_id: int) -> Optional[Task]:
        """Get a task by ID."""
        logger.info(f"Retrieving task with id: {task_id}")
        return self.store.find_by_id(task_id)

    def require_task(self, task_id: int) -> Task:
        """Get a task by ID or raise TaskNotFoundError."""
        task = self.get_task(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    def update_task(
        self,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: StatusInput = None,
        priority: PriorityInput = None,
        due_date: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> Optional[Task]:
        """
        Apply a partial update. Only arguments that are not None change.

        Every supplied value is validated before anything is written, so an
        invalid status/priority/due date leaves the task untouched.

        Returns:
            The updated task, or None if the task does not exist

        Raises:
            InvalidEnumValueError: If status or priority is not a known value
            DueDateParseError: If due_date cannot be parsed
            ValueError: If title is supplied but blank
        """
        logger.info(f"Updating task with id: {task_id}")
        task = self.store.find_by_id(task_id)
        if task is None:
            return None

        changes = {}
        if title is not None:
            changes["title"] = _require_title(title)
        if description is not None:
            changes["description"] = description
        if status is not None:
            changes["status"] = require_status(status)
        if priority is not None:
            changes["priority"] = require_priority(priority)
        if due_date:
            changes["due_date"] = parse_due_date(due_date)
        if tags is not None:
            changes["tags"] = tags

        if not changes:
            return task
        return self.store.save(task.model_copy(update=changes))

    def delete_task(self, task_id: int) -> bool:
        """Delete a task. Returns False if it did not exist."""
        logger.info(f"Deleting task with id: {task_id}")
        if self.store.exists_by_id(task_id):
            self.store.delete_by_id(task_id)
            return True
        return False

    def search_tasks(self, keyword: str) -> List[Task]:
        """Case-insensitive keyword search across title, description and tags."""
        logger.info(f"Searching tasks with keyword: {keyword}")
        return self.store.search_by_keyword(keyword)

    def get_all_tasks(self) -> List[Task]:
        logger.info("Retrieving all tasks")
        return self.store.find_all()

    def get_tasks_by_status(self, status: StatusInput) -> List[Task]:
        """
        Raises:
            InvalidEnumValueError: If status is not a known value
        """
        resolved = require_status(status)
        logger.info(f"Retrieving tasks with status: {resolved.value}")
        return self.store.find_by_status(resolved)

    def get_tasks_by_priority(self, priority: PriorityInput) -> List[Task]:
        """
        Raises:
            InvalidEnumValueError: If priority is not a known value
        """
        resolved = require_priority(priority)
        logger.info(f"Retrieving tasks with priority: {resolved.value}")
        return self.store.find_by_priority(resolved)

    def get_tasks_sorted_by_priority(self) -> List[Task]:
        logger.info("Retrieving tasks sorted by priority")
        return self.store.find_by_order_by_priority_desc_created_at_desc()
