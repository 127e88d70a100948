"""
Storage interface - defines the contract for task storage backends.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List

from taskmind.models import Task, TaskStatus, TaskPriority


class TaskStore(ABC):
    """Abstract interface for task persistence.

    Implementations assign ``id`` and ``createdAt`` on create and own the
    serialization of concurrent writes to the same row.
    """

    @abstractmethod
    def create(
        self,
        title: str,
        description: Optional[str] = None,
        status: TaskStatus = TaskStatus.TODO,
        priority: TaskPriority = TaskPriority.MEDIUM,
        due_date: Optional[datetime] = None,
        tags: Optional[str] = None,
    ) -> Task:
        """Persist a new task and return it with its id and createdAt."""
        pass

    @abstractmethod
    def save(self, task: Task) -> Task:
        """Write every mutable field of an existing task."""
        pass

    @abstractmethod
    def find_by_id(self, task_id: int) -> Optional[Task]:
        """Get a task by ID."""
        pass

    @abstractmethod
    def find_all(self) -> List[Task]:
        """All tasks in insertion order."""
        pass

    @abstractmethod
    def find_by_status(self, status: TaskStatus) -> List[Task]:
        pass

    @abstractmethod
    def find_by_priority(self, priority: TaskPriority) -> List[Task]:
        pass

    @abstractmethod
    def find_by_order_by_priority_desc_created_at_desc(self) -> List[Task]:
        """All tasks, highest priority first, newest first within a priority."""
        pass

    @abstractmethod
    def search_by_keyword(self, keyword: str) -> List[Task]:
        """Case-insensitive substring match over title, description and tags."""
        pass

    @abstractmethod
    def exists_by_id(self, task_id: int) -> bool:
        pass

    @abstractmethod
    def delete_by_id(self, task_id: int) -> None:
        pass

    def ping(self) -> bool:
        """Health probe; backends with a connection override this."""
        return True
