"""
Service layer for business logic.
Services contain pure business logic without HTTP framework dependencies.
"""

from taskmind.services.task_service import TaskService
from taskmind.services.ai_service import TaskAiService

__all__ = ["TaskService", "TaskAiService"]
