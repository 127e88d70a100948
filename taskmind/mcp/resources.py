"""
Read-only ``task://`` resources.

JSON resources return ``{"error": ...}`` documents on failure instead of
raising; the summary resource is plain text.
"""
import logging

from taskmind.analytics import count_by_status
from taskmind.mcp.formatting import error_json, task_list_json, to_json
from taskmind.models import TaskStatus
from taskmind.services import TaskService

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"

_STATUS_ICONS = {
    TaskStatus.TODO: "📝",
    TaskStatus.IN_PROGRESS: "⚡",
    TaskStatus.DONE: "✅",
    TaskStatus.CANCELLED: "❌",
}


def read_all_tasks(task_service: TaskService) -> str:
    try:
        return task_list_json(task_service.get_all_tasks())
    except Exception as e:
        logger.error("Error retrieving all tasks resource", exc_info=True)
        return error_json(str(e))


def read_task(task_service: TaskService, id: str) -> str:
    try:
        task = task_service.get_task(int(id))
        if task is None:
            return error_json(TASK_NOT_FOUND)
        return to_json(task)
    except Exception as e:
        logger.error(f"Error retrieving task resource by ID: {id}", exc_info=True)
        return error_json(str(e))


def read_tasks_by_status(task_service: TaskService, status: str) -> str:
    try:
        return task_list_json(task_service.get_tasks_by_status(status))
    except Exception as e:
        logger.error(f"Error retrieving tasks by status: {status}", exc_info=True)
        return error_json(str(e))


def read_tasks_by_priority(task_service: TaskService, priority: str) -> str:
    try:
        return task_list_json(task_service.get_tasks_by_priority(priority))
    except Exception as e:
        logger.error(f"Error retrieving tasks by priority: {priority}", exc_info=True)
        return error_json(str(e))


def read_summary(task_service: TaskService) -> str:
    """Plain-text totals for each of the four statuses."""
    try:
        tasks = task_service.get_all_tasks()
        counts = count_by_status(tasks)
        lines = ["📊 Task Management Summary", "", f"Total Tasks: {len(tasks)}", "", "By Status:"]
        lines.extend(f"  {_STATUS_ICONS[status]} {status.value}: {counts[status]}" for status in TaskStatus)
        return "\n".join(lines) + "\n"
    except Exception as e:
        logger.error("Error generating tasks summary", exc_info=True)
        return f"Error: {e}"
