"""Task management MCP tool handlers."""
import logging
from typing import Optional

from taskmind.mcp.formatting import (
    SUCCESS_MARKER,
    error_result,
    format_task,
    format_task_blocks,
    not_found_result,
)
from taskmind.services import TaskService
from taskmind.tracing import add_span_attribute

logger = logging.getLogger(__name__)


def handle_create_task(
    task_service: TaskService,
    title: str,
    description: Optional[str] = None,
    priority: Optional[str] = None,
    dueDate: Optional[str] = None,
    tags: Optional[str] = None,
) -> str:
    """
    Create a task. Status always starts as TODO.

    An unknown priority silently becomes MEDIUM; an unparsable due date
    fails the whole call.
    """
    try:
        task = task_service.create_task(
            title=title,
            description=description,
            priority=priority,
            due_date=dueDate,
            tags=tags,
        )
        logger.info(f"Task created via MCP: {task.id}")
        add_span_attribute("mcp.task_id", task.id)
        return (
            f"{SUCCESS_MARKER} Task created successfully!\n"
            f"ID: {task.id}\n"
            f"Title: {task.title}\n"
            f"Priority: {task.priority.value}\n"
            f"Status: {task.status.value}"
        )
    except Exception as e:
        logger.error("Error creating task via MCP", exc_info=True)
        return error_result(f"Error creating task: {e}")


def handle_list_tasks(
    task_service: TaskService,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sortByPriority: bool = False,
) -> str:
    """
    List tasks.

    Only one selector is honoured, in this order: status filter, priority
    filter, priority sort, then everything unsorted.
    """
    try:
        if status:
            tasks = task_service.get_tasks_by_status(status)
        elif priority:
            tasks = task_service.get_tasks_by_priority(priority)
        elif sortByPriority:
            tasks = task_service.get_tasks_sorted_by_priority()
        else:
            tasks = task_service.get_all_tasks()

        add_span_attribute("mcp.tasks_count", len(tasks))
        if not tasks:
            return "📋 No tasks found."
        return format_task_blocks(f"📋 Found {len(tasks)} task(s):", tasks)
    except Exception as e:
        logger.error("Error listing tasks via MCP", exc_info=True)
        return error_result(f"Error listing tasks: {e}")


def handle_update_task(
    task_service: TaskService,
    id: int,
    title: Optional[str] = None,
    description: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    dueDate: Optional[str] = None,
    tags: Optional[str] = None,
) -> str:
    """Change only the supplied fields of a task."""
    try:
        task = task_service.update_task(
            id,
            title=title,
            description=description,
            status=status,
            priority=priority,
            due_date=dueDate,
            tags=tags,
        )
        if task is None:
            return not_found_result(id)
        return f"{SUCCESS_MARKER} Task #{id} updated successfully!\n{format_task(task)}"
    except Exception as e:
        logger.error("Error updating task via MCP", exc_info=True)
        return error_result(f"Error updating task: {e}")


def handle_delete_task(task_service: TaskService, id: int) -> str:
    try:
        if task_service.delete_task(id):
            return f"{SUCCESS_MARKER} Task #{id} deleted successfully!"
        return not_found_result(id)
    except Exception as e:
        logger.error("Error deleting task via MCP", exc_info=True)
        return error_result(f"Error deleting task: {e}")


def handle_search_tasks(task_service: TaskService, keyword: str) -> str:
    try:
        tasks = task_service.search_tasks(keyword)
        add_span_attribute("mcp.tasks_count", len(tasks))
        if not tasks:
            return f"🔍 No tasks found matching '{keyword}'"
        return format_task_blocks(f"🔍 Found {len(tasks)} task(s) matching '{keyword}':", tasks)
    except Exception as e:
        logger.error("Error searching tasks via MCP", exc_info=True)
        return error_result(f"Error searching tasks: {e}")
