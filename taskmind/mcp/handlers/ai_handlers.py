"""AI-assisted MCP tool handlers."""
import logging
from datetime import datetime
from typing import Callable

from taskmind.analytics import days_open
from taskmind.mcp.formatting import (
    SUCCESS_MARKER,
    error_result,
    not_found_result,
    sentiment_emoji,
)
from taskmind.models import TaskPriority, parse_priority
from taskmind.services import TaskService, TaskAiService
from taskmind.tracing import add_span_attribute

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description"
NO_TAGS = "None"


def handle_smart_create_task(
    task_service: TaskService,
    ai_service: TaskAiService,
    title: str,
    description: str,
) -> str:
    """
    Create a task using AI suggestions for priority and tags.

    Suggestions are gathered before the task is created. A suggested
    priority that is not a valid level is replaced by MEDIUM; suggestions
    never prevent the task from being created.
    """
    try:
        suggested_priority = ai_service.suggest_priority(title, description)
        suggested_tags = ai_service.suggest_tags(title, description)
        sentiment = ai_service.analyze_sentiment(description)

        priority = parse_priority(suggested_priority, TaskPriority.MEDIUM)
        add_span_attribute("mcp.suggested_priority", suggested_priority)

        task = task_service.create_task(
            title=title,
            description=description,
            priority=priority,
            tags=suggested_tags,
        )
        logger.info(f"Smart task created via MCP: {task.id}")
        return (
            f"{SUCCESS_MARKER} Smart Task Created with AI Assistance!\n\n"
            f"📌 Task #{task.id}: {task.title}\n\n"
            f"🤖 AI Analysis:\n"
            f"- Suggested Priority: {task.priority.value} (applied)\n"
            f"- Sentiment: {sentiment_emoji(sentiment)} {sentiment}\n"
            f"- Auto-Tags: {suggested_tags}\n\n"
            f"Status: {task.status.value}"
        )
    except Exception as e:
        logger.error("Error creating smart task", exc_info=True)
        return error_result(f"Error creating smart task: {e}")


def handle_analyze_task_sentiment(task_service: TaskService, ai_service: TaskAiService, taskId: int) -> str:
    try:
        task = task_service.get_task(taskId)
        if task is None:
            return not_found_result(taskId)
        sentiment = ai_service.analyze_sentiment(task.description)
        return (
            f"🤖 AI Sentiment Analysis for Task #{taskId}\n\n"
            f"Task: {task.title}\n"
            f"Sentiment: {sentiment_emoji(sentiment)} {sentiment}\n\n"
            f"Description analyzed: {task.description if task.description is not None else NO_DESCRIPTION}"
        )
    except Exception as e:
        logger.error("Error analyzing task sentiment", exc_info=True)
        return error_result(f"Error analyzing sentiment: {e}")


def handle_suggest_task_priority(task_service: TaskService, ai_service: TaskAiService, taskId: int) -> str:
    try:
        task = task_service.get_task(taskId)
        if task is None:
            return not_found_result(taskId)
        suggested = ai_service.suggest_priority(task.title, task.description)
        return (
            f"🤖 AI Priority Suggestion for Task #{taskId}\n\n"
            f"Task: {task.title}\n"
            f"Current Priority: {task.priority.value}\n"
            f"Suggested Priority: {suggested}\n\n"
            f"Would you like to update the priority?"
        )
    except Exception as e:
        logger.error("Error suggesting task priority", exc_info=True)
        return error_result(f"Error suggesting priority: {e}")


def handle_generate_task_summary(task_service: TaskService, ai_service: TaskAiService, taskId: int) -> str:
    try:
        task = task_service.get_task(taskId)
        if task is None:
            return not_found_result(taskId)
        summary = ai_service.generate_task_summary(task.title, task.description)
        return (
            f"🤖 AI-Generated Summary for Task #{taskId}\n\n"
            f"Task: {task.title}\n\n"
            f"📝 Summary:\n{summary}"
        )
    except Exception as e:
        logger.error("Error generating task summary", exc_info=True)
        return error_result(f"Error generating summary: {e}")


def handle_suggest_task_tags(task_service: TaskService, ai_service: TaskAiService, taskId: int) -> str:
    try:
        task = task_service.get_task(taskId)
        if task is None:
            return not_found_result(taskId)
        suggested = ai_service.suggest_tags(task.title, task.description)
        return (
            f"🤖 AI Tag Suggestions for Task #{taskId}\n\n"
            f"Task: {task.title}\n"
            f"Current Tags: {task.tags if task.tags is not None else NO_TAGS}\n"
            f"Suggested Tags: {suggested}\n\n"
            f"Use update_task tool to apply these tags."
        )
    except Exception as e:
        logger.error("Error suggesting task tags", exc_info=True)
        return error_result(f"Error suggesting tags: {e}")


def handle_detect_task_risks(
    task_service: TaskService,
    ai_service: TaskAiService,
    taskId: int,
    clock: Callable[[], datetime] = datetime.now,
) -> str:
    """Risk assessment; days open are counted from creation to the time of the call."""
    try:
        task = task_service.get_task(taskId)
        if task is None:
            return not_found_result(taskId)
        open_days = days_open(task.created_at, clock())
        assessment = ai_service.detect_task_risks(
            task.title,
            task.description,
            task.status.value,
            open_days,
        )
        return (
            f"🤖 AI Risk Assessment for Task #{taskId}\n\n"
            f"Task: {task.title}\n"
            f"Status: {task.status.value}\n"
            f"Days Open: {open_days}\n\n"
            f"⚠️ Risk Assessment:\n{assessment}"
        )
    except Exception as e:
        logger.error("Error detecting task risks", exc_info=True)
        return error_result(f"Error detecting risks: {e}")
