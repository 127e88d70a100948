"""Formatting helpers shared by MCP tools, prompts and resources."""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from taskmind.models import Task, TaskPriority, parse_enum

ERROR_MARKER = "❌"
SUCCESS_MARKER = "✅"
NOT_AVAILABLE = "N/A"

_PRIORITY_LABELS = {
    TaskPriority.URGENT: "🔴 URGENT",
    TaskPriority.HIGH: "🟠 HIGH",
    TaskPriority.MEDIUM: "🟡 MEDIUM",
    TaskPriority.LOW: "🟢 LOW",
}


class Sentiment(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"


_SENTIMENT_EMOJI = {
    Sentiment.POSITIVE: "😊",
    Sentiment.NEGATIVE: "😟",
    Sentiment.NEUTRAL: "😐",
}
UNKNOWN_SENTIMENT_EMOJI = "🤔"


def error_result(message: str) -> str:
    """Prefix a failure message with the error marker."""
    return f"{ERROR_MARKER} {message}"


def not_found_result(task_id: Any) -> str:
    return error_result(f"Task not found with ID: {task_id}")


def is_error_result(text: str) -> bool:
    return text.startswith(ERROR_MARKER)


def format_datetime(value: Optional[datetime]) -> str:
    return value.isoformat() if value else NOT_AVAILABLE


def priority_label(priority: TaskPriority) -> str:
    return _PRIORITY_LABELS[priority]


def sentiment_emoji(sentiment: str) -> str:
    """Emoji for an oracle sentiment reply; unrecognised replies get a thinking face."""
    parsed = parse_enum(Sentiment, sentiment)
    return _SENTIMENT_EMOJI.get(parsed, UNKNOWN_SENTIMENT_EMOJI)


def format_task(task: Task) -> str:
    """Multi-line, human-readable task block."""
    return (
        f"📌 Task #{task.id}\n"
        f"Title: {task.title}\n"
        f"Status: {task.status.value}\n"
        f"Priority: {task.priority.value}\n"
        f"Description: {task.description if task.description is not None else NOT_AVAILABLE}\n"
        f"Tags: {task.tags if task.tags is not None else NOT_AVAILABLE}\n"
        f"Due: {format_datetime(task.due_date)}\n"
        f"Created: {format_datetime(task.created_at)}"
    )


def format_task_blocks(header: str, tasks: Iterable[Task]) -> str:
    """``header`` followed by each task block and a separator line."""
    lines = [header, ""]
    for task in tasks:
        lines.append(format_task(task))
        lines.append("---")
    return "\n".join(lines) + "\n"


def format_task_line(task: Task) -> str:
    """One-line bullet used by prompts: title, priority and status."""
    return f"- **{task.title}** [{task.priority.value}] - {task.status.value}"


def task_to_dict(task: Task) -> Dict[str, Any]:
    """JSON-ready dict with camelCase keys and ISO local date-times."""
    return task.model_dump(mode="json", by_alias=True)


def to_json(value: Any) -> str:
    """Serialize tasks, task lists or plain data to a JSON string."""
    if isinstance(value, Task):
        value = task_to_dict(value)
    elif isinstance(value, list):
        value = [task_to_dict(item) if isinstance(item, Task) else item for item in value]
    return json.dumps(value, ensure_ascii=False)


def error_json(message: str) -> str:
    return json.dumps({"error": message}, ensure_ascii=False)


def task_list_json(tasks: List[Task]) -> str:
    return to_json(list(tasks))
