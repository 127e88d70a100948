"""MCP prompt handlers: markdown reports built from the analytics engine."""
from typing import Optional

from taskmind.analytics import analyze_productivity, group_by_tags, suggest_next_task, summarize_tasks
from taskmind.mcp.formatting import format_task_line, priority_label
from taskmind.models import TaskPriority, TaskStatus
from taskmind.services import TaskService


NO_TASKS_TO_SUMMARIZE = "No tasks available to summarize."
NO_ACTIVE_TASKS = "🎉 Great job! No active tasks remaining. Time to create new goals or take a break!"
NO_TASKS_FOR_PRODUCTIVITY = "No tasks available for productivity analysis."
NO_TASKS_TO_GROUP = "No tasks found to group."
NO_TAGGED_TASKS = "No tasks with tags found."

_RATING_LINES = {
    "excellent": "✅ **Excellent completion rate!** You're getting things done.",
    "moderate": "⚠️ **Moderate completion rate.** Consider focusing on finishing tasks.",
    "low": "❌ **Low completion rate.** May need to review task management approach.",
}


def handle_summarize_tasks(task_service: TaskService, detailed: bool = True) -> str:
    """Overview counts; detailed mode adds the attention list and recommendations."""
    tasks = task_service.get_all_tasks()
    if not tasks:
        return NO_TASKS_TO_SUMMARIZE

    summary = summarize_tasks(tasks, detailed=detailed)
    lines = [
        "# Task Management Summary",
        "",
        "## Overview",
        f"- Total Tasks: {summary.total}",
        f"- TODO: {summary.todo}",
        f"- In Progress: {summary.in_progress}",
        f"- Completed: {summary.done}",
        f"- Urgent Tasks: {summary.urgent}",
        "",
    ]
    if detailed:
        if summary.requiring_attention:
            lines.append("## ⚠️ High Priority Tasks Requiring Attention")
            lines.append("")
            lines.extend(format_task_line(task) for task in summary.requiring_attention)
            lines.append("")
        lines.append("## 💡 Recommendations")
        lines.append("")
        lines.extend(f"- {recommendation}" for recommendation in summary.recommendations)
    return "\n".join(lines) + "\n"


def handle_suggest_next_task(task_service: TaskService) -> str:
    task = suggest_next_task(task_service.get_all_tasks())
    if task is None:
        return NO_ACTIVE_TASKS

    lines = [
        "🎯 **Suggested Next Task**",
        "",
        f"**{task.title}**",
        "",
        f"- Priority: {priority_label(task.priority)}",
        f"- Status: {task.status.value}",
    ]
    if task.description:
        lines.append(f"- Description: {task.description}")
    if task.due_date is not None:
        lines.append(f"- Due Date: {task.due_date.isoformat()}")

    lines.append("")
    lines.append("**Why this task?**")
    if task.priority == TaskPriority.URGENT:
        lines.append("- This is an URGENT task that requires immediate attention")
    elif task.priority == TaskPriority.HIGH:
        lines.append("- High priority task that should be addressed soon")
    if task.status == TaskStatus.IN_PROGRESS:
        lines.append("- Already in progress - finish what you started!")
    return "\n".join(lines) + "\n"


def handle_analyze_productivity(task_service: TaskService) -> str:
    tasks = task_service.get_all_tasks()
    if not tasks:
        return NO_TASKS_FOR_PRODUCTIVITY

    report = analyze_productivity(tasks)
    lines = [
        "# 📈 Productivity Analysis",
        "",
        "## Task Statistics",
        "",
        f"- Total Tasks: {report.total}",
        f"- Completed: {report.completed} ({report.completion_rate:.1f}%)",
        f"- Cancelled: {report.cancelled}",
        f"- Active: {report.active}",
        "",
        "## Performance Indicators",
        "",
        _RATING_LINES[report.rating],
        "",
        f"- Most common priority level: **{report.most_common_priority.value}**",
        "",
        "## 💡 Insights",
        "",
    ]
    if report.creating_faster_than_completing:
        lines.append("- You're creating tasks faster than completing them. Consider task breakdown or delegation.")
    if report.high_cancellation_rate:
        lines.append("- High cancellation rate detected. Review task feasibility before creation.")
    if report.too_many_urgent:
        lines.append("- Too many urgent tasks. Consider better planning to avoid urgency.")
    return "\n".join(lines) + "\n"


def handle_group_related_tasks(task_service: TaskService, keyword: Optional[str] = None) -> str:
    """Group tasks by tag, optionally restricted to a keyword search."""
    tasks = task_service.search_tasks(keyword) if keyword else task_service.get_all_tasks()
    if not tasks:
        return NO_TASKS_TO_GROUP

    groups = group_by_tags(tasks)
    lines = ["# 🏷️ Tasks Grouped by Tags", ""]
    if not groups:
        lines.append(NO_TAGGED_TASKS)
        return "\n".join(lines) + "\n"

    for tag, tagged in groups.items():
        lines.append(f"## {tag} ({len(tagged)} tasks)")
        lines.append("")
        lines.extend(format_task_line(task) for task in tagged)
        lines.append("")
    return "\n".join(lines) + "\n"
