"""
Ranking and analytics over in-memory task collections.

Everything here is a pure function of the tasks passed in: no storage,
no clock unless one is supplied, no shared state.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from taskmind.models import Task, TaskStatus, TaskPriority, ACTIVE_STATUSES

EXCELLENT_COMPLETION_RATE = 70.0
MODERATE_COMPLETION_RATE = 40.0
CANCELLED_FRACTION_LIMIT = 0.2
URGENT_FRACTION_LIMIT = 0.3
IN_PROGRESS_LIMIT = 5
TODO_BACKLOG_LIMIT = 10

RECOMMEND_URGENT = "Focus on urgent tasks first"
RECOMMEND_FINISH_IN_PROGRESS = "Consider completing some in-progress tasks before starting new ones"
RECOMMEND_BACKLOG = "Large backlog detected - prioritize and break down tasks"


def next_task_sort_key(task: Task) -> Tuple[int, int, datetime]:
    """Highest priority first, IN_PROGRESS before TODO, then oldest first."""
    in_progress_first = 0 if task.status == TaskStatus.IN_PROGRESS else 1
    return (-task.priority.rank, in_progress_first, task.created_at)


def rank_active_tasks(tasks: Iterable[Task]) -> List[Task]:
    """Active (TODO / IN_PROGRESS) tasks in suggested working order."""
    active = [task for task in tasks if task.status in ACTIVE_STATUSES]
    return sorted(active, key=next_task_sort_key)


def suggest_next_task(tasks: Iterable[Task]) -> Optional[Task]:
    """The task to work on next, or None when nothing is active."""
    ranked = rank_active_tasks(tasks)
    return ranked[0] if ranked else None


def completion_rate(tasks: List[Task]) -> float:
    """Percentage of DONE tasks, 0.0 for an empty collection."""
    if not tasks:
        return 0.0
    done = sum(1 for task in tasks if task.status == TaskStatus.DONE)
    return done * 100.0 / len(tasks)


def most_common_priority(tasks: Iterable[Task]) -> TaskPriority:
    """
    Most frequent priority.

    Ties go to the priority whose count reached the maximum first while
    scanning the tasks in order. An empty collection yields MEDIUM.
    """
    counts: Dict[TaskPriority, int] = {}
    best = TaskPriority.MEDIUM
    best_count = 0
    for task in tasks:
        counts[task.priority] = counts.get(task.priority, 0) + 1
        if counts[task.priority] > best_count:
            best = task.priority
            best_count = counts[task.priority]
    return best


@dataclass
class ProductivityReport:
    """Completion statistics and the insights derived from them."""
    total: int
    completed: int
    cancelled: int
    active: int
    urgent: int
    completion_rate: float
    rating: str
    most_common_priority: TaskPriority
    creating_faster_than_completing: bool
    high_cancellation_rate: bool
    too_many_urgent: bool


def completion_rating(rate: float) -> str:
    """Band a completion rate into 'excellent', 'moderate' or 'low'."""
    if rate >= EXCELLENT_COMPLETION_RATE:
        return "excellent"
    if rate >= MODERATE_COMPLETION_RATE:
        return "moderate"
    return "low"


def analyze_productivity(tasks: List[Task]) -> ProductivityReport:
    total = len(tasks)
    completed = sum(1 for task in tasks if task.status == TaskStatus.DONE)
    cancelled = sum(1 for task in tasks if task.status == TaskStatus.CANCELLED)
    urgent = sum(1 for task in tasks if task.priority == TaskPriority.URGENT)
    active = total - completed - cancelled
    rate = completion_rate(tasks)

    return ProductivityReport(
        total=total,
        completed=completed,
        cancelled=cancelled,
        active=active,
        urgent=urgent,
        completion_rate=rate,
        rating=completion_rating(rate),
        most_common_priority=most_common_priority(tasks),
        creating_faster_than_completing=active > completed * 2,
        high_cancellation_rate=cancelled > total * CANCELLED_FRACTION_LIMIT,
        too_many_urgent=urgent > total * URGENT_FRACTION_LIMIT,
    )


def group_by_tags(tasks: Iterable[Task]) -> Dict[str, List[Task]]:
    """
    Group tasks under each of their tags.

    Tags are split on commas and trimmed; tasks without tags are skipped
    and a task appears once under every distinct tag it carries. Keys keep
    the order in which each tag was first seen.
    """
    groups: Dict[str, List[Task]] = {}
    for task in tasks:
        for tag in dict.fromkeys(task.tag_list()):
            groups.setdefault(tag, []).append(task)
    return groups


def count_by_status(tasks: Iterable[Task]) -> Dict[TaskStatus, int]:
    """Count of tasks for each of the four statuses (zeros included)."""
    counts = Counter(task.status for task in tasks)
    return {status: counts.get(status, 0) for status in TaskStatus}


@dataclass
class TaskSummary:
    """Overview counts, plus attention list and recommendations for detailed summaries."""
    total: int
    todo: int
    in_progress: int
    done: int
    cancelled: int
    urgent: int
    requiring_attention: List[Task] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def summarize_tasks(tasks: List[Task], detailed: bool = True) -> TaskSummary:
    by_status = count_by_status(tasks)
    summary = TaskSummary(
        total=len(tasks),
        todo=by_status[TaskStatus.TODO],
        in_progress=by_status[TaskStatus.IN_PROGRESS],
        done=by_status[TaskStatus.DONE],
        cancelled=by_status[TaskStatus.CANCELLED],
        urgent=sum(1 for task in tasks if task.priority == TaskPriority.URGENT),
    )
    if not detailed:
        return summary

    summary.requiring_attention = [
        task for task in tasks
        if task.priority in (TaskPriority.URGENT, TaskPriority.HIGH) and task.status != TaskStatus.DONE
    ]
    if summary.urgent > 0:
        summary.recommendations.append(RECOMMEND_URGENT)
    if summary.in_progress > IN_PROGRESS_LIMIT:
        summary.recommendations.append(RECOMMEND_FINISH_IN_PROGRESS)
    if summary.todo > TODO_BACKLOG_LIMIT:
        summary.recommendations.append(RECOMMEND_BACKLOG)
    return summary


def days_open(created_at: datetime, now: datetime) -> int:
    """Whole days elapsed since ``created_at``, floored."""
    return (now - created_at).days
