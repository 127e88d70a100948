"""
Task REST routes.
Thin HTTP layer that delegates to the service layer.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response

from taskmind.dependencies.services import get_task_service
from taskmind.exceptions import TaskNotFoundError
from taskmind.mcp.formatting import task_to_dict
from taskmind.models import TaskCreate, TaskUpdate
from taskmind.services import TaskService


router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(task_service: TaskService = Depends(get_task_service)) -> List[Dict[str, Any]]:
    """List all tasks."""
    return [task_to_dict(task) for task in task_service.get_all_tasks()]


@router.post("", status_code=201)
async def create_task(
    task: TaskCreate,
    task_service: TaskService = Depends(get_task_service)
) -> Dict[str, Any]:
    """Create a new task. Status always starts as TODO."""
    try:
        created = task_service.create_task(
            title=task.title,
            description=task.description,
            priority=task.priority,
            due_date=task.due_date,
            tags=task.tags,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return task_to_dict(created)


@router.get("/search")
async def search_tasks(
    keyword: str = Query(..., description="Keyword matched against title, description and tags"),
    task_service: TaskService = Depends(get_task_service)
) -> List[Dict[str, Any]]:
    return [task_to_dict(task) for task in task_service.search_tasks(keyword)]


@router.get("/status/{status}")
async def list_tasks_by_status(
    status: str = Path(..., description="TODO, IN_PROGRESS, DONE or CANCELLED"),
    task_service: TaskService = Depends(get_task_service)
) -> List[Dict[str, Any]]:
    return [task_to_dict(task) for task in task_service.get_tasks_by_status(status)]


@router.get("/priority/{priority}")
async def list_tasks_by_priority(
    priority: str = Path(..., description="LOW, MEDIUM, HIGH or URGENT"),
    task_service: TaskService = Depends(get_task_service)
) -> List[Dict[str, Any]]:
    return [task_to_dict(task) for task in task_service.get_tasks_by_priority(priority)]


@router.get("/{task_id}")
async def get_task(
    task_id: int = Path(..., gt=0),
    task_service: TaskService = Depends(get_task_service)
) -> Dict[str, Any]:
    return task_to_dict(task_service.require_task(task_id))


@router.put("/{task_id}")
async def update_task(
    task_update: TaskUpdate,
    task_id: int = Path(..., gt=0),
    task_service: TaskService = Depends(get_task_service)
) -> Dict[str, Any]:
    """Partial update: only fields present in the body change."""
    try:
        task = task_service.update_task(
            task_id,
            title=task_update.title,
            description=task_update.description,
            status=task_update.status,
            priority=task_update.priority,
            due_date=task_update.due_date,
            tags=task_update.tags,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if task is None:
        raise TaskNotFoundError(task_id)
    return task_to_dict(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: int = Path(..., gt=0),
    task_service: TaskService = Depends(get_task_service)
) -> Response:
    if not task_service.delete_task(task_id):
        raise TaskNotFoundError(task_id)
    return Response(status_code=204)
