# task_manager/routers/tasks.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from task_manager.database import get_db
from task_manager.models.task import Task
from task_manager.models.user import User
from task_manager.schemas.task import (
    TaskCreate,
    TaskDetailOut,
    TaskListOut,
    TaskMutationOut,
    TaskOut,
    TaskStatusUpdate,
    TaskUpdate,
)
from task_manager.schemas.user import MessageOut
from task_manager.services.task_commands import TaskCommands
from task_manager.services.task_query import DEFAULT_SORT, TaskQueryEngine, parse_status_filter
from task_manager.utils.auth import get_current_user
from task_manager.utils.exceptions import TaskNotFound

logger = logging.getLogger(__name__)

# Every route below goes through the auth gate first
router = APIRouter(dependencies=[Depends(get_current_user)])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


def _internal_error(action: str) -> HTTPException:
    logger.exception(f"Error in {action}")
    return HTTPException(status_code=500, detail="Internal server error")


def _mutation(message: str, task: Task) -> dict:
    return {"message": message, "task": TaskOut.model_validate(task)}


@router.get("", response_model=TaskListOut)
def get_tasks(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),  # clamped to MAX_PAGE_SIZE by the engine
    status_filter: Optional[str] = Query("all", alias="status"),
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List the current user's tasks, one page at a time"""
    try:
        task_status = parse_status_filter(status_filter)
    except ValueError:
        raise HTTPException(status_code=400, detail="Status must be all, 1, 2 or 3")

    try:
        result = TaskQueryEngine(db).list(
            current_user.id,
            page=page,
            page_size=limit,
            status_filter=task_status,
            sort_by=sort_by,
        )
    except Exception:
        raise _internal_error("get_tasks")

    return {
        "tasks": [TaskOut.model_validate(task) for task in result.items],
        "total": result.total,
        "page": result.page,
        "limit": result.page_size,
        "total_pages": result.total_pages,
    }


@router.get("/{task_id}", response_model=TaskDetailOut)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = TaskCommands(db).get(current_user.id, task_id)
    except TaskNotFound:
        raise _not_found()
    return {"task": TaskOut.model_validate(task)}


@router.post("", response_model=TaskMutationOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        db_task = TaskCommands(db).create(current_user.id, task)
    except Exception:
        raise _internal_error("create_task")
    return _mutation("Task created successfully", db_task)


@router.put("/{task_id}", response_model=TaskMutationOut)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update only the fields present in the request body"""
    try:
        task = TaskCommands(db).update(
            current_user.id, task_id, task_update.model_dump(exclude_unset=True)
        )
    except TaskNotFound:
        raise _not_found()
    except Exception:
        raise _internal_error("update_task")
    return _mutation("Task updated successfully", task)


@router.patch("/{task_id}/status", response_model=TaskMutationOut)
def update_task_status(
    task_id: int,
    status_update: TaskStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = TaskCommands(db).set_status(current_user.id, task_id, status_update.status)
    except TaskNotFound:
        raise _not_found()
    except Exception:
        raise _internal_error("update_task_status")
    return _mutation("Task status updated successfully", task)


@router.patch("/{task_id}/complete", response_model=TaskMutationOut)
def mark_task_complete(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        task = TaskCommands(db).mark_complete(current_user.id, task_id)
    except TaskNotFound:
        raise _not_found()
    except Exception:
        raise _internal_error("mark_task_complete")
    return _mutation("Task marked as completed", task)


@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        TaskCommands(db).delete(current_user.id, task_id)
    except TaskNotFound:
        raise _not_found()
    except Exception:
        raise _internal_error("delete_task")
    return {"message": "Task deleted successfully"}
