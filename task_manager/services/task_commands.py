# task_manager/services/task_commands.py
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from task_manager.models.task import Task, TaskPriority, TaskStatus
from task_manager.schemas.task import TaskCreate
from task_manager.utils.exceptions import TaskNotFound

logger = logging.getLogger(__name__)


class TaskCommands:
    """Create, read, update and delete tasks on behalf of one owner.

    Every lookup filters on both the task id and the owner, so a task that
    belongs to someone else is reported exactly like a missing one.
    Concurrent writes are last-write-wins; there is no version column.
    """

    UPDATABLE_FIELDS = ("title", "description", "due_date", "priority", "status")

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_id: int, data: TaskCreate) -> Task:
        task = Task(
            user_id=user_id,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            priority=int(data.priority or TaskPriority.LOW),
            status=int(data.status or TaskStatus.PENDING),
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        logger.info(f"User {user_id} created task {task.id}")
        return task

    def get(self, user_id: int, task_id: int) -> Task:
        task = self.db.query(Task).filter(
            Task.id == task_id,
            Task.user_id == user_id,
        ).first()
        if task is None:
            raise TaskNotFound(task_id)
        return task

    def update(self, user_id: int, task_id: int, changes: Dict[str, Any]) -> Task:
        """Apply only the fields present in ``changes``"""
        task = self.get(user_id, task_id)

        for key, value in changes.items():
            if key not in self.UPDATABLE_FIELDS:
                continue
            if key in ("priority", "status"):
                value = int(value)
            setattr(task, key, value)

        self.db.commit()
        self.db.refresh(task)
        logger.info(f"User {user_id} updated task {task.id}: {sorted(changes)}")
        return task

    def delete(self, user_id: int, task_id: int) -> None:
        task = self.get(user_id, task_id)
        self.db.delete(task)
        self.db.commit()
        logger.info(f"User {user_id} deleted task {task_id}")

    def set_status(self, user_id: int, task_id: int, status: TaskStatus) -> Task:
        # Any status may follow any other
        return self.update(user_id, task_id, {"status": status})

    def mark_complete(self, user_id: int, task_id: int) -> Task:
        return self.set_status(user_id, task_id, TaskStatus.COMPLETED)
