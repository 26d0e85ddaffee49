# task_manager/models/task.py
from sqlalchemy import Column, Integer, SmallInteger, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from task_manager.database import Base
import enum
from datetime import datetime


class TaskStatus(enum.IntEnum):
    PENDING = 1
    IN_PROGRESS = 2
    COMPLETED = 3


class TaskPriority(enum.IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Date only, no time component
    due_date = Column(Date, nullable=False)

    # Stored as plain integers so ORDER BY priority sorts High > Medium > Low
    priority = Column(SmallInteger, default=int(TaskPriority.LOW), nullable=False)
    status = Column(SmallInteger, default=int(TaskStatus.PENDING), nullable=False)

    # System dates
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = relationship("User", back_populates="tasks")
