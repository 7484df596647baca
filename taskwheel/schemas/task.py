from sqlmodel import SQLModel, Field
from typing import Dict, List, Optional
from datetime import date, datetime
import uuid

from ..tagging import EffortLevel, Quadrant


class TaskBase(SQLModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    due_date: Optional[date] = None

class TaskCreate(TaskBase):
    # Manually chosen tags, kept alongside the auto-tags
    tags: List[str] = []

class TaskRead(TaskBase):
    id: uuid.UUID
    user_id: uuid.UUID
    completed: bool
    order_index: int
    quadrant: Optional[Quadrant] = None
    effort_level: Optional[EffortLevel] = None
    time_category_id: Optional[uuid.UUID] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task) -> "TaskRead":
        return cls(
            id=task.id,
            user_id=task.user_id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            completed=task.completed,
            order_index=task.order_index,
            quadrant=task.quadrant,
            effort_level=task.effort_level,
            time_category_id=task.time_category_id,
            tags=task.tag_ids,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )

class TaskUpdate(SQLModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[date] = None

# --- MODE ASSIGNMENTS ---
class QuadrantAssign(SQLModel):
    quadrant: Quadrant

class EffortAssign(SQLModel):
    level: EffortLevel

class TimeCategoryAssign(SQLModel):
    category_id: uuid.UUID

class ReorderRequest(SQLModel):
    task_ids: List[uuid.UUID]

class MatrixRead(SQLModel):
    quadrants: Dict[str, List[TaskRead]]
    unassigned: List[TaskRead]

class UrgencyRefreshResult(SQLModel):
    updated: int

class TwoMinuteRead(SQLModel):
    tasks: List[TaskRead]
    estimated_minutes: int

class EnergyRead(SQLModel):
    high: List[TaskRead]
    medium: List[TaskRead]
    low: List[TaskRead]

# --- STATS SCHEMA ---
class DashboardStats(SQLModel):
    tasks_due_soon: int
    completed_today: int
    productivity_score: int
    total_tasks: int
    completed_tasks: int
