from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import date, datetime
import uuid
from enum import Enum

from ..tagging import EffortLevel, Quadrant


class TagSource(str, Enum):
    rule = "rule"
    manual = "manual"


class TaskTag(SQLModel, table=True):
    __tablename__ = "task_tags"

    task_id: uuid.UUID = Field(foreign_key="tasks.id", primary_key=True)
    tag_id: str = Field(foreign_key="tags.id", primary_key=True)
    # "rule" when produced by auto-tagging, "manual" when the user attached it
    source: TagSource = Field(default=TagSource.rule)

    task: Optional["Task"] = Relationship(back_populates="tag_links")


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", nullable=False)
    title: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)
    completed: bool = Field(default=False)
    due_date: Optional[date] = Field(default=None)
    order_index: int = Field(default=0)

    # Mode assignments
    quadrant: Optional[Quadrant] = Field(default=None)
    effort_level: Optional[EffortLevel] = Field(default=None)
    time_category_id: Optional[uuid.UUID] = Field(default=None, foreign_key="time_categories.id")

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    # Relationship to user
    user: Optional["User"] = Relationship(back_populates="tasks")
    tag_links: List[TaskTag] = Relationship(
        back_populates="task", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    @property
    def tag_ids(self) -> List[str]:
        return sorted(link.tag_id for link in self.tag_links)

    @property
    def rule_tag_ids(self) -> set:
        return {link.tag_id for link in self.tag_links if link.source == TagSource.rule}
