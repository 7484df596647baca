from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field
from typing import List, Optional
from datetime import datetime
import uuid

from ..tagging import DateRange, GENERAL_CATEGORY, TagRule, TimeCategoryRef


class TagCategory(SQLModel, table=True):
    __tablename__ = "tag_categories"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    # Referenced by Tag.category, e.g. "general" or "effort"
    key: str = Field(index=True)
    name: str
    description: Optional[str] = Field(default=None)
    color: str = Field(default="#6B7280")
    created_at: datetime = Field(default_factory=datetime.utcnow)


class Tag(SQLModel, table=True):
    __tablename__ = "tags"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    name: str = Field(nullable=False)
    keywords: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    category: str = Field(default=GENERAL_CATEGORY)
    date_range_enabled: bool = Field(default=False)
    date_range_start_days: Optional[int] = Field(default=None)
    date_range_end_days: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def to_rule(self) -> TagRule:
        date_range = None
        if self.date_range_enabled:
            date_range = DateRange(
                enabled=True,
                start_days=self.date_range_start_days,
                end_days=self.date_range_end_days,
            )
        return TagRule(
            id=self.id,
            name=self.name,
            keywords=list(self.keywords or []),
            category=self.category or GENERAL_CATEGORY,
            date_range=date_range,
        )


class TimeCategory(SQLModel, table=True):
    __tablename__ = "time_categories"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    name: str
    description: Optional[str] = Field(default=None)
    color: str = Field(default="#3B82F6")
    order_index: int = Field(default=0)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    def to_ref(self) -> TimeCategoryRef:
        return TimeCategoryRef(id=str(self.id), name=self.name)


class SavedFilter(SQLModel, table=True):
    __tablename__ = "saved_filters"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    name: str
    tag_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=datetime.utcnow)
