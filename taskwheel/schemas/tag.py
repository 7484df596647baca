from sqlmodel import SQLModel, Field
from typing import List, Optional
from datetime import date
import uuid

from ..tagging import DateRange, GENERAL_CATEGORY


class TagBase(SQLModel):
    name: str = Field(min_length=1)
    keywords: List[str] = []
    category: str = GENERAL_CATEGORY
    date_range: Optional[DateRange] = None

class TagCreate(TagBase):
    pass

class TagUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    keywords: Optional[List[str]] = None
    category: Optional[str] = None
    date_range: Optional[DateRange] = None

class TagRead(TagBase):
    id: str

    @classmethod
    def from_tag(cls, tag) -> "TagRead":
        rule = tag.to_rule()
        date_range = rule.date_range
        if date_range is None and (tag.date_range_start_days is not None or tag.date_range_end_days is not None):
            # Keep a disabled range visible so it can be re-enabled
            date_range = DateRange(
                enabled=False,
                start_days=tag.date_range_start_days,
                end_days=tag.date_range_end_days,
            )
        return cls(id=rule.id, name=rule.name, keywords=rule.keywords, category=rule.category, date_range=date_range)


class TagPreviewRequest(SQLModel):
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None

class TagPreviewResult(SQLModel):
    tag_ids: List[str]
    tag_names: List[str]


class TagCategoryBase(SQLModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    color: str = "#6B7280"

class TagCategoryCreate(TagCategoryBase):
    # Derived from the name when omitted
    key: Optional[str] = None

class TagCategoryUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None

class TagCategoryRead(TagCategoryBase):
    id: uuid.UUID
    key: str


class TimeCategoryBase(SQLModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    color: str = "#3B82F6"

class TimeCategoryCreate(TimeCategoryBase):
    order_index: Optional[int] = None

class TimeCategoryUpdate(SQLModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    order_index: Optional[int] = None

class TimeCategoryRead(TimeCategoryBase):
    id: uuid.UUID
    order_index: int


class SavedFilterCreate(SQLModel):
    name: str = Field(min_length=1)
    tag_ids: List[str] = []

class SavedFilterRead(SavedFilterCreate):
    id: uuid.UUID
