from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum

GENERAL_CATEGORY = "general"


class Quadrant(str, Enum):
    urgent_important = "urgent-important"
    not_urgent_important = "not-urgent-important"
    urgent_not_important = "urgent-not-important"
    not_urgent_not_important = "not-urgent-not-important"


class EffortLevel(str, Enum):
    quick = "quick"
    medium = "medium"
    high = "high"


class DateRange(BaseModel):
    enabled: bool = False
    # Offsets in days from today; None means the side is unbounded
    start_days: Optional[int] = None
    end_days: Optional[int] = None


class TagRule(BaseModel):
    """Read-only view of a tag as seen by the tagging engine."""

    id: str
    name: str
    keywords: List[str] = Field(default_factory=list)
    category: str = GENERAL_CATEGORY
    date_range: Optional[DateRange] = None


class TimeCategoryRef(BaseModel):
    id: str
    name: str
