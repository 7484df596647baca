# Pure tagging engine: every function takes the tag catalog as an argument
from .types import DateRange, EffortLevel, GENERAL_CATEGORY, Quadrant, TagRule, TimeCategoryRef
from .matching import days_difference, in_range, matches_keywords
from .families import TagFamily, effort_buckets, eisenhower_buckets
from .engine import apply_urgency_tags, auto_tag, merge_manual_tags
from .retag import retag_for_effort, retag_for_quadrant, retag_for_time_category
from .defaults import default_tag_categories, default_time_categories, default_urgency_tags, ensure_urgency_tags

__all__ = [
    "DateRange",
    "EffortLevel",
    "GENERAL_CATEGORY",
    "Quadrant",
    "TagRule",
    "TimeCategoryRef",
    "days_difference",
    "in_range",
    "matches_keywords",
    "TagFamily",
    "effort_buckets",
    "eisenhower_buckets",
    "apply_urgency_tags",
    "auto_tag",
    "merge_manual_tags",
    "retag_for_effort",
    "retag_for_quadrant",
    "retag_for_time_category",
    "default_tag_categories",
    "default_time_categories",
    "default_urgency_tags",
    "ensure_urgency_tags",
]
