from typing import Dict, List

from .types import DateRange, GENERAL_CATEGORY, TagRule


def default_urgency_tags() -> List[TagRule]:
    """The asap/urgent/soon/later tags with contiguous date ranges (0, 1-3, 4-7, 8+)."""
    return [
        TagRule(
            id="tag-asap",
            name="asap",
            keywords=["asap", "immediately", "now"],
            date_range=DateRange(enabled=True, start_days=0, end_days=0),
        ),
        TagRule(
            id="tag-urgent",
            name="urgent",
            keywords=["urgent", "important", "priority"],
            date_range=DateRange(enabled=True, start_days=1, end_days=3),
        ),
        TagRule(
            id="tag-soon",
            name="soon",
            keywords=["soon", "upcoming", "approaching"],
            date_range=DateRange(enabled=True, start_days=4, end_days=7),
        ),
        TagRule(
            id="tag-later",
            name="later",
            keywords=["later", "future", "eventually"],
            date_range=DateRange(enabled=True, start_days=8, end_days=None),
        ),
    ]


def missing_urgency_tags(existing: List[TagRule]) -> List[TagRule]:
    names = {tag.name.lower() for tag in existing}
    return [tag for tag in default_urgency_tags() if tag.name.lower() not in names]


def ensure_urgency_tags(existing: List[TagRule]) -> List[TagRule]:
    """Append any default urgency tag whose name is not already taken."""
    return list(existing) + missing_urgency_tags(existing)


def default_tag_categories() -> List[Dict[str, str]]:
    return [
        {"key": GENERAL_CATEGORY, "name": "General", "description": "General purpose tags", "color": "#6B7280"},
        {
            "key": "urgency-importance",
            "name": "Urgency & Importance",
            "description": "Tags used by the Eisenhower matrix",
            "color": "#EF4444",
        },
        {"key": "time-based", "name": "Time Based", "description": "Tags used by time sorting", "color": "#F59E0B"},
        {"key": "effort", "name": "Effort", "description": "Tags describing the energy a task needs", "color": "#10B981"},
    ]


def default_time_categories() -> List[Dict]:
    return [
        {"name": "ASAP", "color": "#EF4444", "description": "Tasks that need immediate attention", "order_index": 0},
        {"name": "This Week", "color": "#F59E0B", "description": "Tasks to complete within the current week", "order_index": 1},
        {"name": "Next Month", "color": "#3B82F6", "description": "Tasks planned for the upcoming month", "order_index": 2},
        {"name": "Someday", "color": "#6B7280", "description": "Tasks without a specific timeline", "order_index": 3},
    ]
