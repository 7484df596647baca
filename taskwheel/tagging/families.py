from enum import Enum
from typing import Dict, Iterable, List

from .types import EffortLevel, TagRule

URGENCY_TAG_NAMES = ("asap", "urgent", "soon", "later")


class TagFamily(str, Enum):
    """Groups of tags that are mutually exclusive on one axis.

    The three organizational families are keyed by the tag's category.
    The urgency family is keyed by tag name, so a tag can belong to both
    EISENHOWER and URGENCY at once.
    """

    EISENHOWER = "urgency-importance"
    TIME_BASED = "time-based"
    EFFORT = "effort"
    URGENCY = "urgency"

    def contains(self, tag: TagRule) -> bool:
        if self is TagFamily.URGENCY:
            return tag.name.lower() in URGENCY_TAG_NAMES
        return tag.category == self.value

    def members(self, catalog: Iterable[TagRule]) -> List[TagRule]:
        return [tag for tag in catalog if self.contains(tag)]

    def member_ids(self, catalog: Iterable[TagRule]) -> set:
        return {tag.id for tag in self.members(catalog)}


def eisenhower_buckets(catalog: Iterable[TagRule]) -> Dict[str, List[TagRule]]:
    """Split the Eisenhower family by the words in each tag's name."""
    buckets: Dict[str, List[TagRule]] = {"urgent": [], "important": [], "both": [], "neither": []}
    for tag in TagFamily.EISENHOWER.members(catalog):
        name = tag.name.lower()
        urgent = "urgent" in name
        important = "important" in name
        if urgent and important:
            buckets["both"].append(tag)
        elif urgent:
            buckets["urgent"].append(tag)
        elif important:
            buckets["important"].append(tag)
        else:
            buckets["neither"].append(tag)
    return buckets


EFFORT_WORDS = {
    EffortLevel.quick: ("quick", "easy"),
    EffortLevel.medium: ("medium", "moderate"),
    EffortLevel.high: ("high", "difficult", "complex"),
}


def effort_buckets(catalog: Iterable[TagRule]) -> Dict[EffortLevel, List[TagRule]]:
    # A tag named e.g. "quick but complex" lands in more than one bucket
    members = TagFamily.EFFORT.members(catalog)
    return {
        level: [tag for tag in members if any(word in tag.name.lower() for word in words)]
        for level, words in EFFORT_WORDS.items()
    }
