"""Category re-tagging.

Each operation drops the task's tags from one family and adds the family
tags implied by the new assignment. Tag ids that do not resolve to a tag
in the catalog are carried through unchanged.
"""
import logging
from typing import Iterable, Optional, Set, Union

from .families import TagFamily, effort_buckets, eisenhower_buckets
from .types import EffortLevel, Quadrant, TagRule, TimeCategoryRef

logger = logging.getLogger(__name__)


def _ids(tags) -> Set[str]:
    return {tag.id for tag in tags}


def retag_for_quadrant(task_tags: Iterable[str], quadrant: Union[Quadrant, str], catalog: Iterable[TagRule]) -> Set[str]:
    catalog = list(catalog)
    quadrant = Quadrant(quadrant)
    remaining = set(task_tags) - TagFamily.EISENHOWER.member_ids(catalog)
    buckets = eisenhower_buckets(catalog)

    if quadrant is Quadrant.urgent_important:
        if buckets["both"]:
            replacement = _ids(buckets["both"])
        else:
            replacement = _ids(buckets["urgent"]) | _ids(buckets["important"])
    elif quadrant is Quadrant.not_urgent_important:
        replacement = _ids(buckets["important"])
    elif quadrant is Quadrant.urgent_not_important:
        replacement = _ids(buckets["urgent"])
    else:
        replacement = _ids(buckets["neither"])

    logger.debug("quadrant %s -> %s", quadrant.value, sorted(replacement))
    return remaining | replacement


def find_time_tag(category: TimeCategoryRef, catalog: Iterable[TagRule]) -> Optional[TagRule]:
    members = TagFamily.TIME_BASED.members(catalog)
    name = category.name.lower()
    for tag in members:
        if tag.name.lower() == name:
            return tag
    for tag in members:
        if any(keyword.lower() in name for keyword in tag.keywords):
            return tag
    return None


def retag_for_time_category(
    task_tags: Iterable[str],
    category_id: str,
    catalog: Iterable[TagRule],
    time_categories: Iterable[TimeCategoryRef],
) -> Set[str]:
    catalog = list(catalog)
    current = set(task_tags)
    category = next((c for c in time_categories if c.id == category_id), None)
    if category is None:
        # Unknown column: nothing to derive from, keep the task as it was
        return current

    remaining = current - TagFamily.TIME_BASED.member_ids(catalog)
    tag = find_time_tag(category, catalog)
    if tag is None:
        return remaining
    return remaining | {tag.id}


def retag_for_effort(task_tags: Iterable[str], level: Union[EffortLevel, str], catalog: Iterable[TagRule]) -> Set[str]:
    catalog = list(catalog)
    level = EffortLevel(level)
    remaining = set(task_tags) - TagFamily.EFFORT.member_ids(catalog)
    return remaining | _ids(effort_buckets(catalog)[level])
