import logging
from datetime import date
from typing import Iterable, Optional, Set

from .families import TagFamily
from .matching import DueDate, in_range, matches_keywords
from .types import TagRule

logger = logging.getLogger(__name__)


def keyword_tags(title: str, description: Optional[str], catalog: Iterable[TagRule]) -> Set[str]:
    content = f"{title} {description or ''}".lower()
    return {tag.id for tag in catalog if matches_keywords(content, tag.keywords)}


def date_tags(due_date: DueDate, catalog: Iterable[TagRule], today: Optional[date] = None) -> Set[str]:
    if not due_date:
        return set()
    return {tag.id for tag in catalog if in_range(due_date, tag.date_range, today)}


def auto_tag(
    title: str,
    description: Optional[str],
    due_date: DueDate,
    catalog: Iterable[TagRule],
    today: Optional[date] = None,
) -> Set[str]:
    """Compute every tag id whose keyword or date rule matches the task.

    Both checks run independently over the whole catalog and their results
    are unioned. Inputs are left untouched.
    """
    catalog = list(catalog)
    tag_ids = keyword_tags(title, description, catalog) | date_tags(due_date, catalog, today)
    logger.debug("auto_tag(%r, due=%s) -> %s", title, due_date, sorted(tag_ids))
    return tag_ids


def merge_manual_tags(computed: Iterable[str], existing: Iterable[str], previous_rule_tags: Iterable[str]) -> Set[str]:
    """Recomputed rule tags plus whatever the user attached by hand.

    A tag that was only present because an earlier rule matched is dropped
    once that rule stops matching.
    """
    manual = set(existing) - set(previous_rule_tags)
    return set(computed) | manual


def apply_urgency_tags(
    task_tags: Iterable[str],
    due_date: DueDate,
    catalog: Iterable[TagRule],
    today: Optional[date] = None,
) -> Set[str]:
    """Re-derive the urgency tags (asap/urgent/soon/later) from the due date.

    Leaves the tag set alone when nothing in the catalog matches the date.
    """
    catalog = list(catalog)
    current = set(task_tags)
    matching = date_tags(due_date, catalog, today)
    if not matching:
        return current

    urgency_ids = TagFamily.URGENCY.member_ids(catalog)
    return (current - urgency_ids) | matching
