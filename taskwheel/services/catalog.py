"""Database side of tagging: load catalog snapshots, store computed tag sets."""
import logging
from typing import Iterable, List, Optional
import uuid

from sqlmodel import Session, select

from ..models.task import Task, TaskTag, TagSource
from ..models.tag import Tag, TagCategory, TimeCategory, SavedFilter
from ..models.user import User
from ..tagging import (
    TagRule,
    TimeCategoryRef,
    apply_urgency_tags,
    auto_tag,
    default_tag_categories,
    default_time_categories,
    merge_manual_tags,
)
from ..tagging.defaults import missing_urgency_tags

logger = logging.getLogger(__name__)

# --- 1. CATALOG SNAPSHOTS ---

def get_user_tags(session: Session, user_id: uuid.UUID) -> List[Tag]:
    return session.exec(select(Tag).where(Tag.user_id == user_id).order_by(Tag.created_at)).all()

def load_catalog(session: Session, user_id: uuid.UUID) -> List[TagRule]:
    return [tag.to_rule() for tag in get_user_tags(session, user_id)]

def load_time_categories(session: Session, user_id: uuid.UUID) -> List[TimeCategoryRef]:
    categories = session.exec(
        select(TimeCategory).where(TimeCategory.user_id == user_id).order_by(TimeCategory.order_index)
    ).all()
    return [category.to_ref() for category in categories]

# --- 2. WRITING TAG SETS ---

def set_task_tags(session: Session, task: Task, tag_ids: Iterable[str], catalog: List[TagRule],
                  rule_ids: Iterable[str] = ()):
    """Replace the task's tag links with ``tag_ids``.

    Existing links keep their provenance; new ones are "rule" links when
    listed in ``rule_ids`` and "manual" otherwise. New ids missing from the
    catalog are skipped.
    """
    known = {tag.id for tag in catalog}
    rule_ids = set(rule_ids)
    wanted = set(tag_ids)
    existing = {link.tag_id: link for link in task.tag_links}

    for tag_id, link in existing.items():
        if tag_id not in wanted:
            task.tag_links.remove(link)

    for tag_id in sorted(wanted):
        if tag_id in existing:
            continue
        if tag_id not in known:
            logger.debug("Dropping unknown tag %s from task %s", tag_id, task.id)
            continue
        source = TagSource.rule if tag_id in rule_ids else TagSource.manual
        task.tag_links.append(TaskTag(task_id=task.id, tag_id=tag_id, source=source))

    session.add(task)

def retag_task_content(session: Session, task: Task, catalog: List[TagRule], keep_manual: bool = True,
                       due_date_set: bool = False):
    """Recompute rule tags after title, description or due date changed.

    When the due date was just set, the urgency family is re-derived from it
    so a hand-picked asap/urgent/soon/later tag gives way to the dated one.
    """
    computed = auto_tag(task.title, task.description, task.due_date, catalog)
    if keep_manual:
        tag_ids = merge_manual_tags(computed, task.tag_ids, task.rule_tag_ids)
    else:
        tag_ids = computed
    if due_date_set and task.due_date:
        tag_ids = apply_urgency_tags(tag_ids, task.due_date, catalog)
    set_task_tags(session, task, tag_ids, catalog, rule_ids=computed)
    logger.info("Task %s tagged with %d tags (%d from rules)", task.id, len(tag_ids), len(computed))

def refresh_urgency_tags(session: Session, user_id: uuid.UUID, catalog: Optional[List[TagRule]] = None) -> int:
    """Re-derive the urgency tags of every open task with a due date."""
    if catalog is None:
        catalog = load_catalog(session, user_id)

    tasks = session.exec(
        select(Task).where(Task.user_id == user_id, Task.completed == False, Task.due_date != None)  # noqa: E711,E712
    ).all()

    updated = 0
    for task in tasks:
        current = set(task.tag_ids)
        new_tags = apply_urgency_tags(current, task.due_date, catalog)
        if new_tags != current:
            set_task_tags(session, task, new_tags, catalog, rule_ids=new_tags - current)
            updated += 1

    session.commit()
    logger.info("Refreshed urgency tags for user %s: %d of %d tasks changed", user_id, updated, len(tasks))
    return updated

def remove_tag_everywhere(session: Session, tag: Tag):
    links = session.exec(select(TaskTag).where(TaskTag.tag_id == tag.id)).all()
    for link in links:
        session.delete(link)

    filters = session.exec(select(SavedFilter).where(SavedFilter.user_id == tag.user_id)).all()
    for saved in filters:
        if tag.id in saved.tag_ids:
            # JSON columns need a new list to register the change
            saved.tag_ids = [tag_id for tag_id in saved.tag_ids if tag_id != tag.id]
            session.add(saved)

# --- 3. DEFAULTS ---

def ensure_default_tags(session: Session, user_id: uuid.UUID) -> List[Tag]:
    """Insert any missing asap/urgent/soon/later tag for the user."""
    created = []
    for rule in missing_urgency_tags(load_catalog(session, user_id)):
        # Default ids are per-catalog; rows need globally unique ones
        tag = Tag(
            user_id=user_id,
            name=rule.name,
            keywords=list(rule.keywords),
            category=rule.category,
            date_range_enabled=rule.date_range.enabled,
            date_range_start_days=rule.date_range.start_days,
            date_range_end_days=rule.date_range.end_days,
        )
        session.add(tag)
        created.append(tag)
    if created:
        session.commit()
        logger.info("Created %d default urgency tags for user %s", len(created), user_id)
    return created

def bootstrap_user(session: Session, user: User):
    for category in default_tag_categories():
        session.add(TagCategory(user_id=user.id, **category))
    for category in default_time_categories():
        session.add(TimeCategory(user_id=user.id, **category))
    session.commit()
    ensure_default_tags(session, user.id)
