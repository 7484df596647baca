import logging
from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from taskwheel.db.session import get_session
from taskwheel.models.user import User
from taskwheel.models.tag import Tag
from taskwheel.schemas.tag import TagCreate, TagRead, TagUpdate, TagPreviewRequest, TagPreviewResult
from taskwheel.services.catalog import (
    get_user_tags, load_catalog, ensure_default_tags, refresh_urgency_tags, remove_tag_everywhere,
)
from taskwheel.tagging import auto_tag
from taskwheel.api.deps import get_current_user, get_owned

logger = logging.getLogger(__name__)

router = APIRouter()


def _apply_date_range(tag: Tag, date_range):
    if date_range is None:
        tag.date_range_enabled = False
        tag.date_range_start_days = None
        tag.date_range_end_days = None
    else:
        tag.date_range_enabled = date_range.enabled
        tag.date_range_start_days = date_range.start_days
        tag.date_range_end_days = date_range.end_days

@router.get("/", response_model=List[TagRead])
def list_tags(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return [TagRead.from_tag(tag) for tag in get_user_tags(session, current_user.id)]

@router.post("/", response_model=TagRead, status_code=status.HTTP_201_CREATED)
def create_tag(
    tag_create: TagCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    tag = Tag(
        user_id=current_user.id,
        name=tag_create.name,
        keywords=list(tag_create.keywords),
        category=tag_create.category,
    )
    _apply_date_range(tag, tag_create.date_range)
    session.add(tag)
    session.commit()
    # Date-range tags change which urgency tag a dated task should carry
    refresh_urgency_tags(session, current_user.id)
    session.refresh(tag)
    logger.info("Created tag %s (%s)", tag.id, tag.name)
    return TagRead.from_tag(tag)

@router.put("/{tag_id}", response_model=TagRead)
def update_tag(
    tag_id: str,
    tag_update: TagUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    tag = get_owned(session, Tag, tag_id, current_user, "Tag")

    tag_data = tag_update.model_dump(exclude_unset=True)
    if "date_range" in tag_data:
        _apply_date_range(tag, tag_update.date_range)
    if tag_data.get("name"):
        tag.name = tag_update.name
    if tag_update.keywords is not None:
        tag.keywords = list(tag_update.keywords)
    if tag_update.category:
        tag.category = tag_update.category

    session.add(tag)
    session.commit()
    refresh_urgency_tags(session, current_user.id)
    session.refresh(tag)
    return TagRead.from_tag(tag)

@router.delete("/{tag_id}")
def delete_tag(
    tag_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    tag = get_owned(session, Tag, tag_id, current_user, "Tag")
    remove_tag_everywhere(session, tag)
    session.delete(tag)
    session.commit()
    refresh_urgency_tags(session, current_user.id)
    logger.info("Deleted tag %s", tag_id)
    return {"ok": True}

@router.post("/ensure-defaults", response_model=List[TagRead])
def ensure_defaults(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Add any missing asap/urgent/soon/later tag, then re-derive urgency tags."""
    ensure_default_tags(session, current_user.id)
    refresh_urgency_tags(session, current_user.id)
    return [TagRead.from_tag(tag) for tag in get_user_tags(session, current_user.id)]

@router.post("/preview", response_model=TagPreviewResult)
def preview_tags(
    request: TagPreviewRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    catalog = load_catalog(session, current_user.id)
    tag_ids = auto_tag(request.title, request.description, request.due_date, catalog)
    names = {tag.id: tag.name for tag in catalog}
    ordered = [tag.id for tag in catalog if tag.id in tag_ids]
    return TagPreviewResult(tag_ids=ordered, tag_names=[names[tag_id] for tag_id in ordered])
