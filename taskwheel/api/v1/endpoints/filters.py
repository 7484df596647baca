from fastapi import APIRouter, Depends, status
from sqlmodel import Session, select
from typing import List
import uuid

from taskwheel.db.session import get_session
from taskwheel.models.user import User
from taskwheel.models.tag import SavedFilter
from taskwheel.schemas.tag import SavedFilterCreate, SavedFilterRead
from taskwheel.services.catalog import get_user_tags
from taskwheel.api.deps import get_current_user, get_owned

router = APIRouter()

@router.get("/", response_model=List[SavedFilterRead])
def list_filters(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return session.exec(
        select(SavedFilter).where(SavedFilter.user_id == current_user.id).order_by(SavedFilter.created_at)
    ).all()

@router.post("/", response_model=SavedFilterRead, status_code=status.HTTP_201_CREATED)
def create_filter(
    filter_create: SavedFilterCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    # Only keep tags the user actually owns
    known = {tag.id for tag in get_user_tags(session, current_user.id)}
    saved = SavedFilter(
        user_id=current_user.id,
        name=filter_create.name,
        tag_ids=[tag_id for tag_id in filter_create.tag_ids if tag_id in known],
    )
    session.add(saved)
    session.commit()
    session.refresh(saved)
    return saved

@router.delete("/{filter_id}")
def delete_filter(
    filter_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    saved = get_owned(session, SavedFilter, filter_id, current_user, "Filter")
    session.delete(saved)
    session.commit()
    return {"ok": True}
