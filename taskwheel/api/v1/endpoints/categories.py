import logging
import re
from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select, func
from typing import List
import uuid

from taskwheel.db.session import get_session
from taskwheel.models.user import User
from taskwheel.models.task import Task
from taskwheel.models.tag import Tag, TagCategory, TimeCategory
from taskwheel.schemas.tag import (
    TagCategoryCreate, TagCategoryRead, TagCategoryUpdate,
    TimeCategoryCreate, TimeCategoryRead, TimeCategoryUpdate,
)
from taskwheel.tagging import GENERAL_CATEGORY
from taskwheel.api.deps import get_current_user, get_owned

logger = logging.getLogger(__name__)

tag_categories_router = APIRouter()
time_categories_router = APIRouter()


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")

# --- TAG CATEGORIES ---
@tag_categories_router.get("/", response_model=List[TagCategoryRead])
def list_tag_categories(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return session.exec(
        select(TagCategory).where(TagCategory.user_id == current_user.id).order_by(TagCategory.created_at)
    ).all()

@tag_categories_router.post("/", response_model=TagCategoryRead, status_code=status.HTTP_201_CREATED)
def create_tag_category(
    category_create: TagCategoryCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    key = category_create.key or slugify(category_create.name)
    if not key:
        raise HTTPException(status_code=400, detail="Category key cannot be empty")

    existing = session.exec(
        select(TagCategory).where(TagCategory.user_id == current_user.id, TagCategory.key == key)
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail=f"Category '{key}' already exists")

    category = TagCategory(
        user_id=current_user.id,
        key=key,
        name=category_create.name,
        description=category_create.description,
        color=category_create.color,
    )
    session.add(category)
    session.commit()
    session.refresh(category)
    return category

@tag_categories_router.put("/{category_id}", response_model=TagCategoryRead)
def update_tag_category(
    category_id: uuid.UUID,
    category_update: TagCategoryUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    category = get_owned(session, TagCategory, category_id, current_user, "Tag category")
    for key, value in category_update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, key, value)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category

@tag_categories_router.delete("/{category_id}")
def delete_tag_category(
    category_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    category = get_owned(session, TagCategory, category_id, current_user, "Tag category")
    if category.key == GENERAL_CATEGORY:
        raise HTTPException(status_code=400, detail="The general category cannot be deleted")

    # Tags of a deleted category fall back to general
    tags = session.exec(
        select(Tag).where(Tag.user_id == current_user.id, Tag.category == category.key)
    ).all()
    for tag in tags:
        tag.category = GENERAL_CATEGORY
        session.add(tag)

    session.delete(category)
    session.commit()
    logger.info("Deleted tag category %s, moved %d tags to general", category.key, len(tags))
    return {"ok": True}

# --- TIME CATEGORIES ---
@time_categories_router.get("/", response_model=List[TimeCategoryRead])
def list_time_categories(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return session.exec(
        select(TimeCategory).where(TimeCategory.user_id == current_user.id).order_by(TimeCategory.order_index)
    ).all()

@time_categories_router.post("/", response_model=TimeCategoryRead, status_code=status.HTTP_201_CREATED)
def create_time_category(
    category_create: TimeCategoryCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    order_index = category_create.order_index
    if order_index is None:
        last_index = session.exec(
            select(func.max(TimeCategory.order_index)).where(TimeCategory.user_id == current_user.id)
        ).one()
        order_index = 0 if last_index is None else last_index + 1

    category = TimeCategory(
        user_id=current_user.id,
        name=category_create.name,
        description=category_create.description,
        color=category_create.color,
        order_index=order_index,
    )
    session.add(category)
    session.commit()
    session.refresh(category)
    return category

@time_categories_router.put("/{category_id}", response_model=TimeCategoryRead)
def update_time_category(
    category_id: uuid.UUID,
    category_update: TimeCategoryUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    category = get_owned(session, TimeCategory, category_id, current_user, "Time category")
    for key, value in category_update.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(category, key, value)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category

@time_categories_router.delete("/{category_id}")
def delete_time_category(
    category_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    category = get_owned(session, TimeCategory, category_id, current_user, "Time category")

    # Tasks in the column become unsorted; their tags stay as they are
    tasks = session.exec(select(Task).where(Task.time_category_id == category.id)).all()
    for task in tasks:
        task.time_category_id = None
        session.add(task)

    session.delete(category)
    session.commit()
    return {"ok": True}
