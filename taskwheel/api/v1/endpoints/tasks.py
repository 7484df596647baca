import logging
import random
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session, select, func
from typing import List, Optional
from datetime import date, datetime, timedelta
import uuid

from taskwheel.db.session import get_session
from taskwheel.models.user import User
from taskwheel.models.task import Task, TaskTag, TagSource
from taskwheel.models.tag import Tag, TimeCategory
from taskwheel.schemas.task import (
    TaskCreate, TaskRead, TaskUpdate, DashboardStats, QuadrantAssign, EffortAssign,
    TimeCategoryAssign, ReorderRequest, MatrixRead, UrgencyRefreshResult, TwoMinuteRead, EnergyRead,
)
from taskwheel.services.catalog import (
    load_catalog, load_time_categories, set_task_tags, retag_task_content, refresh_urgency_tags,
)
from taskwheel.services.modes import MINUTES_PER_QUICK_TASK, energy_groups, two_minute_queue
from taskwheel.tagging import (
    Quadrant, apply_urgency_tags, auto_tag, retag_for_effort, retag_for_quadrant, retag_for_time_category,
)
from taskwheel.api.deps import get_current_user, get_owned

logger = logging.getLogger(__name__)

router = APIRouter()

CONTENT_FIELDS = {"title", "description", "due_date"}


def _user_tasks(session: Session, user: User) -> List[Task]:
    return session.exec(
        select(Task).where(Task.user_id == user.id).order_by(Task.order_index, Task.created_at)
    ).all()


def _filter_by_tags(tasks: List[Task], tag_ids: Optional[List[str]]) -> List[Task]:
    # A task matches when it carries any of the selected tags
    if not tag_ids:
        return tasks
    selected = set(tag_ids)
    return [t for t in tasks if selected & set(t.tag_ids)]


def _save(session: Session, task: Task) -> TaskRead:
    task.updated_at = datetime.utcnow()
    session.add(task)
    session.commit()
    session.refresh(task)
    return TaskRead.from_task(task)

# --- STATS ---
@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    today_start = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    # Same calendar as the date-range rules
    today = date.today()

    total_tasks = session.exec(
        select(func.count(Task.id)).where(Task.user_id == current_user.id)
    ).one()

    completed_tasks = session.exec(
        select(func.count(Task.id)).where(
            Task.user_id == current_user.id,
            Task.completed == True  # noqa: E712
        )
    ).one()

    completed_today = session.exec(
        select(func.count(Task.id)).where(
            Task.user_id == current_user.id,
            Task.completed == True,  # noqa: E712
            Task.updated_at >= today_start
        )
    ).one()

    # Open tasks due between today and a week from now
    tasks_due_soon = session.exec(
        select(func.count(Task.id)).where(
            Task.user_id == current_user.id,
            Task.completed == False,  # noqa: E712
            Task.due_date != None,  # noqa: E711
            Task.due_date >= today,
            Task.due_date <= today + timedelta(days=7)
        )
    ).one()

    productivity_score = 0
    if total_tasks > 0:
        productivity_score = round((completed_tasks / total_tasks) * 100)

    return DashboardStats(
        tasks_due_soon=tasks_due_soon,
        completed_today=completed_today,
        productivity_score=productivity_score,
        total_tasks=total_tasks,
        completed_tasks=completed_tasks
    )

# --- MODES ---
@router.get("/wheel", response_model=TaskRead)
def spin_wheel(
    tag: Optional[List[str]] = Query(None),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Pick a random open task, optionally limited to some tags."""
    candidates = _filter_by_tags([t for t in _user_tasks(session, current_user) if not t.completed], tag)
    if not candidates:
        raise HTTPException(status_code=404, detail="No open tasks to choose from")
    return TaskRead.from_task(random.choice(candidates))

@router.get("/matrix", response_model=MatrixRead)
def get_matrix(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    quadrants = {q.value: [] for q in Quadrant}
    unassigned = []
    for task in _user_tasks(session, current_user):
        if task.completed:
            continue
        if task.quadrant:
            quadrants[Quadrant(task.quadrant).value].append(TaskRead.from_task(task))
        else:
            unassigned.append(TaskRead.from_task(task))
    return MatrixRead(quadrants=quadrants, unassigned=unassigned)

@router.get("/two-minute", response_model=TwoMinuteRead)
def get_two_minute_tasks(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    """Open tasks small enough to finish right away."""
    quick = two_minute_queue(_user_tasks(session, current_user))
    return TwoMinuteRead(
        tasks=[TaskRead.from_task(t) for t in quick],
        estimated_minutes=len(quick) * MINUTES_PER_QUICK_TASK,
    )

@router.get("/energy", response_model=EnergyRead)
def get_energy_groups(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    groups = energy_groups(_user_tasks(session, current_user))
    return EnergyRead(**{
        level: [TaskRead.from_task(t) for t in tasks] for level, tasks in groups.items()
    })

@router.post("/refresh-urgency", response_model=UrgencyRefreshResult)
def refresh_urgency(
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return UrgencyRefreshResult(updated=refresh_urgency_tags(session, current_user.id))

@router.post("/reorder", response_model=List[TaskRead])
def reorder_tasks(
    reorder: ReorderRequest,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    for index, task_id in enumerate(reorder.task_ids):
        task = get_owned(session, Task, task_id, current_user, "Task")
        task.order_index = index
        session.add(task)
    session.commit()
    return [TaskRead.from_task(t) for t in _user_tasks(session, current_user)]

# --- CRUD ---
@router.get("/", response_model=List[TaskRead])
def list_user_tasks(
    tag: Optional[List[str]] = Query(None),
    include_completed: bool = True,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    tasks = _user_tasks(session, current_user)
    if not include_completed:
        tasks = [t for t in tasks if not t.completed]
    return [TaskRead.from_task(t) for t in _filter_by_tags(tasks, tag)]

@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_create: TaskCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    last_index = session.exec(
        select(func.max(Task.order_index)).where(Task.user_id == current_user.id)
    ).one()

    db_task = Task(
        user_id=current_user.id,
        title=task_create.title,
        description=task_create.description,
        due_date=task_create.due_date,
        order_index=0 if last_index is None else last_index + 1,
    )
    session.add(db_task)
    session.flush()

    catalog = load_catalog(session, current_user.id)
    computed = auto_tag(db_task.title, db_task.description, db_task.due_date, catalog)
    manual = set(task_create.tags)
    tag_ids = computed | manual
    if db_task.due_date:
        tag_ids = apply_urgency_tags(tag_ids, db_task.due_date, catalog)
    set_task_tags(session, db_task, tag_ids, catalog, rule_ids=computed - manual)
    logger.info("Created task %s with %d auto-tags", db_task.id, len(computed))
    return _save(session, db_task)

@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return TaskRead.from_task(get_owned(session, Task, task_id, current_user, "Task"))

@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: uuid.UUID,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")

    task_data = task_update.model_dump(exclude_unset=True)
    if task_data.get("title") is None:
        task_data.pop("title", None)
    for key, value in task_data.items():
        setattr(task, key, value)

    if CONTENT_FIELDS & task_data.keys():
        retag_task_content(
            session, task, load_catalog(session, current_user.id), due_date_set="due_date" in task_data
        )
    return _save(session, task)

@router.post("/{task_id}/toggle", response_model=TaskRead)
def toggle_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")
    task.completed = not task.completed
    return _save(session, task)

@router.delete("/{task_id}")
def delete_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")
    session.delete(task)
    session.commit()
    return {"ok": True}

# --- MANUAL TAGS ---
@router.post("/{task_id}/tags/{tag_id}", response_model=TaskRead)
def add_task_tag(
    task_id: uuid.UUID,
    tag_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")
    get_owned(session, Tag, tag_id, current_user, "Tag")

    link = next((existing for existing in task.tag_links if existing.tag_id == tag_id), None)
    if link is None:
        task.tag_links.append(TaskTag(task_id=task.id, tag_id=tag_id, source=TagSource.manual))
    else:
        # Pin a rule tag so later edits keep it
        link.source = TagSource.manual
        session.add(link)
    return _save(session, task)

@router.delete("/{task_id}/tags/{tag_id}", response_model=TaskRead)
def remove_task_tag(
    task_id: uuid.UUID,
    tag_id: str,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")
    link = next((existing for existing in task.tag_links if existing.tag_id == tag_id), None)
    if link is None:
        raise HTTPException(status_code=404, detail="Tag not on task")
    task.tag_links.remove(link)
    return _save(session, task)

# --- CATEGORY RE-TAGGING ---
@router.put("/{task_id}/quadrant", response_model=TaskRead)
def assign_quadrant(
    task_id: uuid.UUID,
    assign: QuadrantAssign,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")
    catalog = load_catalog(session, current_user.id)

    task.quadrant = assign.quadrant
    set_task_tags(session, task, retag_for_quadrant(task.tag_ids, assign.quadrant, catalog), catalog)
    logger.info("Task %s moved to quadrant %s", task.id, assign.quadrant.value)
    return _save(session, task)

@router.put("/{task_id}/time-category", response_model=TaskRead)
def assign_time_category(
    task_id: uuid.UUID,
    assign: TimeCategoryAssign,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")
    get_owned(session, TimeCategory, assign.category_id, current_user, "Time category")
    catalog = load_catalog(session, current_user.id)
    time_categories = load_time_categories(session, current_user.id)

    task.time_category_id = assign.category_id
    new_tags = retag_for_time_category(task.tag_ids, str(assign.category_id), catalog, time_categories)
    if task.due_date:
        # The time-sort tag may be an urgency tag; the due date still decides that family
        dated = apply_urgency_tags(set(), task.due_date, catalog)
        new_tags = apply_urgency_tags(new_tags, task.due_date, catalog)
        set_task_tags(session, task, new_tags, catalog, rule_ids=dated)
    else:
        set_task_tags(session, task, new_tags, catalog)
    logger.info("Task %s moved to time category %s", task.id, assign.category_id)
    return _save(session, task)

@router.put("/{task_id}/effort", response_model=TaskRead)
def assign_effort(
    task_id: uuid.UUID,
    assign: EffortAssign,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task = get_owned(session, Task, task_id, current_user, "Task")
    catalog = load_catalog(session, current_user.id)

    task.effort_level = assign.level
    set_task_tags(session, task, retag_for_effort(task.tag_ids, assign.level, catalog), catalog)
    logger.info("Task %s set to effort %s", task.id, assign.level.value)
    return _save(session, task)
