from fastapi import APIRouter
from .endpoints import auth, tasks, tags, categories, filters

router = APIRouter()

# Include all API endpoints
router.include_router(auth.router, prefix="/auth", tags=["authentication"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(tags.router, prefix="/tags", tags=["tags"])
router.include_router(categories.tag_categories_router, prefix="/tag-categories", tags=["tag categories"])
router.include_router(categories.time_categories_router, prefix="/time-categories", tags=["time categories"])
router.include_router(filters.router, prefix="/filters", tags=["filters"])
