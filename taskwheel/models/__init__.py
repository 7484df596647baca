# This file ensures all models are loaded together to resolve circular references
from .user import User
from .task import Task, TaskTag, TagSource
from .tag import Tag, TagCategory, TimeCategory, SavedFilter

__all__ = ["User", "Task", "TaskTag", "TagSource", "Tag", "TagCategory", "TimeCategory", "SavedFilter"]
