"""Task selection for the two-minute and energy modes."""
from typing import Dict, List

from ..models.task import Task
from ..tagging import EffortLevel

MINUTES_PER_QUICK_TASK = 2
QUICK_TITLE_LENGTH = 30
QUICK_DESCRIPTION_LENGTH = 50

ENERGY_LEVELS = ("high", "medium", "low")

EFFORT_TO_ENERGY = {
    EffortLevel.quick: "low",
    EffortLevel.medium: "medium",
    EffortLevel.high: "high",
}

def is_quick(task: Task) -> bool:
    """Short title and little or no description."""
    if len(task.title) >= QUICK_TITLE_LENGTH:
        return False
    return not task.description or len(task.description) < QUICK_DESCRIPTION_LENGTH

def two_minute_queue(tasks: List[Task]) -> List[Task]:
    return [task for task in tasks if not task.completed and is_quick(task)]

def energy_level(task: Task) -> str:
    # A stored effort level wins over the text heuristic
    if task.effort_level:
        return EFFORT_TO_ENERGY[EffortLevel(task.effort_level)]

    description = task.description or ""
    if len(description) > 100 or len(task.title) > 40:
        return "high"
    if len(task.tag_ids) > 2 or description:
        return "medium"
    return "low"

def energy_groups(tasks: List[Task]) -> Dict[str, List[Task]]:
    groups = {level: [] for level in ENERGY_LEVELS}
    for task in tasks:
        if not task.completed:
            groups[energy_level(task)].append(task)
    return groups
