"""Missed/upcoming classification - pure logic, no I/O."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .tasks import TaskRecord
from .timestamps import parse_timestamp
from .windows import elapsed_minutes, format_hours, in_future_window, in_past_window, magnitude_width


class Category(Enum):
    """Alert categories with their report labels."""

    MISSED_DEADLINE = "Missed Deadline by"
    MISSED_SCHEDULE = "Missed Schedule by"
    UPCOMING_DEADLINE = "Upcmng Deadline in"
    UPCOMING_SCHEDULE = "Upcmng Schedule in"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class WindowConfig:
    """Lead times and grace periods, in minutes."""

    schedule_lead: int = 60
    deadline_lead: int = 1440
    schedule_grace: int = 600
    deadline_grace: int = 1440

    def __post_init__(self):
        for name in ("schedule_lead", "deadline_lead", "schedule_grace", "deadline_grace"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")

    @property
    def width(self) -> int:
        return magnitude_width(
            self.schedule_lead, self.deadline_lead, self.schedule_grace, self.deadline_grace
        )


@dataclass(frozen=True)
class CategoryAssignment:
    """A task placed in one category, with its magnitude in hours."""

    task: TaskRecord
    category: Category
    hours: str


def classify_task(task: TaskRecord, windows: WindowConfig, now: datetime) -> list[CategoryAssignment]:
    """
    Categories for a single task.

    At most one "missed" category, deadline first. Both "upcoming"
    categories are checked independently of that and of each other.
    """
    width = windows.width
    deadline = parse_timestamp(task.deadline_timestamp)
    schedule = parse_timestamp(task.schedule_timestamp)
    deadline_elapsed = elapsed_minutes(now, deadline) if deadline else None
    schedule_elapsed = elapsed_minutes(now, schedule) if schedule else None

    def assign(category: Category, elapsed: float) -> CategoryAssignment:
        return CategoryAssignment(task, category, format_hours(elapsed, width))

    results = []
    if deadline_elapsed is not None and in_past_window(deadline_elapsed, windows.deadline_grace):
        results.append(assign(Category.MISSED_DEADLINE, deadline_elapsed))
    elif schedule_elapsed is not None and in_past_window(schedule_elapsed, windows.schedule_grace):
        results.append(assign(Category.MISSED_SCHEDULE, schedule_elapsed))

    if deadline_elapsed is not None and in_future_window(deadline_elapsed, windows.deadline_lead):
        results.append(assign(Category.UPCOMING_DEADLINE, deadline_elapsed))
    if schedule_elapsed is not None and in_future_window(schedule_elapsed, windows.schedule_lead):
        results.append(assign(Category.UPCOMING_SCHEDULE, schedule_elapsed))
    return results


def classify(
    tasks: list[TaskRecord],
    windows: WindowConfig,
    now: datetime | None = None,
) -> list[CategoryAssignment]:
    """Classify every task in order. Pure function - no I/O."""
    now = now or datetime.now()
    return [a for task in tasks for a in classify_task(task, windows, now)]
