"""Task extraction from outline entries - no direct I/O."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from .rules import FilterConfig, admit, admit_file
from .timestamps import normalize_timestamp

if TYPE_CHECKING:
    from orgcheck.ports.outline_source import OutlineSource

DEFAULT_SCHEDULE_TIME = "09:00"
DEFAULT_DEADLINE_TIME = "23:59"


@dataclass(frozen=True)
class SourceLocator:
    """Where an entry lives: file path and 1-based heading line."""

    path: str
    line: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}"


@dataclass
class OutlineEntry:
    """One heading as read from an outline file."""

    heading: str
    keyword: str | None = None
    tags: list[str] = field(default_factory=list)
    inherited_tags: list[str] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
    scheduled: str | None = None
    deadline: str | None = None
    locator: SourceLocator | None = None

    @property
    def all_tags(self) -> list[str]:
        """Own tags plus inherited ones, first occurrence wins."""
        return list(dict.fromkeys(self.inherited_tags + self.tags))

    def effective_tags(self, use_inheritance: bool) -> list[str]:
        return self.all_tags if use_inheritance else list(self.tags)


@dataclass(frozen=True)
class TaskRecord:
    """A filtered task with normalized schedule/deadline timestamps."""

    name: str
    schedule_timestamp: str | None
    deadline_timestamp: str | None
    locator: SourceLocator

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "scheduled": self.schedule_timestamp,
            "deadline": self.deadline_timestamp,
            "file": self.locator.path,
            "line": self.locator.line,
        }


def build_task(
    entry: OutlineEntry,
    config: FilterConfig,
    schedule_time: str = DEFAULT_SCHEDULE_TIME,
    deadline_time: str = DEFAULT_DEADLINE_TIME,
) -> TaskRecord | None:
    """
    Turn an entry into a task record if it passes the rules.

    Returns None for rejected entries and for entries without a usable
    heading or locator. Pure function - no I/O.
    """
    tags = entry.effective_tags(config.use_tag_inheritance)
    if not admit(tags, entry.keyword, entry.properties, config):
        return None

    name = (entry.heading or "").strip()
    if not name or entry.locator is None:
        return None

    return TaskRecord(
        name=name,
        schedule_timestamp=normalize_timestamp(entry.scheduled, schedule_time),
        deadline_timestamp=normalize_timestamp(entry.deadline, deadline_time),
        locator=entry.locator,
    )


def admitted_files(files: Iterable[str], config: FilterConfig, source: "OutlineSource") -> list[str]:
    """Files that pass the name rules and exist, in input order."""
    return [f for f in files if admit_file(f, config) and source.exists(f)]


def extract_tasks(
    files: Iterable[str],
    source: "OutlineSource",
    config: FilterConfig,
    schedule_time: str = DEFAULT_SCHEDULE_TIME,
    deadline_time: str = DEFAULT_DEADLINE_TIME,
) -> list[TaskRecord]:
    """
    Walk every admitted file and collect task records.

    Always builds a fresh list; nothing carries over between calls.
    """
    tasks = []
    for path in admitted_files(files, config, source):
        for entry in source.entries(path):
            task = build_task(entry, config, schedule_time, deadline_time)
            if task is not None:
                tasks.append(task)
    return tasks
