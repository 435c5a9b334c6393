"""Task store and background scanning.

The store has a single writer: the scan worker publishes a complete task
list in one assignment once it has finished walking the files. Readers
should wait on the completion signal before classifying. Two overlapping
scans are not coordinated; callers serialize them.
"""

import logging
import threading
from typing import Iterable

from .core.rules import FilterConfig
from .core.tasks import DEFAULT_DEADLINE_TIME, DEFAULT_SCHEDULE_TIME, TaskRecord, extract_tasks
from .ports.outline_source import OutlineSource

logger = logging.getLogger(__name__)


class TaskStore:
    """Holds the task list from the most recent completed scan."""

    def __init__(self, tasks: Iterable[TaskRecord] = ()):
        self._tasks: tuple[TaskRecord, ...] = tuple(tasks)
        self._published = False
        self._scan_complete = threading.Event()
        self._scan_complete.set()

    @property
    def tasks(self) -> list[TaskRecord]:
        return list(self._tasks)

    @property
    def has_scanned(self) -> bool:
        """True once a scan has published a task list."""
        return self._published

    @property
    def scanning(self) -> bool:
        return not self._scan_complete.is_set()

    def replace(self, tasks: Iterable[TaskRecord]) -> None:
        """Swap in a complete new task list."""
        self._tasks = tuple(tasks)
        self._published = True

    def begin_scan(self) -> None:
        self._scan_complete.clear()

    def finish_scan(self) -> None:
        self._scan_complete.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until no scan is in flight. Returns False on timeout."""
        return self._scan_complete.wait(timeout)


def run_scan(
    store: TaskStore,
    files: list[str],
    source: OutlineSource,
    rules: FilterConfig,
    schedule_time: str = DEFAULT_SCHEDULE_TIME,
    deadline_time: str = DEFAULT_DEADLINE_TIME,
) -> None:
    """Extract tasks and publish them to the store. Always signals completion."""
    try:
        tasks = extract_tasks(files, source, rules, schedule_time, deadline_time)
    except Exception:
        logger.exception("Scan failed, keeping previous task list")
    else:
        store.replace(tasks)
        logger.info(f"Scan complete: {len(tasks)} task(s) from {len(files)} file(s)")
    finally:
        store.finish_scan()


def start_scan(
    store: TaskStore,
    files: list[str],
    source: OutlineSource,
    rules: FilterConfig,
    schedule_time: str = DEFAULT_SCHEDULE_TIME,
    deadline_time: str = DEFAULT_DEADLINE_TIME,
) -> threading.Thread:
    """
    Run a scan on a background thread and return the thread.

    The store is marked as scanning before the thread starts, so a
    store.wait() issued right after this call never sees a stale "done".
    """
    store.begin_scan()
    worker = threading.Thread(
        target=run_scan,
        args=(store, list(files), source, rules, schedule_time, deadline_time),
        name="orgcheck-scan",
        daemon=True,
    )
    worker.start()
    return worker
