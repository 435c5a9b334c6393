"""Functional core - pure business logic with no I/O."""

from .classify import Category, CategoryAssignment, WindowConfig, classify
from .report import escape_link, format_assignment, render_report, unescape_link
from .rules import FilterConfig, admit, admit_file
from .tasks import OutlineEntry, SourceLocator, TaskRecord, build_task, extract_tasks
from .timestamps import ensure_time_of_day, normalize_timestamp, parse_timestamp, strip_repeater
from .windows import elapsed_minutes, format_hours, in_future_window, in_past_window

__all__ = [
    # Windows
    "elapsed_minutes",
    "in_past_window",
    "in_future_window",
    "format_hours",
    # Rules
    "FilterConfig",
    "admit",
    "admit_file",
    # Timestamps
    "strip_repeater",
    "ensure_time_of_day",
    "normalize_timestamp",
    "parse_timestamp",
    # Tasks
    "OutlineEntry",
    "SourceLocator",
    "TaskRecord",
    "build_task",
    "extract_tasks",
    # Classification
    "Category",
    "CategoryAssignment",
    "WindowConfig",
    "classify",
    # Report
    "escape_link",
    "unescape_link",
    "format_assignment",
    "render_report",
]
