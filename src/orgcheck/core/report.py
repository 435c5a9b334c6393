"""Report rendering - pure formatting, no I/O."""

import re
from datetime import datetime

from .classify import CategoryAssignment
from .tasks import TaskRecord

_ESCAPES = {"\\": "\\\\", "[": "\\[", "]": "\\]", "|": "\\|"}
_UNESCAPE_RE = re.compile(r"\\([\\\[\]|])")


def escape_link(text: str) -> str:
    """Backslash-escape the characters that would break an Org link target."""
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


def unescape_link(text: str) -> str:
    return _UNESCAPE_RE.sub(r"\1", text)


def format_link(task: TaskRecord) -> str:
    """Org link to the task's heading; only the target is escaped."""
    target = escape_link(f"file:{task.locator.path}::{task.locator.line}")
    return f"[[{target}][{task.name}]]"


def format_assignment(assignment: CategoryAssignment, use_links: bool = False) -> str:
    """
    Format one report line.

    Example: "Missed Deadline by  1.0 Hours: Submit report"
    """
    text = format_link(assignment.task) if use_links else assignment.task.name
    return f"{assignment.category.label} {assignment.hours} Hours: {text}"


def format_title(now: datetime) -> str:
    return f"#+TITLE: Tasks List as of {now.strftime('%Y-%m-%d %H:%M:%S')}"


def render_report(
    assignments: list[CategoryAssignment],
    now: datetime,
    use_links: bool = False,
) -> str:
    """
    Render the full report text: title line, then sorted entry lines.

    Pure function - the same assignments and now always give the same text.
    """
    lines = sorted(format_assignment(a, use_links) for a in assignments)
    return "\n".join([format_title(now), *lines]) + "\n"
