"""Time window arithmetic - no I/O dependencies."""

from datetime import datetime


def elapsed_minutes(now: datetime, timestamp: datetime) -> float:
    """Signed minutes from now until timestamp (positive = future)."""
    return (timestamp - now).total_seconds() / 60


def in_past_window(elapsed: float, window_minutes: float) -> bool:
    """True when elapsed is in the past and no older than the window."""
    return elapsed < 0 and abs(elapsed) <= window_minutes


def in_future_window(elapsed: float, window_minutes: float) -> bool:
    """True when elapsed is now or ahead, within the window."""
    return 0 <= elapsed <= window_minutes


def magnitude_width(*window_minutes: float) -> int:
    """
    Field width for rendered hour magnitudes.

    Sized to the largest window rendered in hours with one decimal place,
    so every magnitude in a run lines up regardless of category. Rounding
    is counted, so 599 minutes needs room for "10.0".
    """
    largest = max(window_minutes, default=0)
    return len(f"{largest / 60:.1f}")


def format_hours(elapsed: float, width: int) -> str:
    """Right-aligned absolute hours with one decimal place."""
    return f"{abs(elapsed) / 60:{width}.1f}"
