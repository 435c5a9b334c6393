"""Ports - interfaces/protocols for external dependencies."""

from .outline_source import OutlineSource
from .report_surface import ReportSurface
from .notifier import Notifier

__all__ = [
    "OutlineSource",
    "ReportSurface",
    "Notifier",
]
