"""Adapters - I/O implementations of ports."""

from .org_file import OrgFileSource
from .file_report import FileReportSurface
from .notifiers import EchoNotifier, LogNotifier

__all__ = [
    "OrgFileSource",
    "FileReportSurface",
    "EchoNotifier",
    "LogNotifier",
]
