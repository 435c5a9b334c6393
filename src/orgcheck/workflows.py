"""Shared workflow layer between the CLI and watch mode.

scan() starts a background extraction into a TaskStore; check() classifies
whatever the store currently holds and (re)writes the report.
"""

import glob
import logging
import threading
from datetime import datetime
from pathlib import Path

from .adapters.file_report import FileReportSurface
from .adapters.org_file import OrgFileSource
from .config import Config
from .core.classify import CategoryAssignment, classify
from .core.report import render_report
from .ports.notifier import Notifier
from .ports.outline_source import OutlineSource
from .ports.report_surface import ReportSurface
from .scanner import TaskStore, start_scan

logger = logging.getLogger(__name__)

NO_MATCHES = "No matching tasks."


def resolve_files(patterns: list[str]) -> list[str]:
    """
    Expand ~ and glob patterns, keeping input order and dropping duplicates.

    Plain paths are kept even if they don't exist; the scan skips them.
    """
    files = []
    for pattern in patterns:
        expanded = str(Path(pattern).expanduser())
        matches = sorted(glob.glob(expanded)) if glob.has_magic(expanded) else [expanded]
        for match in matches:
            if match not in files:
                files.append(match)
    return files


def get_source(config: Config) -> OrgFileSource:
    return OrgFileSource()


def get_surface(config: Config) -> FileReportSurface:
    """Resolve the report surface from config."""
    return FileReportSurface(Path(config.report_dir).expanduser(), config.report_name)


def scan(
    config: Config,
    store: TaskStore,
    files: list[str] | None = None,
    source: OutlineSource | None = None,
) -> threading.Thread:
    """Start a background scan of files (or the configured org files)."""
    paths = resolve_files(files if files else config.org_files)
    if not paths:
        logger.warning("No org files to scan - set ORG_FILES in orgcheck.conf or pass paths")
    return start_scan(
        store,
        paths,
        source or get_source(config),
        config.filter_config(),
        config.default_schedule_time,
        config.default_deadline_time,
    )


def check(
    config: Config,
    store: TaskStore,
    surface: ReportSurface,
    notifier: Notifier,
    now: datetime | None = None,
    use_links: bool | None = None,
) -> list[CategoryAssignment]:
    """
    Classify the stored tasks and refresh the report.

    With no matches the report is discarded and only a notice is sent.
    Returns the assignments that were rendered.
    """
    if store.scanning:
        logger.warning("Checking while a scan is still running; results may be stale")

    now = now or datetime.now()
    use_links = config.use_links if use_links is None else use_links
    assignments = classify(store.tasks, config.window_config(), now)

    if not assignments:
        surface.discard()
        notifier.notify(NO_MATCHES)
        return assignments

    surface.replace(render_report(assignments, now, use_links))
    location = surface.location
    message = f"{len(assignments)} task alert(s)"
    notifier.notify(f"{message} written to {location}" if location else message)
    return assignments
