"""Periodic scan/check loop."""

import logging
from datetime import datetime

from apscheduler.schedulers.base import BaseScheduler
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .config import Config
from .ports.notifier import Notifier
from .ports.report_surface import ReportSurface
from .scanner import TaskStore
from .workflows import check, scan

logger = logging.getLogger(__name__)


def scan_job(
    config: Config,
    store: TaskStore,
    surface: ReportSurface,
    notifier: Notifier,
    files: list[str] | None,
) -> None:
    """
    Scan, wait for it to finish, then check the fresh task list.

    Joining the worker holds back overlapping runs of this job.
    """
    worker = scan(config, store, files)
    worker.join()
    check_job(config, store, surface, notifier)


def check_job(config: Config, store: TaskStore, surface: ReportSurface, notifier: Notifier) -> None:
    if store.scanning:
        logger.info("Scan in progress, skipping check")
        return
    if not store.has_scanned:
        logger.info("No scan has completed yet, skipping check")
        return
    try:
        check(config, store, surface, notifier)
    except OSError as e:
        logger.error(f"Failed to write report: {e}")


def setup_scheduler(
    config: Config,
    store: TaskStore,
    surface: ReportSurface,
    notifier: Notifier,
    files: list[str] | None = None,
    scheduler: BaseScheduler | None = None,
) -> BaseScheduler:
    """
    Set up the scan and check jobs.

    The scan fires immediately and checks once it finishes; the check job
    first fires one interval later.
    """
    scheduler = scheduler or BlockingScheduler()
    now = datetime.now()

    scheduler.add_job(
        scan_job,
        IntervalTrigger(minutes=config.scan_interval_minutes),
        args=[config, store, surface, notifier, files],
        id="scan",
        next_run_time=now,
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"Scheduled scan every {config.scan_interval_minutes} minute(s)")

    scheduler.add_job(
        check_job,
        IntervalTrigger(minutes=config.check_interval_minutes),
        args=[config, store, surface, notifier],
        id="check",
        max_instances=1,
        coalesce=True,
    )
    logger.info(f"Scheduled check every {config.check_interval_minutes} minute(s)")

    return scheduler


def run_watch(config: Config, surface: ReportSurface, notifier: Notifier, files: list[str] | None = None) -> None:
    """Run scan/check jobs until interrupted."""
    store = TaskStore()
    scheduler = setup_scheduler(config, store, surface, notifier, files)
    logger.info("Starting orgcheck watch...")
    scheduler.start()
