"""Tests for watch-mode scheduling."""

import time
from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
from apscheduler.schedulers.background import BackgroundScheduler

from orgcheck.adapters.file_report import FileReportSurface
from orgcheck.config import Config
from orgcheck.scanner import TaskStore
from orgcheck.watcher import check_job, scan_job, setup_scheduler


@pytest.fixture
def config():
    return Config(scan_interval_minutes=15, check_interval_minutes=2)


@pytest.fixture
def scanned_store():
    store = TaskStore()
    store.replace([])
    return store


class TestSetupScheduler:
    def test_adds_both_jobs(self, config):
        scheduler = MagicMock()
        store = TaskStore()
        surface, notifier = MagicMock(), MagicMock()

        setup_scheduler(config, store, surface, notifier, ["a.org"], scheduler=scheduler)

        calls = {c.kwargs["id"]: c for c in scheduler.add_job.call_args_list}
        assert set(calls) == {"scan", "check"}
        assert calls["scan"].args[0] is scan_job
        assert calls["scan"].kwargs["args"] == [config, store, surface, notifier, ["a.org"]]
        assert calls["check"].args[0] is check_job
        assert calls["check"].kwargs["max_instances"] == 1

    def test_only_scan_fires_immediately(self, config):
        scheduler = MagicMock()
        setup_scheduler(config, TaskStore(), MagicMock(), MagicMock(), scheduler=scheduler)
        calls = {c.kwargs["id"]: c for c in scheduler.add_job.call_args_list}
        assert "next_run_time" in calls["scan"].kwargs
        assert "next_run_time" not in calls["check"].kwargs

    def test_intervals(self, config):
        scheduler = MagicMock()
        setup_scheduler(config, TaskStore(), MagicMock(), MagicMock(), scheduler=scheduler)
        triggers = {c.kwargs["id"]: c.args[1] for c in scheduler.add_job.call_args_list}
        assert triggers["scan"].interval.total_seconds() == 15 * 60
        assert triggers["check"].interval.total_seconds() == 2 * 60

    def test_first_report_has_scanned_tasks(self, config, tmp_path):
        soon = datetime.now() + timedelta(minutes=30)
        org = tmp_path / "todo.org"
        org.write_text(f"* TODO Standup\n  SCHEDULED: <{soon:%Y-%m-%d %a %H:%M}>\n")
        config.schedule_lead_minutes = 60
        surface = FileReportSurface(tmp_path / "reports", "tasks-report")
        surface.replace("#+TITLE: earlier report\nUpcmng Schedule in  0.5 Hours: Standup\n")
        notifier = MagicMock()

        scheduler = setup_scheduler(
            config, TaskStore(), surface, notifier, [str(org)], scheduler=BackgroundScheduler()
        )
        scheduler.start()
        try:
            deadline = time.monotonic() + 5
            while not notifier.notify.called and time.monotonic() < deadline:
                time.sleep(0.05)
        finally:
            scheduler.shutdown(wait=True)

        notifier.notify.assert_called_once_with(f"1 task alert(s) written to {surface.path}")
        assert "Hours: Standup" in surface.read()


class TestJobs:
    @patch("orgcheck.watcher.check")
    @patch("orgcheck.watcher.scan")
    def test_scan_job_waits_then_checks(self, mock_scan, mock_check, config):
        worker = MagicMock()
        mock_scan.return_value = worker
        store, surface, notifier = TaskStore(), MagicMock(), MagicMock()
        worker.join.side_effect = lambda: store.replace([])

        scan_job(config, store, surface, notifier, None)

        mock_scan.assert_called_once_with(config, store, None)
        worker.join.assert_called_once()
        mock_check.assert_called_once_with(config, store, surface, notifier)

    @patch("orgcheck.watcher.check")
    def test_check_job_skips_during_scan(self, mock_check, config, scanned_store):
        scanned_store.begin_scan()
        check_job(config, scanned_store, MagicMock(), MagicMock())
        mock_check.assert_not_called()

    @patch("orgcheck.watcher.check")
    def test_check_job_skips_before_first_scan(self, mock_check, config):
        surface, notifier = MagicMock(), MagicMock()
        check_job(config, TaskStore(), surface, notifier)
        mock_check.assert_not_called()
        surface.discard.assert_not_called()
        notifier.notify.assert_not_called()

    @patch("orgcheck.watcher.check")
    def test_check_job_runs(self, mock_check, config, scanned_store):
        surface, notifier = MagicMock(), MagicMock()
        check_job(config, scanned_store, surface, notifier)
        mock_check.assert_called_once_with(config, scanned_store, surface, notifier)

    @patch("orgcheck.watcher.check", side_effect=OSError("disk full"))
    def test_check_job_logs_write_errors(self, mock_check, config, scanned_store, caplog):
        check_job(config, scanned_store, MagicMock(), MagicMock())
        assert "disk full" in caplog.text
