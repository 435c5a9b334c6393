"""Tests for the shared workflow layer."""

from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from orgcheck.adapters.file_report import FileReportSurface
from orgcheck.config import Config
from orgcheck.core.classify import Category
from orgcheck.core.tasks import SourceLocator, TaskRecord
from orgcheck.scanner import TaskStore
from orgcheck.workflows import NO_MATCHES, check, get_surface, resolve_files, scan

ORG = """\
* TODO Pay rent :home:
  DEADLINE: <2024-01-01 Mon 09:00>
* TODO Standup :work:
  SCHEDULED: <2024-01-01 Mon 10:20>
* DONE Archived :work:
  DEADLINE: <2024-01-01 Mon 09:30>
"""


@pytest.fixture
def now():
    return datetime(2024, 1, 1, 10, 0)


@pytest.fixture
def config(tmp_path):
    return Config(
        report_dir=str(tmp_path / "reports"),
        schedule_lead_minutes=30,
        deadline_grace_minutes=600,
        excluded_keywords=["DONE"],
    )


@pytest.fixture
def org_file(tmp_path):
    path = tmp_path / "notes" / "todo.org"
    path.parent.mkdir()
    path.write_text(ORG)
    return path


@pytest.fixture
def notifier():
    return MagicMock()


def task(name, scheduled=None, deadline=None):
    return TaskRecord(name, scheduled, deadline, SourceLocator("/notes/todo.org", 1))


class TestResolveFiles:
    def test_expands_globs_sorted(self, tmp_path):
        for name in ("b.org", "a.org", "c.txt"):
            (tmp_path / name).write_text("")
        assert resolve_files([str(tmp_path / "*.org")]) == [
            str(tmp_path / "a.org"),
            str(tmp_path / "b.org"),
        ]

    def test_keeps_missing_plain_paths(self, tmp_path):
        missing = str(tmp_path / "missing.org")
        assert resolve_files([missing]) == [missing]

    def test_dedupes_keeping_order(self, tmp_path):
        (tmp_path / "a.org").write_text("")
        a = str(tmp_path / "a.org")
        assert resolve_files([a, str(tmp_path / "*.org"), a]) == [a]

    def test_expands_user(self):
        assert resolve_files(["~/todo.org"]) == [str(Path.home() / "todo.org")]


class TestGetSurface:
    def test_uses_config(self, tmp_path):
        surface = get_surface(Config(report_dir=str(tmp_path), report_name="alerts"))
        assert surface.path == tmp_path / "alerts.org"


class TestScan:
    def test_scans_given_files(self, config, org_file):
        store = TaskStore()
        scan(config, store, [str(org_file)]).join(5)
        assert [t.name for t in store.tasks] == ["Pay rent", "Standup"]

    def test_falls_back_to_configured_files(self, config, org_file):
        config.org_files = [str(org_file.parent / "*.org")]
        store = TaskStore()
        scan(config, store).join(5)
        assert len(store.tasks) == 2

    def test_no_files(self, config):
        store = TaskStore([task("Stale")])
        scan(config, store, []).join(5)
        assert store.tasks == []

    def test_excluded_file_name(self, config, org_file):
        config.excluded_files = ["todo.org"]
        store = TaskStore()
        scan(config, store, [str(org_file)]).join(5)
        assert store.tasks == []


class TestCheck:
    def test_end_to_end(self, config, org_file, notifier, now):
        store = TaskStore()
        scan(config, store, [str(org_file)]).join(5)
        surface = get_surface(config)

        assignments = check(config, store, surface, notifier, now=now)

        assert [(a.task.name, a.category) for a in assignments] == [
            ("Pay rent", Category.MISSED_DEADLINE),
            ("Standup", Category.UPCOMING_SCHEDULE),
        ]
        assert surface.read() == (
            "#+TITLE: Tasks List as of 2024-01-01 10:00:00\n"
            "Missed Deadline by  1.0 Hours: Pay rent\n"
            "Upcmng Schedule in  0.3 Hours: Standup\n"
        )
        notifier.notify.assert_called_once_with(f"2 task alert(s) written to {surface.path}")

    def test_no_matches_discards_report(self, config, notifier, now, tmp_path):
        surface = FileReportSurface(tmp_path / "reports", "tasks-report")
        surface.replace("stale report\n")

        result = check(config, TaskStore([task("Far away", scheduled="<2030-01-01 Tue 09:00>")]),
                       surface, notifier, now=now)

        assert result == []
        assert surface.exists() is False
        notifier.notify.assert_called_once_with(NO_MATCHES)

    def test_empty_store_is_idempotent(self, config, notifier, now):
        surface = MagicMock()
        store = TaskStore()
        check(config, store, surface, notifier, now=now)
        check(config, store, surface, notifier, now=now)
        assert surface.discard.call_count == 2
        surface.replace.assert_not_called()

    def test_rerun_is_byte_identical(self, config, notifier, now):
        store = TaskStore([task("Pay rent", deadline="<2024-01-01 Mon 09:00>")])
        surface = get_surface(config)
        check(config, store, surface, notifier, now=now)
        first = surface.read()
        check(config, store, surface, notifier, now=now)
        assert surface.read() == first

    def test_links_override(self, config, notifier, now):
        store = TaskStore([task("Pay rent", deadline="<2024-01-01 Mon 09:00>")])
        surface = get_surface(config)
        check(config, store, surface, notifier, now=now, use_links=True)
        assert "[[file:/notes/todo.org::1][Pay rent]]" in surface.read()

    def test_links_from_config(self, config, notifier, now):
        config.use_links = True
        store = TaskStore([task("Pay rent", deadline="<2024-01-01 Mon 09:00>")])
        surface = get_surface(config)
        check(config, store, surface, notifier, now=now)
        assert "[[file:" in surface.read()

    def test_surface_without_location(self, config, notifier, now):
        surface = MagicMock(location=None)
        store = TaskStore([task("Pay rent", deadline="<2024-01-01 Mon 09:00>")])
        check(config, store, surface, notifier, now=now)
        notifier.notify.assert_called_once_with("1 task alert(s)")

    def test_warns_during_scan(self, config, notifier, now, caplog):
        store = TaskStore()
        store.begin_scan()
        check(config, store, MagicMock(), notifier, now=now)
        assert "scan is still running" in caplog.text
