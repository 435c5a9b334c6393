"""File-based report surface adapter."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileReportSurface:
    """
    File-based report surface.

    Implements ReportSurface protocol. The report lives in
    <report_dir>/<name>.org and is rewritten from scratch on every replace.
    """

    def __init__(self, report_dir: Path | str, name: str):
        self.report_dir = Path(report_dir).expanduser()
        self.name = name

    @property
    def path(self) -> Path:
        return self.report_dir / f"{self.name}.org"

    @property
    def location(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str | None:
        """Current report text, or None if there is no report."""
        if not self.path.exists():
            return None
        return self.path.read_text(encoding="utf-8")

    def replace(self, text: str) -> None:
        """Clear any previous contents and write the report."""
        self.report_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
        logger.debug(f"Wrote report to {self.path}")

    def discard(self) -> None:
        """Remove the report entirely. No-op if there is none."""
        if self.path.exists():
            self.path.unlink()
            logger.debug(f"Removed report {self.path}")
