"""Report surface interface."""

from typing import Protocol


class ReportSurface(Protocol):
    """Interface for the named place a report is shown."""

    @property
    def location(self) -> str | None:
        """Where the report can be found, for notices. None if not addressable."""
        ...

    def replace(self, text: str) -> None:
        """Clear any previous contents and write the report."""
        ...

    def discard(self) -> None:
        """Remove the report entirely. No-op if there is none."""
        ...
