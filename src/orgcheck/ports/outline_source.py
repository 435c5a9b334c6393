"""Outline source interface."""

from typing import Protocol

from orgcheck.core.tasks import OutlineEntry


class OutlineSource(Protocol):
    """Interface for reading task entries from outline files."""

    def exists(self, path: str) -> bool:
        """Check that a file is present and readable."""
        ...

    def entries(self, path: str) -> list[OutlineEntry]:
        """Read every heading in a file. Returns [] if the file can't be read."""
        ...
