"""Notification hook interface."""

from typing import Protocol


class Notifier(Protocol):
    """Interface for delivering short user-facing messages."""

    def notify(self, message: str) -> None:
        """Deliver a message."""
        ...
