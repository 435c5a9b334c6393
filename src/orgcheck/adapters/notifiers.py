"""Notifier adapters."""

import logging

import click

logger = logging.getLogger(__name__)


class EchoNotifier:
    """Implements Notifier protocol by printing to the terminal."""

    def __init__(self, err: bool = False):
        self.err = err

    def notify(self, message: str) -> None:
        click.echo(message, err=self.err)


class LogNotifier:
    """Implements Notifier protocol by logging at INFO level."""

    def notify(self, message: str) -> None:
        logger.info(message)
