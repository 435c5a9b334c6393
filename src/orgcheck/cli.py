"""orgcheck CLI - missed and upcoming task alerts for Org files."""

import json
import logging
import sys
from pathlib import Path

import click

from .adapters.notifiers import EchoNotifier, LogNotifier
from .config import CONFIG_FILE, Config, ConfigError, load_config
from .scanner import TaskStore
from .workflows import check, get_surface, resolve_files, scan

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _load(ctx: click.Context) -> Config:
    """Load and validate config, exiting with an error if it's unusable."""
    config = load_config(ctx.obj["config_path"])
    try:
        config.validate()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return config


def _scan_and_wait(config: Config, files: tuple[str, ...]) -> TaskStore:
    store = TaskStore()
    scan(config, store, list(files) or None)
    store.wait()
    return store


@click.group()
@click.version_option(package_name="orgcheck")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help=f"Config file (default: {CONFIG_FILE})",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, config_path: Path | None, debug: bool):
    """orgcheck - missed and upcoming task alerts for Org files."""
    if debug:
        logging.basicConfig(format=LOG_FORMAT, level=logging.DEBUG)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command("scan")
@click.argument("files", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def scan_cmd(ctx, files: tuple[str, ...], as_json: bool):
    """Scan org files and list matching tasks."""
    config = _load(ctx)
    store = _scan_and_wait(config, files)
    tasks = store.tasks

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    file_count = len(resolve_files(list(files) or config.org_files))
    click.echo(f"Found {len(tasks)} task(s) in {file_count} file(s).")
    for task in tasks:
        click.echo(f"  {task.name} ({task.locator})")


@main.command("check")
@click.argument("files", nargs=-1)
@click.option("--links/--no-links", default=None, help="Link report lines to their headings")
@click.option("--stdout", "to_stdout", is_flag=True, help="Also print the report")
@click.pass_context
def check_cmd(ctx, files: tuple[str, ...], links: bool | None, to_stdout: bool):
    """Scan, then report missed and upcoming tasks."""
    config = _load(ctx)
    store = _scan_and_wait(config, files)
    surface = get_surface(config)

    try:
        assignments = check(config, store, surface, EchoNotifier(), use_links=links)
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if to_stdout and assignments:
        click.echo(surface.read() or "", nl=False)


@main.command()
@click.argument("files", nargs=-1)
@click.pass_context
def watch(ctx, files: tuple[str, ...]):
    """Re-scan and re-check on an interval until stopped."""
    if not logging.getLogger().handlers:
        logging.basicConfig(format=LOG_FORMAT, level=logging.INFO)

    config = _load(ctx)
    from .watcher import run_watch

    click.echo("Watching org files...")
    click.echo("Press Ctrl+C to stop")
    try:
        run_watch(config, get_surface(config), LogNotifier(), list(files) or None)
    except KeyboardInterrupt:
        click.echo("\nStopped.")


@main.command("config")
@click.pass_context
def show_config(ctx):
    """Show the effective configuration."""
    config = _load(ctx)
    for key, value in config.as_dict().items():
        if isinstance(value, list):
            value = ", ".join(":".join(v) if isinstance(v, tuple) else v for v in value)
        click.echo(f"{key.upper()} = {value}")


if __name__ == "__main__":
    main()
