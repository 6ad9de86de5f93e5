"""Command-line entry point for checking task configuration files."""

from __future__ import annotations

import logging
import sys

import click

from ..config import ConfigLoadError, HttpTask, load_config
from ..config._value import VArray, VObject, VSource

logger = logging.getLogger(__name__)


def describe_task(task: HttpTask) -> str:
    """One-line summary of a task: name, method, URL, headers and body shape."""
    parts = [task.name, task.method.value, str(task.url)]
    if task.headers:
        parts.append(f"headers={','.join(sorted(task.headers))}")
    if task.success_status_codes:
        parts.append(f"success={','.join(str(code) for code in task.success_status_codes)}")
    if task.body is not None:
        parts.append(f"body=json:{type(task.body.value).__name__}")
    sources = sum(1 for value in task.headers.values() if isinstance(value, VSource))
    if task.body is not None:
        sources += _count_sources(task.body.value)
    if sources:
        parts.append(f"sources={sources}")
    return " ".join(parts)


def _count_sources(value) -> int:
    if isinstance(value, VSource):
        return 1
    if isinstance(value, VObject):
        return sum(_count_sources(child) for child in value.properties.values())
    if isinstance(value, VArray):
        return sum(_count_sources(child) for child in value.items)
    return 0


def check_command(config_path: str) -> None:
    """Load *config_path* and print one line per task.

    Exits with status 1 when the file cannot be loaded.
    """
    try:
        config = load_config(config_path)
    except ConfigLoadError as e:
        logger.debug("Config load failed", exc_info=True)
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    for task in config.tasks:
        click.echo(describe_task(task))
    click.secho(f"{len(config.tasks)} task(s) OK", fg="green")


@click.group("httptasks")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def httptasks_group(verbose: bool) -> None:
    """Scheduled HTTP task tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httptasks").setLevel(logging.DEBUG if verbose else logging.WARNING)


@httptasks_group.command("check")
@click.argument("config_path", type=click.Path(dir_okay=False))
def check_cli(config_path: str) -> None:
    """Validate a task configuration file.

    Environment placeholders are resolved against the current process
    environment.

    Examples:\n
        httptasks check config.yaml\n
        httptasks -v check config.yaml\n
    """
    check_command(config_path)


def main() -> None:
    httptasks_group()
