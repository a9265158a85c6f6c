"""
CLI Utilities - Shared helpers for sheetgraph commands.

Formatted printing, the terminal sink for ingestion notifications, and
the common "ingest a workbook into a fresh session" step.
"""

from pathlib import Path
from typing import Optional

import click

from ..config import Settings
from ..core.result import Ok
from ..notify import Level, Notification, ResultNotifier
from ..session import GraphSession


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"))


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style(f"⚠️  {message}", fg="yellow"))


def echo_info(message: str) -> None:
    click.echo(click.style(f"   {message}", dim=True))


def terminal_sink(notification: Notification) -> None:
    """Print an ingestion notification; the hint goes below the message."""
    if notification.level == Level.ERROR:
        echo_error(notification.message)
        for line in notification.hint.splitlines():
            click.echo(f"   {line}", err=True)
    else:
        echo_success(notification.message)


def get_settings(ctx: click.Context) -> Settings:
    obj = ctx.find_object(dict) or {}
    return obj.get("settings") or Settings()


def load_session(workbook: str, settings: Settings, quiet: bool = False) -> Optional[GraphSession]:
    """
    Ingest a workbook into a new session.

    Args:
        workbook (str): Path to the .xlsx file.
        settings (Settings): Active settings.
        quiet (bool): Suppress terminal output (JSON mode).

    Returns:
        Optional[GraphSession]: The session, or None if ingestion failed.
    """
    notifier = ResultNotifier(sinks=[])
    if not quiet:
        notifier.add_sink(terminal_sink)

    session = GraphSession(settings=settings, notifier=notifier)
    result = session.ingest_workbook(Path(workbook))
    if not isinstance(result, Ok):
        if quiet:
            echo_error(result.error.describe())
        return None
    return session
