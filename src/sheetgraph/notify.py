"""
Result notifier.

Turns ingestion outcomes into user-facing messages and dispatches them to
any number of sinks (the log by default, the terminal in the CLI).
"""

import logging
from enum import StrEnum
from typing import Callable, List

from pydantic import BaseModel

from .core.exceptions import IngestionError
from .core.result import Ok, Result
from .ingest.pipeline import IngestionReport

logger = logging.getLogger(__name__)


class Level(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    level: Level
    message: str
    kind: str = "loaded"
    hint: str = ""

    @property
    def text(self) -> str:
        return f"{self.message}\n{self.hint}" if self.hint else self.message


Sink = Callable[[Notification], None]


def describe(result: Result[IngestionReport, IngestionError]) -> Notification:
    """Build the notification for one ingestion attempt."""
    if isinstance(result, Ok):
        report = result.value
        message = (
            f"Successfully loaded {report.node_count} nodes and {report.edge_count} edges "
            f"from {report.rows_processed} rows."
        )
        if report.rows_skipped:
            message += f" Skipped {report.rows_skipped} row(s) missing a source or target."
        return Notification(level=Level.SUCCESS, message=message)

    error = result.error
    return Notification(level=Level.ERROR, message=error.message, kind=error.kind, hint=error.hint)


def log_sink(notification: Notification) -> None:
    if notification.level == Level.ERROR:
        logger.warning(notification.text)
    else:
        logger.info(notification.text)


class ResultNotifier:
    """Fans each ingestion outcome out to the registered sinks."""

    def __init__(self, sinks: List[Sink] | None = None):
        self.sinks: List[Sink] = list(sinks) if sinks is not None else [log_sink]

    def add_sink(self, sink: Sink) -> None:
        self.sinks.append(sink)

    def notify(self, result: Result[IngestionReport, IngestionError]) -> Notification:
        notification = describe(result)
        for sink in self.sinks:
            sink(notification)
        return notification
