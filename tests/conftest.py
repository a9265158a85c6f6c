"""Shared fixtures for the sheetgraph test suite."""

from pathlib import Path
from typing import Callable, Dict, List, Sequence

import pytest
from openpyxl import Workbook

from sheetgraph.ingest.builder import build
from sheetgraph.ingest.source import RowsSource
from sheetgraph.ingest.validation import ValidRow, validate

HEADER = ("Source", "Target", "Label", "Tooltip")

SCENARIO_A = [
    ("A", "B", "knows", "see docs"),
    ("B", "C", "", ""),
]


class FakeTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


class FakeTimers:
    """Timer factory recording every timer it creates."""

    def __init__(self):
        self.created: List[FakeTimer] = []

    def __call__(self, interval, callback):
        timer = FakeTimer(interval, callback)
        self.created.append(timer)
        return timer

    @property
    def live(self) -> List[FakeTimer]:
        return [t for t in self.created if t.started and not t.cancelled]

    def fire_live(self):
        for timer in self.live:
            timer.fire()


def valid_rows(rows: Sequence[Sequence], sheet: str = "Sheet1") -> List[ValidRow]:
    """Header + rows through the validator, keeping the usable ones."""
    source = RowsSource({sheet: [HEADER, *rows]})
    return [r for r in map(validate, source.iter_rows()) if isinstance(r, ValidRow)]


@pytest.fixture
def timers():
    return FakeTimers()


@pytest.fixture
def scenario_a():
    return build(valid_rows(SCENARIO_A))


@pytest.fixture
def make_workbook(tmp_path) -> Callable[..., Path]:
    """Write an .xlsx with one sheet per mapping entry; header added automatically."""

    def _make(sheets: Dict[str, Sequence[Sequence]] | Sequence[Sequence], name: str = "links.xlsx",
              header: bool = True) -> Path:
        if not isinstance(sheets, dict):
            sheets = {"Sheet1": sheets}
        wb = Workbook()
        wb.remove(wb.active)
        for title, rows in sheets.items():
            ws = wb.create_sheet(title)
            if header:
                ws.append(HEADER)
            for row in rows:
                ws.append(list(row))
        path = tmp_path / name
        wb.save(path)
        return path

    return _make
