"""Unit tests for the result notifier."""

from unittest.mock import MagicMock

from sheetgraph.core.exceptions import DecodeFailureError, DecodeFailureKind, NoValidRowsError
from sheetgraph.core.result import Err, Ok
from sheetgraph.core.types import Graph
from sheetgraph.ingest.pipeline import IngestionReport
from sheetgraph.notify import Level, ResultNotifier, describe


def report(**overrides):
    values = dict(graph=Graph(), node_count=3, edge_count=2, rows_processed=4, rows_skipped=0, sheet_count=1)
    values.update(overrides)
    return IngestionReport(**values)


class TestDescribe:
    def test_success(self):
        n = describe(Ok(report()))
        assert n.level == Level.SUCCESS
        assert n.message == "Successfully loaded 3 nodes and 2 edges from 4 rows."

    def test_success_mentions_skips(self):
        assert "Skipped 2 row(s)" in describe(Ok(report(rows_skipped=2))).message

    def test_no_valid_rows(self):
        n = describe(Err(NoValidRowsError()))
        assert n.level == Level.ERROR
        assert n.kind == "no_valid_rows"
        assert "Column B: Target Node" in n.text

    def test_decode_failure(self):
        n = describe(Err(DecodeFailureError(DecodeFailureKind.CORRUPTED)))
        assert n.kind == "decode_failure"
        assert "corrupted" in n.message


class TestResultNotifier:
    def test_fans_out_to_sinks(self):
        first, second = MagicMock(), MagicMock()
        notifier = ResultNotifier(sinks=[first])
        notifier.add_sink(second)

        n = notifier.notify(Ok(report()))

        first.assert_called_once_with(n)
        second.assert_called_once_with(n)

    def test_default_sink_logs(self, caplog):
        with caplog.at_level("WARNING"):
            ResultNotifier().notify(Err(NoValidRowsError()))
        assert "No valid data found" in caplog.text
