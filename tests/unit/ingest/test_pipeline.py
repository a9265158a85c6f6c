"""Unit tests for the ingestion pipeline."""

import zipfile
import zlib
from unittest.mock import patch

import pytest

from sheetgraph.core.exceptions import (
    DecodeFailureError,
    DecodeFailureKind,
    EmptyInputError,
    NoValidRowsError,
    OversizeInputError,
)
from sheetgraph.core.result import Err, Ok
from sheetgraph.ingest.pipeline import ingest_bytes, ingest_source, ingest_workbook
from sheetgraph.ingest.source import RowsSource, WorkbookSource


class TestIngestWorkbook:
    def test_scenario_a(self, make_workbook):
        path = make_workbook([("A", "B", "knows", "see docs"), ("B", "C")])

        result = ingest_workbook(path)

        assert isinstance(result, Ok)
        report = result.value
        assert (report.node_count, report.edge_count, report.rows_processed) == (3, 2, 2)
        assert report.graph.edges[0].tooltip == "see docs"
        assert report.graph.edges[1].tooltip == ""

    def test_header_only_workbook(self, make_workbook):
        """Scenario B: the header row alone yields NoValidRows."""
        result = ingest_workbook(make_workbook([]))

        assert isinstance(result, Err)
        assert isinstance(result.error, NoValidRowsError)

    def test_all_rows_invalid(self, make_workbook):
        result = ingest_workbook(make_workbook([("A", None), (None, "B")]))

        assert isinstance(result.error, NoValidRowsError)
        assert result.error.rows_processed == 2

    def test_sheets_are_merged(self, make_workbook):
        path = make_workbook({"One": [("A", "B")], "Two": [("B", "C"), ("A", None)]})

        report = ingest_workbook(path).unwrap()

        assert list(report.graph.nodes) == ["A", "B", "C"]
        assert report.sheet_count == 2
        assert report.rows_processed == 3
        assert report.rows_skipped == 1

    def test_first_row_of_each_sheet_is_header(self, make_workbook):
        path = make_workbook({"One": [("A", "B")], "Two": [("X", "Y"), ("C", "D")]}, header=False)

        report = ingest_workbook(path).unwrap()

        assert list(report.graph.nodes) == ["C", "D"]

    def test_blank_rows_are_not_counted(self, make_workbook):
        path = make_workbook([("A", "B"), (None, None, None, None), ("B", "C")])
        assert ingest_workbook(path).unwrap().rows_processed == 2

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.xlsx"
        path.write_bytes(b"")
        assert isinstance(ingest_workbook(path).error, EmptyInputError)

    def test_missing_file_is_unreadable(self, tmp_path):
        result = ingest_workbook(tmp_path / "missing.xlsx")

        assert isinstance(result, Err)
        assert result.error.failure == DecodeFailureKind.UNREADABLE
        assert "missing.xlsx" in result.error.detail

    def test_oversize_checked_before_decoding(self, make_workbook):
        path = make_workbook([("A", "B")])
        with patch("sheetgraph.ingest.pipeline.WorkbookSource") as source_cls:
            result = ingest_workbook(path, max_bytes=10)

        assert isinstance(result.error, OversizeInputError)
        assert result.error.limit_bytes == 10
        source_cls.assert_not_called()


class TestIngestBytes:
    def test_not_a_zip(self):
        result = ingest_bytes(b"source,target\nA,B\n", name="links.csv")

        assert isinstance(result.error, DecodeFailureError)
        assert result.error.failure == DecodeFailureKind.WRONG_FORMAT

    def test_truncated_workbook_is_corrupted(self, make_workbook):
        data = make_workbook([("A", "B")]).read_bytes()

        result = ingest_bytes(data[: len(data) // 2])

        assert isinstance(result.error, DecodeFailureError)
        assert result.error.failure == DecodeFailureKind.CORRUPTED
        assert "corrupted" in result.error.message

    @pytest.mark.parametrize("error", [
        zipfile.BadZipFile("Bad CRC-32 for file 'xl/worksheets/sheet1.xml'"),
        zlib.error("Error -3 while decompressing data: invalid block type"),
    ])
    def test_damaged_entries_are_corrupted(self, make_workbook, error):
        data = make_workbook([("A", "B")]).read_bytes()
        with patch("sheetgraph.ingest.source.load_workbook", side_effect=error):
            result = ingest_bytes(data)

        assert result.error.failure == DecodeFailureKind.CORRUPTED

    def test_unexpected_decode_error_is_unreadable(self, make_workbook):
        data = make_workbook([("A", "B")]).read_bytes()
        with patch("sheetgraph.ingest.source.load_workbook", side_effect=RuntimeError("boom")):
            result = ingest_bytes(data)

        assert result.error.failure == DecodeFailureKind.UNREADABLE
        assert result.error.hint

    def test_empty_and_oversize(self):
        assert isinstance(ingest_bytes(b"").error, EmptyInputError)
        assert isinstance(ingest_bytes(b"x" * 11, max_bytes=10).error, OversizeInputError)

    def test_valid_payload(self, make_workbook):
        data = make_workbook([("A", "B")]).read_bytes()
        assert ingest_bytes(data).unwrap().edge_count == 1


class TestWorkbookSource:
    def test_rows_carry_sheet_and_number(self, make_workbook):
        source = WorkbookSource(make_workbook({"Links": [("A", "B")]}).read_bytes())
        rows = list(source.iter_rows())

        assert source.sheet_names == ["Links"]
        assert [(r.sheet, r.row_number) for r in rows] == [("Links", 1), ("Links", 2)]
        assert rows[1].values[:2] == ("A", "B")


class TestIngestSource:
    def test_in_memory_rows(self):
        source = RowsSource([("src", "dst"), ("A", "B"), ("B", "")])
        report = ingest_source(source).unwrap()

        assert report.edge_count == 1
        assert report.rows_skipped == 1
