from __future__ import annotations

import asyncio

from report_scanner.config import ImportSettings
from report_scanner.importer import ReportImporter, file_extension, import_report
from report_scanner.models import MessageKind, SourceFormat
from report_scanner.progress import ProgressReporter


def _recording_importer(**settings):
    seen = []
    progress = ProgressReporter([seen.append])
    return ReportImporter(ImportSettings(**settings), progress), seen


def test_file_extension_is_case_insensitive():
    assert file_extension("Report.CSV") == "csv"
    assert file_extension("archive.tar.json") == "json"
    assert file_extension("noext") == "noext"


def test_import_csv_success_reports_progress():
    importer, seen = _recording_importer()
    result = importer.import_bytes(b"name,amount\nAnn,10\n", "people.CSV")

    assert result.success
    assert result.errors == []
    assert result.dataset.source_format == SourceFormat.CSV
    assert result.dataset.rows == [["Ann", 10.0]]
    assert seen == [10.0, 30.0, 80.0, 95.0, 100.0, 0.0]


def test_import_rejects_oversized_file():
    importer, seen = _recording_importer(max_file_size_bytes=10)
    result = importer.import_bytes(b"a,b\n1,2\n3,4\n", "big.csv")

    assert not result.success
    assert result.dataset is None
    assert len(result.errors) == 1
    assert result.errors[0].kind == MessageKind.ERROR
    assert "exceeds" in result.errors[0].message
    assert seen == [10.0, 0.0]


def test_import_default_size_limit_message():
    data = b"a\n" + b"1\n" * (5 * 1024 * 1024 + 1)
    result = import_report(data, "huge.csv")

    assert not result.success
    assert result.errors[0].message == "File size exceeds 10MB limit"


def test_import_rejects_unsupported_extension():
    result = import_report(b"a,b\n1,2\n", "data.xlsx")

    assert not result.success
    message = result.errors[0].message
    assert "xlsx" in message
    assert "CSV, JSON, TXT, TSV" in message


def test_import_blank_csv_fails_with_single_error():
    result = import_report(b"\n  \n\n", "blank.csv")

    assert not result.success
    assert result.dataset is None
    assert len(result.errors) == 1
    assert result.errors[0].kind == MessageKind.ERROR
    assert result.errors[0].message == "Failed to parse file: File is empty"


def test_import_header_only_csv_fails():
    result = import_report(b"a,b\n", "header.csv")

    assert not result.success
    assert result.errors[0].message == "No data rows found in the file"


def test_import_malformed_json_carries_parser_message():
    result = import_report(b'{"a": ', "broken.json")

    assert not result.success
    assert result.errors[0].message.startswith("Failed to parse file: ")


def test_import_empty_object_warns_about_headers():
    result = import_report(b"{}", "empty.json")

    assert result.success
    assert result.dataset.headers == []
    assert len(result.warnings) == 1
    assert result.warnings[0].message == "No headers detected in the file"


def test_import_strips_byte_order_mark():
    result = import_report("\ufeffid,name\n1,Ann\n".encode("utf-8"), "bom.csv")

    assert result.dataset.headers == ["id", "name"]


def test_failing_progress_observer_does_not_break_import():
    def _broken(_value):
        raise RuntimeError("observer failure")

    seen = []
    progress = ProgressReporter([_broken, seen.append])
    result = ReportImporter(progress=progress).import_bytes(b"a\n1\n", "one.tsv")

    assert result.success
    assert seen[-1] == 0.0


def test_import_file_reads_from_disk(tmp_path):
    path = tmp_path / "data.tsv"
    path.write_text("id\tname\n1\tAnn\n2\tBob\n", encoding="utf-8")

    result = asyncio.run(ReportImporter().import_file(path))

    assert result.success
    assert result.dataset.file_name == "data.tsv"
    assert result.dataset.row_count == 2


def test_import_file_missing_path(tmp_path):
    result = asyncio.run(ReportImporter().import_file(tmp_path / "missing.csv"))

    assert not result.success
    assert result.errors[0].message.startswith("Failed to read file: ")


def test_import_file_checks_size_before_reading(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")

    importer, seen = _recording_importer(max_file_size_bytes=4)
    result = asyncio.run(importer.import_file(path))

    assert not result.success
    assert "exceeds" in result.errors[0].message
    assert seen == [10.0, 0.0]


def test_import_json_integer_beyond_float_range():
    digits = "9" * 400
    result = import_report(('[{"a": ' + digits + "}]").encode("utf-8"), "big.json")

    assert result.success
    assert result.dataset.rows == [[digits]]
