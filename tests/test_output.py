"""Tests for output formatting."""

import json

from s3etag.etag import ETag
from s3etag.output import (
    FileResult,
    format_error,
    format_etag_line,
    format_json_results,
    format_result,
)

SINGLE = ETag(bytes.fromhex("d41d8cd98f00b204e9800998ecf8427e"))
MULTI = ETag(bytes.fromhex("d41d8cd98f00b204e9800998ecf8427e"), 12)


class TestFormatEtagLine:
    """Test the ETag line format."""

    def test_single_part(self):
        line = format_etag_line(SINGLE, "empty.bin")
        assert line == "d41d8cd98f00b204e9800998ecf8427e        empty.bin"

    def test_multipart(self):
        line = format_etag_line(MULTI, "big.tar")
        assert line == "d41d8cd98f00b204e9800998ecf8427e-12     big.tar"

    def test_columns_align(self):
        """Paths start in the same column for single and multipart."""
        assert format_etag_line(SINGLE, "x").index("x") == format_etag_line(
            MULTI, "x"
        ).index("x")

    def test_no_quotes(self):
        assert '"' not in format_etag_line(MULTI, "big.tar")


class TestFormatResult:
    """Test per-file human-readable output."""

    def test_etag(self):
        assert format_result(FileResult(path="a", etag=SINGLE)).startswith(str(SINGLE))

    def test_check_ok(self):
        result = FileResult(path="a.bin", etag=SINGLE, expected=SINGLE, matched=True)
        assert format_result(result) == "a.bin: OK"

    def test_check_failed(self):
        result = FileResult(path="a.bin", etag=SINGLE, expected=MULTI, matched=False)
        assert format_result(result) == "a.bin: FAILED"


class TestFormatJsonResults:
    """Test JSON output."""

    def test_success(self):
        result = format_json_results(
            [FileResult(path="a", etag=SINGLE), FileResult(path="b", etag=MULTI)],
            threshold=8388608,
            chunksize=8388608,
        )

        data = json.loads(result)
        assert data["status"] == "success"
        assert data["threshold"] == 8388608
        assert data["files"][0] == {"path": "a", "etag": str(SINGLE), "parts": 1}
        assert data["files"][1]["parts"] == 12
        assert data["summary"]["processed"] == 2

    def test_failure(self):
        result = format_json_results(
            [FileResult(path="a", error="a: No such file or directory")],
            threshold=1,
            chunksize=1,
        )

        data = json.loads(result)
        assert data["status"] == "error"
        assert "etag" not in data["files"][0]
        assert data["summary"]["failed"] == 1

    def test_check_results(self):
        result = format_json_results(
            [FileResult(path="a", etag=SINGLE, expected=MULTI, matched=False)],
            threshold=1,
            chunksize=1,
        )

        data = json.loads(result)
        assert data["files"][0]["expected"] == str(MULTI)
        assert data["files"][0]["matched"] is False
        assert data["summary"]["mismatched"] == 1


class TestFormatError:
    """Test error output formatting."""

    def test_json_format(self):
        """Should output valid JSON error."""
        result = format_error(
            code="INVALID_CONFIGURATION",
            message="threshold must be greater than zero",
            json_output=True,
        )

        data = json.loads(result)
        assert data["status"] == "error"
        assert data["code"] == "INVALID_CONFIGURATION"

    def test_human_format(self):
        result = format_error(code="IO_FAILURE", message="boom")
        assert result == "Error: boom"
