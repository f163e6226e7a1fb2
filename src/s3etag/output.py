"""Output formatting for JSON and human-readable modes."""

import json
from dataclasses import dataclass
from pathlib import Path

from .etag import ETag

# Widest ETag column: 32 hex digits plus "-" and a 5-digit part count
ETAG_COLUMN_WIDTH = 39


@dataclass
class FileResult:
    """Outcome of processing one input file."""

    path: str
    etag: ETag | None = None
    error: str | None = None
    expected: ETag | None = None
    matched: bool | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        data: dict = {"path": self.path}
        if self.etag is not None:
            data["etag"] = str(self.etag)
            data["parts"] = self.etag.part_count or 1
        if self.expected is not None:
            data["expected"] = str(self.expected)
        if self.matched is not None:
            data["matched"] = self.matched
        if self.error is not None:
            data["error"] = self.error
        return data


def format_etag_line(etag: ETag, path: str | Path) -> str:
    """Format an ETag and its file name, md5sum style."""
    return f"{etag:<{ETAG_COLUMN_WIDTH}} {path}"


def format_check_line(path: str | Path, ok: bool) -> str:
    return f"{path}: {'OK' if ok else 'FAILED'}"


def format_result(result: FileResult) -> str:
    """Format the human-readable line for one successfully processed file."""
    assert result.etag is not None
    if result.matched is not None:
        return format_check_line(result.path, result.matched)
    return format_etag_line(result.etag, result.path)


def format_json_results(
    results: list[FileResult],
    threshold: int,
    chunksize: int,
) -> str:
    """Format all per-file results as one JSON document."""
    failed = sum(1 for r in results if not r.success)
    return json.dumps(
        {
            "status": "success" if failed == 0 else "error",
            "threshold": threshold,
            "chunksize": chunksize,
            "files": [r.to_dict() for r in results],
            "summary": {
                "processed": len(results) - failed,
                "failed": failed,
                "mismatched": sum(1 for r in results if r.matched is False),
            },
        },
        indent=2,
    )


def format_error(
    code: str,
    message: str,
    json_output: bool = False,
) -> str:
    """Format error result."""
    if json_output:
        return json.dumps(
            {
                "status": "error",
                "code": code,
                "message": message,
            },
            indent=2,
        )

    return f"Error: {message}"
