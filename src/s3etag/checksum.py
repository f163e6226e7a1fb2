"""ETag verification against expected values."""

from pathlib import Path
from typing import Any

from .etag import ETag, compute_etag
from .log import get_logger


class ETagMismatch(Exception):
    """Raised when a file's ETag doesn't match the expected value."""

    def __init__(self, path: str | Path, expected: ETag, actual: ETag):
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(f"ETag mismatch for {path}: expected {expected}, got {actual}")


def parse_check_line(line: str) -> tuple[ETag, str] | None:
    """Parse one ``ETAG  PATH`` line as written by s3etag.

    Returns:
        (expected ETag, path), or None for blank and comment lines

    Raises:
        ValueError: If the line is malformed
    """
    line = line.rstrip("\r\n")
    if not line.strip() or line.lstrip().startswith("#"):
        return None

    fields = line.strip().split(None, 1)
    if len(fields) != 2:
        raise ValueError(f"Missing path in check line: {line!r}")
    return ETag.parse(fields[0]), fields[1]


def verify_etag(
    path: str | Path,
    expected: ETag | str,
    threshold: int,
    chunk_size: int,
    **kwargs: Any,
) -> ETag:
    """Verify a file against an S3 ETag.

    Args:
        path: Path to file
        expected: ETag value (may include quotes, may be multipart)
        threshold: Multipart threshold the object was uploaded with
        chunk_size: Multipart chunk size the object was uploaded with
        **kwargs: Passed through to compute_etag

    Returns:
        The computed ETag

    Raises:
        ETagMismatch: If the ETag doesn't match
    """
    logger = get_logger()

    if isinstance(expected, str):
        expected = ETag.parse(expected)

    actual = compute_etag(path, threshold, chunk_size, **kwargs)
    if actual != expected:
        raise ETagMismatch(path, expected, actual)

    logger.debug(f"ETag verified: {path}")
    return actual
