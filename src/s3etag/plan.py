"""Multipart chunk planning.

Decides whether S3 would store a file of a given length as a single-part or
multipart object under a (threshold, chunk size) policy, and lays out the
byte ranges of the parts.
"""

from dataclasses import dataclass


class InvalidConfiguration(ValueError):
    """Raised when a multipart policy cannot be applied."""

    def __init__(self, message: str, parameter: str | None = None) -> None:
        self.parameter = parameter
        super().__init__(message)


@dataclass(frozen=True)
class ByteRange:
    """Half-open byte interval ``[start, end)`` of one part."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end:
            raise ValueError(f"Invalid byte range [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


@dataclass(frozen=True)
class ChunkPlan:
    """Ordered, contiguous part layout covering a whole file."""

    ranges: tuple[ByteRange, ...]
    chunk_size: int

    @property
    def is_multipart(self) -> bool:
        return len(self.ranges) > 1

    @property
    def part_count(self) -> int:
        return len(self.ranges)

    @property
    def file_length(self) -> int:
        return self.ranges[-1].end


def validate_policy(threshold: int, chunk_size: int) -> None:
    """Reject policies that would make partitioning degenerate.

    Raises:
        InvalidConfiguration: If threshold or chunk_size is not a positive integer
    """
    for name, value in (("threshold", threshold), ("chunksize", chunk_size)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(
                f"{name} must be an integer byte count, got {value!r}", name
            )
        if value <= 0:
            raise InvalidConfiguration(f"{name} must be greater than zero", name)


def plan_chunks(file_length: int, threshold: int, chunk_size: int) -> ChunkPlan:
    """Lay out the parts S3 would receive for a file.

    Args:
        file_length: Size of the file in bytes
        threshold: Largest size still uploaded as a single part
        chunk_size: Size of every part but the last in a multipart upload

    Returns:
        ChunkPlan whose ranges cover ``[0, file_length)`` in ascending order

    Raises:
        InvalidConfiguration: If threshold or chunk_size is zero
        ValueError: If file_length is negative
    """
    validate_policy(threshold, chunk_size)
    if file_length < 0:
        raise ValueError(f"file_length must not be negative, got {file_length}")

    if file_length <= threshold:
        return ChunkPlan((ByteRange(0, file_length),), chunk_size)

    # The final part holds the remainder, or a full chunk on an exact multiple
    ranges = tuple(
        ByteRange(start, min(start + chunk_size, file_length))
        for start in range(0, file_length, chunk_size)
    )
    return ChunkPlan(ranges, chunk_size)
