"""S3 ETag composition.

Single-part objects carry the MD5 of their content. Multipart objects carry
the MD5 of the concatenated per-part MD5 digests, in part-number order,
followed by ``-<part count>``.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .digest import Digester, Md5Digester
from .log import get_logger
from .plan import ByteRange, ChunkPlan, plan_chunks, validate_policy
from .progress import HashProgress
from .sizes import format_size
from .source import ByteSource, FileSource

_ETAG_RE = re.compile(r"^([0-9a-f]{32})(?:-([1-9][0-9]*))?$")


@dataclass(frozen=True)
class ETag:
    """An S3 ETag value."""

    digest: bytes
    part_count: int | None = None

    @property
    def is_multipart(self) -> bool:
        return self.part_count is not None

    def __str__(self) -> str:
        if self.part_count is not None:
            return f"{self.digest.hex()}-{self.part_count}"
        return self.digest.hex()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    @classmethod
    def parse(cls, text: str) -> "ETag":
        """Parse an ETag as S3 returns it, with or without quotes.

        Raises:
            ValueError: If text is not a hex MD5 with an optional part count
        """
        match = _ETAG_RE.match(text.strip().strip('"').lower())
        if not match:
            raise ValueError(f"Invalid ETag: {text!r}")
        part_count = int(match.group(2)) if match.group(2) else None
        return cls(bytes.fromhex(match.group(1)), part_count)


def _tracked(blocks: Iterable[bytes], progress: HashProgress | None) -> Iterator[bytes]:
    for block in blocks:
        yield block
        if progress is not None:
            progress.update(len(block))


def compose(
    source: ByteSource,
    plan: ChunkPlan,
    digester: Digester | None = None,
    workers: int = 1,
    progress: HashProgress | None = None,
) -> ETag:
    """Compute the ETag of a source laid out by a chunk plan.

    Args:
        source: Where part bytes are read from
        plan: Part layout from plan_chunks
        digester: Digest provider (default MD5)
        workers: Number of threads digesting parts concurrently
        progress: Optional progress bar fed with bytes hashed

    Returns:
        ETag with a part count for multipart plans

    Raises:
        IoFailure: If any part cannot be read
    """
    if digester is None:
        digester = Md5Digester()

    def digest_part(byte_range: ByteRange) -> bytes:
        part_digest = digester.digest_blocks(
            _tracked(source.iter_range(byte_range), progress)
        )
        if progress is not None:
            progress.complete_part()
        return part_digest

    if not plan.is_multipart:
        return ETag(digest_part(plan.ranges[0]))

    if workers > 1:
        with ThreadPoolExecutor(max_workers=min(workers, plan.part_count)) as executor:
            # map() yields in submission order, i.e. ascending part number
            part_digests = list(executor.map(digest_part, plan.ranges))
    else:
        part_digests = [digest_part(byte_range) for byte_range in plan.ranges]

    return ETag(digester.digest(b"".join(part_digests)), len(part_digests))


def compute_etag(
    path: str | Path,
    threshold: int,
    chunk_size: int,
    *,
    digester: Digester | None = None,
    workers: int = 1,
    use_mmap: bool = True,
    show_progress: bool = False,
) -> ETag:
    """Compute the ETag S3 would assign to a file uploaded with a policy.

    Raises:
        InvalidConfiguration: If threshold or chunk_size is zero (before any I/O)
        FileNotFound: If path does not exist
        IoFailure: If the file cannot be read
    """
    logger = get_logger()
    validate_policy(threshold, chunk_size)

    with FileSource(path, use_mmap=use_mmap) as source:
        plan = plan_chunks(source.length, threshold, chunk_size)
        logger.debug(
            f"{path}: {format_size(source.length)} in {plan.part_count} part(s)"
            f" of up to {format_size(chunk_size)}"
        )
        with HashProgress(
            source.length,
            desc=Path(path).name,
            show_progress=show_progress,
        ) as progress:
            return compose(source, plan, digester, workers, progress)
