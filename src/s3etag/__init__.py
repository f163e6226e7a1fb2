"""Compute Amazon S3 ETags for local files."""

__version__ = "0.4.4"

from .etag import ETag, compose, compute_etag
from .plan import ByteRange, ChunkPlan, InvalidConfiguration, plan_chunks
from .source import FileNotFound, IoFailure

__all__ = [
    "__version__",
    "ByteRange",
    "ChunkPlan",
    "ETag",
    "FileNotFound",
    "InvalidConfiguration",
    "IoFailure",
    "compose",
    "compute_etag",
    "plan_chunks",
]
