"""Read-only byte sources for ETag computation."""

import mmap
import os
from pathlib import Path
from threading import Lock
from types import TracebackType
from typing import BinaryIO, Iterator, Protocol

from .log import get_logger
from .plan import ByteRange

DEFAULT_BLOCK_SIZE = 1024 * 1024  # 1 MB


class IoFailure(Exception):
    """Raised when a file cannot be opened or read."""

    def __init__(
        self,
        path: str | Path,
        message: str,
        byte_range: ByteRange | None = None,
    ) -> None:
        self.path = path
        self.message = message
        self.byte_range = byte_range
        if byte_range is not None:
            super().__init__(f"{path}: {message} (reading bytes {byte_range})")
        else:
            super().__init__(f"{path}: {message}")


class FileNotFound(IoFailure):
    """Raised when the input path does not exist."""

    def __init__(self, path: str | Path) -> None:
        super().__init__(path, "No such file or directory")


class ByteSource(Protocol):
    """A byte sequence of known length that can be read by range."""

    @property
    def length(self) -> int: ...

    def iter_range(self, byte_range: ByteRange) -> Iterator[bytes]: ...


class BytesSource:
    """In-memory byte source."""

    def __init__(self, data: bytes, block_size: int = DEFAULT_BLOCK_SIZE) -> None:
        self._data = memoryview(data)
        self.block_size = block_size

    @property
    def length(self) -> int:
        return len(self._data)

    def iter_range(self, byte_range: ByteRange) -> Iterator[bytes]:
        if byte_range.end > len(self._data):
            raise IoFailure("<memory>", "range beyond end of data", byte_range)
        for pos in range(byte_range.start, byte_range.end, self.block_size):
            yield self._data[pos : min(pos + self.block_size, byte_range.end)]


class FileSource:
    """A file on disk, read through a memory map or plain reads.

    Ranges may be read concurrently from several threads; plain reads
    serialise on a lock because they share one file position.

    A file truncated while it is memory-mapped raises SIGBUS on access
    rather than IoFailure; pass use_mmap=False for files that may change
    while being hashed.
    """

    def __init__(
        self,
        path: str | Path,
        use_mmap: bool = True,
        block_size: int = DEFAULT_BLOCK_SIZE,
    ) -> None:
        self.path = path
        self.use_mmap = use_mmap
        self.block_size = block_size
        self._file: BinaryIO | None = None
        self._mmap: mmap.mmap | None = None
        self._length = 0
        self._lock = Lock()

    def __enter__(self) -> "FileSource":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def length(self) -> int:
        return self._length

    def open(self) -> None:
        logger = get_logger()
        try:
            self._file = open(self.path, "rb")
        except FileNotFoundError as e:
            raise FileNotFound(self.path) from e
        except OSError as e:
            raise IoFailure(self.path, e.strerror or str(e)) from e

        try:
            self._length = os.fstat(self._file.fileno()).st_size
        except OSError as e:
            self.close()
            raise IoFailure(self.path, e.strerror or str(e)) from e

        # Empty files cannot be mapped
        if self.use_mmap and self._length > 0:
            try:
                self._mmap = mmap.mmap(
                    self._file.fileno(), 0, access=mmap.ACCESS_READ
                )
            except (OSError, ValueError) as e:
                logger.debug(f"Memory map unavailable for {self.path} ({e}), using reads")
                self._mmap = None
            else:
                if hasattr(mmap, "MADV_SEQUENTIAL"):
                    try:
                        self._mmap.madvise(mmap.MADV_SEQUENTIAL)
                    except OSError as e:
                        logger.debug(f"madvise failed for {self.path} ({e}), using reads")
                        self._mmap.close()
                        self._mmap = None

    def close(self) -> None:
        if self._mmap is not None:
            self._mmap.close()
            self._mmap = None
        if self._file is not None:
            self._file.close()
            self._file = None

    def iter_range(self, byte_range: ByteRange) -> Iterator[bytes]:
        if self._file is None:
            raise IoFailure(self.path, "file is not open", byte_range)
        if byte_range.end > self._length:
            raise IoFailure(self.path, "range beyond end of file", byte_range)

        for pos in range(byte_range.start, byte_range.end, self.block_size):
            size = min(self.block_size, byte_range.end - pos)
            yield self._read(pos, size, byte_range)

    def _read(self, pos: int, size: int, byte_range: ByteRange) -> bytes:
        if self._mmap is not None:
            return self._mmap[pos : pos + size]

        assert self._file is not None
        try:
            with self._lock:
                self._file.seek(pos)
                data = self._file.read(size)
        except OSError as e:
            raise IoFailure(self.path, e.strerror or str(e), byte_range) from e

        if len(data) != size:
            raise IoFailure(
                self.path,
                f"short read at offset {pos}: file changed while reading",
                byte_range,
            )
        return data
