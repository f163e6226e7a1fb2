"""Progress reporting while hashing."""

from threading import RLock

from tqdm import tqdm


class HashProgress:
    """Thread-safe byte progress bar for one file."""

    def __init__(
        self,
        total_bytes: int,
        desc: str = "Hashing",
        show_progress: bool = True,
    ) -> None:
        self.total_bytes = total_bytes
        self._lock = RLock()
        self._completed_bytes = 0
        self._completed_parts = 0

        self._pbar: tqdm | None  # type: ignore[type-arg]
        if show_progress:
            self._pbar = tqdm(
                total=total_bytes,
                unit="B",
                unit_scale=True,
                desc=desc,
                ncols=80,
                leave=False,
            )
        else:
            self._pbar = None

    def update(self, bytes_hashed: int) -> None:
        with self._lock:
            self._completed_bytes += bytes_hashed
            if self._pbar is not None:
                self._pbar.update(bytes_hashed)

    def complete_part(self) -> None:
        with self._lock:
            self._completed_parts += 1
            if self._pbar is not None:
                self._pbar.set_postfix(parts=self._completed_parts, refresh=False)

    def close(self) -> None:
        if self._pbar is not None:
            self._pbar.close()

    def __enter__(self) -> "HashProgress":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def completed_bytes(self) -> int:
        with self._lock:
            return self._completed_bytes

    @property
    def completed_parts(self) -> int:
        with self._lock:
            return self._completed_parts
