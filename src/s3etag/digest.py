"""MD5 digest provider."""

import hashlib
from typing import Iterable, Protocol

MD5_DIGEST_SIZE = 16


class Digester(Protocol):
    """Anything that turns bytes into a fixed-size digest."""

    digest_size: int

    def digest(self, data: bytes) -> bytes: ...

    def digest_blocks(self, blocks: Iterable[bytes]) -> bytes: ...


class Md5Digester:
    """MD5 through hashlib (OpenSSL where Python is built against it)."""

    digest_size = MD5_DIGEST_SIZE

    def _new(self) -> "hashlib._Hash":
        # S3 uses MD5 as a checksum, which FIPS builds allow with this flag
        return hashlib.md5(usedforsecurity=False)

    def digest(self, data: bytes) -> bytes:
        md5 = self._new()
        md5.update(data)
        return md5.digest()

    def digest_blocks(self, blocks: Iterable[bytes]) -> bytes:
        md5 = self._new()
        for block in blocks:
            md5.update(block)
        return md5.digest()
