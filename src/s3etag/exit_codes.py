"""Exit code constants for CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for s3etag CLI.

    These follow Unix conventions:
    - 0 for success
    - Non-zero for various failure modes
    """

    SUCCESS = 0
    FILE_ERROR = 1
    INVALID_CONFIGURATION = 2
    CHECK_MISMATCH = 3
