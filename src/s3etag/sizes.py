"""Human-readable size parsing and formatting."""

import re

# Powers of 1024, as the AWS CLI interprets multipart_threshold/chunksize
MULTIPLIERS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024 * 1024,
    "GB": 1024 * 1024 * 1024,
    "TB": 1024 * 1024 * 1024 * 1024,
}

_SIZE_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*(KB|MB|GB|TB|B)?$")


def parse_size(size: str | int) -> int:
    """Parse human-readable size string (e.g., "8MB", "1.5GB") to bytes."""
    if isinstance(size, bool):
        raise ValueError(f"Invalid size: {size!r}")
    if isinstance(size, int):
        if size < 0:
            raise ValueError(f"Invalid size: {size}")
        return size

    size_str = str(size).strip().upper()
    match = _SIZE_RE.match(size_str)
    if not match:
        raise ValueError(f"Invalid size format: {size!r}")

    unit = match.group(2) or "B"
    number = match.group(1)
    if "." in number:
        whole, frac = number.split(".")
        # Exact integer arithmetic; float would round large TB values
        scale = 10 ** len(frac)
        return (int(whole) * scale + int(frac)) * MULTIPLIERS[unit] // scale
    return int(number) * MULTIPLIERS[unit]


def format_size(size_bytes: int | float) -> str:
    """Format bytes as human-readable size."""
    size: float = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(size) < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} PB"
