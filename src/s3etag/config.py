"""Configuration loading from CLI args, environment, and config file."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from .plan import InvalidConfiguration, validate_policy
from .sizes import parse_size

# tomli is in stdlib as tomllib in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


ENV_THRESHOLD = "S3ETAG_THRESHOLD"
ENV_CHUNKSIZE = "S3ETAG_CHUNKSIZE"

# awscli defaults for multipart_threshold and multipart_chunksize
DEFAULT_THRESHOLD = "8MB"
DEFAULT_CHUNKSIZE = "8MB"

MAX_WORKERS = 32

DEFAULT_CONFIG_PATHS = [
    Path.home() / ".s3etag.toml",
    Path.home() / ".config" / "s3etag" / "config.toml",
]


@dataclass
class Config:
    """Resolved configuration from all sources."""

    threshold: int
    chunksize: int
    files: list[str] = field(default_factory=list)

    # Mode
    check: bool = False

    # Output options
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_file: str | None = None
    progress: bool = False

    # Performance
    workers: int = 1
    use_mmap: bool = True


def _load_config_file(path: str | Path | None) -> dict[str, object]:
    if path is not None:
        paths = [Path(path)]
    else:
        paths = DEFAULT_CONFIG_PATHS

    for config_path in paths:
        # A path named by the user must exist; default paths are optional
        if not config_path.exists() and path is None:
            continue
        try:
            with open(config_path, "rb") as f:
                return dict(tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfiguration(f"Invalid config file {config_path}: {e}") from e
        except OSError as e:
            raise InvalidConfiguration(
                f"Cannot read config file {config_path}: {e.strerror or e}"
            ) from e

    return {}


def _resolve_size(
    name: str,
    cli_value: str | None,
    env_var: str,
    file_value: object,
    default: str,
) -> int:
    """Precedence: CLI > env > file > default."""
    value: object = cli_value
    if value is None:
        value = os.environ.get(env_var)
    if value is None:
        value = file_value
    if value is None:
        value = default

    if not isinstance(value, (str, int)):
        raise InvalidConfiguration(f"Invalid {name}: {value!r}", name)
    try:
        return parse_size(value)
    except ValueError as e:
        raise InvalidConfiguration(f"Invalid {name}: {e}", name) from e


def load_config(
    cli_threshold: str | None = None,
    cli_chunksize: str | None = None,
    config_file: str | None = None,
    **kwargs: object,
) -> Config:
    """Resolve the multipart policy and options.

    Raises:
        InvalidConfiguration: If a size cannot be parsed or is zero
    """
    file_config = _load_config_file(config_file)

    threshold = _resolve_size(
        "threshold",
        cli_threshold,
        ENV_THRESHOLD,
        file_config.get("multipart_threshold"),
        DEFAULT_THRESHOLD,
    )
    chunksize = _resolve_size(
        "chunksize",
        cli_chunksize,
        ENV_CHUNKSIZE,
        file_config.get("multipart_chunksize"),
        DEFAULT_CHUNKSIZE,
    )
    validate_policy(threshold, chunksize)

    # Resolve workers: CLI > file > default
    workers = cast(int | None, kwargs.pop("workers", None))
    if workers is None:
        workers = cast(int | None, file_config.get("workers"))
    if workers is None:
        workers = 1
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise InvalidConfiguration(f"workers must be a positive integer, got {workers!r}")
    workers = min(workers, MAX_WORKERS)

    return Config(
        threshold=threshold,
        chunksize=chunksize,
        workers=workers,
        **cast(dict[str, Any], kwargs),
    )
