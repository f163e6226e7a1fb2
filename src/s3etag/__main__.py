"""Entry point for s3etag CLI."""

from __future__ import annotations

import sys
from logging import Logger

from .checksum import ETagMismatch, parse_check_line, verify_etag
from .cli import parse_args
from .config import Config, load_config
from .etag import ETag, compute_etag
from .exit_codes import ExitCode
from .log import get_logger, setup_logging
from .output import FileResult, format_error, format_json_results, format_result
from .plan import InvalidConfiguration
from .sizes import format_size
from .source import IoFailure


def _print_error(config: Config, message: str) -> None:
    if not config.json_output:
        print(format_error("IO_FAILURE", message), file=sys.stderr)


def _report(config: Config, result: FileResult) -> None:
    """Print a file's line as soon as it is known, in text mode."""
    if config.json_output:
        return
    if result.success:
        print(format_result(result), flush=True)
    else:
        assert result.error is not None
        _print_error(config, result.error)


def _hash_options(config: Config) -> dict:
    return {
        "workers": config.workers,
        "use_mmap": config.use_mmap,
        "show_progress": config.progress,
    }


def _compute_file(path: str, config: Config) -> FileResult:
    try:
        etag = compute_etag(
            path, config.threshold, config.chunksize, **_hash_options(config)
        )
    except IoFailure as e:
        return FileResult(path=path, error=str(e))
    return FileResult(path=path, etag=etag)


def _verify_file(path: str, expected: ETag, config: Config) -> FileResult:
    try:
        etag = verify_etag(
            path, expected, config.threshold, config.chunksize, **_hash_options(config)
        )
    except ETagMismatch as e:
        return FileResult(path=path, etag=e.actual, expected=expected, matched=False)
    except IoFailure as e:
        return FileResult(path=path, error=str(e), expected=expected)
    return FileResult(path=path, etag=etag, expected=expected, matched=True)


def _check_list(list_path: str, config: Config, logger: Logger) -> list[FileResult]:
    """Verify every ``ETAG  PATH`` line of a check list."""
    try:
        with open(list_path, encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as e:
        result = FileResult(path=list_path, error=f"{list_path}: {e.strerror or e}")
        _report(config, result)
        return [result]
    except UnicodeDecodeError as e:
        result = FileResult(
            path=list_path, error=f"{list_path}: not a UTF-8 text file ({e.reason})"
        )
        _report(config, result)
        return [result]

    results = []
    for lineno, line in enumerate(lines, 1):
        try:
            entry = parse_check_line(line)
        except ValueError as e:
            result = FileResult(path=list_path, error=f"{list_path}:{lineno}: {e}")
        else:
            if entry is None:
                continue
            expected, path = entry
            logger.debug(f"Checking {path} against {expected}")
            result = _verify_file(path, expected, config)
        _report(config, result)
        results.append(result)
    return results


def _exit_code(results: list[FileResult]) -> ExitCode:
    if any(not r.success for r in results):
        return ExitCode.FILE_ERROR
    if any(r.matched is False for r in results):
        return ExitCode.CHECK_MISMATCH
    return ExitCode.SUCCESS


def main() -> int:
    args = parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)
    logger = get_logger()

    try:
        config = load_config(
            cli_threshold=args.threshold,
            cli_chunksize=args.chunksize,
            config_file=args.config,
            files=args.files,
            check=args.check,
            json_output=args.json,
            quiet=args.quiet,
            verbose=args.verbose,
            log_file=args.log_file,
            progress=args.progress and not args.quiet and sys.stderr.isatty(),
            workers=args.workers,
            use_mmap=args.use_mmap,
        )
    except InvalidConfiguration as e:
        if args.json:
            print(format_error("INVALID_CONFIGURATION", str(e), json_output=True))
        else:
            print(format_error("INVALID_CONFIGURATION", str(e)), file=sys.stderr)
        return ExitCode.INVALID_CONFIGURATION

    logger.debug(
        f"Policy: threshold {format_size(config.threshold)}, "
        f"chunksize {format_size(config.chunksize)}, workers {config.workers}"
    )

    results: list[FileResult] = []
    for path in config.files:
        if config.check:
            results.extend(_check_list(path, config, logger))
            continue
        result = _compute_file(path, config)
        results.append(result)
        _report(config, result)

    if config.json_output:
        print(format_json_results(results, config.threshold, config.chunksize))

    failed = sum(1 for r in results if not r.success)
    if failed:
        logger.warning(f"{failed} of {len(results)} file(s) could not be processed")
    mismatched = sum(1 for r in results if r.matched is False)
    if mismatched:
        logger.warning(f"{mismatched} computed ETag(s) did NOT match")

    return _exit_code(results)


if __name__ == "__main__":
    sys.exit(main())
