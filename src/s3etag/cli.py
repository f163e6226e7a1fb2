"""CLI argument parsing."""

import argparse

from . import __version__


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="s3etag",
        description="Compute Amazon S3 ETags of local files",
        epilog="""
Examples:
  %(prog)s big.tar                            # ETag with the awscli defaults (8MB)
  %(prog)s --chunksize 16MB *.tar             # ETags for 16MB parts
  %(prog)s --threshold 64MB --chunksize 64MB data.bin
  %(prog)s big.tar > ETAGS && %(prog)s -c ETAGS   # Verify later

SIZE is a byte count or a number with suffix KB, MB, GB or TB (powers of 1024).

Environment variables:
  S3ETAG_THRESHOLD    Default for --threshold
  S3ETAG_CHUNKSIZE    Default for --chunksize

Config file: ~/.s3etag.toml or ~/.config/s3etag/config.toml
(keys: multipart_threshold, multipart_chunksize, workers)
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="Files to compute ETags for (with --check: lists of ETAG PATH lines)",
    )

    # Upload policy
    policy_group = parser.add_argument_group("Upload policy")
    policy_group.add_argument(
        "--threshold",
        metavar="SIZE",
        default=None,
        help="multipart_threshold used for upload (default: 8MB)",
    )
    policy_group.add_argument(
        "--chunksize",
        metavar="SIZE",
        default=None,
        help="multipart_chunksize used for upload (default: 8MB)",
    )
    policy_group.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="Read defaults from this TOML file",
    )

    # Verification
    verify_group = parser.add_argument_group("Verification")
    verify_group.add_argument(
        "-c",
        "--check",
        action="store_true",
        help="Read ETags from the FILEs and check them",
    )

    # Output
    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )
    output_group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress output, only show errors",
    )
    output_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug information",
    )
    output_group.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )
    output_group.add_argument(
        "--no-progress",
        action="store_false",
        dest="progress",
        help="Never show a progress bar (shown on terminals by default)",
    )

    # Performance
    perf_group = parser.add_argument_group("Performance")
    perf_group.add_argument(
        "-w",
        "--workers",
        type=int,
        default=None,
        metavar="N",
        help="Number of parts hashed in parallel (default: 1, max: 32)",
    )
    perf_group.add_argument(
        "--no-mmap",
        action="store_false",
        dest="use_mmap",
        help="Disable memory-mapped I/O in reading files",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)
