# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""``s3-get``: download an object from an S3-compatible store.

Usage:
    s3-get -r eu-central-1 /bucket/file.ext > file.ext
    s3-get -r eu-central-1 -o file.ext /bucket/file.ext
"""

from __future__ import annotations

import sys
from pathlib import Path

from s3ops.cli.common import (
    build_parser,
    config_from_args,
    report,
    report_usage_error,
)
from s3ops.engine import execute
from s3ops.errors import UsageError
from s3ops.logging import configure_logging, level_for_flags


PROG = "s3-get"


class OutputFileError(UsageError):
    """The downloaded object cannot be written to the output file."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot write output file {path}: {reason}")


def write_output(path: Path, body: bytes) -> None:
    """Write the object body to *path*.

    Raises:
        OutputFileError: If the file cannot be written.
    """
    try:
        path.write_bytes(body)
    except OSError as e:
        raise OutputFileError(path, e.strerror or str(e)) from e


def main(argv: list[str] | None = None) -> int:
    """Run the get command.

    The object body is written to ``--output`` or to stdout.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).

    Returns:
        Process exit code.
    """
    parser = build_parser(PROG, "Download an object from an S3 bucket.")
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        type=Path,
        help="write the object to FILE instead of stdout",
    )
    parser.add_argument(
        "resource_path",
        metavar="RESOURCE_PATH",
        help="object to download, as /bucket/key",
    )
    args = parser.parse_args(argv)
    configure_logging(
        level=level_for_flags(verbose=args.verbose, debug=args.debug)
    )

    try:
        config = config_from_args(args)
    except UsageError as e:
        report_usage_error(PROG, e)
        return 2

    result = execute("GET", args.resource_path, config)
    if not result.ok:
        report(PROG, result)
        return result.status.exit_code

    if args.output is not None:
        try:
            write_output(args.output, result.body)
        except OutputFileError as e:
            report_usage_error(PROG, e)
            return 2
    else:
        sys.stdout.buffer.write(result.body)
        sys.stdout.buffer.flush()
    return result.status.exit_code


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    cli()
