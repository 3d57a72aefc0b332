# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""``s3-delete``: delete objects from an S3-compatible store.

Usage:
    s3-delete -k AKIA... -s ~/.s3secret -r eu-central-1 /bucket/file.ext
    s3-delete /bucket/a.txt /bucket/b.txt    # credentials from environment

Each resource path is signed and sent as its own request, so a failure
on one path does not affect the others.  A missing object (HTTP 404) is
reported as ``NotFoundError``.
"""

from __future__ import annotations

import sys

from s3ops.cli.common import (
    build_parser,
    config_from_args,
    report,
    report_usage_error,
)
from s3ops.engine import execute, worst_status
from s3ops.errors import UsageError
from s3ops.logging import configure_logging, level_for_flags


PROG = "s3-delete"


def main(argv: list[str] | None = None) -> int:
    """Run the delete command.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).

    Returns:
        Process exit code.
    """
    parser = build_parser(PROG, "Delete objects from an S3 bucket.")
    parser.add_argument(
        "resource_paths",
        nargs="+",
        metavar="RESOURCE_PATH",
        help="object to delete, as /bucket/key",
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

    results = []
    for resource_path in args.resource_paths:
        result = execute("DELETE", resource_path, config)
        report(PROG, result)
        results.append(result)
    return worst_status(results).exit_code


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    cli()
