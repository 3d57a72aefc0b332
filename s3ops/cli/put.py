# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""``s3-put``: upload a file to an S3-compatible store.

Usage:
    s3-put -r eu-central-1 -T file.ext /bucket/file.ext
    s3-put -r eu-central-1 -T page.html -c text/html -p /bucket/index.html
"""

from __future__ import annotations

import mimetypes
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


PROG = "s3-put"

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class UploadFileError(UsageError):
    """The file to upload cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot read upload file {path}: {reason}")


def guess_content_type(path: Path) -> str:
    """Guess a content type from the file name."""
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or DEFAULT_CONTENT_TYPE


def read_upload(path: Path) -> bytes:
    """Read the whole upload body.

    Raises:
        UploadFileError: If the file is missing or unreadable.
    """
    if not path.is_file():
        raise UploadFileError(path, "file does not exist")
    try:
        return path.read_bytes()
    except OSError as e:
        raise UploadFileError(path, str(e)) from e


def main(argv: list[str] | None = None) -> int:
    """Run the put command.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``).

    Returns:
        Process exit code.
    """
    parser = build_parser(PROG, "Upload a file to an S3 bucket.")
    parser.add_argument(
        "-T",
        "--upload-file",
        metavar="FILE",
        type=Path,
        required=True,
        help="file to upload",
    )
    parser.add_argument(
        "-c",
        "--content-type",
        help="content type (default: guessed from the file name)",
    )
    parser.add_argument(
        "-p",
        "--public",
        action="store_true",
        help="grant public read access to the uploaded object",
    )
    parser.add_argument(
        "resource_path",
        metavar="RESOURCE_PATH",
        help="destination, as /bucket/key",
    )
    args = parser.parse_args(argv)
    configure_logging(
        level=level_for_flags(verbose=args.verbose, debug=args.debug)
    )

    try:
        config = config_from_args(args)
        body = read_upload(args.upload_file)
    except UsageError as e:
        report_usage_error(PROG, e)
        return 2

    headers = {
        "content-type": args.content_type
        or guess_content_type(args.upload_file)
    }
    if args.public:
        headers["x-amz-acl"] = "public-read"

    result = execute(
        "PUT", args.resource_path, config, body=body, extra_headers=headers
    )
    report(PROG, result)
    return result.status.exit_code


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    cli()
