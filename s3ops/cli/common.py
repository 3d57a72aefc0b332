# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Flags and helpers shared by the verb CLIs."""

from __future__ import annotations

import argparse
import sys
from typing import TextIO

from s3ops import __version__
from s3ops.credentials import (
    ADDRESSING_STYLES,
    ENV_ACCESS_KEY_ID,
    ENV_DEFAULT_DOMAIN,
    ENV_DEFAULT_REGION,
    ENV_SECRET_ACCESS_KEY,
    ENV_SECURITY_TOKEN,
    build_environment,
)
from s3ops.engine import EngineConfig, EngineResult
from s3ops.errors import OperationError, UsageError, body_preview


_ENV_EPILOG = f"""\
environment:
  {ENV_ACCESS_KEY_ID:<22} access key id (when --key is not given)
  {ENV_SECRET_ACCESS_KEY:<22} secret access key (when --secret is not given)
  {ENV_SECURITY_TOKEN:<22} session token (when --token is not given)
  {ENV_DEFAULT_REGION:<22} region (when --region is not given)
  {ENV_DEFAULT_DOMAIN:<22} service domain (default: amazonaws.com)

exit status: 0 on success, 1 if a request failed, 2 on usage errors.\
"""


def build_parser(prog: str, description: str) -> argparse.ArgumentParser:
    """Create a verb parser with the shared connection flags.

    The verb adds its own positional arguments and options.
    """
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_ENV_EPILOG,
    )
    parser.add_argument(
        "-k",
        "--key",
        metavar="KEY_ID",
        help=f"AWS access key id (default: ${ENV_ACCESS_KEY_ID})",
    )
    parser.add_argument(
        "-s",
        "--secret",
        metavar="FILE",
        dest="secret_file",
        help="file holding the AWS secret access key on its first line",
    )
    parser.add_argument(
        "-t",
        "--token",
        help=f"AWS security token (default: ${ENV_SECURITY_TOKEN})",
    )
    parser.add_argument(
        "-r",
        "--region",
        help=f"AWS region (default: ${ENV_DEFAULT_REGION})",
    )
    parser.add_argument(
        "--domain",
        help=(
            "S3 service domain or S3-compatible host[:port] "
            f"(default: ${ENV_DEFAULT_DOMAIN} or amazonaws.com)"
        ),
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="use plain HTTP instead of HTTPS",
    )
    parser.add_argument(
        "--addressing",
        choices=ADDRESSING_STYLES,
        default="path",
        help="bucket addressing style (default: path)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="request timeout in seconds (default: transport default)",
    )
    parser.add_argument(
        "--env-file",
        metavar="FILE",
        help="read default environment values from a dotenv file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log the request line and response status",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log canonical request and string to sign",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> EngineConfig:
    """Build the engine configuration from parsed flags.

    Raises:
        UsageError: If the dotenv file does not exist.
    """
    return EngineConfig(
        key=args.key,
        secret_file=args.secret_file,
        token=args.token,
        region=args.region,
        domain=args.domain,
        insecure=args.insecure,
        addressing=args.addressing,
        timeout=args.timeout,
        env=build_environment(args.env_file),
    )


def report_usage_error(
    prog: str, error: UsageError, stream: TextIO | None = None
) -> None:
    """Print a usage error in the ``prog: Name: message`` format."""
    out = stream if stream is not None else sys.stderr
    print(f"{prog}: {type(error).__name__}: {error}", file=out)


def report(
    prog: str, result: EngineResult, stream: TextIO | None = None
) -> None:
    """Print a failed result for the operator.

    Successful results print nothing.  Operation errors are followed by
    the (truncated) response body, verbatim.
    """
    if result.ok or result.error is None:
        return
    out = stream if stream is not None else sys.stderr
    error = result.error
    if isinstance(error, UsageError):
        report_usage_error(prog, error, out)
        return

    assert isinstance(error, OperationError)
    name = type(error).__name__
    if error.status is None:
        print(f"{prog}: {name}: {result.resource}: {error}", file=out)
        return

    print(
        f"{prog}: {name}: {result.resource}: "
        f"HTTP {error.status} {error.summary}",
        file=out,
    )
    preview = body_preview(error.body)
    if preview:
        print(preview, file=out)
