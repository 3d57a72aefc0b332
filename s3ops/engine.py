# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Shared request engine used by every verb CLI.

One call to :func:`execute` handles one object: resolve credentials,
validate the resource path, sign, dispatch, classify.  Usage problems
stop the pipeline before any request is built.  The engine never exits
the process; it returns an :class:`EngineResult` that the CLI maps to an
exit code.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from s3ops.credentials import Credentials, Endpoint, resolve
from s3ops.dispatch import dispatch
from s3ops.errors import OperationError, S3OpsError, UsageError
from s3ops.outcome import Success, classify
from s3ops.resource import ResourcePath
from s3ops.signing import sign_request


logger = logging.getLogger(__name__)


class ResultStatus(Enum):
    """Tri-state result exposed to the CLIs."""

    SUCCESS = "success"
    USAGE_ERROR = "usage_error"
    OPERATION_ERROR = "operation_error"

    @property
    def exit_code(self) -> int:
        """Conventional process exit code for this status."""
        return _EXIT_CODES[self]


_EXIT_CODES = {
    ResultStatus.SUCCESS: 0,
    ResultStatus.OPERATION_ERROR: 1,
    ResultStatus.USAGE_ERROR: 2,
}


@dataclass(frozen=True)
class EngineConfig:
    """Immutable settings for one CLI invocation.

    Values left as None fall back to the environment during resolution.
    """

    key: str | None = None
    secret_file: str | Path | None = None
    token: str | None = None
    region: str | None = None
    domain: str | None = None
    insecure: bool = False
    addressing: str = "path"
    timeout: float | None = None
    env: Mapping[str, str] = field(default_factory=dict)

    def resolve(self) -> tuple[Credentials, Endpoint]:
        """Resolve credentials and endpoint for this configuration."""
        return resolve(
            self.key,
            self.secret_file,
            self.token,
            self.region,
            self.domain,
            self.env,
            insecure=self.insecure,
            addressing=self.addressing,
        )


@dataclass(frozen=True)
class EngineResult:
    """Outcome of one engine run.

    Attributes:
        status: Tri-state status.
        resource: The resource path as given by the caller.
        body: Response body on success.
        http_status: Response status, when a response was received.
        error: The usage or operation error, if any.
    """

    status: ResultStatus
    resource: str
    body: bytes = b""
    http_status: int | None = None
    error: S3OpsError | None = None

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.SUCCESS


def worst_status(results: list[EngineResult]) -> ResultStatus:
    """Combine several results: usage errors outrank operation errors."""
    statuses = {r.status for r in results}
    if ResultStatus.USAGE_ERROR in statuses:
        return ResultStatus.USAGE_ERROR
    if ResultStatus.OPERATION_ERROR in statuses:
        return ResultStatus.OPERATION_ERROR
    return ResultStatus.SUCCESS


def execute(
    method: str,
    resource_path: str,
    config: EngineConfig,
    *,
    body: bytes = b"",
    extra_headers: Mapping[str, str] | None = None,
) -> EngineResult:
    """Run one signed request against the object store.

    Args:
        method: HTTP method (``DELETE``, ``GET`` or ``PUT``).
        resource_path: ``/bucket/key`` path.
        config: Invocation settings.
        body: Upload body (PUT only).
        extra_headers: Additional headers to sign and send.

    Returns:
        The engine result.
    """
    try:
        resource = ResourcePath.parse(resource_path)
        credentials, endpoint = config.resolve()
    except UsageError as e:
        logger.debug("Rejected %s %s: %s", method, resource_path, e)
        return EngineResult(
            status=ResultStatus.USAGE_ERROR, resource=resource_path, error=e
        )

    signed = sign_request(
        method,
        resource,
        credentials,
        endpoint,
        body=body,
        extra_headers=extra_headers,
    )
    outcome = dispatch(signed, endpoint, timeout=config.timeout)
    result = classify(outcome)

    if isinstance(result, Success):
        return EngineResult(
            status=ResultStatus.SUCCESS,
            resource=resource_path,
            body=result.body,
            http_status=result.status,
        )

    assert isinstance(result, OperationError)
    logger.debug(
        "%s %s failed: %s", method, resource_path, type(result).__name__
    )
    return EngineResult(
        status=ResultStatus.OPERATION_ERROR,
        resource=resource_path,
        http_status=result.status,
        error=result,
    )
