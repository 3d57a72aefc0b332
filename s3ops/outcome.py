# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Map request outcomes onto the error taxonomy.

:func:`classify` is a pure function of the transport error, status and
body.  A 404 is always reported as :class:`NotFoundError`, including for
deletes; callers that want idempotent deletes must opt in themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from s3ops.dispatch import RequestOutcome
from s3ops.errors import (
    AuthenticationError,
    NetworkError,
    NotFoundError,
    OperationError,
    RequestError,
    ServerError,
    UnknownStatusError,
)


@dataclass(frozen=True)
class Success:
    """A 2xx response; the body is passed through unchanged."""

    status: int
    body: bytes = b""


def classify(outcome: RequestOutcome) -> Success | OperationError:
    """Classify a request outcome.

    Args:
        outcome: The dispatcher's result.

    Returns:
        Success for 2xx responses, otherwise the matching OperationError.
    """
    if outcome.transport_error is not None:
        return NetworkError(outcome.transport_error)

    status = outcome.http_status
    body = outcome.body
    if status is None:
        return UnknownStatusError(None, body)
    if 200 <= status < 300:
        return Success(status, body)
    if status == 403:
        return AuthenticationError(status, body)
    if status == 404:
        return NotFoundError(status, body)
    if status in (400, 409):
        return RequestError(status, body)
    if status >= 500:
        return ServerError(status, body)
    return UnknownStatusError(status, body)
