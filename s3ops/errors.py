# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Error taxonomy shared by the engine and the verb CLIs.

Two families exist:

- :class:`UsageError` subclasses are raised while resolving credentials
  and validating the resource path.  They are always detected before a
  request is built, and the CLIs report them as a bad invocation.
- :class:`OperationError` subclasses describe a request that was sent
  (or attempted) and failed.  The outcome classifier returns them as
  values; they carry the HTTP status and the raw response body.

None of these are retried.
"""

from __future__ import annotations


# Response bodies are truncated to this many bytes in error messages.
BODY_PREVIEW_BYTES = 1024


def body_preview(body: bytes, limit: int = BODY_PREVIEW_BYTES) -> str:
    """Decode a response body for display, truncating long bodies."""
    text = body[:limit].decode("utf-8", errors="replace").strip()
    if len(body) > limit:
        text += f" ... ({len(body) - limit} more bytes)"
    return text


class S3OpsError(Exception):
    """Base exception for all s3ops errors."""


# ---------------------------------------------------------------------------
# Usage errors (pre-dispatch)
# ---------------------------------------------------------------------------


class UsageError(S3OpsError):
    """Invocation problem detected before any network call."""


class MissingCredentialError(UsageError):
    """A required credential or endpoint field resolved to empty.

    Attributes:
        field: Name of the missing field (``access_key_id``,
            ``secret_access_key`` or ``region``).
    """

    def __init__(self, field: str, hint: str = "") -> None:
        self.field = field
        message = f"missing {field}"
        if hint:
            message += f" ({hint})"
        super().__init__(message)


class CredentialFileError(UsageError):
    """The secret file could not be read or holds no secret."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot use secret file {path}: {reason}")


class InvalidResourcePath(UsageError):
    """The resource path does not have the ``/bucket/key`` shape."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"invalid resource path {path!r}: {reason}")


# ---------------------------------------------------------------------------
# Operation errors (post-dispatch)
# ---------------------------------------------------------------------------


class OperationError(S3OpsError):
    """A dispatched request failed.

    Attributes:
        status: HTTP status code, or None when no response was received.
        body: Raw response body (empty when no response was received).
    """

    summary = "request failed"

    def __init__(self, status: int | None = None, body: bytes = b"") -> None:
        self.status = status
        self.body = body
        super().__init__(self._message())

    def _message(self) -> str:
        message = f"HTTP {self.status}: {self.summary}"
        preview = body_preview(self.body)
        if preview:
            message += f"\n{preview}"
        return message


class NetworkError(OperationError):
    """No HTTP response was received (DNS, connection, TLS, timeout)."""

    summary = "network failure"

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(None, b"")

    def _message(self) -> str:
        return f"{self.summary}: {type(self.cause).__name__}: {self.cause}"


class AuthenticationError(OperationError):
    """HTTP 403: signature mismatch or expired credentials."""

    summary = "access denied (signature mismatch or expired credentials)"


class NotFoundError(OperationError):
    """HTTP 404: the bucket or object does not exist."""

    summary = "resource not found"


class RequestError(OperationError):
    """HTTP 400 or 409: the server rejected the request."""

    summary = "request rejected"


class ServerError(OperationError):
    """HTTP 5xx: server-side failure."""

    summary = "server error"


class UnknownStatusError(OperationError):
    """Any status the classifier has no dedicated error for."""

    summary = "unexpected status"
