# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""AWS Signature Version 4 for S3 requests.

Builds the canonical request and string-to-sign, derives the signing key
and produces the ``Authorization`` header.  Only header-based SigV4 with
the ``s3`` service is implemented.

No boto3/botocore dependency; uses only stdlib hashlib/hmac.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import NamedTuple

from s3ops.credentials import Credentials, Endpoint
from s3ops.resource import ResourcePath, canonical_uri, uri_encode


logger = logging.getLogger(__name__)

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
SCOPE_TERMINATOR = "aws4_request"

AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
SCOPE_DATE_FORMAT = "%Y%m%d"

SHA256_EMPTY = hashlib.sha256(b"").hexdigest()


# ---------------------------------------------------------------------------
# Canonical request construction
# ---------------------------------------------------------------------------


def payload_hash(body: bytes = b"") -> str:
    """Hex SHA-256 of the request body (empty digest for no body)."""
    return hashlib.sha256(body).hexdigest()


def amz_date(timestamp: datetime) -> str:
    """Format a timestamp for the ``x-amz-date`` header."""
    return timestamp.astimezone(UTC).strftime(AMZ_DATE_FORMAT)


def credential_scope(timestamp: datetime, region: str) -> str:
    """Build the credential scope ``YYYYMMDD/region/s3/aws4_request``."""
    date = timestamp.astimezone(UTC).strftime(SCOPE_DATE_FORMAT)
    return f"{date}/{region}/{SERVICE}/{SCOPE_TERMINATOR}"


def canonical_query_string(query: str) -> str:
    """Build canonical query string.

    Not used by delete/get/put, which send no query parameters.

    Args:
        query: Raw query string (without leading ?).

    Returns:
        Canonical query string (sorted, encoded).
    """
    if not query:
        return ""

    params = urllib.parse.parse_qsl(query, keep_blank_values=True)

    # URI-encode names and values, sort by encoded name then value
    encoded = [(uri_encode(k), uri_encode(v)) for k, v in params]
    encoded.sort()

    return "&".join(f"{k}={v}" for k, v in encoded)


def normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Lower-case header names and trim values.

    Leading/trailing whitespace is removed and inner runs of whitespace
    are collapsed to a single space.

    Raises:
        ValueError: If two names collide case-insensitively.
    """
    normalized: dict[str, str] = {}
    for name, value in headers.items():
        lower = name.lower()
        if lower in normalized:
            raise ValueError(f"Duplicate header: {name}")
        normalized[lower] = " ".join(str(value).split())
    return normalized


def canonical_headers_string(headers: Mapping[str, str]) -> str:
    """Build canonical headers string.

    Args:
        headers: Normalized headers (lower-case name -> trimmed value).

    Returns:
        Canonical headers string (each line: "name:value" + newline).
    """
    return "".join(f"{name}:{headers[name]}\n" for name in sorted(headers))


def signed_headers_string(headers: Mapping[str, str]) -> str:
    """Semicolon-separated sorted header names."""
    return ";".join(sorted(headers))


class CanonicalRequest(NamedTuple):
    """Output of :func:`build_canonical_request`."""

    canonical_request: str
    string_to_sign: str
    credential_scope: str
    signed_headers: str


def build_string_to_sign(
    timestamp: str, scope: str, canonical_request: str
) -> str:
    """Build the SigV4 string to sign.

    Args:
        timestamp: ISO8601 basic timestamp (the ``x-amz-date`` value).
        scope: Credential scope (date/region/service/aws4_request).
        canonical_request: The canonical request string.

    Returns:
        String to sign.
    """
    return "\n".join(
        [
            ALGORITHM,
            timestamp,
            scope,
            hashlib.sha256(canonical_request.encode("utf-8")).hexdigest(),
        ]
    )


def build_canonical_request(
    method: str,
    path: str,
    headers: Mapping[str, str],
    payload_hash: str,
    timestamp: datetime,
    region: str,
    query: str = "",
) -> CanonicalRequest:
    """Build the canonical request, string-to-sign and credential scope.

    Every header passed in is signed.

    Args:
        method: HTTP method.
        path: Unencoded request path.
        headers: Headers to sign; must include ``host``, ``x-amz-date``
            and ``x-amz-content-sha256``.
        payload_hash: Hex SHA-256 of the body.
        timestamp: Signing time; must match the ``x-amz-date`` header.
        region: Region for the credential scope.
        query: Raw query string (without leading ?).

    Returns:
        CanonicalRequest tuple.
    """
    normalized = normalize_headers(headers)
    signed = signed_headers_string(normalized)

    creq = "\n".join(
        [
            method.upper(),
            canonical_uri(path),
            canonical_query_string(query),
            canonical_headers_string(normalized),
            signed,
            payload_hash,
        ]
    )
    scope = credential_scope(timestamp, region)
    string_to_sign = build_string_to_sign(amz_date(timestamp), scope, creq)
    return CanonicalRequest(creq, string_to_sign, scope, signed)


# ---------------------------------------------------------------------------
# SigV4 signing
# ---------------------------------------------------------------------------


def _hmac_sha256(key: bytes, msg: str | bytes) -> bytes:
    """HMAC-SHA256 helper."""
    if isinstance(msg, str):
        msg = msg.encode("utf-8")
    return hmac.new(key, msg, hashlib.sha256).digest()


def derive_signing_key(
    secret_key: str, date: str, region: str, service: str = SERVICE
) -> bytes:
    """Derive the SigV4 signing key.

    Args:
        secret_key: AWS secret access key.
        date: Date string (YYYYMMDD).
        region: AWS region.
        service: AWS service name.

    Returns:
        Derived signing key bytes.
    """
    k_date = _hmac_sha256(("AWS4" + secret_key).encode("utf-8"), date)
    k_region = _hmac_sha256(k_date, region)
    k_service = _hmac_sha256(k_region, service)
    return _hmac_sha256(k_service, SCOPE_TERMINATOR)


def sign(secret_key: str, date: str, region: str, string_to_sign: str) -> str:
    """Compute the hex SigV4 signature of *string_to_sign*."""
    signing_key = derive_signing_key(secret_key, date, region)
    return hmac.new(
        signing_key, string_to_sign.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def authorization_header(
    access_key_id: str, scope: str, signed_headers: str, signature: str
) -> str:
    """Format the ``Authorization`` header value."""
    return (
        f"{ALGORITHM} Credential={access_key_id}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )


# ---------------------------------------------------------------------------
# Request signing orchestration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SignedRequest:
    """A fully signed request, ready for dispatch.

    ``headers`` holds every header to send as sorted lower-case
    ``(name, value)`` pairs, ``authorization`` included.
    """

    method: str
    host: str
    canonical_uri: str
    canonical_query_string: str
    headers: tuple[tuple[str, str], ...]
    payload_hash: str
    amz_date: str
    authorization: str
    body: bytes = b""

    @property
    def target(self) -> str:
        """Request target (path plus optional query) for the URL."""
        if self.canonical_query_string:
            return f"{self.canonical_uri}?{self.canonical_query_string}"
        return self.canonical_uri

    def url(self, scheme: str) -> str:
        """Absolute URL for this request."""
        return f"{scheme}://{self.host}{self.target}"


def sign_request(
    method: str,
    resource: ResourcePath,
    credentials: Credentials,
    endpoint: Endpoint,
    *,
    body: bytes = b"",
    extra_headers: Mapping[str, str] | None = None,
    timestamp: datetime | None = None,
) -> SignedRequest:
    """Sign a request for *resource*.

    The timestamp is captured once here and shared by ``x-amz-date`` and
    the credential scope.

    Args:
        method: HTTP method.
        resource: Target object.
        credentials: Signing credentials.
        endpoint: Target endpoint (host and addressing style).
        body: Request body (uploads only).
        extra_headers: Additional headers to sign and send (for example
            ``content-type``).
        timestamp: Signing time; defaults to now (UTC, whole seconds).

    Returns:
        The signed request.
    """
    if not credentials.access_key_id or not credentials.secret_access_key:
        raise ValueError("Cannot sign without an access key and secret")

    if timestamp is None:
        timestamp = datetime.now(UTC).replace(microsecond=0)

    host = endpoint.host_for(resource.bucket)
    path = resource.request_path(endpoint.addressing)
    body_hash = payload_hash(body)
    date_header = amz_date(timestamp)

    headers: dict[str, str] = {}
    if extra_headers:
        headers.update(normalize_headers(extra_headers))
    headers["host"] = host
    headers["x-amz-date"] = date_header
    headers["x-amz-content-sha256"] = body_hash
    if credentials.session_token:
        headers["x-amz-security-token"] = credentials.session_token

    creq = build_canonical_request(
        method=method,
        path=path,
        headers=headers,
        payload_hash=body_hash,
        timestamp=timestamp,
        region=endpoint.region,
    )
    logger.debug("Canonical request:\n%s", creq.canonical_request)
    logger.debug("String to sign:\n%s", creq.string_to_sign)

    signature = sign(
        credentials.secret_access_key,
        creq.credential_scope.split("/")[0],
        endpoint.region,
        creq.string_to_sign,
    )
    auth = authorization_header(
        credentials.access_key_id,
        creq.credential_scope,
        creq.signed_headers,
        signature,
    )

    normalized = normalize_headers(headers)
    normalized["authorization"] = auth
    return SignedRequest(
        method=method.upper(),
        host=host,
        canonical_uri=canonical_uri(path),
        canonical_query_string="",
        headers=tuple(sorted(normalized.items())),
        payload_hash=body_hash,
        amz_date=date_header,
        authorization=auth,
        body=body,
    )
