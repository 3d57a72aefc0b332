# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Resource path parsing and S3 URI encoding."""

from __future__ import annotations

from dataclasses import dataclass

from s3ops.errors import InvalidResourcePath


_DOT_SEGMENTS = frozenset({".", ".."})

_AWS_UNRESERVED = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~"
)


def uri_encode(value: str, *, encode_slash: bool = True) -> str:
    """URI-encode a value using AWS's specific rules.

    - Unreserved characters are not encoded: A-Z, a-z, 0-9, -, _, ., ~
    - All other characters are UTF-8 percent-encoded as %XX (uppercase hex)
    - Forward slashes (/) are optionally preserved

    Args:
        value: String to encode.
        encode_slash: If True, encode '/'; if False, preserve '/'.

    Returns:
        URI-encoded string.
    """
    result: list[str] = []
    for ch in value:
        if ch in _AWS_UNRESERVED:
            result.append(ch)
        elif ch == "/" and not encode_slash:
            result.append("/")
        else:
            result.extend(f"%{byte:02X}" for byte in ch.encode("utf-8"))
    return "".join(result)


def canonical_uri(path: str) -> str:
    """Build the S3 canonical URI for a raw request path.

    S3 uses single encoding: the path is an unencoded object key and
    every segment is encoded exactly once.  A literal ``%`` in a key is
    encoded as ``%25``.  Double slashes are kept since they are part of
    the key.

    Args:
        path: Unencoded request path.

    Returns:
        URI-encoded canonical path.
    """
    if not path:
        return "/"
    return uri_encode(path, encode_slash=False)


@dataclass(frozen=True)
class ResourcePath:
    """An object addressed as ``/bucket/key``.

    Attributes:
        bucket: Bucket name (first path segment).
        key: Object key (everything after the bucket, may contain ``/``).
    """

    bucket: str
    key: str

    @classmethod
    def parse(cls, path: str) -> ResourcePath:
        """Parse and validate a resource path.

        ``.`` and ``..`` segments are rejected: HTTP clients remove them
        from the URL before sending, so the request would address a
        different object than the one signed.

        Args:
            path: Path such as ``/mybucket/dir/file.ext``.

        Returns:
            The parsed resource path.

        Raises:
            InvalidResourcePath: If the path does not start with ``/``,
                lacks a bucket or an object key, or has a dot segment.
        """
        if not path.startswith("/"):
            raise InvalidResourcePath(path, "must start with '/'")
        bucket, sep, key = path[1:].partition("/")
        if not bucket:
            raise InvalidResourcePath(path, "missing bucket name")
        if not sep or not key:
            raise InvalidResourcePath(path, "missing object key after bucket")
        if any(segment in _DOT_SEGMENTS for segment in path[1:].split("/")):
            raise InvalidResourcePath(
                path, "'.' and '..' segments are not allowed"
            )
        return cls(bucket=bucket, key=key)

    @property
    def path(self) -> str:
        """Unencoded path-style path ``/bucket/key``."""
        return f"/{self.bucket}/{self.key}"

    def request_path(self, addressing: str) -> str:
        """Unencoded request path for the given addressing style.

        Path style keeps the bucket in the path; virtual-hosted style
        moves it into the host name, leaving only ``/key``.
        """
        if addressing == "virtual":
            return f"/{self.key}"
        return self.path

    def __str__(self) -> str:
        return self.path
