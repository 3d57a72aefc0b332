# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Credential and endpoint resolution.

Every field follows the same precedence: an explicit command-line value
wins, then the matching environment variable, then empty.  The secret
access key is special: it is read from a secret file when one is given
and only falls back to ``AWS_SECRET_ACCESS_KEY`` otherwise.

The environment is passed in as a plain mapping (usually built by
:func:`build_environment`) so resolution has no hidden global inputs.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from s3ops.errors import CredentialFileError, MissingCredentialError
from s3ops.logging import SecretFilter


logger = logging.getLogger(__name__)

ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_SECURITY_TOKEN = "AWS_SECURITY_TOKEN"
ENV_DEFAULT_REGION = "AWS_DEFAULT_REGION"
ENV_DEFAULT_DOMAIN = "S3_DEFAULT_DOMAIN"

DEFAULT_DOMAIN = "amazonaws.com"

ADDRESSING_STYLES = ("path", "virtual")


@dataclass(frozen=True)
class Credentials:
    """AWS credentials used to sign one invocation.

    Attributes:
        access_key_id: Access key ID (appears in the Authorization header).
        secret_access_key: Secret used for signing-key derivation.
        session_token: Optional STS token, forwarded as
            ``x-amz-security-token``.
    """

    access_key_id: str
    secret_access_key: str
    session_token: str | None = None

    def __post_init__(self) -> None:
        """Register the secret and token for log redaction."""
        SecretFilter.register_secret(self.secret_access_key)
        SecretFilter.register_secret(self.session_token)

    def __repr__(self) -> str:
        token = "set" if self.session_token else "unset"
        return (
            f"Credentials(access_key_id={self.access_key_id!r}, "
            f"secret_access_key=<hidden>, session_token=<{token}>)"
        )


@dataclass(frozen=True)
class Endpoint:
    """Where requests are sent.

    Attributes:
        region: Region used in the credential scope and the AWS host name.
        domain: Service domain; ``amazonaws.com`` or a custom
            S3-compatible host (optionally with ``:port``).
        scheme: ``https``, or ``http`` when explicitly marked insecure.
        addressing: ``path`` (``host/bucket/key``) or ``virtual``
            (``bucket.host/key``).
    """

    region: str
    domain: str = DEFAULT_DOMAIN
    scheme: str = "https"
    addressing: str = "path"

    @property
    def service_host(self) -> str:
        """Host name of the S3 service without any bucket prefix.

        The AWS domain gets the regional ``s3.<region>.`` prefix.  Any
        other domain names an S3-compatible server directly.
        """
        if self.domain == DEFAULT_DOMAIN:
            return f"s3.{self.region}.{self.domain}"
        return self.domain

    def host_for(self, bucket: str) -> str:
        """Host header value for a request against *bucket*."""
        if self.addressing == "virtual":
            return f"{bucket}.{self.service_host}"
        return self.service_host


def read_secret_file(path: str | Path) -> str:
    """Read a secret access key from a file.

    The first non-empty line, with surrounding whitespace stripped, is
    the secret.

    Args:
        path: Path to the secret file.

    Returns:
        The secret value.

    Raises:
        CredentialFileError: If the file does not exist, cannot be read,
            or holds no non-empty line.
    """
    secret_path = Path(path)
    if not secret_path.is_file():
        raise CredentialFileError(str(path), "file does not exist")
    try:
        content = secret_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialFileError(str(path), str(e)) from e

    for line in content.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    raise CredentialFileError(str(path), "file is empty")


def build_environment(
    env_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Build the environment mapping consulted by :func:`resolve`.

    Values from an optional dotenv file are used as defaults; the process
    environment always wins over them.

    Args:
        env_file: Optional path to a ``.env`` file.
        environ: Process environment (defaults to ``os.environ``).

    Returns:
        Merged environment mapping.
    """
    merged: dict[str, str] = {}
    if env_file is not None:
        if not Path(env_file).is_file():
            raise CredentialFileError(str(env_file), "file does not exist")
        values = dotenv_values(env_file)
        merged.update({k: v for k, v in values.items() if v is not None})
        logger.debug("Loaded %d values from %s", len(merged), env_file)
    merged.update(os.environ if environ is None else environ)
    return merged


def _pick(explicit: str | None, env: Mapping[str, str], name: str) -> str:
    if explicit:
        return explicit
    return env.get(name, "")


def resolve(
    key: str | None = None,
    secret_file: str | Path | None = None,
    token: str | None = None,
    region: str | None = None,
    domain: str | None = None,
    env: Mapping[str, str] | None = None,
    *,
    insecure: bool = False,
    addressing: str = "path",
) -> tuple[Credentials, Endpoint]:
    """Resolve credentials and endpoint from flags and environment.

    Args:
        key: Explicit access key ID.
        secret_file: Path to a file holding the secret access key.
        token: Explicit session token.
        region: Explicit region.
        domain: Explicit service domain.
        env: Environment mapping (defaults to ``os.environ``).
        insecure: Use plain HTTP instead of HTTPS.
        addressing: ``path`` or ``virtual`` addressing.

    Returns:
        Tuple of (credentials, endpoint).

    Raises:
        CredentialFileError: If the secret file cannot be used.
        MissingCredentialError: If the access key ID, secret access key
            or region resolves to empty.
    """
    if env is None:
        env = os.environ
    if addressing not in ADDRESSING_STYLES:
        raise ValueError(f"Unknown addressing style: {addressing!r}")

    access_key_id = _pick(key, env, ENV_ACCESS_KEY_ID)
    if secret_file:
        secret_access_key = read_secret_file(secret_file)
    else:
        secret_access_key = env.get(ENV_SECRET_ACCESS_KEY, "")
    session_token = _pick(token, env, ENV_SECURITY_TOKEN)
    resolved_region = _pick(region, env, ENV_DEFAULT_REGION)
    resolved_domain = _pick(domain, env, ENV_DEFAULT_DOMAIN) or DEFAULT_DOMAIN

    if not access_key_id:
        raise MissingCredentialError(
            "access_key_id", f"use --key or set {ENV_ACCESS_KEY_ID}"
        )
    if not secret_access_key:
        raise MissingCredentialError(
            "secret_access_key",
            f"use --secret or set {ENV_SECRET_ACCESS_KEY}",
        )
    if not resolved_region:
        raise MissingCredentialError(
            "region", f"use --region or set {ENV_DEFAULT_REGION}"
        )

    credentials = Credentials(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token or None,
    )
    endpoint = Endpoint(
        region=resolved_region,
        domain=resolved_domain,
        scheme="http" if insecure else "https",
        addressing=addressing,
    )
    logger.debug(
        "Resolved endpoint %s://%s (region %s, %s addressing)",
        endpoint.scheme,
        endpoint.service_host,
        endpoint.region,
        endpoint.addressing,
    )
    return credentials, endpoint
