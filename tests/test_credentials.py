# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for credential and endpoint resolution."""

import dataclasses
from pathlib import Path

import pytest

from s3ops.credentials import (
    DEFAULT_DOMAIN,
    Credentials,
    Endpoint,
    build_environment,
    read_secret_file,
    resolve,
)
from s3ops.errors import CredentialFileError, MissingCredentialError
from s3ops.logging import SecretFilter
from tests.helpers import ACCESS_KEY_ID, SECRET_ACCESS_KEY


class TestReadSecretFile:
    """Tests for read_secret_file."""

    def test_trailing_newline_stripped(self, secret_file: Path) -> None:
        assert read_secret_file(secret_file) == "mysecret"

    def test_first_non_empty_line(self, tmp_path: Path) -> None:
        path = tmp_path / "secret"
        path.write_text("\n   \n  first  \nsecond\n")
        assert read_secret_file(path) == "first"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CredentialFileError, match="does not exist"):
            read_secret_file(tmp_path / "nope")

    def test_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(CredentialFileError):
            read_secret_file(tmp_path)

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "secret"
        path.write_text("\n\n")
        with pytest.raises(CredentialFileError, match="empty"):
            read_secret_file(path)


class TestResolvePrecedence:
    """Explicit values win over the environment."""

    def test_explicit_key_wins(self, env: dict[str, str]) -> None:
        credentials, _ = resolve(key="AKIAEXPLICIT", env=env)
        assert credentials.access_key_id == "AKIAEXPLICIT"

    def test_environment_key_used(self, env: dict[str, str]) -> None:
        credentials, _ = resolve(env=env)
        assert credentials.access_key_id == ACCESS_KEY_ID
        assert credentials.secret_access_key == SECRET_ACCESS_KEY

    def test_no_key_fails(self, env: dict[str, str]) -> None:
        del env["AWS_ACCESS_KEY_ID"]
        with pytest.raises(MissingCredentialError) as exc_info:
            resolve(env=env)
        assert exc_info.value.field == "access_key_id"

    def test_secret_file_overrides_environment(
        self, env: dict[str, str], secret_file: Path
    ) -> None:
        credentials, _ = resolve(secret_file=secret_file, env=env)
        assert credentials.secret_access_key == "mysecret"

    def test_missing_secret_file_fails_even_with_env(
        self, env: dict[str, str], tmp_path: Path
    ) -> None:
        with pytest.raises(CredentialFileError):
            resolve(secret_file=tmp_path / "missing", env=env)

    def test_no_secret_fails(self, env: dict[str, str]) -> None:
        del env["AWS_SECRET_ACCESS_KEY"]
        with pytest.raises(MissingCredentialError) as exc_info:
            resolve(env=env)
        assert exc_info.value.field == "secret_access_key"

    def test_no_region_fails(self, env: dict[str, str]) -> None:
        del env["AWS_DEFAULT_REGION"]
        with pytest.raises(MissingCredentialError) as exc_info:
            resolve(env=env)
        assert exc_info.value.field == "region"

    def test_explicit_region_wins(self, env: dict[str, str]) -> None:
        _, endpoint = resolve(region="us-west-2", env=env)
        assert endpoint.region == "us-west-2"

    def test_token_from_environment(self, env: dict[str, str]) -> None:
        env["AWS_SECURITY_TOKEN"] = "env-token"
        credentials, _ = resolve(env=env)
        assert credentials.session_token == "env-token"

    def test_explicit_token_wins(self, env: dict[str, str]) -> None:
        env["AWS_SECURITY_TOKEN"] = "env-token"
        credentials, _ = resolve(token="cli-token", env=env)
        assert credentials.session_token == "cli-token"

    def test_no_token_is_none(self, env: dict[str, str]) -> None:
        credentials, _ = resolve(env=env)
        assert credentials.session_token is None


class TestResolveEndpoint:
    """Tests for domain, scheme and addressing."""

    def test_default_domain(self, env: dict[str, str]) -> None:
        _, endpoint = resolve(env=env)
        assert endpoint.domain == DEFAULT_DOMAIN
        assert endpoint.scheme == "https"
        assert endpoint.addressing == "path"

    def test_domain_from_environment(self, env: dict[str, str]) -> None:
        env["S3_DEFAULT_DOMAIN"] = "minio.internal:9000"
        _, endpoint = resolve(env=env)
        assert endpoint.domain == "minio.internal:9000"

    def test_explicit_domain_wins(self, env: dict[str, str]) -> None:
        env["S3_DEFAULT_DOMAIN"] = "minio.internal:9000"
        _, endpoint = resolve(domain="storage.example.com", env=env)
        assert endpoint.domain == "storage.example.com"

    def test_insecure_uses_http(self, env: dict[str, str]) -> None:
        _, endpoint = resolve(env=env, insecure=True)
        assert endpoint.scheme == "http"

    def test_unknown_addressing_rejected(self, env: dict[str, str]) -> None:
        with pytest.raises(ValueError, match="addressing"):
            resolve(env=env, addressing="dns")


class TestEndpoint:
    """Tests for host derivation."""

    def test_aws_service_host(self) -> None:
        endpoint = Endpoint(region="eu-central-1")
        assert endpoint.service_host == "s3.eu-central-1.amazonaws.com"

    def test_custom_domain_used_verbatim(self) -> None:
        endpoint = Endpoint(region="us-east-1", domain="localhost:9000")
        assert endpoint.service_host == "localhost:9000"

    def test_path_style_host(self) -> None:
        endpoint = Endpoint(region="eu-central-1")
        assert endpoint.host_for("mybucket") == "s3.eu-central-1.amazonaws.com"

    def test_virtual_style_host(self) -> None:
        endpoint = Endpoint(region="eu-central-1", addressing="virtual")
        assert (
            endpoint.host_for("mybucket")
            == "mybucket.s3.eu-central-1.amazonaws.com"
        )


class TestCredentials:
    """Tests for the Credentials dataclass."""

    def test_frozen(self) -> None:
        credentials = Credentials(ACCESS_KEY_ID, SECRET_ACCESS_KEY)
        with pytest.raises(dataclasses.FrozenInstanceError):
            credentials.access_key_id = "other"  # type: ignore[misc]

    def test_repr_hides_secret(self) -> None:
        credentials = Credentials(ACCESS_KEY_ID, SECRET_ACCESS_KEY, "tok")
        assert SECRET_ACCESS_KEY not in repr(credentials)
        assert "tok" not in repr(credentials)

    def test_secrets_registered_for_redaction(self) -> None:
        Credentials(ACCESS_KEY_ID, SECRET_ACCESS_KEY, "session-tok")
        assert SECRET_ACCESS_KEY in SecretFilter._secrets
        assert "session-tok" in SecretFilter._secrets


class TestBuildEnvironment:
    """Tests for dotenv merging."""

    def test_without_file_copies_environ(self) -> None:
        assert build_environment(environ={"A": "1"}) == {"A": "1"}

    def test_file_values_are_defaults(self, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(
            "AWS_DEFAULT_REGION=eu-west-1\nAWS_ACCESS_KEY_ID=AKIAFILE\n"
        )
        merged = build_environment(
            env_file, environ={"AWS_ACCESS_KEY_ID": "AKIAPROCESS"}
        )
        assert merged["AWS_DEFAULT_REGION"] == "eu-west-1"
        assert merged["AWS_ACCESS_KEY_ID"] == "AKIAPROCESS"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CredentialFileError):
            build_environment(tmp_path / ".env", environ={})
