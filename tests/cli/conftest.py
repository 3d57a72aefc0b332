# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Fixtures for the verb CLI tests."""

import pytest

from s3ops.credentials import (
    ENV_ACCESS_KEY_ID,
    ENV_DEFAULT_DOMAIN,
    ENV_DEFAULT_REGION,
    ENV_SECRET_ACCESS_KEY,
    ENV_SECURITY_TOKEN,
)
from tests.helpers import ACCESS_KEY_ID, SECRET_ACCESS_KEY


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable the resolver reads."""
    for name in (
        ENV_ACCESS_KEY_ID,
        ENV_SECRET_ACCESS_KEY,
        ENV_SECURITY_TOKEN,
        ENV_DEFAULT_REGION,
        ENV_DEFAULT_DOMAIN,
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def aws_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Process environment with complete credentials."""
    clean_env.setenv(ENV_ACCESS_KEY_ID, ACCESS_KEY_ID)
    clean_env.setenv(ENV_SECRET_ACCESS_KEY, SECRET_ACCESS_KEY)
    clean_env.setenv(ENV_DEFAULT_REGION, "eu-central-1")
    return clean_env
