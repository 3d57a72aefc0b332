# Copyright (c) 2026 Pyry Haulos
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Shared pytest fixtures used across multiple test packages."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from s3ops.logging import SecretFilter
from tests.helpers import ACCESS_KEY_ID, SECRET_ACCESS_KEY


@pytest.fixture(autouse=True)
def _isolate_logging() -> Iterator[None]:
    """Restore root logger state and registered secrets after each test.

    The CLIs call ``configure_logging``, which replaces root handlers.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    SecretFilter.clear_secrets()


@pytest.fixture
def env() -> dict[str, str]:
    """A complete environment for credential resolution."""
    return {
        "AWS_ACCESS_KEY_ID": ACCESS_KEY_ID,
        "AWS_SECRET_ACCESS_KEY": SECRET_ACCESS_KEY,
        "AWS_DEFAULT_REGION": "eu-central-1",
    }


@pytest.fixture
def secret_file(tmp_path: Path) -> Path:
    """A secret file holding ``mysecret`` with a trailing newline."""
    path = tmp_path / "secret"
    path.write_text("mysecret\n")
    return path
