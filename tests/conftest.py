# tests/conftest.py
"""Shared pytest fixtures for all test modules.

Provides common fixtures for:
- Command factories with valid defaults
- Temporary trove file paths
- Repository singleton reset
- Mock environment variables
"""

import os
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from src.core.commands.models import HoardCommand

FIXED_TIME = datetime(2024, 1, 15, 14, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_command() -> Callable[..., HoardCommand]:
    """Build valid commands, overriding any field by keyword.

    Returns:
        Factory creating HoardCommand instances with fixed timestamps.
    """

    def factory(**overrides) -> HoardCommand:
        fields = {
            "name": "list-files",
            "namespace": "default",
            "command": "ls -la",
            "description": "List all files",
            "tags": ("fs", "ls"),
            "created": FIXED_TIME,
            "modified": FIXED_TIME,
            "last_used": FIXED_TIME,
        }
        fields.update(overrides)
        return HoardCommand(**fields)

    return factory


@pytest.fixture
def trove_path(tmp_path) -> str:
    """Path to a not yet existing trove file in a temporary directory.

    Returns:
        Path to the trove file as a string.
    """
    return str(tmp_path / "hoard" / "trove.yml")


@pytest.fixture
def reset_repository_singleton() -> Generator[None, None, None]:
    """Reset the TroveRepository singleton before and after test.

    This fixture ensures each test gets a fresh repository instance.
    """
    import src.core.commands.repository

    original = src.core.commands.repository._repository
    src.core.commands.repository._repository = None

    yield

    src.core.commands.repository._repository = original


@pytest.fixture
def mock_env_vars() -> Generator[dict[str, str], None, None]:
    """Provide mock environment variables for testing.

    Yields:
        Dictionary of mock environment variables that were set.
    """
    mock_vars = {
        "HOARD_DEFAULT_NAMESPACE": "work",
        "HOARD_PARAMETER_TOKEN": "$",
        "HOARD_PARAMETER_ENDING_TOKEN": "}",
        "HOARD_LOG_LEVEL": "DEBUG",
    }

    with patch.dict(os.environ, mock_vars):
        yield mock_vars
