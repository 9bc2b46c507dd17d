"""Shared pytest fixtures for all tests."""

import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def temp_project_dir() -> Generator[Path, None, None]:
    """Create a temporary project directory for testing.

    Yields:
        Path object pointing to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fixtures_hurl_dir() -> Path:
    """Return the path to the bundled Hurl fixtures."""
    return FIXTURES_DIR / "hurl"


@pytest.fixture
def hurl_dir(temp_project_dir: Path, fixtures_hurl_dir: Path) -> Path:
    """Copy the Hurl fixtures into a writable api/hurl directory.

    Args:
        temp_project_dir: Temporary directory fixture
        fixtures_hurl_dir: Bundled fixtures

    Returns:
        Path to the api/hurl directory
    """
    target = temp_project_dir / "api" / "hurl"
    shutil.copytree(fixtures_hurl_dir, target)
    return target


@pytest.fixture
def bruno_dir(temp_project_dir: Path) -> Path:
    """Return the (not yet created) api/bruno directory path."""
    return temp_project_dir / "api" / "bruno"


@pytest.fixture
def single_request_hurl() -> str:
    """A Hurl file with one fully featured request."""
    return """# Register a new user
POST {{host}}/api/users
Content-Type: application/json
{
  "user": {
    "username": "auth_{{uid}}",
    "password": "password123"
  }
}
HTTP 201
[Captures]
token: jsonpath "$.user.token"
[Asserts]
jsonpath "$.user.username" == "auth_{{uid}}"
jsonpath "$.user.bio" == null
"""
