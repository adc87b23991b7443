from unittest.mock import MagicMock

import pytest
from rich.console import Console

from userpurge.core.repositories import InMemoryUserRepository
from userpurge.models.user import UserHandle
from userpurge.utils.rich_utils import THEME, set_console


@pytest.fixture(autouse=True)
def fresh_console():
    """Install a wide shared Rich console per test so output follows capture.

    The console has no fixed file, so it writes to whatever ``sys.stdout``
    is at print time, including ``CliRunner``'s buffer.
    """
    set_console(Console(theme=THEME, highlight=False, width=200))
    yield
    set_console(None)


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Stage uploads in a per-test directory."""
    directory = tmp_path / "uploads"
    directory.mkdir()
    monkeypatch.setenv("USERPURGE_UPLOAD_DIR", str(directory))
    return directory


@pytest.fixture
def write_csv(tmp_path):
    """Create a CSV file in the test directory and return its path."""

    def _write(content: str, name: str = "users.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def users():
    """A small user store population."""
    return [
        UserHandle(user_id="1", name="bob"),
        UserHandle(user_id="2", name="dupe"),
        UserHandle(user_id="3", name="dupe"),
        UserHandle(user_id="4", name="sleepy", active=False),
    ]


@pytest.fixture
def repository(users):
    """In-memory repository seeded with the default population."""
    return InMemoryUserRepository(users)


@pytest.fixture
def mock_response():
    """Create a mock response object for requests."""
    response = MagicMock()
    response.status_code = 200
    response.headers = {}
    response.text = ""
    response.json = MagicMock(return_value=[])
    return response
