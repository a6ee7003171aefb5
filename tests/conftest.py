"""
XtreamTV Test Configuration

Shared fixtures and configuration for all tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio

from tests.fixtures import FakeXtreamProvider
from tests.fixtures.mock_responses import SERVER_URL
from xtreamtv.session import XtreamSession
from xtreamtv.storage.memory import MemoryStore
from xtreamtv.xtream.client import XtreamClient
from xtreamtv.xtream.models import XtreamCredentials


# ============ Provider & Session Fixtures ============


@pytest.fixture
def provider() -> FakeXtreamProvider:
    return FakeXtreamProvider()


@pytest.fixture
def client(provider: FakeXtreamProvider) -> XtreamClient:
    return XtreamClient(timeout=5, transport=provider.transport())


@pytest.fixture
def credentials() -> XtreamCredentials:
    return XtreamCredentials(username="alice", password="s3cret", server_url=SERVER_URL + "/")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def session(client: XtreamClient, store: MemoryStore) -> XtreamSession:
    return XtreamSession(client, store)


@pytest_asyncio.fixture
async def logged_in_session(
    session: XtreamSession, credentials: XtreamCredentials
) -> XtreamSession:
    await session.login(credentials)
    return session


# ============ Temporary File Fixtures ============


@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(scope="function")
def temp_config_file(temp_dir: Path) -> Path:
    """Create a temporary config file."""
    config_file = temp_dir / "config.yaml"
    config_content = """
server:
  host: "127.0.0.1"
  port: 8420
  debug: true

provider:
  server_url: "http://iptv.example.com:8080/"
  username: "alice"
  password: "s3cret"

cache:
  ttl_hours: 12

storage:
  backend: "memory"

logging:
  level: "DEBUG"
"""
    config_file.write_text(config_content)
    return config_file


# ============ Environment Fixtures ============


@pytest.fixture(autouse=True)
def clean_environment():
    """Clean environment variables for each test."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("XTREAMTV_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


# ============ Markers ============


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
