from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime
from pathlib import Path

import pytest

from gitquery.models.commit import Author, Commit, CommitMessage
from gitquery.types import Hash


@pytest.fixture(autouse=True)
def configure_test_logging() -> Generator[None, None, None]:
    """Configure structlog for test environment.

    Runs automatically for all tests so decoder debug events go to stderr
    at WARNING level and stay out of captured stdout.
    """
    from gitquery.logging import configure_logging

    configure_logging(level=logging.WARNING)
    yield


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files.

    Also saves and restores the current working directory to prevent
    tests that use os.chdir() from affecting other tests.
    """
    original_cwd = os.getcwd()
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
    os.chdir(original_cwd)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove all GITQUERY_ environment variables for clean testing."""
    original_env = os.environ.copy()
    for key in list(os.environ.keys()):
        if key.startswith("GITQUERY_"):
            del os.environ[key]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def sample_config_yaml() -> str:
    """Return sample gitquery.yaml content for testing."""
    return """
logging:
  level: "debug"
  json_output: true

parsing:
  log_delimiter: "\\x1f"
"""


@pytest.fixture
def make_commit() -> Callable[..., Commit]:
    """Factory for commits with sensible defaults.

    Example:
        >>> commit = make_commit("abc1234", parents=("p1", "p2"))
    """

    def _make(
        hash_value: str = "a" * 40,
        *,
        subject: str = "Initial commit",
        body: str | None = None,
        author: str = "Alice",
        email: str = "alice@example.com",
        when: int = 1_700_000_000,
        parents: tuple[str, ...] = (),
    ) -> Commit:
        timestamp = datetime.fromtimestamp(when, tz=UTC)
        identity = Author(name=author, email=email, timestamp=timestamp)
        return Commit(
            hash=Hash(hash_value),
            author=identity,
            committer=identity,
            message=CommitMessage(subject=subject, body=body),
            timestamp=timestamp,
            parents=tuple(Hash(p) for p in parents),
        )

    return _make
