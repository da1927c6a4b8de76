"""
tests/conftest.py — Shared fixtures and path setup for all tests.

Adds the project root to sys.path so unit tests can import:
    from checkmate import builder, WhenFalse
    from config.settings import Settings
    from scripts.check_env import check_home
"""
import io
import pathlib
import sys

import pytest

# Make project root importable without installing as a package
PROJECT_ROOT = pathlib.Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def out() -> io.StringIO:
    """In-memory stream standing in for stdout in report assertions."""
    return io.StringIO()


@pytest.fixture
def java_home(tmp_path: pathlib.Path) -> pathlib.Path:
    """A directory laid out like java-1.8/bin/java; returns the archive root."""
    java = tmp_path / "java-1.8" / "bin" / "java"
    java.parent.mkdir(parents=True)
    java.write_text("foo", encoding="utf-8")
    return tmp_path
