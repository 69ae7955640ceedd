"""Shared fixtures for the rsync runner tests."""

import logging
import sys
from pathlib import Path

import pytest

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

KB = 1024


def make_file(path: Path, size: int) -> Path:
    """Create a file of the given logical size (sparse where supported)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'wb') as f:
        f.truncate(size)
    return path


def stub_flags(exit_code: int) -> str:
    """Flags that make the Python interpreter behave like a tool exiting with exit_code."""
    return f'-c "import sys; sys.exit({exit_code})"'


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("rsync_runner")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def big_source(tmp_path: Path) -> Path:
    """A source folder holding a little more than 4 MB at the top level."""
    source = tmp_path / "source"
    make_file(source / "album.flac", 4097 * KB)
    return source


@pytest.fixture
def tool_log(tmp_path: Path) -> Path:
    log = tmp_path / "logs" / "music-sync.log"
    log.parent.mkdir(parents=True, exist_ok=True)
    log.write_text(
        "Deleting old.txt\nTransferred new.txt\ndeleting cache.tmp\n", encoding="utf-8"
    )
    return log


@pytest.fixture
def clean_log(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "music-sync-clean.txt"
