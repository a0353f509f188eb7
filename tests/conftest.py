"""Shared pytest fixtures for Countrydex tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from countrydex.api.main import create_app
from countrydex.core.config import CountrydexConfig
from countrydex.core.records_db import RecordsDB

# Smallest valid PNG signature followed by filler; the server never decodes images.
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> CountrydexConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        CountrydexConfig instance for testing
    """
    return CountrydexConfig(
        data_dir=str(temp_dir / "data"),
        uploads_dir=str(temp_dir / "uploads"),
        _env_file=None,
    )


@pytest.fixture
def uploads_dir(test_config: CountrydexConfig) -> Path:
    """The content directory used by the test configuration."""
    return test_config.uploads_dir


@pytest.fixture
def records_db(test_config: CountrydexConfig) -> RecordsDB:
    """Open the records database the test application also uses."""
    return RecordsDB(test_config.database_path)


@pytest.fixture
def test_client(test_config: CountrydexConfig) -> Generator[TestClient, None, None]:
    """Run the application against the temporary configuration.

    The client is used as a context manager so the lifespan handler opens
    the records database.
    """
    app = create_app(test_config)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def png_bytes() -> bytes:
    """Bytes for a small fake PNG upload."""
    return PNG_BYTES


@pytest.fixture
def sample_entries(records_db: RecordsDB, uploads_dir: Path) -> list[dict]:
    """Insert three entries with image files on disk.

    Returns:
        The created entries in insertion order (oldest first)
    """
    entries = []
    for index, name in enumerate(["Japan", "Peru", "Iceland"]):
        filename = f"170000000000{index}-12345.png"
        (uploads_dir / filename).write_bytes(PNG_BYTES)
        entries.append(records_db.insert(name, filename))
    return entries
