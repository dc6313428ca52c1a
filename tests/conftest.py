"""Pytest configuration and fixtures for resumectl tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import MagicMock

import pytest

from resumectl.models.upload import SelectedFile


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
default_profile: test
output_format: table

profiles:
  test:
    url: https://api-test.example.org/api/v1
    verify_ssl: false
    timeout: 30
    batch_size: 3

  production:
    url: https://api.example.org/api/v1
    verify_ssl: true
    timeout: 600
"""


@pytest.fixture
def make_files() -> Callable[..., list[SelectedFile]]:
    """Build in-memory files named ``resume<N><ext>``."""

    def _make(count: int, ext: str = ".pdf", size: int = 1024) -> list[SelectedFile]:
        return [
            SelectedFile.from_bytes(f"resume{i}{ext}", b"x" * size) for i in range(1, count + 1)
        ]

    return _make


@pytest.fixture
def mock_client() -> MagicMock:
    """Mock ResumeClient acknowledging every uploaded file."""
    client = MagicMock()
    client.base_url = "https://api.example.org/api/v1"
    client.is_authenticated = True
    client.upload_files.side_effect = lambda parts: {
        "results": [{"fileName": name} for name, _, _ in parts]
    }
    return client
