"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_home(monkeypatch):
    """Point schemacat at a throwaway home so tests never touch ~/.schemacat."""
    temp_dir = tempfile.mkdtemp()
    monkeypatch.setenv("SCHEMACAT_HOME", temp_dir)
    monkeypatch.delenv("SCHEMACAT_CATALOG_DIR", raising=False)
    monkeypatch.delenv("SCHEMACAT_COMPARE_CONSTRAINTS", raising=False)
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp, ignore_errors=True)
