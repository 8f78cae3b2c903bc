"""Global fixtures for the configunit test suite."""

import logging
import os

import pytest

from configunit.adapters.io.logging_setup import reset_logging
from configunit.adapters.io.output import MemoryOutputAdapter


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep CONFIGUNIT_* variables from the outer shell out of every test."""
    for key in list(os.environ):
        if key.startswith("CONFIGUNIT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any root logger changes made through setup_logging."""
    root_logger = logging.getLogger()
    original_level = root_logger.level
    yield
    reset_logging()
    root_logger.setLevel(original_level)


@pytest.fixture
def memory_output():
    """Return an output sink that records lines."""
    return MemoryOutputAdapter()
