"""Shared pytest setup for the redline test suite."""

import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config_logging import reset_config  # noqa: E402


@pytest.fixture
def no_api_key(monkeypatch):
    """Run with GEMINI_API_KEY unset."""
    monkeypatch.delenv('GEMINI_API_KEY', raising=False)
    reset_config()
    yield
    reset_config()
