"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Keeps the process-wide default configuration isolated per test
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from hashtree.config import set_default_config  # noqa: E402
from hashtree.crypto.hashing import HashlibAlgorithm  # noqa: E402

from fixtures import RecordingAlgorithm, make_values  # noqa: E402


_ENV_VARS = ["HASHTREE_HASH_ALGORITHM", "HASHTREE_LOG_LEVEL", "HASHTREE_LOG_FILE"]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear hashtree env vars and the cached default config around each test."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def sha256_algorithm():
    """Provide a fresh SHA-256 HashAlgorithm."""
    return HashlibAlgorithm("sha256")


@pytest.fixture
def recording_algorithm():
    """Provide a HashAlgorithm that records its calls."""
    return RecordingAlgorithm()


@pytest.fixture
def five_values():
    """Provide five distinct leaf values."""
    return make_values(5)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
