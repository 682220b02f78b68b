from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures building small, independent partition trees.
3. Isolation of process-wide state (default session, instance counters).
"""

import os
import sys
from typing import Any, Dict, Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from partitionfs.core import session as session_module  # noqa: E402
from partitionfs.domain.constants import CONFIG_ENV_VAR  # noqa: E402
from partitionfs.domain.node_models import Partition  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def partition() -> Partition:
    """
    Return an empty partition with the default name and capacity.

    Returns:
        Partition: A fresh tree root, independent of the process-wide session.
    """
    return Partition("root", 10_000)


@pytest.fixture
def small_partition() -> Partition:
    """Return an empty partition with a deliberately tight capacity."""
    return Partition("disk", 100)


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete session configuration dictionary.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "root_name": "volume",
        "capacity": 5000,
        "indent_width": 4,
        "log_level": "DEBUG",
        "log_file": None,
    }


@pytest.fixture
def fresh_default_session(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """
    Drop the process-wide session so the next root_instance() builds a new one.

    The previous session is restored afterwards by monkeypatch.
    """
    monkeypatch.setattr(session_module, "_DEFAULT_SESSION", None)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    yield
