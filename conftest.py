"""
Root conftest to ensure proper import paths.

This file exists at the project root to ensure that the project directory
is in Python's sys.path before pytest starts collecting tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure project root is in Python path
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ============================================================================
# Shared Test Fixtures
# ============================================================================

@pytest.fixture
def mock_logger():
    """Create a mock structlog-style logger.

    The logger supports:
    - bind(**kwargs) -> logger (returns itself with context)
    - debug/info/warning/error/critical methods
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger
