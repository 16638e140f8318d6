"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from signedgen.core.models import CodegenConfig


@pytest.fixture
def config() -> CodegenConfig:
    """Default codegen settings."""
    return CodegenConfig()


@pytest.fixture
def php_path(tmp_path: Path) -> Path:
    """A target path that uses block comments."""
    return tmp_path / "Demo.php"


@pytest.fixture
def restore_logging():
    """Put the signedgen logger back the way it was after a test reconfigures it."""
    logger = logging.getLogger("signedgen")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for h in logger.handlers:
        if h not in handlers:
            h.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
