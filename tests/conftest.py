"""
Shared fixtures for reservoir tests.
"""

import pytest

from reservoir.core.registries import RegistryManager


@pytest.fixture
def registry() -> RegistryManager:
    """Fresh registry so model types defined in a test do not leak."""
    return RegistryManager()


@pytest.fixture(autouse=True)
def _restore_reservoir_logger():
    """Undo logger configuration done by CLI invocations so it does not leak between tests."""
    import logging

    logger = logging.getLogger("reservoir")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
