import logging
import pytest
import sys
import os

# Add src dir to path to allow importing argguard without installing it
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from argguard.config import GuardConfig
from argguard.registry import build_registry


@pytest.fixture(scope="function", autouse=True)
def configure_argguard_logging():
    """Show argguard debug logs for failing tests, restore the level afterwards."""
    argguard_logger = logging.getLogger('argguard')
    original_level = argguard_logger.level
    argguard_logger.setLevel(logging.DEBUG)
    yield
    argguard_logger.setLevel(original_level)

@pytest.fixture
def registry():
    """A registry with validation enabled, independent of ARGGUARD_NDEBUG."""
    return build_registry(GuardConfig(disabled=False))

@pytest.fixture
def disabled_registry():
    return build_registry(GuardConfig(disabled=True))
