import sys
import os

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from config import get_settings


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings are cached per process; drop them around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
