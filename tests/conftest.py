"""
Pytest configuration and shared fixtures for the stream-temporal test suite.
"""

import pytest
import sys
from pathlib import Path

from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from stream_temporal.config import set_global_seed, set_config, Settings
from stream_temporal.gen import integers, lists


# Shared hypothesis profiles, selected with --hypothesis-profile
hypothesis_settings.register_profile("ci", max_examples=200, deadline=None)
hypothesis_settings.register_profile("dev", max_examples=50, deadline=None)


@pytest.fixture(scope="session")
def global_test_seed():
    """Set global random seed for all tests to ensure reproducibility."""
    seed = 42
    set_global_seed(seed)
    return seed


@pytest.fixture(autouse=True)
def default_settings():
    """Reset the global configuration to the default preset for each test."""
    settings = Settings.from_preset("default")
    set_config(settings)
    yield settings
    set_config(Settings.from_preset("default"))


@pytest.fixture
def int_list_strategy():
    """Hypothesis strategy of small integer lists, zero appearing often."""
    return st.lists(st.integers(min_value=-3, max_value=3), max_size=15)


@pytest.fixture
def int_list_sampler():
    """Numpy sampler of small integer lists, zero appearing often."""
    return lists(integers(-3, 3), max_size=15)


@pytest.fixture
def is_zero():
    """Trigger predicate used throughout the suite."""
    return lambda x: x == 0


class CallCounter:
    """Zero-argument provider recording how often it is called."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


@pytest.fixture
def call_counter():
    """Factory for counting providers."""
    return CallCounter


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "property: marks hypothesis property tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark integration tests."""
    for item in items:
        if "integration" in item.nodeid or "end_to_end" in item.nodeid:
            item.add_marker(pytest.mark.integration)
