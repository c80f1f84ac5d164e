"""Run the examples embedded in module docstrings."""

import doctest
import importlib

import pytest

DOCTEST_MODULES = [
    "stream_temporal.core.operators",
    "stream_temporal.core.value_source",
    "stream_temporal.gen.algebra",
    "stream_temporal.gen.elementwise",
    "stream_temporal.analysis.checks",
]


@pytest.mark.parametrize("module_name", DOCTEST_MODULES)
def test_module_doctests(module_name):
    module = importlib.import_module(module_name)
    results = doctest.testmod(module, verbose=False)

    assert results.attempted > 0
    assert results.failed == 0
