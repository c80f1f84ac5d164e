"""Sequence augmentor: temporal insertion operators over lazy iterables.

This module contains the stream-side components:
- Value sources (literal, eager provider, history provider)
- The four single-pass operators and the ``always`` trigger states
"""

from .value_source import (
    Literal,
    Eager,
    FromHistory,
    ValueSource,
    value_source,
    history_free_source,
    ensure_predicate
)
from .operators import (
    never,
    starts_with,
    ends_with,
    next,
    always,
    Accumulating,
    Triggered,
    HistoryView
)

__all__ = [
    # Value sources
    'Literal',
    'Eager',
    'FromHistory',
    'ValueSource',
    'value_source',
    'history_free_source',
    'ensure_predicate',

    # Operators
    'never',
    'starts_with',
    'ends_with',
    'next',
    'always',

    # Trigger states
    'Accumulating',
    'Triggered',
    'HistoryView'
]
