"""
stream-temporal - Temporal insertion operators for Python iterables.

This package provides lazy stream operators that insert values at temporally
defined positions, and generators of sequences known to satisfy the matching
temporal properties for property-based testing.
"""

__version__ = "0.1.0"

from .core import (
    Literal,
    Eager,
    FromHistory,
    value_source,
    starts_with,
    ends_with,
    next,
    always
)

__all__ = [
    'Literal',
    'Eager',
    'FromHistory',
    'value_source',
    'starts_with',
    'ends_with',
    'next',
    'always'
]
