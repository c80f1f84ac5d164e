"""Checks of temporal properties on materialized sequences."""

from .checks import (
    match_mask,
    match_indices,
    count_matches,
    at_most_once,
    is_frozen_after,
    is_followed_by,
    is_eventually_followed,
    first_is,
    last_is,
    strip_first,
    strip_last
)

__all__ = [
    'match_mask',
    'match_indices',
    'count_matches',
    'at_most_once',
    'is_frozen_after',
    'is_followed_by',
    'is_eventually_followed',
    'first_is',
    'last_is',
    'strip_first',
    'strip_last'
]
