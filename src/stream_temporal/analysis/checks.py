"""Temporal property checks over finished sequences.

These are the invariants the generator combinators guarantee, written as
plain predicates over a materialized sequence so tests (and the command
line) can verify operator outputs and generated samples alike.
"""

import numpy as np
from typing import Any, Callable, Iterable, List

Predicate = Callable[[Any], bool]


def match_mask(seq: Iterable[Any], pred: Predicate) -> np.ndarray:
    """Boolean mask of the elements satisfying *pred*.

    Examples
    --------
    >>> match_mask([0, 1, 0], lambda x: x == 0).tolist()
    [True, False, True]
    """
    items = list(seq)
    return np.fromiter((bool(pred(item)) for item in items), dtype=bool, count=len(items))


def match_indices(seq: Iterable[Any], pred: Predicate) -> np.ndarray:
    """Indices of the elements satisfying *pred*, in order."""
    return np.flatnonzero(match_mask(seq, pred))


def count_matches(seq: Iterable[Any], pred: Predicate) -> int:
    return int(match_mask(seq, pred).sum())


def at_most_once(seq: Iterable[Any], pred: Predicate) -> bool:
    """Whether *pred* holds for zero or one element."""
    return count_matches(seq, pred) <= 1


def is_frozen_after(seq: Iterable[Any], pred: Predicate, value: Any) -> bool:
    """Whether only *value* follows the first ``pred`` match, at least once.

    A sequence without a match trivially satisfies the property; a match
    in last position does not, the frozen value must recur at least once.

    Examples
    --------
    >>> is_frozen_after([1, 0, 9, 9], lambda x: x == 0, 9)
    True
    >>> is_frozen_after([1, 0, 9, 2], lambda x: x == 0, 9)
    False
    """
    items = list(seq)
    indices = match_indices(items, pred)
    if indices.size == 0:
        return True
    tail = items[int(indices[0]) + 1:]
    return len(tail) > 0 and all(item == value for item in tail)


def _value_mask(items: List[Any], value: Any) -> np.ndarray:
    return np.fromiter((item == value for item in items), dtype=bool, count=len(items))


def is_followed_by(seq: Iterable[Any], pred: Predicate, value: Any) -> bool:
    """Whether each ``pred`` match is immediately followed by *value*.

    A *value* anywhere else (not right after a match) fails the check too.

    Examples
    --------
    >>> is_followed_by([1, 0, "n", 2, 0, "n"], lambda x: x == 0, "n")
    True
    >>> is_followed_by([1, 0, 2, "n"], lambda x: x == 0, "n")
    False
    """
    items = list(seq)
    if not items:
        return True

    matched = match_mask(items, pred)
    if matched[-1]:
        return False

    is_value = _value_mask(items, value)
    after_match = np.zeros(len(items), dtype=bool)
    after_match[1:] = matched[:-1]

    if (after_match & ~is_value).any():
        return False
    return not (is_value & ~matched & ~after_match).any()


def is_eventually_followed(seq: Iterable[Any], pred: Predicate, value: Any) -> bool:
    """Whether each ``pred`` match is paired with a later *value*.

    Walks a running balance: +1 per match, -1 per *value*. The balance
    must never drop below zero and must end at zero.

    Examples
    --------
    >>> is_eventually_followed([0, 1, 0, "e", 2, "e"], lambda x: x == 0, "e")
    True
    >>> is_eventually_followed(["e", 0], lambda x: x == 0, "e")
    False
    """
    items = list(seq)
    steps = match_mask(items, pred).astype(int)
    steps -= _value_mask(items, value).astype(int)
    balance = np.cumsum(steps)
    return bool((balance >= 0).all() and (balance.size == 0 or balance[-1] == 0))


def first_is(seq: Iterable[Any], value: Any) -> bool:
    items = list(seq)
    return bool(items) and items[0] == value


def last_is(seq: Iterable[Any], value: Any) -> bool:
    items = list(seq)
    return bool(items) and items[-1] == value


def strip_first(seq: Iterable[Any]) -> List[Any]:
    """Drop the first element, inverse of a ``starts_with`` insertion."""
    return list(seq)[1:]


def strip_last(seq: Iterable[Any]) -> List[Any]:
    """Drop the last element, inverse of an ``ends_with`` insertion."""
    return list(seq)[:-1]
