"""Temporal stream operators.

Each operator takes any iterable and returns a lazy iterator that inserts or
substitutes values at a temporally defined position:

- ``starts_with``: before the first element
- ``ends_with``: after the last element, or in place of the rest of the
  stream once a predicate matches
- ``next``: right after the first element matching a predicate
- ``always``: from the point where a predicate over the history holds, every
  remaining position

The source iterable is never mutated and is pulled one element at a time,
so infinite inputs are fine as long as the caller stops pulling.
"""

import logging
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, List, Sequence, Tuple, TypeVar, Union

from .value_source import (
    ensure_predicate,
    history_free_source,
    value_source,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


def never(_item: Any) -> bool:
    """Default ``ends_with`` predicate: nothing halts the stream."""
    return False


def starts_with(enum: Iterable[T], value: Any) -> Iterator[T]:
    """Add a value at the beginning of a stream.

    The value is resolved exactly once, when the first output element is
    pulled.

    Examples
    --------
    >>> list(starts_with([1, 2, 3], 0))
    [0, 1, 2, 3]
    >>> list(starts_with([1, 2, 3], lambda: 0))
    [0, 1, 2, 3]
    >>> list(starts_with([], 0))
    [0]
    """
    source = history_free_source(value, "starts_with")

    def _stream():
        yield source.resolve()
        yield from enum

    return _stream()


def ends_with(enum: Iterable[T], value: Any,
              pred: Callable[[T], bool] = never) -> Iterator[T]:
    """Add a value at the end of a stream, or halt on a predicate.

    The value source is resolved once immediately, giving the replacement
    emitted if ``pred`` matches an element. In that case the replacement is
    the last output element and nothing further is pulled from *enum*.
    When the input runs out without a match the source is resolved again
    and that value is appended, so a provider may run twice.

    Examples
    --------
    >>> list(ends_with([1, 2, 3], 4))
    [1, 2, 3, 4]
    >>> list(ends_with([1, 2, 3], 4, lambda x: x == 2))
    [1, 4]
    >>> list(ends_with([1, 2, 3], 4, lambda _: True))
    [4]
    """
    source = history_free_source(value, "ends_with")
    ensure_predicate(pred)
    replacement = source.resolve()

    def _stream():
        for item in enum:
            if pred(item):
                logger.debug("ends_with halted on %r", item)
                yield replacement
                return
            yield item
        yield source.resolve()

    return _stream()


def next(enum: Iterable[T], value: Any, pred: Callable[[T], bool]) -> Iterator[T]:
    """Insert a value right after the first element matching ``pred``.

    Later matches pass through untouched.

    Examples
    --------
    >>> list(next([1, 2, 3], 0, lambda x: x == 2))
    [1, 2, 0, 3]
    >>> list(next([1, 2, 3, 2, 4], "X", lambda x: x == 2))
    [1, 2, 'X', 3, 2, 4]
    """
    source = history_free_source(value, "next")
    ensure_predicate(pred)

    def _stream():
        inserted = source.resolve()
        triggered = False
        for item in enum:
            yield item
            if not triggered and pred(item):
                triggered = True
                yield inserted

    return _stream()


class HistoryView(SequenceABC):
    """Read-only view of the first *length* elements of a growing list.

    The list only ever grows, so the view keeps showing the same elements
    after later appends.
    """

    __slots__ = ("_items", "_length")

    def __init__(self, items: List[Any], length: int):
        self._items = items
        self._length = length

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(self._items[i] for i in range(*index.indices(self._length)))
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("history index out of range")
        return self._items[index]

    def __eq__(self, other):
        if isinstance(other, SequenceABC) and not isinstance(other, str):
            return tuple(self) == tuple(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"HistoryView({tuple(self)!r})"


@dataclass(frozen=True)
class Accumulating:
    """``always`` state before the trigger: the elements seen so far.

    *seen* is appended to in place, one element per step.
    """

    seen: List[Any] = field(default_factory=list)

    @property
    def history(self) -> HistoryView:
        return HistoryView(self.seen, len(self.seen))


@dataclass(frozen=True)
class Triggered:
    """``always`` state after the trigger: the frozen value."""

    value: Any


AlwaysState = Union[Accumulating, Triggered]


def _step_always(state: AlwaysState, item: Any, source,
                 pred: Callable[[Sequence[Any]], bool]) -> Tuple[Any, AlwaysState]:
    """Advance the ``always`` state machine by one input element.

    Returns the element to emit and the next state.
    """
    if isinstance(state, Triggered):
        return state.value, state

    history = state.history
    if pred(history):
        frozen = source.resolve(history)
        logger.debug("always triggered after %d element(s)", len(history))
        return frozen, Triggered(frozen)

    state.seen.append(item)
    return item, state


def always(enum: Iterable[T], value: Any,
           pred: Callable[[Sequence[T]], bool]) -> Iterator[T]:
    """Overwrite the stream with a value from the point ``pred`` holds.

    ``pred`` receives a read-only sequence of the elements seen before the current one.
    Once it returns true the value source is resolved a single time (a
    one-argument provider gets that history) and the result replaces the
    current element and every element after it. Output length always
    equals input length.

    Examples
    --------
    >>> list(always([1, 2, 3], 0, lambda acc: len(acc) >= 2))
    [1, 2, 0]
    >>> list(always([1, 2, 3, 4], lambda acc: sum(acc), lambda acc: len(acc) >= 2))
    [1, 2, 3, 3]
    """
    source = value_source(value)
    ensure_predicate(pred)

    def _stream():
        state: AlwaysState = Accumulating()
        for item in enum:
            emitted, state = _step_always(state, item, source, pred)
            yield emitted

    return _stream()


__all__ = [
    "never",
    "starts_with",
    "ends_with",
    "next",
    "always",
    "Accumulating",
    "HistoryView",
    "Triggered",
]
