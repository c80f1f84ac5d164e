"""Generator combinators producing sequences that satisfy a temporal shape.

Each combinator is the generator-side counterpart of an operator in
``stream_temporal.core``: instead of transforming a given stream, it shapes
randomly generated lists so they are known to hold the property by
construction. Feed them to a property-based test to fuzz the operators or
any code consuming such streams.

``always``, ``eventually`` and ``next`` are leads-to *operations*
``(sample, pred) -> generator``, used through ``when``/``leads_to``.
``none_after``, ``starts_with`` and ``ends_with`` are *property functions*
``(gen, quantifier) -> generator``. The ``bind_*`` helpers apply the right
quantifier for you.

Replacement generators (``some_gen``) may be plain values; they are lifted
into constant generators of the base generator's engine.
"""

import logging
from typing import Any, Callable, List, Sequence

from .algebra import (
    Operation,
    PropertyFn,
    Quantifier,
    default_mapper,
    eq,
    normalize,
    for_all,
    every,
    require_quantifier,
    when,
)
from .engine import current_engine, engine_for

logger = logging.getLogger(__name__)

Mapper = Callable[[Any, Any], Any]


def _as_predicate(pred: Any) -> Callable[[Any], bool]:
    return pred if callable(pred) else eq(pred)


def _first_index(items: Sequence[Any], pred: Callable[[Any], bool]):
    for index, item in enumerate(items):
        if pred(item):
            return index
    return None


def _match_indices(items: Sequence[Any], pred: Callable[[Any], bool]) -> List[int]:
    return [index for index, item in enumerate(items) if pred(item)]


def always(some_gen: Any, mapper: Mapper = default_mapper) -> Operation:
    """Operation: once ``pred`` first holds, values of *some_gen* recur.

    The sample is cut after the first matching element and followed by a
    non-empty list of ``mapper(matched, v)`` for values ``v`` of *some_gen*.
    Samples without a match are left unchanged.
    """
    def _operation(items: List[Any], pred: Callable[[Any], bool]):
        engine = current_engine()
        idx = _first_index(items, pred)
        if idx is None:
            return engine.constant(items)

        trigger = items[idx]
        repeated = engine.map(engine.lift(some_gen), lambda new_value: mapper(trigger, new_value))
        return engine.tuple_of([
            engine.constant(items[:idx + 1]),
            engine.list_of(repeated, min_size=1),
        ])

    return _operation


def _insert_after_matches(items: List[Any], pred: Callable[[Any], bool], some_gen: Any,
                          mapper: Mapper, randomized: bool):
    """Insert one mapped value of *some_gen* after every match of *pred*.

    Matches are folded left to right with an offset counter starting at 1
    and growing by one per insertion, so each insertion point is computed
    on the list as already extended by the previous ones. With
    *randomized* the point is drawn uniformly between the slot right after
    the match and the end of the list; otherwise it is that slot.
    """
    engine = current_engine()
    matches = _match_indices(items, pred)
    if not matches:
        return engine.constant(items)

    source = engine.lift(some_gen)

    def _build(positions):
        slots = [engine.constant(item) for item in items]
        for index, position in zip(matches, positions):
            trigger = items[index]
            slots.insert(position, engine.map(source, lambda v, t=trigger: mapper(t, v)))
        return engine.fixed_list(slots)

    bounds = []
    offset = 1
    for index in matches:
        # len(items) + offset - 1 is the list length before this insertion
        bounds.append((index + offset, len(items) + offset - 1))
        offset += 1

    if not randomized:
        return _build([low for low, _high in bounds])

    position_gen = engine.fixed_list([engine.integers(low, high) for low, high in bounds])
    return engine.bind(position_gen, _build)


def eventually(some_gen: Any, mapper: Mapper = default_mapper) -> Operation:
    """Operation: every match of ``pred`` is followed, sooner or later, by a value.

    For each matching element one ``mapper(matched, v)`` is inserted at a
    random position after it. Samples without a match are left unchanged.
    """
    def _operation(items: List[Any], pred: Callable[[Any], bool]):
        return _insert_after_matches(items, pred, some_gen, mapper, randomized=True)

    return _operation


def next(some_gen: Any, mapper: Mapper = default_mapper) -> Operation:
    """Operation: every match of ``pred`` is immediately followed by a value."""
    def _operation(items: List[Any], pred: Callable[[Any], bool]):
        return _insert_after_matches(items, pred, some_gen, mapper, randomized=False)

    return _operation


def none_after(pred: Any, element_gen: Any = None) -> PropertyFn:
    """Property function: ``pred`` holds for at most one element.

    Samples are cut after their first match and completed with elements
    that do not satisfy ``pred``. Those come from *element_gen* when given;
    otherwise a fresh base list is drawn and its matching elements dropped.
    """
    pred = _as_predicate(pred)

    def _property(gen: Any, quantifier: Any):
        require_quantifier(quantifier, Quantifier.FOR_ALL, "none_after")
        engine = engine_for(gen)

        if element_gen is None:
            tail = engine.map(gen, lambda more: [item for item in more if not pred(item)])
        else:
            tail = engine.list_of(engine.filter(engine.lift(element_gen), lambda item: not pred(item)))

        def _cut(items):
            items = list(items)
            idx = _first_index(items, pred)
            if idx is None:
                return engine.constant(items)
            logger.debug("none_after cut a sample of %d at index %d", len(items), idx)
            return engine.tuple_of([engine.constant(items[:idx + 1]), tail])

        return normalize(engine, engine.bind(gen, _cut))

    return _property


def _marker_property(some_gen: Any, what: str, attach: Callable[[List[Any], Any], List[Any]]) -> PropertyFn:
    def _property(gen: Any, quantifier: Any):
        require_quantifier(quantifier, Quantifier.EVERY, what)
        engine = engine_for(gen)
        marker_gen = engine.lift(some_gen)

        def _decorate(items):
            items = list(items)

            def _with_flag(flag):
                if not items and not flag:
                    return engine.constant(items)
                return engine.map(marker_gen, lambda marker: attach(items, marker))

            return engine.bind(engine.booleans(), _with_flag)

        return engine.bind(gen, _decorate)

    return _property


def starts_with(some_gen: Any) -> PropertyFn:
    """Property function: lists start with a value of *some_gen*.

    A drawn flag decides whether an empty base list stays empty or gets
    the marker, so both shapes are exercised.
    """
    return _marker_property(some_gen, "starts_with", lambda items, marker: [marker] + items)


def ends_with(some_gen: Any) -> PropertyFn:
    """Property function: lists end with a value of *some_gen*."""
    return _marker_property(some_gen, "ends_with", lambda items, marker: items + [marker])


def bind_always(gen: Any, pred: Any, some_gen: Any, mapper: Mapper = default_mapper) -> Any:
    """Lists where, after the first ``pred`` match, only *some_gen* values follow."""
    return for_all(gen, when(pred, always(some_gen, mapper)))


def bind_eventually(gen: Any, pred: Any, some_gen: Any, mapper: Mapper = default_mapper) -> Any:
    """Lists where every ``pred`` match is eventually followed by a *some_gen* value."""
    return for_all(gen, when(pred, eventually(some_gen, mapper)))


def bind_next(gen: Any, pred: Any, some_gen: Any, mapper: Mapper = default_mapper) -> Any:
    """Lists where every ``pred`` match is directly followed by a *some_gen* value."""
    return for_all(gen, when(pred, next(some_gen, mapper)))


def bind_none_after(gen: Any, pred: Any, element_gen: Any = None) -> Any:
    """Lists in which ``pred`` holds at most once."""
    return for_all(gen, none_after(pred, element_gen))


def bind_starts_with(gen: Any, some_gen: Any) -> Any:
    """Lists that are empty or start with a *some_gen* value."""
    return every(gen, starts_with(some_gen))


def bind_ends_with(gen: Any, some_gen: Any) -> Any:
    """Lists that are empty or end with a *some_gen* value."""
    return every(gen, ends_with(some_gen))
