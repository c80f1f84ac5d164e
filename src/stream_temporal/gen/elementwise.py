"""Element-wise list generators.

Where ``combinators`` reshapes whole sampled lists, these build lists from
an *element* generator and decide element by element what goes where. They
are the simplest way to get lists known to start, end or be punctuated by
a value.

>>> from stream_temporal.gen.engine import integers
>>> sample = starts_with(integers(0, 9), 42).samples(1)[0]
>>> sample[0]
42
"""

from typing import Any, Callable

from ..core.value_source import ensure_predicate, value_source
from .engine import engine_for, is_any_generator


def starts_with(gen: Any, value: Any) -> Any:
    """Lists of *gen* elements headed by a value of *value*.

    *value* may be a generator of the same engine or a plain value.
    """
    engine = engine_for(gen)
    return engine.map(
        engine.tuple_of([engine.lift(value), engine.list_of(gen)]),
        lambda pair: [pair[0]] + pair[1],
    )


def ends_with(gen: Any, value: Any) -> Any:
    """Lists of *gen* elements closed by a value of *value*."""
    engine = engine_for(gen)
    return engine.map(
        engine.tuple_of([engine.list_of(gen), engine.lift(value)]),
        lambda pair: pair[0] + [pair[1]],
    )


def next(gen: Any, value: Any, pred: Callable[[Any], bool]) -> Any:
    """Lists of *gen* elements where each ``pred`` match is followed by a value."""
    ensure_predicate(pred)
    engine = engine_for(gen)
    filler = engine.lift(value)

    def _punctuate(items):
        slots = []
        for item in items:
            slots.append(engine.constant(item))
            if pred(item):
                slots.append(filler)
        return engine.fixed_list(slots)

    return engine.bind(engine.list_of(gen), _punctuate)


def always(gen: Any, value: Any, pred: Callable[[Any], bool]) -> Any:
    """Lists of *gen* elements where every ``pred`` match is replaced.

    The replacement depends on the shape of *value*:

    - a generator of the same engine: a fresh sample per replacement
    - a generator of another engine: rejected with ``TypeError``
    - a zero-argument callable: its result, called per replacement
    - a one-argument callable: its result on the matched element
    - anything else: *value* itself
    """
    ensure_predicate(pred)
    engine = engine_for(gen)

    if is_any_generator(value):
        replacement = engine.lift(value)
        element = engine.bind(gen, lambda item: replacement if pred(item) else engine.constant(item))
    else:
        source = value_source(value)
        # One-argument providers receive the matched element
        element = engine.map(gen, lambda item: source.resolve(item) if pred(item) else item)

    return engine.list_of(element)
