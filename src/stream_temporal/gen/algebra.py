"""Temporal predicate algebra: quantifiers and the leads-to composition.

A *property function* takes a base generator and a quantifier and returns a
generator of whole sequences. ``for_all``/``every`` apply a property function
with their quantifier; ``leads_to`` (and its curried form ``when``) builds
one from a predicate and an *operation* ``(sample, pred) -> generator``::

    gen = st.lists(st.integers())
    lists_with_zero_followed = for_all(gen, when(0, always("after zero")))
"""

import logging
from enum import Enum
from typing import Any, Callable, List

from .engine import engine_for, using_engine

logger = logging.getLogger(__name__)

Predicate = Callable[[Any], bool]
Operation = Callable[[List[Any], Predicate], Any]
PropertyFn = Callable[[Any, 'Quantifier'], Any]


class Quantifier(Enum):
    """Dispatch key selecting the variant a property function realizes."""

    FOR_ALL = "for_all"
    EVERY = "every"

    @classmethod
    def coerce(cls, tag: Any) -> 'Quantifier':
        """Accept a ``Quantifier`` or its string value.

        Raises
        ------
        ValueError
            If *tag* names no quantifier.
        """
        if isinstance(tag, cls):
            return tag
        try:
            return cls(tag)
        except ValueError:
            raise ValueError(
                f"Unknown quantifier {tag!r}. Available: {[q.value for q in cls]}"
            ) from None


def require_quantifier(tag: Any, expected: Quantifier, what: str) -> Quantifier:
    """Coerce *tag* and check it is the one *what* supports."""
    quantifier = Quantifier.coerce(tag)
    if quantifier is not expected:
        raise ValueError(f"{what} supports the '{expected.value}' quantifier, got '{quantifier.value}'")
    return quantifier


def eq(value: Any) -> Predicate:
    """Equality predicate against *value*.

    >>> eq(0)(0), eq(0)(1)
    (True, False)
    """
    return lambda item: item == value


def default_mapper(trigger_value: Any, resultant_value: Any) -> Any:
    """Mapper ignoring the trigger and keeping the generated value.

    >>> default_mapper(5, 10)
    10
    """
    return resultant_value


def flatten_sample(sample: Any) -> List[Any]:
    """Concatenate a ``(prefix, suffix)`` pair, pass anything else through."""
    if isinstance(sample, tuple) and len(sample) == 2:
        prefix, suffix = sample
        return list(prefix) + list(suffix)
    return sample


def normalize(engine, gen):
    """Flatten pair samples of *gen* into single lists."""
    return engine.map(gen, flatten_sample)


def leads_to(gen: Any, quantifier: Any, pred: Any, operation: Operation) -> Any:
    """Bind *gen* through ``operation(sample, pred)``.

    Parameters
    ----------
    gen : generator
        Generator of base lists (hypothesis strategy or ``Sampler``)
    quantifier : Quantifier or str
        Must be ``for_all``
    pred : callable or Any
        Trigger predicate; a non-callable is compared with ``eq``
    operation : callable
        ``(sample, pred) -> generator`` whose samples are lists or
        ``(prefix, suffix)`` pairs

    Returns
    -------
    generator
        Generator of lists, from the same engine as *gen*

    Raises
    ------
    ValueError
        If *quantifier* is not ``for_all``
    TypeError
        If *operation* is not callable or *gen* is not a generator
    """
    require_quantifier(quantifier, Quantifier.FOR_ALL, "leads_to")
    if not callable(operation):
        raise TypeError(f"operation must be callable, got {type(operation).__name__}")
    if not callable(pred):
        pred = eq(pred)

    engine = engine_for(gen)
    logger.debug("leads_to bound on the %s engine", engine.name)

    def _apply(sample):
        with using_engine(engine):
            return operation(list(sample), pred)

    return normalize(engine, engine.bind(gen, _apply))


def when(pred: Any, operation: Operation) -> PropertyFn:
    """Curried ``leads_to``: "when *pred* holds, it leads to *operation*".

    ::

        strategy = for_all(st.lists(st.integers()), when(eq(0), next("X")))
    """
    return lambda gen, quantifier: leads_to(gen, quantifier, pred, operation)


def for_all(gen: Any, prop: PropertyFn) -> Any:
    """Apply *prop* to *gen* under the ``for_all`` quantifier."""
    return prop(gen, Quantifier.FOR_ALL)


def every(gen: Any, prop: PropertyFn) -> Any:
    """Apply *prop* to *gen* under the ``every`` quantifier."""
    return prop(gen, Quantifier.EVERY)
