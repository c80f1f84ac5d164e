"""Generators of sequences satisfying temporal properties.

Key Components
--------------
- Sampling engines: Hypothesis strategies or seeded numpy samplers
- Predicate algebra: ``leads_to``/``when`` composition, ``for_all``/``every``
- Combinators: ``always``, ``eventually``, ``next``, ``none_after``,
  ``starts_with``, ``ends_with`` and their ``bind_*`` shortcuts
- Element-wise list generators (``stream_temporal.gen.elementwise``)

Examples
--------
>>> from hypothesis import given, strategies as st
>>> from stream_temporal.gen import bind_next
>>>
>>> @given(bind_next(st.lists(st.integers()), 0, "after zero"))
... def test_consumer(sample):
...     ...
"""

from .engine import (
    Sampler,
    SamplingEngine,
    HypothesisEngine,
    NumpyEngine,
    create_engine,
    engine_for,
    is_any_generator,
    current_engine,
    using_engine,
    just,
    integers,
    booleans,
    sampled_from,
    lists,
    fixed_lists,
    tuples
)

from .algebra import (
    Quantifier,
    leads_to,
    when,
    for_all,
    every,
    eq,
    default_mapper,
    normalize,
    flatten_sample
)

from .combinators import (
    always,
    eventually,
    next,
    none_after,
    starts_with,
    ends_with,
    bind_always,
    bind_eventually,
    bind_next,
    bind_none_after,
    bind_starts_with,
    bind_ends_with
)

from . import elementwise

__all__ = [
    # Engines
    'Sampler',
    'SamplingEngine',
    'HypothesisEngine',
    'NumpyEngine',
    'create_engine',
    'engine_for',
    'is_any_generator',
    'current_engine',
    'using_engine',

    # Numpy sampler constructors
    'just',
    'integers',
    'booleans',
    'sampled_from',
    'lists',
    'fixed_lists',
    'tuples',

    # Predicate algebra
    'Quantifier',
    'leads_to',
    'when',
    'for_all',
    'every',
    'eq',
    'default_mapper',
    'normalize',
    'flatten_sample',

    # Combinators
    'always',
    'eventually',
    'next',
    'none_after',
    'starts_with',
    'ends_with',
    'bind_always',
    'bind_eventually',
    'bind_next',
    'bind_none_after',
    'bind_starts_with',
    'bind_ends_with',

    # Element-wise generators
    'elementwise'
]
