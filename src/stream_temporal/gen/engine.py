"""Sampling engines behind the temporal generator combinators.

The combinators only need a handful of primitives from a random data
generator: constants, ``map``, ``bind``, ``filter``, list repetition and
fixed-shape lists. ``SamplingEngine`` names those primitives and two
implementations provide them:

- ``HypothesisEngine`` builds ``hypothesis`` strategies, so generated
  sequences shrink and report through Hypothesis.
- ``NumpyEngine`` builds ``Sampler`` objects drawing from a
  ``numpy.random.Generator``, for reproducible sampling outside a test run
  (fixtures, the command line).

The engine for a combinator is picked from the type of the base generator
(``engine_for``) and made available to leads-to operations through
``current_engine``.
"""

import contextlib
import contextvars
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator, List, Optional, Sequence

import numpy as np
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

logger = logging.getLogger(__name__)

# Rejection sampling budget for Sampler.filter
MAX_FILTER_TRIES = 1000


class Sampler:
    """A generator of random values drawn from a numpy ``Generator``.

    Parameters
    ----------
    draw_fn : Callable[[np.random.Generator], Any]
        Function producing one sample from a random generator
    name : str
        Label used in ``repr`` and error messages
    """

    def __init__(self, draw_fn: Callable[[np.random.Generator], Any], name: str = "sampler"):
        self._draw_fn = draw_fn
        self.name = name

    def __repr__(self) -> str:
        return f"Sampler({self.name})"

    def draw(self, rng: np.random.Generator) -> Any:
        """Draw one sample using *rng*."""
        return self._draw_fn(rng)

    def map(self, fn: Callable[[Any], Any]) -> 'Sampler':
        return Sampler(lambda rng: fn(self.draw(rng)), f"{self.name}.map")

    def flatmap(self, fn: Callable[[Any], 'Sampler']) -> 'Sampler':
        """Draw a value, turn it into a new sampler and draw from that."""
        return Sampler(lambda rng: fn(self.draw(rng)).draw(rng), f"{self.name}.flatmap")

    def filter(self, pred: Callable[[Any], bool]) -> 'Sampler':
        """Keep only samples satisfying *pred*, by rejection.

        Raises
        ------
        RuntimeError
            If no accepted sample is found within ``MAX_FILTER_TRIES`` draws.
        """
        def _draw(rng):
            for _ in range(MAX_FILTER_TRIES):
                value = self.draw(rng)
                if pred(value):
                    return value
            raise RuntimeError(
                f"{self.name}.filter rejected {MAX_FILTER_TRIES} consecutive samples"
            )

        return Sampler(_draw, f"{self.name}.filter")

    def samples(self, n: int, rng: Optional[np.random.Generator] = None) -> List[Any]:
        """Draw *n* independent samples.

        Uses the package-wide generator from ``config.random_state`` when
        *rng* is not given.
        """
        if rng is None:
            from ..config.random_state import get_rng
            rng = get_rng()
        return [self.draw(rng) for _ in range(n)]

    def stream(self, rng: Optional[np.random.Generator] = None) -> Iterator[Any]:
        """Lazily draw samples forever."""
        if rng is None:
            from ..config.random_state import get_rng
            rng = get_rng()
        while True:
            yield self.draw(rng)


# Sampler constructors, named after their hypothesis counterparts

def just(value: Any) -> Sampler:
    return Sampler(lambda rng: value, f"just({value!r})")


def integers(min_value: int = -100, max_value: int = 100) -> Sampler:
    """Uniform integers in ``[min_value, max_value]``, both inclusive."""
    if min_value > max_value:
        raise ValueError(f"Empty integer range [{min_value}, {max_value}]")
    return Sampler(lambda rng: int(rng.integers(min_value, max_value + 1)),
                   f"integers({min_value}, {max_value})")


def booleans() -> Sampler:
    return Sampler(lambda rng: bool(rng.integers(0, 2)), "booleans()")


def sampled_from(elements: Sequence[Any]) -> Sampler:
    elements = list(elements)
    if not elements:
        raise ValueError("Cannot sample from an empty sequence")
    return Sampler(lambda rng: elements[int(rng.integers(0, len(elements)))],
                   f"sampled_from({elements!r})")


def lists(elements: Sampler, min_size: int = 0, max_size: int = 20) -> Sampler:
    """Lists of *elements* with a uniform length in ``[min_size, max_size]``."""
    max_size = max(min_size, max_size)

    def _draw(rng):
        size = int(rng.integers(min_size, max_size + 1))
        return [elements.draw(rng) for _ in range(size)]

    return Sampler(_draw, f"lists({elements.name})")


def fixed_lists(samplers: Sequence[Sampler]) -> Sampler:
    samplers = list(samplers)
    return Sampler(lambda rng: [s.draw(rng) for s in samplers], "fixed_lists")


def tuples(*samplers: Sampler) -> Sampler:
    return Sampler(lambda rng: tuple(s.draw(rng) for s in samplers), "tuples")


def is_any_generator(obj: Any) -> bool:
    """Whether *obj* is a generator of any engine."""
    return isinstance(obj, (SearchStrategy, Sampler))


class SamplingEngine(ABC):
    """Primitives the temporal combinators need from a generator library."""

    name = "abstract"

    def __init__(self, max_size: int = 20):
        self.max_size = max_size

    @abstractmethod
    def is_generator(self, obj: Any) -> bool:
        """Whether *obj* is a generator of this engine."""

    @abstractmethod
    def constant(self, value: Any) -> Any:
        """Generator always producing *value*."""

    @abstractmethod
    def map(self, gen: Any, fn: Callable[[Any], Any]) -> Any:
        ...

    @abstractmethod
    def bind(self, gen: Any, fn: Callable[[Any], Any]) -> Any:
        """Feed each sample of *gen* to *fn*, which returns a generator."""

    @abstractmethod
    def filter(self, gen: Any, pred: Callable[[Any], bool]) -> Any:
        ...

    @abstractmethod
    def list_of(self, gen: Any, min_size: int = 0) -> Any:
        """Lists of samples of *gen*, at most ``max_size`` long."""

    @abstractmethod
    def fixed_list(self, gens: Sequence[Any]) -> Any:
        """Lists with one sample from each generator of *gens*, in order."""

    @abstractmethod
    def tuple_of(self, gens: Sequence[Any]) -> Any:
        """Tuples with one sample from each generator of *gens*."""

    @abstractmethod
    def booleans(self) -> Any:
        ...

    @abstractmethod
    def integers(self, min_value: int, max_value: int) -> Any:
        """Integers in ``[min_value, max_value]``, both inclusive."""

    def lift(self, obj: Any) -> Any:
        """Return *obj* if it is a generator, a constant generator otherwise.

        Raises
        ------
        TypeError
            If *obj* is a generator of another engine.
        """
        if self.is_generator(obj):
            return obj
        if is_any_generator(obj):
            raise TypeError(
                f"Cannot mix engines: {self.name} engine got a {type(obj).__name__} generator"
            )
        return self.constant(obj)


class HypothesisEngine(SamplingEngine):
    """Engine producing ``hypothesis`` strategies."""

    name = "hypothesis"

    def is_generator(self, obj: Any) -> bool:
        return isinstance(obj, SearchStrategy)

    def constant(self, value):
        return st.just(value)

    def map(self, gen, fn):
        return gen.map(fn)

    def bind(self, gen, fn):
        return gen.flatmap(fn)

    def filter(self, gen, pred):
        return gen.filter(pred)

    def list_of(self, gen, min_size=0):
        return st.lists(gen, min_size=min_size, max_size=max(min_size, self.max_size))

    def fixed_list(self, gens):
        return st.tuples(*gens).map(list)

    def tuple_of(self, gens):
        return st.tuples(*gens)

    def booleans(self):
        return st.booleans()

    def integers(self, min_value, max_value):
        return st.integers(min_value=min_value, max_value=max_value)


class NumpyEngine(SamplingEngine):
    """Engine producing numpy-backed ``Sampler`` objects."""

    name = "numpy"

    def is_generator(self, obj: Any) -> bool:
        return isinstance(obj, Sampler)

    def constant(self, value):
        return just(value)

    def map(self, gen, fn):
        return gen.map(fn)

    def bind(self, gen, fn):
        return gen.flatmap(fn)

    def filter(self, gen, pred):
        return gen.filter(pred)

    def list_of(self, gen, min_size=0):
        return lists(gen, min_size=min_size, max_size=self.max_size)

    def fixed_list(self, gens):
        return fixed_lists(gens)

    def tuple_of(self, gens):
        return tuples(*gens)

    def booleans(self):
        return booleans()

    def integers(self, min_value, max_value):
        return integers(min_value, max_value)


ENGINES = {
    HypothesisEngine.name: HypothesisEngine,
    NumpyEngine.name: NumpyEngine,
}


def create_engine(name: Optional[str] = None, max_size: Optional[int] = None) -> SamplingEngine:
    """Create an engine by name, defaulting to the configured one.

    Raises
    ------
    ValueError
        If *name* is not a known engine.
    """
    from ..config import get_config

    if name is None or max_size is None:
        config = get_config()
        name = name or config.engine
        max_size = config.max_list_size if max_size is None else max_size

    if name not in ENGINES:
        raise ValueError(f"Unknown engine '{name}'. Available: {list(ENGINES.keys())}")
    return ENGINES[name](max_size=max_size)


def engine_for(gen: Any) -> SamplingEngine:
    """Pick the engine matching the type of *gen*.

    Raises
    ------
    TypeError
        If *gen* is neither a hypothesis strategy nor a ``Sampler``.
    """
    if isinstance(gen, SearchStrategy):
        return create_engine(HypothesisEngine.name)
    if isinstance(gen, Sampler):
        return create_engine(NumpyEngine.name)
    raise TypeError(
        f"Expected a hypothesis strategy or a Sampler, got {type(gen).__name__}"
    )


_CURRENT_ENGINE: contextvars.ContextVar = contextvars.ContextVar(
    "stream_temporal_engine", default=None
)


@contextlib.contextmanager
def using_engine(engine: SamplingEngine):
    """Make *engine* the one returned by ``current_engine`` inside the block."""
    token = _CURRENT_ENGINE.set(engine)
    try:
        yield engine
    finally:
        _CURRENT_ENGINE.reset(token)


def current_engine() -> SamplingEngine:
    """Engine of the enclosing ``leads_to``, or the configured default."""
    engine = _CURRENT_ENGINE.get()
    if engine is None:
        engine = create_engine()
        logger.debug("No active engine, falling back to %s", engine.name)
    return engine
