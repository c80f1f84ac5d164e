"""Value sources for the sequence augmentor.

An insertion value can be given as a literal, a zero-argument provider or a
one-argument provider computing the value from the history seen so far.
The shape is resolved once, at the call boundary, into one of three tagged
types so the operators never inspect arity while streaming.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple, Union


@dataclass(frozen=True)
class Literal:
    """A fixed value, returned as is."""

    value: Any

    def resolve(self, history: Sequence[Any] = ()) -> Any:
        return self.value


@dataclass(frozen=True)
class Eager:
    """A zero-argument provider, called each time the value is resolved."""

    provider: Callable[[], Any]

    def resolve(self, history: Sequence[Any] = ()) -> Any:
        return self.provider()


@dataclass(frozen=True)
class FromHistory:
    """A one-argument provider fed with the elements observed so far."""

    provider: Callable[[Sequence[Any]], Any]

    def resolve(self, history: Sequence[Any] = ()) -> Any:
        return self.provider(history)


ValueSource = Union[Literal, Eager, FromHistory]


def _required_parameters(fn: Callable) -> Tuple[int, List[str]]:
    """Count the positional parameters *fn* needs and name its required keywords.

    Returns ``(0, [])`` for callables whose signature cannot be inspected.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 0, []

    positional = 0
    keywords = []
    for param in signature.parameters.values():
        if param.default is not param.empty:
            continue
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            positional += 1
        elif param.kind is param.KEYWORD_ONLY:
            keywords.append(param.name)
    return positional, keywords


def value_source(obj: Any) -> ValueSource:
    """Resolve *obj* into a tagged value source.

    Parameters
    ----------
    obj : Any
        A ``Literal``/``Eager``/``FromHistory`` instance, a plain value,
        a zero-argument callable or a one-argument callable.

    Returns
    -------
    ValueSource
        The tagged source.

    Raises
    ------
    TypeError
        If *obj* is a callable requiring two or more positional arguments
        or any keyword-only argument.

    Examples
    --------
    >>> value_source(3)
    Literal(value=3)
    >>> value_source(lambda: 3).resolve()
    3
    >>> value_source(lambda acc: sum(acc)).resolve([1, 2])
    3
    """
    if isinstance(obj, (Literal, Eager, FromHistory)):
        return obj

    if not callable(obj):
        return Literal(obj)

    arity, keywords = _required_parameters(obj)
    if keywords:
        raise TypeError(
            f"Value provider {obj!r} requires keyword-only arguments {keywords}; "
            "providers are called with at most one positional argument"
        )

    if arity == 0:
        return Eager(obj)
    if arity == 1:
        return FromHistory(obj)

    raise TypeError(
        f"Value provider {obj!r} takes {arity} required arguments; "
        "expected a literal, a zero-argument or a one-argument callable"
    )


def history_free_source(obj: Any, operation: str) -> ValueSource:
    """Resolve *obj* for operators that have no history to offer.

    Raises
    ------
    TypeError
        If *obj* resolves to a ``FromHistory`` provider.
    """
    source = value_source(obj)
    if isinstance(source, FromHistory):
        raise TypeError(
            f"{operation}() does not accept a one-argument value provider; "
            "wrap the callable in Literal() to insert it as a value"
        )
    return source


def ensure_predicate(pred: Any, name: str = "pred") -> Callable[[Any], bool]:
    """Return *pred* if it is callable, raise ``TypeError`` otherwise."""
    if not callable(pred):
        raise TypeError(f"{name} must be callable, got {type(pred).__name__}")
    return pred
