"""
This module implements the callback types accepted by configuration methods.

`Action`:
A single-method callback that configures a target object. Methods whose last
parameter is annotated as `Action[...]` are the configuration methods the
engine knows how to extend.

`Closure`:
A literal-block callback. It wraps a plain callable of zero or one
positional parameter and carries a `delegate`: the object being configured.
Augmented types accept a `Closure` wherever a configuration method declares
an `Action`, by converting it with `ClosureBackedAction`.
"""

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any, Generic, TypeVar

from typeweave._utils import _positional_arity

T = TypeVar("T")

# (body, delegate) of every closure currently running, innermost last
_RUNNING_CLOSURES: ContextVar[tuple[tuple[Callable, Any], ...]] = ContextVar(
    "_RUNNING_CLOSURES", default=()
)


class Action(ABC, Generic[T]):
    """Performs some action against a target object."""

    @abstractmethod
    def execute(self, target: T) -> None:
        """Perform this action against the given object."""

    @staticmethod
    def of(fn: Callable[[T], Any]) -> "Action[T]":
        """Adapt a plain one-argument callable to an `Action`."""
        return _FunctionAction(fn)

    def __call__(self, target: T) -> None:
        self.execute(target)


class _FunctionAction(Action[T]):
    def __init__(self, fn: Callable[[T], Any]):
        self._fn = fn

    def execute(self, target: T) -> None:
        self._fn(target)

    def __repr__(self) -> str:
        return f"Action.of({self._fn!r})"


class Closure(Generic[T]):
    """
    A block of configuration code.

    The wrapped callable may accept no parameter or one parameter (the
    configured object is passed to it). A body without parameter reaches the
    configured object through `delegate`: while a rehydrated copy runs, the
    `delegate` of every closure sharing its body resolves to that copy's
    delegate, so a block may refer to the closure it was created as.
    """

    def __init__(self, fn: Callable[..., T], owner: Any = None):
        if not callable(fn):
            raise TypeError(f"Closure requires a callable, got {fn!r}.")
        self._fn = fn
        self.owner = owner
        self._delegate: Any = None

    @property
    def delegate(self) -> Any:
        if self._delegate is not None:
            return self._delegate
        for fn, delegate in reversed(_RUNNING_CLOSURES.get()):
            if fn is self._fn:
                return delegate
        return None

    @delegate.setter
    def delegate(self, value: Any) -> None:
        self._delegate = value

    @property
    def maximum_number_of_parameters(self) -> int | None:
        return _positional_arity(self._fn)

    def call(self, *args: Any) -> T:
        arity = self.maximum_number_of_parameters
        if arity is not None:
            args = args[:arity]
        token = _RUNNING_CLOSURES.set(
            (*_RUNNING_CLOSURES.get(), (self._fn, self.delegate))
        )
        try:
            return self._fn(*args)
        finally:
            _RUNNING_CLOSURES.reset(token)

    def rehydrate(self, delegate: Any) -> "Closure[T]":
        """Return a copy of this closure bound to another delegate."""
        clone = copy.copy(self)
        clone.delegate = delegate
        return clone

    def __call__(self, *args: Any) -> T:
        return self.call(*args)

    def __repr__(self) -> str:
        return f"Closure({self._fn!r})"


class ClosureBackedAction(Action[T]):
    """An `Action` that runs a `Closure` with the target as delegate."""

    def __init__(self, closure: Closure):
        self.closure = closure

    def execute(self, target: T) -> None:
        closure = self.closure.rehydrate(target)
        closure.call(target)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ClosureBackedAction) and other.closure is self.closure

    def __hash__(self) -> int:
        return hash(self.closure)


def as_action(callback: Action | Closure | Callable) -> Action:
    """Convert any supported callback form to an `Action`."""
    if isinstance(callback, Action):
        return callback
    if isinstance(callback, Closure):
        return ClosureBackedAction(callback)
    if callable(callback):
        return Action.of(callback)
    raise TypeError(f"Cannot use {callback!r} as a configuration action.")
