from abc import ABC, abstractmethod

import pytest

from typeweave import (
    GeneratedConstructor,
    InstantiationError,
    InvocationError,
    augment,
)
from typeweave.runtime._state import _SERVICES_FOR_NEXT_OBJECT


class Point:
    def __init__(self, x: int, y: int = 0, *rest: int, **labels: str):
        self.x = x
        self.y = y
        self.rest = rest
        self.labels = labels


class Exploding:
    def __init__(self):
        raise RuntimeError("boom")


def test_constructor_describes_signature():
    constructor = augment(Point).constructors[0]
    assert [p.name for p in constructor.parameters] == ["x", "y", "rest", "labels"]
    assert constructor.parameter_types == (int, int, int, str)
    assert constructor.modifiers == frozenset({"public", "varargs", "varkw"})
    assert repr(constructor).startswith("<constructor Point_Decorated(")


def test_instantiate_passes_arguments():
    point = augment(Point).constructors[0].instantiate(None, None, 1, 2, 3, tag="a")
    assert (point.x, point.y, point.rest, point.labels) == (1, 2, (3,), {"tag": "a"})


def test_arguments_that_do_not_bind_are_rejected():
    constructor = augment(Point).constructors[0]
    with pytest.raises(InstantiationError, match="Could not create an instance of type Point_Decorated"):
        constructor.instantiate(None, None)
    with pytest.raises(InstantiationError):
        constructor.instantiate(None, None, 1, x=2)


def test_constructor_exception_is_wrapped():
    constructor = augment(Exploding).constructors[0]
    with pytest.raises(InvocationError) as exc_info:
        constructor.instantiate(None, None)

    cause = exc_info.value.__cause__
    assert isinstance(cause, RuntimeError)
    assert str(cause) == "boom"
    assert exc_info.value.type is augment(Exploding).generated_type


def test_services_context_is_reset_after_failure():
    with pytest.raises(InvocationError):
        augment(Exploding).constructors[0].instantiate(object(), None)
    assert _SERVICES_FOR_NEXT_OBJECT.get(None) is None


def test_abstract_type_cannot_be_instantiated():
    class Base(ABC):
        @abstractmethod
        def run(self) -> None: ...

    constructor = GeneratedConstructor(Base, Base, ())
    with pytest.raises(InstantiationError, match=r"it is abstract \(missing run\)"):
        constructor.instantiate(None, None)
