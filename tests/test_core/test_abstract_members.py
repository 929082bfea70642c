from abc import ABC, abstractmethod

import pytest

from typeweave import (
    AbstractMemberOnConcreteTypeError,
    DefaultServiceRegistry,
    TypeGenerationError,
    augment,
    inject,
    set_typeweave_option,
)


class Shape(ABC):
    @abstractmethod
    def area(self) -> float: ...


class LooseShape:
    """Marked abstract, but the class does not enforce it."""

    @abstractmethod
    def area(self) -> float: ...


def test_abstract_method_on_abc_fails_generation():
    with pytest.raises(TypeGenerationError) as exc_info:
        augment(Shape)

    assert isinstance(exc_info.value.__cause__, AbstractMemberOnConcreteTypeError)
    assert str(exc_info.value) == (
        "Could not generate a decorated class for type Shape.\n"
        "  - Cannot have abstract method Shape.area()."
    )


def test_unenforced_abstract_marker_is_tolerated():
    generated = augment(LooseShape).generated_type
    assert issubclass(generated, LooseShape)


def test_strict_option_rejects_unenforced_marker():
    set_typeweave_option("strict_abstract_members", True)
    with pytest.raises(TypeGenerationError, match=r"Cannot have abstract method LooseShape\.area\(\)"):
        augment(LooseShape)


def test_abstract_injected_property_is_implemented():
    class Palette:
        color = "blue"

    class Painter(ABC):
        @property
        @inject
        @abstractmethod
        def palette(self) -> Palette: ...

    generated = augment(Painter).generated_type
    assert not generated.__abstractmethods__
    painter = augment(Painter).constructors[0].instantiate(
        DefaultServiceRegistry(Palette()), None
    )
    assert painter.palette.color == "blue"
