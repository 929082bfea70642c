from __future__ import annotations

import logging

import pytest

from typeweave import (
    InvalidInjectionMarkerError,
    Property,
    TypeGenerationError,
    augment,
    inject,
)
from typeweave._utils import _inspect_type


class Registry:
    pass


def test_module_and_mro_names_resolve():
    class Node:
        def get_parent(self) -> Node: ...

    class Leaf(Node):
        def get_sibling(self) -> Node: ...

        def get_registry(self) -> Registry: ...

        @property
        def label(self) -> Property[str]: ...

    details = _inspect_type(Leaf)
    assert details.properties["sibling"].getters[0].return_type is Node
    assert details.properties["parent"].getters[0].return_type is Node
    assert details.properties["registry"].getters[0].return_type is Registry
    assert details.properties["label"].getters[0].return_type is Property


def test_injected_service_declared_after_use():
    class Scheduler:
        @property
        @inject
        def registry(self) -> Registry:
            raise NotImplementedError

    assert augment(Scheduler).injected_services == (Registry,)
    assert not augment(Scheduler).constructors[0].requires_dependency(int)


def test_unresolved_injected_service_is_rejected(caplog):
    class Clock:
        pass

    class Scheduler:
        @property
        @inject
        def clock(self) -> Clock:
            raise NotImplementedError

    with caplog.at_level(logging.WARNING, logger="typeweave._utils.inspect"):
        with pytest.raises(TypeGenerationError) as excinfo:
            augment(Scheduler)

    cause = excinfo.value.__cause__
    assert isinstance(cause, InvalidInjectionMarkerError)
    assert "its return type 'Clock' does not name a class" in str(cause)
    assert "Cannot resolve annotation 'Clock'" in caplog.text
