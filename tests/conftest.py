"""
This module contains shared fixtures for testing.
"""

from pathlib import Path

import pytest

from typeweave import Action, DefaultServiceRegistry, Property, inject
from typeweave._utils import config
from typeweave.core._abstracts.generator import _clear_cache


class PaintService:
    """A service injected into widgets."""

    def __init__(self, color: str = "red"):
        self.color = color

    def paint(self, widget) -> str:
        return f"{widget.name} painted {self.color}"


class Widget:
    """The reference specification type used across the tests."""

    def __init__(self, name: str = "widget"):
        self.name = name
        self._label = Property(str)
        self.configured = []

    @property
    @inject
    def paint_service(self) -> PaintService:
        raise NotImplementedError

    @property
    def label(self) -> Property[str]:
        return self._label

    def configure(self, action: Action["Widget"]) -> None:
        action.execute(self)
        self.configured.append(action)


class Compiler:
    """A specification type with plain mutable properties."""

    def __init__(self):
        self._target = None
        self._flags = []
        self._name = None

    @property
    def target(self) -> str | None:
        return self._target

    @target.setter
    def target(self, value: str | None) -> None:
        self._target = value

    @property
    def flags(self) -> list[str]:
        return self._flags

    @flags.setter
    def flags(self, value: list[str]) -> None:
        self._flags = value

    def get_name(self) -> str | None:
        return self._name

    def set_name(self, value: str | None) -> None:
        self._name = value


@pytest.fixture(autouse=True)
def clean_generator_state():
    """Every test starts with an empty type cache and default options."""
    saved = dict(config._settings)
    _clear_cache()
    yield
    _clear_cache()
    config._settings.clear()
    config._settings.update(saved)


@pytest.fixture
def paint_service() -> PaintService:
    return PaintService("blue")


@pytest.fixture
def services(paint_service) -> DefaultServiceRegistry:
    """A registry supplying a PaintService."""
    return DefaultServiceRegistry(paint_service)


@pytest.fixture
def widget_type() -> type:
    return Widget


@pytest.fixture
def compiler_type() -> type:
    return Compiler


@pytest.fixture
def test_data_path() -> Path:
    """Path to the test data directory."""
    return Path(__file__).parent / "data" / "conventions"
