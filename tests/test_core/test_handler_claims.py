from typing import final

import pytest

from typeweave import (
    AmbiguousPropertyClaimError,
    DefaultServiceRegistry,
    InjectionMarkerAmbiguityError,
    InvalidInjectionMarkerError,
    Property,
    ServiceRegistry,
    TypeGenerationError,
    augment,
    inject,
)


class Clock:
    pass


def _cause(excinfo):
    return excinfo.value.__cause__


def test_claims_are_reported(widget_type):
    report = augment(widget_type).report
    assert report._claims == {
        "label": "property-type",
        "paint_service": "injection",
    }
    assert report._handlers == ["extensible", "dsl", "property-type", "injection"]


def test_injected_container_property_is_ambiguous():
    class Conflicted:
        @property
        @inject
        def label(self) -> Property[str]:
            raise NotImplementedError

    with pytest.raises(TypeGenerationError, match="Conflicted") as excinfo:
        augment(Conflicted)

    cause = _cause(excinfo)
    assert isinstance(cause, InjectionMarkerAmbiguityError)
    assert isinstance(cause, AmbiguousPropertyClaimError)
    assert cause.property_name == "label"
    assert "Cannot use @inject annotation on method Conflicted.label()" in str(cause)


def test_generic_ambiguity_names_the_property():
    class Clashing:
        def __init__(self):
            self._extensions = Property(str)

        @property
        def extensions(self) -> Property[str]:
            return self._extensions

    with pytest.raises(TypeGenerationError) as excinfo:
        augment(Clashing)

    cause = _cause(excinfo)
    assert type(cause) is AmbiguousPropertyClaimError
    assert str(cause) == "Multiple matches for extensions"


def test_generation_error_message_is_a_tree():
    class Conflicted:
        @property
        @inject
        def label(self) -> Property[str]:
            raise NotImplementedError

    with pytest.raises(TypeGenerationError) as excinfo:
        augment(Conflicted)

    first, second = str(excinfo.value).splitlines()[:2]
    assert first == "Could not generate a decorated class for type Conflicted."
    assert second.startswith("  - Cannot use @inject annotation")


class StaticGetter:
    @staticmethod
    @inject
    def get_clock() -> Clock:
        raise NotImplementedError


class FinalGetter:
    @property
    @final
    @inject
    def clock(self) -> Clock:
        raise NotImplementedError


class PrivateGetter:
    @inject
    def __get_clock(self) -> Clock:
        raise NotImplementedError


class NotAGetter:
    @inject
    def clock(self, zone: str) -> Clock:
        raise NotImplementedError


@pytest.mark.injection
@pytest.mark.parametrize(
    "spec, reason",
    [
        (StaticGetter, "as it is static"),
        (FinalGetter, "as it is final"),
        (PrivateGetter, "as it is not public or protected"),
        (NotAGetter, "as it is not a property getter"),
    ],
)
def test_invalid_injection_markers(spec, reason):
    with pytest.raises(TypeGenerationError) as excinfo:
        augment(spec)
    cause = _cause(excinfo)
    assert isinstance(cause, InvalidInjectionMarkerError)
    assert reason in str(cause)
    assert spec.__name__ in str(cause)


@pytest.mark.injection
def test_valid_accessor_style_injection():
    class Scheduler:
        @inject
        def get_clock(self) -> Clock:
            raise NotImplementedError

        @inject
        def _get_backup_clock(self) -> Clock:
            raise NotImplementedError

    augmented = augment(Scheduler)
    assert augmented.constructors[0].requires_dependency(Clock)

    clock = Clock()
    scheduler = augmented.constructors[0].instantiate(DefaultServiceRegistry(clock), None)
    assert scheduler.get_clock() is clock
    assert scheduler._get_backup_clock() is clock


@pytest.mark.injection
def test_injected_value_can_be_overridden_by_setter():
    class Scheduler:
        @property
        @inject
        def clock(self) -> Clock:
            raise NotImplementedError

        @clock.setter
        def clock(self, value: Clock) -> None:
            raise NotImplementedError

    own = Clock()
    scheduler = augment(Scheduler).constructors[0].instantiate(
        DefaultServiceRegistry(Clock()), None
    )
    scheduler.clock = own
    assert scheduler.clock is own


@pytest.mark.injection
def test_own_services_property_is_used():
    class SelfContained:
        def __init__(self, services: ServiceRegistry):
            self._services = services

        @property
        def services(self) -> ServiceRegistry:
            return self._services

        @property
        @inject
        def clock(self) -> Clock:
            raise NotImplementedError

    clock = Clock()
    augmented = augment(SelfContained)
    assert augmented.report._claims["services"] == "injection"

    obj = augmented.generated_type(DefaultServiceRegistry(clock))
    assert obj.clock is clock


@pytest.mark.injection
def test_missing_registry_raises_unknown_service(widget_type):
    from typeweave import UnknownServiceError

    widget = augment(widget_type).generated_type()
    with pytest.raises(UnknownServiceError, match="no service registry was supplied"):
        widget.paint_service
