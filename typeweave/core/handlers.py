"""
This module implements the capability handlers of a generation pass.

Each handler owns one concern. During inspection it sees every member and
every property of the specification type and may claim properties; during
generation it instructs the visitor which members to synthesize. Handlers are
instantiated fresh for each pass and always run in this order:

1. `ExtensibleTypePropertyHandler`: extension point and convention support.
2. `DslMixInPropertyHandler`: dynamic-object view, property bag, DSL
   set-methods and closure-accepting overloads of action methods.
3. `PropertyTypePropertyHandler`: setters for managed value containers.
4. `ServiceInjectionPropertyHandler`: `@inject` properties.

A property is owned by at most one handler. When a second handler claims a
property, its `ambiguous` method is called, which fails the pass.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from typeweave._decorators import (
    _declares_no_convention_mapping,
    _is_injected,
    _is_non_extensible,
)
from typeweave._errors import (
    AmbiguousPropertyClaimError,
    InjectionMarkerAmbiguityError,
    InjectMarkerValidator,
)
from typeweave._utils import MethodInfo
from typeweave.runtime.actions import Action, Closure
from typeweave.runtime.conventions import IConventionAware
from typeweave.runtime.dynamic import DynamicObjectAware, PropertyBag
from typeweave.runtime.providers import HasMultipleValues, MapProperty, Property
from typeweave.runtime.services import ServiceRegistry

from ._abstracts.visitors import TypeGenerationVisitor, TypeInspectionVisitor
from .properties import PropertyMetaData

logger = logging.getLogger(__name__)

_CONTAINER_TYPES = (Property, HasMultipleValues, MapProperty)


def _is_multi_value(t: type) -> bool:
    return issubclass(t, Iterable) and not issubclass(t, (str, bytes))


class TypeGenerationHandler:
    """Base class of the handlers; every hook defaults to doing nothing."""

    name = "handler"

    def start_type(self, type_: type) -> None:
        pass

    def validate_method(self, method: MethodInfo) -> None:
        pass

    def visit_property(self, prop: PropertyMetaData) -> None:
        pass

    def claim_property(self, prop: PropertyMetaData) -> bool:
        return False

    def ambiguous(self, prop: PropertyMetaData) -> None:
        raise AmbiguousPropertyClaimError(prop.name)

    def visit_instance_method(self, method: MethodInfo) -> None:
        pass

    def apply_to_inspection(self, visitor: TypeInspectionVisitor) -> None:
        pass

    def apply_to_generation(self, visitor: TypeGenerationVisitor) -> None:
        pass


class UnclaimedPropertyHandler(ABC):
    @abstractmethod
    def unclaimed(self, prop: PropertyMetaData) -> None:
        """Receive a property no handler claimed."""


class ExtensibleTypePropertyHandler(TypeGenerationHandler, UnclaimedPropertyHandler):
    """Extension point and convention support."""

    name = "extensible"

    def __init__(self):
        self.type: type | None = None
        self.extensible = False
        self.convention_aware = False
        self.no_mapping_class: type = object
        self.has_extensions_implementation = False
        self.convention_properties: list[PropertyMetaData] = []

    def start_type(self, type_: type) -> None:
        self.type = type_
        self.extensible = not _is_non_extensible(type_)
        self.no_mapping_class = next(
            (cls for cls in type_.__mro__ if _declares_no_convention_mapping(cls)), object
        )
        self.convention_aware = self.extensible and self.no_mapping_class is not type_

    def claim_property(self, prop: PropertyMetaData) -> bool:
        if not self.extensible:
            return False
        if prop.name == "extensions":
            if not any(getter.is_abstract for getter in prop.overridable_getters):
                self.has_extensions_implementation = True
            return True
        return prop.name in ("convention_mapping", "convention")

    def unclaimed(self, prop: PropertyMetaData) -> None:
        if not self.convention_aware:
            return
        for getter in prop.overridable_getters:
            # Only members declared below the opt-out class receive conventions.
            if not issubclass(self.no_mapping_class, getter.owner):
                self.convention_properties.append(prop)
                return

    def apply_to_inspection(self, visitor: TypeInspectionVisitor) -> None:
        if self.extensible:
            visitor.mix_in_extensible()
        if self.convention_aware:
            visitor.mix_in_convention_aware()

    def apply_to_generation(self, visitor: TypeGenerationVisitor) -> None:
        if self.extensible and not self.has_extensions_implementation:
            visitor.add_extensions_property()
        if not self.convention_aware:
            return
        if not issubclass(self.type, IConventionAware):
            visitor.mix_in_convention_aware()
        for prop in self.convention_properties:
            visitor.add_convention_property(prop)
            for getter in prop.overridable_getters:
                visitor.apply_convention_mapping_to_getter(prop, getter)
            for setter in prop.overridable_setters:
                visitor.apply_convention_mapping_to_setter(prop, setter)


class DslMixInPropertyHandler(TypeGenerationHandler):
    """Dynamic-object view, DSL set-methods and closure overloads."""

    name = "dsl"

    def __init__(self, extensible_handler: ExtensibleTypePropertyHandler):
        self._extensible = extensible_handler
        self.provides_own_dynamic_object = False
        self.need_dynamic_aware = False
        self.need_property_bag = False
        self.mutable_properties: list[PropertyMetaData] = []
        self.action_methods: dict[str, list[MethodInfo]] = {}
        self.closure_methods: dict[str, list[MethodInfo]] = {}

    def start_type(self, type_: type) -> None:
        self.need_dynamic_aware = not issubclass(type_, DynamicObjectAware)
        self.need_property_bag = not issubclass(type_, PropertyBag)

    def visit_property(self, prop: PropertyMetaData) -> None:
        if not prop.setters or _is_multi_value(prop.type):
            return
        self.mutable_properties.append(prop)

    def claim_property(self, prop: PropertyMetaData) -> bool:
        if prop.name == "as_dynamic_object":
            self.provides_own_dynamic_object = True
            return True
        return False

    def visit_instance_method(self, method: MethodInfo) -> None:
        parameter_types = method.parameter_types
        if not parameter_types:
            return
        if parameter_types[-1] is Action:
            self.action_methods.setdefault(method.name, []).append(method)
        elif parameter_types[-1] is Closure:
            self.closure_methods.setdefault(method.name, []).append(method)

    def apply_to_inspection(self, visitor: TypeInspectionVisitor) -> None:
        if self.provides_own_dynamic_object:
            visitor.provides_own_dynamic_object_implementation()

    def apply_to_generation(self, visitor: TypeGenerationVisitor) -> None:
        if self.need_dynamic_aware:
            visitor.mix_in_dynamic_aware()
        if self.need_property_bag:
            visitor.mix_in_property_bag()
        visitor.add_dynamic_methods()
        self._add_missing_closure_overloads(visitor)
        self._add_set_methods(visitor)

    def _has_closure_overload(self, method: MethodInfo) -> bool:
        for candidate in self.closure_methods.get(method.name, ()):
            if len(candidate.parameters) != len(method.parameters):
                continue
            if candidate.parameter_types[:-1] == method.parameter_types[:-1]:
                return True
        return False

    def _add_missing_closure_overloads(self, visitor: TypeGenerationVisitor) -> None:
        for methods in self.action_methods.values():
            for method in methods:
                if self._has_closure_overload(method):
                    logger.debug("%s already accepts a closure", method.signature_text)
                    continue
                visitor.add_action_method(method)

    def _add_set_methods(self, visitor: TypeGenerationVisitor) -> None:
        convention_properties = self._extensible.convention_properties
        for prop in self.mutable_properties:
            if not prop.set_methods:
                for setter in prop.setters:
                    visitor.add_set_method(prop, setter)
            elif prop in convention_properties:
                for method in prop.set_methods:
                    visitor.apply_convention_mapping_to_set_method(prop, method)


class PropertyTypePropertyHandler(TypeGenerationHandler):
    """Setters for properties backed by managed value containers."""

    name = "property-type"

    def __init__(self):
        self.container_properties: list[PropertyMetaData] = []

    def claim_property(self, prop: PropertyMetaData) -> bool:
        if prop.is_readable and issubclass(prop.type, _CONTAINER_TYPES):
            self.container_properties.append(prop)
            return True
        return False

    def apply_to_generation(self, visitor: TypeGenerationVisitor) -> None:
        for prop in self.container_properties:
            visitor.add_property_setters(prop, prop.main_getter)


class ServiceInjectionPropertyHandler(TypeGenerationHandler):
    """Properties whose value is resolved from a service registry."""

    name = "injection"

    def __init__(self):
        self.has_services_property = False
        self.service_injection_properties: list[PropertyMetaData] = []

    def validate_method(self, method: MethodInfo) -> None:
        if _is_injected(method.function):
            InjectMarkerValidator(method).validate()

    def claim_property(self, prop: PropertyMetaData) -> bool:
        if (
            prop.name == "services"
            and prop.is_readable
            and issubclass(prop.type, ServiceRegistry)
        ):
            self.has_services_property = True
            return True
        for getter in prop.getters:
            if _is_injected(getter.function):
                self.service_injection_properties.append(prop)
                return True
        return False

    def ambiguous(self, prop: PropertyMetaData) -> None:
        for getter in prop.getters:
            if _is_injected(getter.function):
                raise InjectionMarkerAmbiguityError(getter, prop)
        super().ambiguous(prop)

    @property
    def injected_services(self) -> list[type]:
        return [prop.type for prop in self.service_injection_properties]

    def apply_to_inspection(self, visitor: TypeInspectionVisitor) -> None:
        if self.service_injection_properties and not self.has_services_property:
            visitor.mix_in_service_injection()

    def apply_to_generation(self, visitor: TypeGenerationVisitor) -> None:
        for prop in self.service_injection_properties:
            visitor.add_injector_property(prop)
            for getter in prop.overridable_getters:
                visitor.apply_service_injection_to_getter(prop, getter)
            for setter in prop.overridable_setters:
                visitor.apply_service_injection_to_setter(prop, setter)
