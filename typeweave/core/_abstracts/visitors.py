"""
This module defines the two-phase visitor protocol between the capability
handlers and a concrete type generator.

Phase 1, `TypeInspectionVisitor`: handlers report the traits the generated
type must support (order independent facts). Phase 2,
`TypeGenerationVisitor`: handlers emit member-level instructions, in handler
order. Separating the phases lets every handler agree on the mix-ins before
any member is synthesized.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from typeweave._utils import MethodInfo

from ..properties import PropertyMetaData


class TypeGenerationVisitor(ABC):
    """Phase 2: receives the members to synthesize."""

    # Name of the handler currently emitting instructions, for reporting.
    current_handler: str = ""

    @property
    def synthesized_members(self) -> list[tuple[str, str, str, str]]:
        """Members emitted so far, as `(handler, property, attribute, kind)`."""
        return []

    @abstractmethod
    def add_constructor(self, constructor: Callable) -> None: ...

    @abstractmethod
    def mix_in_dynamic_aware(self) -> None: ...

    @abstractmethod
    def mix_in_convention_aware(self) -> None: ...

    @abstractmethod
    def mix_in_property_bag(self) -> None: ...

    @abstractmethod
    def add_dynamic_methods(self) -> None: ...

    @abstractmethod
    def add_extensions_property(self) -> None: ...

    @abstractmethod
    def add_injector_property(self, prop: PropertyMetaData) -> None: ...

    @abstractmethod
    def apply_service_injection_to_getter(
        self, prop: PropertyMetaData, getter: MethodInfo
    ) -> None: ...

    @abstractmethod
    def apply_service_injection_to_setter(
        self, prop: PropertyMetaData, setter: MethodInfo
    ) -> None: ...

    @abstractmethod
    def add_convention_property(self, prop: PropertyMetaData) -> None: ...

    @abstractmethod
    def apply_convention_mapping_to_getter(
        self, prop: PropertyMetaData, getter: MethodInfo
    ) -> None: ...

    @abstractmethod
    def apply_convention_mapping_to_setter(
        self, prop: PropertyMetaData, setter: MethodInfo
    ) -> None: ...

    @abstractmethod
    def apply_convention_mapping_to_set_method(
        self, prop: PropertyMetaData, method: MethodInfo
    ) -> None: ...

    @abstractmethod
    def add_set_method(self, prop: PropertyMetaData, setter: MethodInfo) -> None: ...

    @abstractmethod
    def add_action_method(self, method: MethodInfo) -> None: ...

    @abstractmethod
    def add_property_setters(self, prop: PropertyMetaData, getter: MethodInfo) -> None: ...

    @abstractmethod
    def generate(self) -> type:
        """Return the finished type."""


class TypeInspectionVisitor(ABC):
    """Phase 1: receives the traits of the generated type."""

    @abstractmethod
    def mix_in_extensible(self) -> None: ...

    @abstractmethod
    def mix_in_convention_aware(self) -> None: ...

    @abstractmethod
    def provides_own_dynamic_object_implementation(self) -> None: ...

    @abstractmethod
    def mix_in_service_injection(self) -> None: ...

    @abstractmethod
    def builder(self) -> TypeGenerationVisitor:
        """Finish inspection and return the phase 2 visitor."""
