"""
This module defines the metadata structures used by the decorators and by
the generation engine.

These dataclasses are designed to be immutable containers for metadata
attached to decorated functions and classes, or produced by a generation
pass, ensuring that the metadata remains consistent and safe from unintended
modifications.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class InjectMeta:
    """Metadata for the `@inject` marker."""

    _inject: bool
    _marked_name: str = None


@dataclass(frozen=True)
class ConventionMeta:
    """
    Metadata for the `@conventions` decorator.

    This class is frozen. Container-like attributes are returned as copies when
    accessed to prevent external mutation.
    """

    _conventions: bool
    _path: str = None
    _file: str = None
    _feed_file: str = None
    _include: list[str] = None
    _exclude: list[str] = None
    _custom_engine: dict = None

    def __getattribute__(self, name: str):
        val = super().__getattribute__(name)
        if name in {"_include", "_exclude"} and isinstance(val, list):
            return list(val)
        if name == "_custom_engine" and isinstance(val, dict):
            return dict(val)
        return val


@dataclass(frozen=True)
class GenerationReport:
    """
    Record of one generation pass.

    - `_claims`: property name -> name of the handler that owns it.
    - `_fallback_properties`: properties that received convention support.
    - `_members`: synthesized members as `(handler, property, attribute, kind)`;
      `property` is empty for members not tied to a property.
    - `_mixins`: names of the capability classes mixed into the generated type.
    - `_injected_services`: names of the service types injected by properties.
    - `_handlers`: handler names in the order they ran.

    This class is frozen (attributes cannot be rebound). To provide strong
    immutability for inner containers, list/dict attributes are returned as
    copies when accessed, so external mutation does not affect the report.
    """

    _type_name: str
    _generated_name: str
    _claims: dict[str, str]
    _fallback_properties: list[str]
    _members: list[tuple[str, str, str, str]]
    _mixins: list[str]
    _injected_services: list[str]
    _handlers: list[str]

    def __getattribute__(self, name: str):
        # Containers are handed out as copies
        val = super().__getattribute__(name)
        if name in {
            "_fallback_properties",
            "_members",
            "_mixins",
            "_injected_services",
            "_handlers",
        } and isinstance(val, list):
            return list(val)
        if name == "_claims" and isinstance(val, dict):
            return dict(val)
        return val

    def members_for(self, property_name: str) -> list[tuple[str, str, str, str]]:
        """Synthesized members attached to one property."""
        return [m for m in self._members if m[1] == property_name]
