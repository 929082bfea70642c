"""
This module implements convention (fallback value) support for augmented
types.

Each augmented instance with convention support owns a `ConventionAwareHelper`
that records, per property, a mapping to a fallback value. The generated
setters of a convention property record that it was assigned explicitly, and
the generated getter asks the helper for the value to return:

1. An explicitly assigned value always wins.
2. Otherwise a registered mapping supplies the value, unless the current
   value is a non-empty collection or mapping.
3. Otherwise the current value is returned unchanged.

Mapping values can be plain values or callables. A callable with no
parameter is called as is; a callable with one parameter receives the
object that owns the property. `MappedProperty.cache()` makes a callable
mapping evaluate only once.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable, Mapping
from typing import Any

from typeweave._errors import InvalidConventionMappingError
from typeweave._utils import _positional_arity

from ._state import CONVENTION_MAPPING_ATTR, _instance_state

logger = logging.getLogger(__name__)

_UNSET = object()


class MappedProperty:
    """The fallback value registered for one property."""

    def __init__(self, value: Any):
        self._value = value
        self._cache = False
        self._cached = _UNSET

    def cache(self) -> "MappedProperty":
        """Evaluate a callable mapping at most once."""
        self._cache = True
        return self

    def get_value(self, target: Any) -> Any:
        if self._cached is not _UNSET:
            return self._cached
        value = self._value
        if callable(value):
            value = value(target) if _positional_arity(value) else value()
        if self._cache:
            self._cached = value
        return value


class ConventionMapping(ABC):
    """Fallback values for the properties of one object."""

    @abstractmethod
    def map(self, property_name: str, value: Any) -> MappedProperty:
        """Register the fallback value of a property."""

    @abstractmethod
    def get_convention_value(
        self, actual_value: Any, property_name: str, is_explicit_value: bool = False
    ) -> Any:
        """Return the value a property getter should report."""


class ConventionAwareHelper(ConventionMapping):
    """Default `ConventionMapping` used by augmented types."""

    def __init__(self, source: Any, convention_properties: Iterable[str] = ()):
        self._source = source
        self._properties = frozenset(convention_properties)
        self._mappings: dict[str, MappedProperty] = {}

    @property
    def property_names(self) -> frozenset[str]:
        return self._properties

    def map(self, property_name: str, value: Any) -> MappedProperty:
        """
        Register the fallback value of a convention property.

        Raises:
            InvalidConventionMappingError: If the property has no convention
                support.
        """
        if property_name not in self._properties:
            raise InvalidConventionMappingError(type(self._source), property_name)
        mapped = MappedProperty(value)
        self._mappings[property_name] = mapped
        return mapped

    def map_from_file(self, values: Mapping[str, Any]) -> None:
        """Register file-loaded values; keys without convention support are skipped."""
        for name, value in values.items():
            if name not in self._properties:
                logger.warning(
                    "Ignoring convention value for '%s': %s has no convention property "
                    "with that name.",
                    name,
                    type(self._source).__name__,
                )
                continue
            self.map(name, value)

    def get_convention_value(
        self, actual_value: Any, property_name: str, is_explicit_value: bool = False
    ) -> Any:
        if is_explicit_value:
            return actual_value

        mapped = self._mappings.get(property_name)
        if mapped is None:
            return actual_value

        if (
            isinstance(actual_value, (Collection, Mapping))
            and not isinstance(actual_value, (str, bytes))
            and len(actual_value) > 0
        ):
            return actual_value

        return mapped.get_value(self._source)


class IConventionAware:
    """
    Mix-in providing a lazily created `convention_mapping`.

    Generated types record the names of their convention properties in
    `__convention_properties__` and their file-loaded fallback values in
    `__convention_defaults__`; both seed the helper.
    """

    __convention_properties__: tuple[str, ...] = ()
    __convention_defaults__: Mapping[str, Any] = {}

    @property
    def convention_mapping(self) -> ConventionMapping:
        state = _instance_state(self)
        mapping = state.get(CONVENTION_MAPPING_ATTR)
        if mapping is None:
            cls = type(self)
            mapping = ConventionAwareHelper(self, cls.__convention_properties__)
            mapping.map_from_file(cls.__convention_defaults__)
            state[CONVENTION_MAPPING_ATTR] = mapping
        return mapping
