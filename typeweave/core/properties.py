"""
This module assembles the property model of a specification type.

`assemble_properties` takes the raw member list produced by `_inspect_type`
and groups it into logical properties: every getter and setter is filed under
the property name inferred from its accessor name (visibility prefix and
`get_`/`is_`/`set_` removed), then every single-argument instance method
named exactly like a property is attached to it as a set-method (the
`obj.label("x")` style).

The model is rebuilt for every generation pass and never cached.
"""

from typing import Any

from typeweave._utils import MethodInfo, TypeDetails, _raw_type


class PropertyMetaData:
    """The accessors of one logical property."""

    def __init__(self, name: str):
        self.name = name
        self.getters: list[MethodInfo] = []
        self.setters: list[MethodInfo] = []
        self.set_methods: list[MethodInfo] = []

    def add_getter(self, method: MethodInfo) -> None:
        self.getters.append(method)

    def add_setter(self, method: MethodInfo) -> None:
        # A second setter with the same parameter type is an override of the first.
        for setter in self.setters:
            if setter.parameter_types == method.parameter_types:
                return
        self.setters.append(method)

    def add_set_method(self, method: MethodInfo) -> None:
        self.set_methods.append(method)

    @property
    def main_getter(self) -> MethodInfo | None:
        """The getter that defines the property type, preferring non-synthetic ones."""
        for getter in self.getters:
            if not getter.is_synthetic:
                return getter
        return self.getters[0] if self.getters else None

    @property
    def overridable_getters(self) -> list[MethodInfo]:
        return [g for g in self.getters if not g.is_final and not g.is_synthetic]

    @property
    def overridable_setters(self) -> list[MethodInfo]:
        return [s for s in self.setters if not s.is_final and not s.is_synthetic]

    @property
    def is_readable(self) -> bool:
        return self.main_getter is not None

    @property
    def generic_type(self) -> Any:
        getter = self.main_getter
        if getter is not None and getter.return_type is not None:
            return getter.generic_return_type
        for setter in self.setters:
            if setter.parameter_types and setter.parameter_types[0] is not None:
                return setter.generic_parameter_types[0]
        return object

    @property
    def type(self) -> type:
        return _raw_type(self.generic_type) or object

    def __repr__(self) -> str:
        return (
            f"PropertyMetaData({self.name!r}, getters={len(self.getters)}, "
            f"setters={len(self.setters)}, set_methods={len(self.set_methods)})"
        )


class TypeMetaData:
    """The properties of a specification type, in discovery order."""

    def __init__(self, type_: type):
        self.type = type_
        self._properties: dict[str, PropertyMetaData] = {}

    @property
    def properties(self) -> list[PropertyMetaData]:
        return list(self._properties.values())

    def get_property(self, name: str) -> PropertyMetaData | None:
        return self._properties.get(name)

    def is_property(self, name: str) -> bool:
        return name in self._properties

    def property(self, name: str) -> PropertyMetaData:
        if name not in self._properties:
            self._properties[name] = PropertyMetaData(name)
        return self._properties[name]


def assemble_properties(details: TypeDetails) -> TypeMetaData:
    """Group the raw members of a type into logical properties."""
    metadata = TypeMetaData(details.type)

    for name, accessors in details.properties.items():
        prop = metadata.property(name)
        for getter in accessors.getters:
            prop.add_getter(getter)
        for setter in accessors.setters:
            prop.add_setter(setter)

    for method in details.instance_methods:
        if method.is_overload or len(method.parameters) != 1:
            continue
        if metadata.is_property(method.name):
            metadata.get_property(method.name).add_set_method(method)

    return metadata
