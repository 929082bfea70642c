"""
This module implements the dynamic-object view of augmented types.

A `DynamicObject` exposes the properties and methods of an object by name,
which is what configuration code written against string names (or loaded
from files) uses. `BeanDynamicObject` is the reflective implementation used by
augmented types:

- properties are the public attributes of the object, then its extensions,
  then its extra properties;
- invoking a method named after a property with a single argument assigns
  that property (`invoke_method("label", "x")`), which is how DSL-style
  set-methods behave;
- invoking a method named after an extension with a single callback
  configures that extension.

`DynamicObjectAware` gives an object its `as_dynamic_object` view and
`PropertyBag` offers the name-based operations directly on the object.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any

from ._state import DYNAMIC_OBJECT_ATTR, _instance_state
from .actions import as_action
from .extensions import ExtensionAware

_MISSING = object()


class DynamicObject(ABC):
    """Name-based access to the properties and methods of an object."""

    @abstractmethod
    def has_property(self, name: str) -> bool: ...

    @abstractmethod
    def get_property(self, name: str) -> Any: ...

    @abstractmethod
    def set_property(self, name: str, value: Any) -> None: ...

    @abstractmethod
    def has_method(self, name: str, *args: Any) -> bool: ...

    @abstractmethod
    def invoke_method(self, name: str, *args: Any, **kwargs: Any) -> Any: ...


class BeanDynamicObject(DynamicObject):
    """Reflective `DynamicObject` over a plain object."""

    def __init__(self, bean: Any):
        self._bean = bean

    def _display_name(self) -> str:
        return f"object of type {type(self._bean).__name__}"

    def _is_bean_property(self, name: str) -> bool:
        if name.startswith("_"):
            return False
        member = inspect.getattr_static(type(self._bean), name, _MISSING)
        if isinstance(member, property):
            return True
        if member is not _MISSING:
            return not callable(member)
        return name in _instance_state(self._bean)

    def _is_writable(self, name: str) -> bool:
        member = inspect.getattr_static(type(self._bean), name, _MISSING)
        if isinstance(member, property):
            return member.fset is not None
        return True

    def _extensions(self):
        if isinstance(self._bean, ExtensionAware):
            return self._bean.extensions
        return None

    def _find_dynamic_property(self, name: str) -> Any:
        extensions = self._extensions()
        if extensions is None:
            return _MISSING
        if extensions.has(name):
            return extensions.get_by_name(name)
        if extensions.extra_properties.has(name):
            return extensions.extra_properties.get(name)
        return _MISSING

    def has_property(self, name: str) -> bool:
        return (
            self._is_bean_property(name)
            or self._find_dynamic_property(name) is not _MISSING
        )

    def get_property(self, name: str) -> Any:
        if self._is_bean_property(name):
            return getattr(self._bean, name)
        value = self._find_dynamic_property(name)
        if value is _MISSING:
            raise AttributeError(
                f"Could not get unknown property '{name}' for {self._display_name()}."
            )
        return value

    def set_property(self, name: str, value: Any) -> None:
        if self._is_bean_property(name):
            if not self._is_writable(name):
                raise AttributeError(
                    f"Cannot set the value of read-only property '{name}' "
                    f"for {self._display_name()}."
                )
            setattr(self._bean, name, value)
            return
        extensions = self._extensions()
        if extensions is not None and extensions.extra_properties.has(name):
            extensions.extra_properties.set(name, value)
            return
        raise AttributeError(
            f"Could not set unknown property '{name}' for {self._display_name()}."
        )

    def has_method(self, name: str, *args: Any) -> bool:
        if name.startswith("_"):
            return False
        member = inspect.getattr_static(type(self._bean), name, _MISSING)
        return member is not _MISSING and callable(member) and not isinstance(member, type)

    def invoke_method(self, name: str, *args: Any, **kwargs: Any) -> Any:
        if self.has_method(name):
            return getattr(self._bean, name)(*args, **kwargs)

        if len(args) == 1 and not kwargs:
            if self._is_bean_property(name) and self._is_writable(name):
                self.set_property(name, args[0])
                return None
            extensions = self._extensions()
            if extensions is not None and extensions.has(name) and callable(args[0]):
                return extensions.configure(name, as_action(args[0]))

        raise AttributeError(
            f"Could not find method {name}() for arguments {list(args)} "
            f"on {self._display_name()}."
        )


class DynamicObjectAware:
    """Mix-in providing the `as_dynamic_object` view."""

    @property
    def as_dynamic_object(self) -> DynamicObject:
        state = _instance_state(self)
        dynamic = state.get(DYNAMIC_OBJECT_ATTR)
        if dynamic is None:
            dynamic = BeanDynamicObject(self)
            state[DYNAMIC_OBJECT_ATTR] = dynamic
        return dynamic


class PropertyBag:
    """Mix-in exposing name-based access, delegating to `as_dynamic_object`."""

    def has_property(self, name: str) -> bool:
        return self.as_dynamic_object.has_property(name)

    def get_property(self, name: str) -> Any:
        return self.as_dynamic_object.get_property(name)

    def set_property(self, name: str, value: Any) -> None:
        self.as_dynamic_object.set_property(name, value)

    def invoke_method(self, name: str, *args: Any, **kwargs: Any) -> Any:
        return self.as_dynamic_object.invoke_method(name, *args, **kwargs)
