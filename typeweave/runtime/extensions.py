"""
This module implements the extension point added to augmented types.

`ExtensionContainer`:
A per-instance registry of named extension objects. Extensions are registered
under a unique name together with a public type, and can be looked up by name
or by type. The reserved name `ext` always refers to the instance's
`ExtraProperties`.

`ExtraProperties`:
Free-form named values attached to an object.

`ExtensionAware`:
Mix-in that gives an object a lazily created `extensions` container. When the
object was constructed by an instantiator, `create` uses that instantiator,
so extensions get services injected the same way.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from typeweave._errors import DuplicateExtensionError, UnknownExtensionError

from ._state import EXTENSIONS_ATTR, NESTED_ATTR, _instance_state
from .actions import Action, Closure, as_action

logger = logging.getLogger(__name__)

T = TypeVar("T")

EXTRA_PROPERTIES_NAME = "ext"


class ExtraProperties:
    """Free-form named properties of an object."""

    def __init__(self):
        self._properties: dict[str, Any] = {}

    def has(self, name: str) -> bool:
        return name in self._properties

    def get(self, name: str) -> Any:
        try:
            return self._properties[name]
        except KeyError:
            raise KeyError(
                f"Cannot get extra property '{name}' as it does not exist."
            ) from None

    def set(self, name: str, value: Any) -> None:
        self._properties[name] = value

    @property
    def properties(self) -> dict[str, Any]:
        return dict(self._properties)

    __contains__ = has
    __getitem__ = get
    __setitem__ = set


class ExtensionContainer:
    """Named extension objects of one owner."""

    def __init__(self, instantiator: Any = None):
        self._instantiator = instantiator
        self._extra = ExtraProperties()
        self._extensions: dict[str, tuple[type, Any]] = {
            EXTRA_PROPERTIES_NAME: (ExtraProperties, self._extra)
        }

    @property
    def extra_properties(self) -> ExtraProperties:
        return self._extra

    def add(self, name: str, extension: Any, public_type: type | None = None) -> None:
        """
        Register an extension object.

        Raises:
            DuplicateExtensionError: If the name is already taken.
        """
        if name in self._extensions:
            raise DuplicateExtensionError(name)
        public_type = public_type or type(extension)
        if not isinstance(extension, public_type):
            raise TypeError(
                f"Extension '{name}' is not an instance of its public type "
                f"{public_type.__name__}."
            )
        self._extensions[name] = (public_type, extension)
        logger.debug("Added extension %r of type %s", name, public_type.__name__)

    def create(self, name: str, type_: type[T], *args: Any, **kwargs: Any) -> T:
        """Instantiate and register an extension."""
        if name in self._extensions:
            raise DuplicateExtensionError(name)
        if self._instantiator is not None:
            extension = self._instantiator.new_instance(type_, *args, **kwargs)
        else:
            extension = type_(*args, **kwargs)
        self.add(name, extension, type_)
        return extension

    def has(self, name: str) -> bool:
        return name in self._extensions

    def find_by_name(self, name: str) -> Any:
        entry = self._extensions.get(name)
        return None if entry is None else entry[1]

    def get_by_name(self, name: str) -> Any:
        if name not in self._extensions:
            raise UnknownExtensionError(name)
        return self._extensions[name][1]

    def find_by_type(self, type_: type[T]) -> T | None:
        for public_type, extension in self._extensions.values():
            if public_type is type_:
                return extension
        for _, extension in self._extensions.values():
            if isinstance(extension, type_):
                return extension
        return None

    def get_by_type(self, type_: type[T]) -> T:
        extension = self.find_by_type(type_)
        if extension is None:
            raise UnknownExtensionError(type_)
        return extension

    def configure(self, key: str | type, action: Action | Closure | Callable) -> Any:
        """Run a configuration callback against an extension."""
        extension = self.get_by_name(key) if isinstance(key, str) else self.get_by_type(key)
        as_action(action).execute(extension)
        return extension

    def schema(self) -> dict[str, type]:
        """Public type of every registered extension, by name."""
        return {name: public_type for name, (public_type, _) in self._extensions.items()}

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __repr__(self) -> str:
        return f"ExtensionContainer({sorted(self._extensions)})"


def _extensions_of(obj: Any) -> ExtensionContainer:
    """Return the extension container of an instance, creating it on first use."""
    state = _instance_state(obj)
    container = state.get(EXTENSIONS_ATTR)
    if container is None:
        container = ExtensionContainer(state.get(NESTED_ATTR))
        state[EXTENSIONS_ATTR] = container
    return container


class ExtensionAware:
    """Mix-in providing an `extensions` container."""

    @property
    def extensions(self) -> ExtensionContainer:
        return _extensions_of(self)
