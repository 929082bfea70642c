"""
This module implements the declarative markers read by the generation engine.

`@inject`:
Marks a property getter whose value is supplied by the service registry the
instance was constructed with. It can be applied to a `property` object, to
its getter function (under `@property`) or to a `get_<name>` method. The
engine validates the placement: static, final, private or non-getter members
are rejected when the type is augmented.

`@non_extensible`:
Class decorator that opts a type (and its subclasses) out of the extension
point and of convention support.

`@no_convention_mapping`:
Class decorator that stops convention support at this class: properties
declared by this class or its bases never receive fallback values, while
properties declared by subclasses still do.
"""

from collections.abc import Callable
from typing import Any

from ._meta import InjectMeta


def _marker_target(obj: Any) -> Callable:
    """Return the function a marker is attached to."""
    if isinstance(obj, property):
        return obj.fget
    if isinstance(obj, (staticmethod, classmethod)):
        return obj.__func__
    return obj


def inject(_func: Callable | property | None = None) -> Callable:
    """
    Mark a property getter for service injection.

    Args:
        _func (Callable | property | None): The getter to mark. Allows the
            decorator to be used as `@inject` or `@inject()`.

    Returns:
        Callable: The same object, carrying injection metadata.

    Raises:
        TypeError: If the decorated object is not a callable or a property.
    """

    def decorator(f):
        target = _marker_target(f)
        if not callable(target):
            raise TypeError(f"@inject can only mark getters, got {f!r}.")
        target._inject_meta = InjectMeta(_inject=True, _marked_name=target.__name__)
        return f

    if _func is None:
        return decorator
    return decorator(_func)


def non_extensible(_cls: type | None = None) -> type | Callable:
    """Opt a class out of the extension point and convention support."""

    def decorator(cls):
        if not isinstance(cls, type):
            raise TypeError("@non_extensible can only decorate classes.")
        cls._non_extensible = True
        return cls

    if _cls is None:
        return decorator
    return decorator(_cls)


def no_convention_mapping(_cls: type | None = None) -> type | Callable:
    """Stop convention support at this class."""

    def decorator(cls):
        if not isinstance(cls, type):
            raise TypeError("@no_convention_mapping can only decorate classes.")
        cls._no_convention_mapping = True
        return cls

    if _cls is None:
        return decorator
    return decorator(_cls)


def _is_injected(f: Any) -> bool:
    """Check if a getter is marked with `@inject`."""
    meta = getattr(_marker_target(f), "_inject_meta", None)
    return bool(meta and meta._inject)


def _is_non_extensible(cls: type) -> bool:
    return bool(getattr(cls, "_non_extensible", False))


def _declares_no_convention_mapping(cls: type) -> bool:
    """Check the class itself, not its bases."""
    return bool(vars(cls).get("_no_convention_mapping", False))
