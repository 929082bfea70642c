"""
This module provides the introspection layer that turns a specification type
into a raw member list. It is the foundation the property model and the
capability handlers are built on.

Python has no separate notion of getters, setters, bridges or visibility, so
this module defines them from conventions:

- A **getter** is a `property.fget`, or a zero-argument method named
  `get_<name>` (or `is_<name>` with a `bool` return annotation).
- A **setter** is a `property.fset`, or a single-argument method named
  `set_<name>`.
- **Visibility** follows the leading underscores of the attribute name:
  public, protected (`_name`) or private (name-mangled `_Owner__name`).
- A member is **final** when `typing.final` marked it (`__final__`),
  **abstract** when `abc.abstractmethod` marked it, and **synthetic** when the
  engine generated it (`__synthetic__`).
- `typing.overload` signatures are reported as additional members, which is
  how a type declares alternate calling forms of the same method.

Key functions:
- `_inspect_type`: walks the MRO and classifies every member once.
- `_resolve_annotations` / `_raw_type`: tolerant type-hint resolution, so
  forward references to locally defined classes do not break inspection.
- `_positional_arity`: number of positional parameters a callable accepts,
  used to adapt callbacks of different shapes.
"""

import inspect
import logging
import sys
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Any, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

_GETTER_PREFIX = "get_"
_BOOLEAN_GETTER_PREFIX = "is_"
_SETTER_PREFIX = "set_"


class Visibility(Enum):
    """Visibility of a member, derived from its attribute name."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


class MemberKind(Enum):
    """How a member is declared in the class body."""

    METHOD = "method"
    PROPERTY_GETTER = "property getter"
    PROPERTY_SETTER = "property setter"


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _annotation_namespace(owner: type | None) -> dict[str, Any]:
    """Names visible to the annotations of members of `owner`."""
    if owner is None:
        return {}
    module = sys.modules.get(owner.__module__)
    namespace = dict(vars(module)) if module is not None else {}
    for base in reversed(owner.__mro__):
        namespace[base.__name__] = base
    return namespace


def _resolve_annotations(func: Callable, owner: type | None = None) -> dict[str, Any]:
    """
    Resolve the annotations of a function.

    Names are looked up in the function globals, then in the module of
    `owner` and the classes of its MRO. An annotation that still does not
    resolve is kept as written and logged, and never resolves to a class.
    """
    localns = _annotation_namespace(owner)
    try:
        return get_type_hints(func, localns=localns)
    except (NameError, TypeError, AttributeError):
        pass

    globalns = getattr(inspect.unwrap(func), "__globals__", {})
    hints = {}
    for name, annotation in (getattr(func, "__annotations__", {}) or {}).items():
        if not isinstance(annotation, str):
            hints[name] = annotation
            continue
        try:
            hints[name] = eval(annotation, globalns, localns)
        except (NameError, SyntaxError, TypeError, AttributeError):
            logger.warning(
                "Cannot resolve annotation %r of %s for parameter %r.",
                annotation,
                getattr(func, "__qualname__", func),
                name,
            )
            hints[name] = annotation
    return hints


def _raw_type(annotation: Any) -> type | None:
    """Return the class behind an annotation (`Property[str] | None` -> `Property`)."""
    if annotation is inspect.Parameter.empty or annotation is None:
        return None
    origin = get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in get_args(annotation) if a is not type(None)]
        return _raw_type(members[0]) if len(members) == 1 else None
    if isinstance(origin, type):
        return origin
    if isinstance(annotation, type):
        return annotation
    return None


def _positional_arity(f: Callable) -> int | None:
    """
    Count the positional parameters of a callable.

    Returns None when the callable accepts *args, meaning any number of
    positional arguments is fine.
    """
    try:
        sig = inspect.signature(f)
    except (TypeError, ValueError):
        return None

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


@dataclass(frozen=True, eq=False)
class MethodInfo:
    """One raw member of a specification type."""

    name: str
    owner: type
    function: Callable
    kind: MemberKind = MemberKind.METHOD
    is_static: bool = False
    is_overload: bool = False

    @cached_property
    def _annotations(self) -> dict[str, Any]:
        return _resolve_annotations(self.function, self.owner)

    @cached_property
    def parameters(self) -> tuple[inspect.Parameter, ...]:
        """Parameters excluding the receiver (`self`/`cls`)."""
        try:
            params = tuple(inspect.signature(self.function).parameters.values())
        except (TypeError, ValueError):
            return ()
        skip_receiver = not self.is_static or isinstance(
            inspect.getattr_static(self.owner, self.name, None), classmethod
        )
        return params[1:] if skip_receiver and params else params

    @property
    def generic_parameter_types(self) -> tuple[Any, ...]:
        return tuple(
            self._annotations.get(p.name, inspect.Parameter.empty) for p in self.parameters
        )

    @property
    def parameter_types(self) -> tuple[type | None, ...]:
        return tuple(_raw_type(a) for a in self.generic_parameter_types)

    @property
    def generic_return_type(self) -> Any:
        return self._annotations.get("return", inspect.Parameter.empty)

    @property
    def return_type(self) -> type | None:
        return _raw_type(self.generic_return_type)

    @property
    def visibility(self) -> Visibility:
        if self.name.startswith(f"_{self.owner.__name__.lstrip('_')}__"):
            return Visibility.PRIVATE
        if self.name.startswith("_"):
            return Visibility.PROTECTED
        return Visibility.PUBLIC

    @property
    def base_name(self) -> str:
        """Attribute name with its visibility prefix removed."""
        mangled = f"_{self.owner.__name__.lstrip('_')}__"
        if self.name.startswith(mangled):
            return self.name[len(mangled):]
        return self.name.lstrip("_")

    @property
    def is_final(self) -> bool:
        return bool(getattr(self.function, "__final__", False))

    @property
    def is_abstract(self) -> bool:
        return bool(getattr(self.function, "__isabstractmethod__", False))

    @property
    def is_synthetic(self) -> bool:
        return bool(getattr(self.function, "__synthetic__", False))

    @property
    def is_get_getter(self) -> bool:
        """True for property getters and zero-argument `get_<name>` methods."""
        if self.kind is MemberKind.PROPERTY_GETTER:
            return True
        return (
            self.kind is MemberKind.METHOD
            and not self.is_static
            and not self.parameters
            and len(self.base_name) > len(_GETTER_PREFIX)
            and self.base_name.startswith(_GETTER_PREFIX)
        )

    @property
    def is_getter(self) -> bool:
        if self.is_get_getter:
            return True
        return (
            self.kind is MemberKind.METHOD
            and not self.is_static
            and not self.parameters
            and len(self.base_name) > len(_BOOLEAN_GETTER_PREFIX)
            and self.base_name.startswith(_BOOLEAN_GETTER_PREFIX)
            and self.return_type is bool
        )

    @property
    def is_setter(self) -> bool:
        if self.kind is MemberKind.PROPERTY_SETTER:
            return True
        return (
            self.kind is MemberKind.METHOD
            and not self.is_static
            and len(self.parameters) == 1
            and len(self.base_name) > len(_SETTER_PREFIX)
            and self.base_name.startswith(_SETTER_PREFIX)
        )

    @property
    def property_name(self) -> str | None:
        """Logical property name of a getter or setter, None otherwise."""
        if self.kind is not MemberKind.METHOD:
            return self.base_name
        if self.is_get_getter:
            return self.base_name[len(_GETTER_PREFIX):]
        if self.is_getter:
            return self.base_name[len(_BOOLEAN_GETTER_PREFIX):]
        if self.is_setter:
            return self.base_name[len(_SETTER_PREFIX):]
        return None

    @property
    def signature_text(self) -> str:
        """Human readable signature, e.g. `Widget.configure(Action)`."""
        names = []
        for raw, generic in zip(
            self.parameter_types, self.generic_parameter_types, strict=False
        ):
            if raw is not None:
                names.append(raw.__name__)
            elif generic is inspect.Parameter.empty:
                names.append("?")
            else:
                names.append(str(generic))
        return f"{self.owner.__name__}.{self.name}({', '.join(names)})"

    def describe(self) -> str:
        if self.kind is MemberKind.METHOD:
            return self.signature_text
        return f"{self.signature_text} ({self.kind.value})"

    def __repr__(self) -> str:
        return f"<method {self.describe()}>"


@dataclass
class PropertyDetails:
    """Getters and setters grouped under one logical property name."""

    name: str
    getters: list[MethodInfo] = field(default_factory=list)
    setters: list[MethodInfo] = field(default_factory=list)


@dataclass
class TypeDetails:
    """The raw member list of a specification type."""

    type: type
    properties: dict[str, PropertyDetails] = field(default_factory=dict)
    instance_methods: list[MethodInfo] = field(default_factory=list)
    all_methods: list[MethodInfo] = field(default_factory=list)

    def property(self, name: str) -> PropertyDetails:
        if name not in self.properties:
            self.properties[name] = PropertyDetails(name)
        return self.properties[name]


def _members_of(owner: type, name: str, value: Any) -> list[MethodInfo]:
    """Expand one class attribute into the methods it declares."""
    if isinstance(value, property):
        members = []
        if value.fget is not None:
            members.append(MethodInfo(name, owner, value.fget, MemberKind.PROPERTY_GETTER))
        if value.fset is not None:
            members.append(MethodInfo(name, owner, value.fset, MemberKind.PROPERTY_SETTER))
        return members

    if isinstance(value, (staticmethod, classmethod)):
        return [MethodInfo(name, owner, value.__func__, is_static=True)]

    if inspect.isfunction(value):
        members = [
            MethodInfo(name, owner, signature, is_overload=True)
            for signature in typing.get_overloads(value)
        ]
        members.append(MethodInfo(name, owner, value))
        return members

    return []


def _inspect_type(type_: type) -> TypeDetails:
    """
    Build the raw member list of a type.

    The MRO is walked from the most derived class upwards and every attribute
    name is classified once, so overridden members are reported by their most
    derived definition. Static and private members only appear in
    `all_methods`; they never form properties or instance methods.
    """
    details = TypeDetails(type_)
    seen: set[str] = set()

    for owner in type_.__mro__:
        if owner is object:
            continue
        for name, value in vars(owner).items():
            if name in seen or _is_dunder(name):
                continue
            seen.add(name)

            for method in _members_of(owner, name, value):
                details.all_methods.append(method)
                if method.is_static or method.visibility is Visibility.PRIVATE:
                    continue
                if method.is_getter:
                    details.property(method.property_name).getters.append(method)
                elif method.is_setter:
                    details.property(method.property_name).setters.append(method)
                else:
                    details.instance_methods.append(method)

    return details
