"""
This module implements the visitors of the `DynamicTypeGenerator`, which
materializes an augmented type at runtime with `type()`.

`_InspectionVisitor` records the traits reported by the handlers and hands
them to `_DynamicTypeBuilder`, which collects the synthesized members and
finally creates the subclass:

- the name is the specification type's name plus the `generated_type_suffix`
  option (`Widget_Decorated`), the module is kept;
- the metaclass is the metaclass of the specification type;
- the bases are the specification type followed by the capability mix-ins it
  does not already inherit;
- every synthesized function is marked synthetic, so inspecting a generated
  type never mistakes generated members for hand-written ones.

Overrides of `property` accessors are merged: a new `property` object is
built from the original's accessors with only the overridden parts replaced.

Per-instance state of the generated members lives in the instance
`__dict__` under the `typeweave.runtime._state` attribute names.
"""

import functools
import inspect
import logging
import typing
from collections.abc import Callable
from typing import Any

from typeweave._decorators import _collect_convention_values
from typeweave._errors import UnknownServiceError
from typeweave._utils import MemberKind, MethodInfo, _get_option, _mark_synthetic
from typeweave.runtime._state import (
    EXPLICIT_ATTR,
    INJECTED_ATTR,
    NESTED_ATTR,
    SERVICES_ATTR,
    _instance_state,
    _SERVICES_FOR_NEXT_OBJECT,
)
from typeweave.runtime.actions import Closure, ClosureBackedAction
from typeweave.runtime.conventions import IConventionAware
from typeweave.runtime.dynamic import DynamicObjectAware, PropertyBag
from typeweave.runtime.extensions import ExtensionAware, _extensions_of

from ._abstracts.visitors import TypeGenerationVisitor, TypeInspectionVisitor
from .properties import PropertyMetaData

logger = logging.getLogger(__name__)

_MISSING = object()

# Never resolved through the dynamic fallback
_RESERVED_NAMES = frozenset({"as_dynamic_object", "extensions", "convention_mapping"})


def _mark_explicit(obj: Any, property_name: str) -> None:
    _instance_state(obj).setdefault(EXPLICIT_ATTR, set()).add(property_name)


def _is_explicit(obj: Any, property_name: str) -> bool:
    return property_name in _instance_state(obj).get(EXPLICIT_ATTR, ())


def _closure_form_signature(f: Callable, parameter: str) -> inspect.Signature | None:
    """Signature of `f` with `parameter` also accepting a `Closure`."""
    try:
        sig = inspect.signature(f)
    except (TypeError, ValueError):
        return None
    params = []
    for param in sig.parameters.values():
        if param.name == parameter:
            annotation = (
                Closure
                if param.annotation is inspect.Parameter.empty
                else typing.Union[param.annotation, Closure]
            )
            param = param.replace(annotation=annotation)
        params.append(param)
    return sig.replace(parameters=params)


class _DynamicTypeBuilder(TypeGenerationVisitor):
    """Collects synthesized members and creates the augmented type."""

    def __init__(
        self,
        type_: type,
        *,
        extensible: bool = False,
        convention_aware: bool = False,
        service_injection: bool = False,
        provides_own_dynamic_object: bool = False,
    ):
        suffix = _get_option("generated_type_suffix")
        self.type = type_
        self._name = f"{type_.__name__}{suffix}"
        self._qualname = f"{type_.__qualname__}{suffix}"
        self._convention_aware = convention_aware
        self._service_injection = service_injection
        self._provides_own_dynamic_object = provides_own_dynamic_object

        self._mixins: list[type] = []
        self._namespace: dict[str, Any] = {}
        self._property_parts: dict[str, dict[str, Callable]] = {}
        self._members: list[tuple[str, str, str, str]] = []
        self._convention_properties: list[str] = []
        self._injected_properties: dict[str, Any] = {}

        if extensible:
            self._mix_in(ExtensionAware)

    @property
    def synthesized_members(self) -> list[tuple[str, str, str, str]]:
        return list(self._members)

    # --- helpers -----------------------------------------------------------

    def _mix_in(self, mixin: type) -> None:
        if issubclass(self.type, mixin) or mixin in self._mixins:
            return
        self._mixins.append(mixin)

    def _record(self, property_name: str, attribute: str, kind: str) -> None:
        self._members.append((self.current_handler, property_name, attribute, kind))

    def _synthesize(self, f: Callable, name: str) -> Callable:
        return _mark_synthetic(f, name, self._qualname, self.type.__module__)

    def _is_free(self, name: str) -> bool:
        return (
            name not in self._namespace
            and name not in self._property_parts
            and inspect.getattr_static(self.type, name, _MISSING) is _MISSING
        )

    def _override(
        self, prop: PropertyMetaData, method: MethodInfo, f: Callable, kind: str
    ) -> None:
        """Install `f` in place of the accessor `method`."""
        f = self._synthesize(f, method.name)
        if method.kind is MemberKind.PROPERTY_GETTER:
            self._property_parts.setdefault(method.name, {})["fget"] = f
        elif method.kind is MemberKind.PROPERTY_SETTER:
            self._property_parts.setdefault(method.name, {})["fset"] = f
        else:
            self._namespace[method.name] = f
        self._record(prop.name, method.name, kind)

    # --- mix-ins -----------------------------------------------------------

    def mix_in_dynamic_aware(self) -> None:
        self._mix_in(DynamicObjectAware)

    def mix_in_convention_aware(self) -> None:
        self._mix_in(IConventionAware)

    def mix_in_property_bag(self) -> None:
        self._mix_in(PropertyBag)

    # --- members -----------------------------------------------------------

    def add_constructor(self, constructor: Callable) -> None:
        original = constructor

        def __init__(self, *args, **kwargs):
            pending = _SERVICES_FOR_NEXT_OBJECT.get()
            if pending is not None:
                # Consumed here so nested constructions start without services
                _SERVICES_FOR_NEXT_OBJECT.set(None)
                state = _instance_state(self)
                state[SERVICES_ATTR], state[NESTED_ATTR] = pending
            original(self, *args, **kwargs)

        if original is object.__init__:
            __init__.__signature__ = inspect.Signature(
                [inspect.Parameter("self", inspect.Parameter.POSITIONAL_OR_KEYWORD)]
            )
        else:
            functools.update_wrapper(__init__, original, assigned=("__doc__",), updated=())

        self._namespace["__init__"] = self._synthesize(__init__, "__init__")
        self._record("", "__init__", "constructor")

    def add_dynamic_methods(self) -> None:
        if inspect.getattr_static(self.type, "__getattr__", _MISSING) is not _MISSING:
            logger.debug("%s defines __getattr__, no dynamic fallback added", self.type.__name__)
            return

        def __getattr__(self, name):
            if (
                name.startswith("_")
                or name in _RESERVED_NAMES
                or inspect.getattr_static(type(self), name, _MISSING) is not _MISSING
            ):
                raise AttributeError(
                    f"'{type(self).__name__}' object has no attribute '{name}'"
                )
            dynamic = self.as_dynamic_object
            if dynamic.has_property(name):
                return dynamic.get_property(name)
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        self._namespace["__getattr__"] = self._synthesize(__getattr__, "__getattr__")
        self._record("", "__getattr__", "dynamic fallback")

    def add_extensions_property(self) -> None:
        def extensions(self):
            return _extensions_of(self)

        self._property_parts.setdefault("extensions", {})["fget"] = self._synthesize(
            extensions, "extensions"
        )
        self._record("extensions", "extensions", "extensions property")

        if inspect.getattr_static(self.type, "get_extensions", _MISSING) is not _MISSING:

            def get_extensions(self):
                return _extensions_of(self)

            self._namespace["get_extensions"] = self._synthesize(get_extensions, "get_extensions")
            self._record("extensions", "get_extensions", "extensions property")

    def add_injector_property(self, prop: PropertyMetaData) -> None:
        self._injected_properties[prop.name] = prop.generic_type
        self._record(prop.name, prop.name, "injector property")

    def apply_service_injection_to_getter(
        self, prop: PropertyMetaData, getter: MethodInfo
    ) -> None:
        name = prop.name
        service_type = prop.type
        use_services_property = not self._service_injection

        def injected_getter(self):
            state = _instance_state(self)
            injected = state.setdefault(INJECTED_ATTR, {})
            if name not in injected:
                services = self.services if use_services_property else state.get(SERVICES_ATTR)
                if services is None:
                    raise UnknownServiceError(
                        service_type,
                        f"for property '{name}' of {type(self).__name__}, as no "
                        "service registry was supplied at construction",
                    )
                injected[name] = services.get(service_type)
            return injected[name]

        self._override(prop, getter, injected_getter, "injected getter")

    def apply_service_injection_to_setter(
        self, prop: PropertyMetaData, setter: MethodInfo
    ) -> None:
        name = prop.name

        def injected_setter(self, value):
            _instance_state(self).setdefault(INJECTED_ATTR, {})[name] = value

        self._override(prop, setter, injected_setter, "injected setter")

    def add_convention_property(self, prop: PropertyMetaData) -> None:
        self._convention_properties.append(prop.name)
        self._record(prop.name, prop.name, "convention property")

    def apply_convention_mapping_to_getter(
        self, prop: PropertyMetaData, getter: MethodInfo
    ) -> None:
        name = prop.name
        original = getter.function

        def convention_getter(self):
            value = original(self)
            return self.convention_mapping.get_convention_value(
                value, name, _is_explicit(self, name)
            )

        self._override(prop, getter, convention_getter, "convention getter")

    def apply_convention_mapping_to_setter(
        self, prop: PropertyMetaData, setter: MethodInfo
    ) -> None:
        name = prop.name
        original = setter.function

        def convention_setter(self, value):
            original(self, value)
            _mark_explicit(self, name)

        self._override(prop, setter, convention_setter, "convention setter")

    def apply_convention_mapping_to_set_method(
        self, prop: PropertyMetaData, method: MethodInfo
    ) -> None:
        name = prop.name
        original = method.function

        def convention_set_method(self, *args, **kwargs):
            result = original(self, *args, **kwargs)
            _mark_explicit(self, name)
            return result

        self._override(prop, method, convention_set_method, "convention set-method")

    def add_set_method(self, prop: PropertyMetaData, setter: MethodInfo) -> None:
        name = prop.name
        if not self._is_free(name):
            logger.debug("No set-method for %r, the name is taken", name)
            return

        if setter.kind is MemberKind.PROPERTY_SETTER:
            attribute = setter.name

            def set_method(self, value):
                setattr(self, attribute, value)

        else:
            accessor = setter.name

            def set_method(self, value):
                getattr(self, accessor)(value)

        self._namespace[name] = self._synthesize(set_method, name)
        self._record(name, name, "set-method")

    def add_action_method(self, method: MethodInfo) -> None:
        name = method.name
        if name in self._namespace:
            return

        implementation = inspect.getattr_static(self.type, name)
        parameter = method.parameters[-1].name

        def action_method(self, *args, **kwargs):
            if args and isinstance(args[-1], Closure):
                args = (*args[:-1], ClosureBackedAction(args[-1]))
            if isinstance(kwargs.get(parameter), Closure):
                kwargs[parameter] = ClosureBackedAction(kwargs[parameter])
            return implementation(self, *args, **kwargs)

        functools.update_wrapper(action_method, implementation, assigned=("__doc__",), updated=())
        signature = _closure_form_signature(implementation, parameter)
        if signature is not None:
            action_method.__signature__ = signature

        self._namespace[name] = self._synthesize(action_method, name)
        self._record("", name, "closure overload")

    def add_property_setters(self, prop: PropertyMetaData, getter: MethodInfo) -> None:
        if prop.setters:
            logger.debug("Property %r keeps its own setter", prop.name)
            return

        if getter.kind is MemberKind.PROPERTY_GETTER:
            attribute = getter.name

            def container_setter(self, value):
                getattr(self, attribute).set(value)

            self._property_parts.setdefault(attribute, {})["fset"] = self._synthesize(
                container_setter, attribute
            )
            self._record(prop.name, attribute, "container setter")
            return

        prefix = getter.name[: len(getter.name) - len(getter.base_name)]
        setter_name = f"{prefix}set_{prop.name}"
        if not self._is_free(setter_name):
            return
        accessor = getter.name

        def container_set_accessor(self, value):
            getattr(self, accessor)().set(value)

        self._namespace[setter_name] = self._synthesize(container_set_accessor, setter_name)
        self._record(prop.name, setter_name, "container setter")

    # --- generation --------------------------------------------------------

    def _convention_defaults(self, properties: tuple[str, ...]) -> dict[str, Any]:
        defaults = {}
        for key, value in _collect_convention_values(self.type).items():
            if key not in properties:
                logger.warning(
                    "Ignoring convention value for '%s': %s has no convention property "
                    "with that name.",
                    key,
                    self.type.__name__,
                )
                continue
            defaults[key] = value
        return defaults

    def generate(self) -> type:
        namespace = dict(self._namespace)
        for attribute, parts in self._property_parts.items():
            original = inspect.getattr_static(self.type, attribute, None)
            if isinstance(original, property):
                namespace[attribute] = property(
                    parts.get("fget", original.fget),
                    parts.get("fset", original.fset),
                    original.fdel,
                    original.__doc__,
                )
            else:
                namespace[attribute] = property(parts.get("fget"), parts.get("fset"))

        namespace["__module__"] = self.type.__module__
        namespace["__qualname__"] = self._qualname
        namespace["__doc__"] = self.type.__doc__

        if self._convention_aware:
            inherited = tuple(getattr(self.type, "__convention_properties__", ()))
            properties = tuple(dict.fromkeys((*inherited, *self._convention_properties)))
            namespace["__convention_properties__"] = properties
            namespace["__convention_defaults__"] = self._convention_defaults(properties)

        metaclass = type(self.type)
        generated = metaclass(self._name, (self.type, *self._mixins), namespace)
        logger.debug(
            "Generated %s with mix-ins %s",
            generated.__qualname__,
            [m.__name__ for m in self._mixins],
        )
        return generated


class _InspectionVisitor(TypeInspectionVisitor):
    """Records the traits reported by the handlers."""

    def __init__(self, type_: type):
        self.type = type_
        self.extensible = False
        self.convention_aware = False
        self.own_dynamic_object = False
        self.service_injection = False

    def mix_in_extensible(self) -> None:
        self.extensible = True

    def mix_in_convention_aware(self) -> None:
        self.convention_aware = True

    def provides_own_dynamic_object_implementation(self) -> None:
        self.own_dynamic_object = True

    def mix_in_service_injection(self) -> None:
        self.service_injection = True

    def builder(self) -> _DynamicTypeBuilder:
        return _DynamicTypeBuilder(
            self.type,
            extensible=self.extensible,
            convention_aware=self.convention_aware,
            service_injection=self.service_injection,
            provides_own_dynamic_object=self.own_dynamic_object,
        )
