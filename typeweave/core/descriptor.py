"""
This module defines the result of an augmentation pass: the augmented type
descriptor, its constructor descriptors and the cache entry that keeps it.

`AugmentedType`:
The externally consumed result. Exposes the generated type, its enclosing
type (if the specification type is nested in another class), the service
types the generated type supplies to itself through injected properties, the
constructors and the `GenerationReport` of the pass.

`GeneratedConstructor`:
Describes the constructor of a generated type. It reports whether a service
type is required (either by a parameter or by an injected property) and
creates instances with a service registry and a nested instantiator handed
to the generated `__init__`.

`CachedType`:
The cache entry. Holds the generated type and its enclosing type through
weak references, so caching never keeps a type alive; the injected service
types are held strongly, as they are assumed to be long-lived.
"""

import inspect
import logging
import sys
import weakref
from typing import Any

from typeweave._decorators import GenerationReport
from typeweave._errors import InstantiationError, InvocationError
from typeweave._utils import _raw_type, _resolve_annotations
from typeweave.runtime._state import _SERVICES_FOR_NEXT_OBJECT

logger = logging.getLogger(__name__)


def _outer_type(type_: type) -> type | None:
    """Return the class a type is nested in, or None."""
    qualname = type_.__qualname__
    if "." not in qualname or "<locals>" in qualname:
        return None
    module = sys.modules.get(type_.__module__)
    outer: Any = module
    for part in qualname.split(".")[:-1]:
        outer = getattr(outer, part, None)
        if outer is None:
            return None
    return outer if isinstance(outer, type) else None


class GeneratedConstructor:
    """A constructor of a generated type."""

    def __init__(
        self,
        generated_type: type,
        declaring_type: type,
        injected_services: tuple[type, ...] = (),
    ):
        self.generated_type = generated_type
        self.declaring_type = declaring_type
        self._injected_services = injected_services
        try:
            self.signature = inspect.signature(generated_type)
        except (TypeError, ValueError):
            self.signature = inspect.Signature()

    @property
    def parameters(self) -> tuple[inspect.Parameter, ...]:
        return tuple(self.signature.parameters.values())

    @property
    def generic_parameter_types(self) -> tuple[Any, ...]:
        annotations = _resolve_annotations(self.declaring_type.__init__, self.declaring_type)
        return tuple(
            annotations.get(p.name, p.annotation) for p in self.parameters
        )

    @property
    def parameter_types(self) -> tuple[type | None, ...]:
        return tuple(_raw_type(t) for t in self.generic_parameter_types)

    @property
    def modifiers(self) -> frozenset[str]:
        modifiers = {"public"}
        kinds = {p.kind for p in self.parameters}
        if inspect.Parameter.VAR_POSITIONAL in kinds:
            modifiers.add("varargs")
        if inspect.Parameter.VAR_KEYWORD in kinds:
            modifiers.add("varkw")
        return frozenset(modifiers)

    def requires_dependency(self, service_type: type) -> bool:
        """
        Whether an instance needs a service of the given type.

        True when a parameter accepts `service_type` or when an injected
        property of the generated type does.
        """
        for raw in self.parameter_types:
            if raw is not None and issubclass(service_type, raw):
                return True
        return any(issubclass(service_type, s) for s in self._injected_services)

    def instantiate(self, services: Any, nested: Any, *args: Any, **kwargs: Any) -> Any:
        """
        Create an instance of the generated type.

        Args:
            services (ServiceRegistry | None): Registry used by injected
                properties of the new instance.
            nested (Instantiator | None): Instantiator for objects the instance
                creates itself (e.g. extensions).
            *args: Positional constructor arguments.
            **kwargs: Keyword constructor arguments.

        Raises:
            InstantiationError: If the type is abstract or the arguments do not
                match the constructor.
            InvocationError: If the constructor raises.
        """
        cls = self.generated_type
        if inspect.isabstract(cls):
            missing = ", ".join(sorted(cls.__abstractmethods__))
            raise InstantiationError(cls, f"it is abstract (missing {missing})")
        try:
            self.signature.bind(*args, **kwargs)
        except TypeError as e:
            raise InstantiationError(cls, str(e)) from e

        token = _SERVICES_FOR_NEXT_OBJECT.set((services, nested))
        try:
            return cls(*args, **kwargs)
        except Exception as e:
            raise InvocationError(cls) from e
        finally:
            _SERVICES_FOR_NEXT_OBJECT.reset(token)

    def __repr__(self) -> str:
        return f"<constructor {self.generated_type.__qualname__}{self.signature}>"


class AugmentedType:
    """The generated type of a specification type and its metadata."""

    def __init__(
        self,
        generated_type: type,
        outer_type: type | None,
        injected_services: tuple[type, ...],
        report: GenerationReport,
    ):
        self.generated_type = generated_type
        self.outer_type = outer_type
        self.injected_services = injected_services
        self.report = report

    @property
    def constructors(self) -> list[GeneratedConstructor]:
        return [
            GeneratedConstructor(
                self.generated_type,
                self.generated_type.__mro__[1],
                self.injected_services,
            )
        ]

    def __repr__(self) -> str:
        return f"<AugmentedType {self.generated_type.__qualname__}>"


class CachedType:
    """Cache entry that does not keep the generated type alive."""

    def __init__(self, augmented: AugmentedType):
        self._generated_type = weakref.ref(augmented.generated_type)
        self._outer_type = (
            weakref.ref(augmented.outer_type) if augmented.outer_type is not None else None
        )
        self._injected_services = augmented.injected_services
        self._report = augmented.report

    def as_wrapper(self) -> AugmentedType | None:
        """Rebuild the descriptor, or None once the generated type is gone."""
        generated = self._generated_type()
        if generated is None:
            return None
        outer = self._outer_type() if self._outer_type is not None else None
        return AugmentedType(generated, outer, self._injected_services, self._report)
