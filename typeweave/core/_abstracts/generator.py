"""
This module implements the generation pipeline shared by every concrete type
generator: the type cache and the inspection pass that drives the capability
handlers.

`AbstractTypeGenerator.augment(type_)` returns the augmented type of a
specification type. The whole operation runs under one process-wide lock, so
each type is generated at most once even under concurrent use. Results are
cached per concrete generator class in a `WeakKeyDictionary`; an entry whose
generated type has been garbage collected counts as a miss and is
regenerated. Both the specification type and the generated type key the same
entry, so augmenting a generated type returns its own descriptor.

A pass runs in this order:
1. `start(type_)` returns the generator's inspection visitor.
2. The type's members are inspected: handlers see every method
   (`validate_method`) and every property (`visit_property`, then
   `claim_property`); unclaimed properties are offered to the extensible
   handler and checked for abstract members; then every instance method is
   checked and visited.
3. Handlers report traits (`apply_to_inspection`), then emit members
   (`apply_to_generation`), the constructor is mirrored and the type is
   generated.

Any failure is surfaced as a `TypeGenerationError` chained to its cause;
nothing is cached for a failed pass.
"""

import inspect
import logging
import threading
from abc import ABC, abstractmethod
from weakref import WeakKeyDictionary

from typeweave._decorators import GenerationReport
from typeweave._errors import AbstractMemberOnConcreteTypeError, TypeGenerationError
from typeweave._utils import MethodInfo, _get_option
from typeweave._utils.inspect import _inspect_type as _collect_type_details

from ..descriptor import AugmentedType, CachedType, _outer_type
from ..handlers import (
    DslMixInPropertyHandler,
    ExtensibleTypePropertyHandler,
    PropertyTypePropertyHandler,
    ServiceInjectionPropertyHandler,
    TypeGenerationHandler,
)
from ..properties import assemble_properties
from .visitors import TypeGenerationVisitor, TypeInspectionVisitor

logger = logging.getLogger(__name__)

_lock = threading.RLock()

# One cache per concrete generator class
_generated_types: dict[type, WeakKeyDictionary] = {}


class AbstractTypeGenerator(ABC):
    """Base class of type generators: caching and the handler pipeline."""

    @abstractmethod
    def start(self, type_: type) -> TypeInspectionVisitor:
        """Return the inspection visitor of a new pass over `type_`."""

    def augment(self, type_: type) -> AugmentedType:
        """
        Return the augmented type of a specification type.

        Args:
            type_ (type): The specification type.

        Returns:
            AugmentedType: The generated type and its metadata.

        Raises:
            TypeError: If `type_` is not a class.
            TypeGenerationError: If the type cannot be augmented.
        """
        if not isinstance(type_, type):
            raise TypeError(f"Can only augment classes, got {type_!r}.")

        with _lock:
            cache = _generated_types.setdefault(type(self), WeakKeyDictionary())
            cached = cache.get(type_)
            if cached is not None:
                wrapper = cached.as_wrapper()
                if wrapper is not None:
                    logger.debug("Using cached augmented type for %s", type_.__qualname__)
                    return wrapper
                logger.debug(
                    "Augmented type for %s was collected, regenerating", type_.__qualname__
                )

            try:
                augmented = self._generate(type_)
            except TypeGenerationError:
                raise
            except Exception as e:
                raise TypeGenerationError(type_, str(e)) from e

            cached = CachedType(augmented)
            cache[type_] = cached
            cache[augmented.generated_type] = cached
            return augmented

    def _generate(self, type_: type) -> AugmentedType:
        logger.debug("Generating augmented type for %s", type_.__qualname__)
        extensible = ExtensibleTypePropertyHandler()
        injection = ServiceInjectionPropertyHandler()
        handlers: list[TypeGenerationHandler] = [
            extensible,
            DslMixInPropertyHandler(extensible),
            PropertyTypePropertyHandler(),
            injection,
        ]

        inspection = self.start(type_)
        claims = self._inspect_type(type_, handlers, extensible)

        for handler in handlers:
            handler.apply_to_inspection(inspection)

        builder = inspection.builder()
        for handler in handlers:
            builder.current_handler = handler.name
            handler.apply_to_generation(builder)
        builder.current_handler = ""

        builder.add_constructor(type_.__init__)
        generated = builder.generate()

        report = GenerationReport(
            _type_name=type_.__qualname__,
            _generated_name=generated.__qualname__,
            _claims=claims,
            _fallback_properties=[p.name for p in extensible.convention_properties],
            _members=builder.synthesized_members,
            _mixins=[m.__name__ for m in generated.__bases__ if m is not type_],
            _injected_services=[t.__name__ for t in injection.injected_services],
            _handlers=[h.name for h in handlers],
        )
        return AugmentedType(
            generated,
            _outer_type(type_),
            tuple(injection.injected_services),
            report,
        )

    def _inspect_type(
        self,
        type_: type,
        handlers: list[TypeGenerationHandler],
        extensible: ExtensibleTypePropertyHandler,
    ) -> dict[str, str]:
        details = _collect_type_details(type_)
        metadata = assemble_properties(details)

        for handler in handlers:
            handler.start_type(type_)

        for method in details.all_methods:
            for handler in handlers:
                handler.validate_method(method)

        claims: dict[str, str] = {}
        for prop in metadata.properties:
            for handler in handlers:
                handler.visit_property(prop)

            claimed_by = None
            for handler in handlers:
                if not handler.claim_property(prop):
                    continue
                if claimed_by is None:
                    claimed_by = handler
                else:
                    handler.ambiguous(prop)

            if claimed_by is not None:
                claims[prop.name] = claimed_by.name
                logger.debug("Property %r claimed by %s handler", prop.name, claimed_by.name)
                continue

            extensible.unclaimed(prop)
            for method in (*prop.getters, *prop.setters, *prop.set_methods):
                self._assert_not_abstract(type_, method)

        for method in details.instance_methods:
            self._assert_not_abstract(type_, method)
            for handler in handlers:
                handler.visit_instance_method(method)

        return claims

    @staticmethod
    def _assert_not_abstract(type_: type, method: MethodInfo) -> None:
        if not method.is_abstract:
            return
        if inspect.isabstract(type_) or _get_option("strict_abstract_members"):
            raise AbstractMemberOnConcreteTypeError(method)
        # Abstract markers on a class that does not enforce them are tolerated.
        logger.debug("Ignoring abstract %s on concrete type", method.signature_text)


def _clear_cache() -> None:
    """Drop every cached augmented type."""
    with _lock:
        _generated_types.clear()

