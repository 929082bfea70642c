"""
This module implements the service side of dependency injection.

`ServiceRegistry`:
Resolves a service by type. Augmented types receive a registry at
construction time and use it to supply `@inject` properties.

`DefaultServiceRegistry`:
A simple registry of service instances and lazily called factories, with an
optional parent registry consulted for anything it cannot supply.

`DependencyInjectingInstantiator`:
Creates augmented instances. It augments the requested type, fills every
constructor parameter the caller did not supply from the registry (by
annotated type), and passes itself as the factory for nested instances, so
objects created by an instance (e.g. extensions) are injected the same way.
"""

import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, TypeVar

from typeweave._errors import UnknownServiceError

from ._state import NESTED_ATTR, _instance_state

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServiceRegistry(ABC):
    """Resolves services by type."""

    @abstractmethod
    def find(self, service_type: type[T]) -> T | None:
        """Return a service of the given type, or None."""

    def get(self, service_type: type[T]) -> T:
        """
        Return a service of the given type.

        Raises:
            UnknownServiceError: If no such service is available.
        """
        service = self.find(service_type)
        if service is None:
            raise UnknownServiceError(service_type)
        return service


class DefaultServiceRegistry(ServiceRegistry):
    """A registry of service instances and factories."""

    def __init__(self, *services: Any, parent: ServiceRegistry | None = None):
        self._parent = parent
        self._services: list[tuple[type, Any]] = []
        self._factories: dict[type, Callable[[], Any]] = {}
        for service in services:
            self.add(service)

    def add(self, service: Any, service_type: type | None = None) -> "DefaultServiceRegistry":
        self._services.append((service_type or type(service), service))
        return self

    def add_factory(
        self, service_type: type, factory: Callable[[], Any]
    ) -> "DefaultServiceRegistry":
        """Register a factory called on first lookup of `service_type`."""
        self._factories[service_type] = factory
        return self

    def find(self, service_type: type[T]) -> T | None:
        for registered, service in self._services:
            if registered is service_type:
                return service
        for _, service in self._services:
            if isinstance(service, service_type):
                return service
        for registered, factory in list(self._factories.items()):
            if issubclass(registered, service_type):
                service = factory()
                del self._factories[registered]
                self.add(service, registered)
                return service
        if self._parent is not None:
            return self._parent.find(service_type)
        return None


class Instantiator(ABC):
    """Creates instances of types."""

    @abstractmethod
    def new_instance(self, type_: type[T], *args: Any, **kwargs: Any) -> T:
        """Create an instance of `type_` with the given constructor arguments."""


class DependencyInjectingInstantiator(Instantiator):
    """Creates augmented instances with services injected."""

    def __init__(self, generator: Any = None, services: ServiceRegistry | None = None):
        if generator is None:
            # Explicit import to avoid circular import error
            from typeweave.core.generator import default_generator

            generator = default_generator
        self._generator = generator
        self._services = services

    @property
    def services(self) -> ServiceRegistry | None:
        return self._services

    def _resolve(self, raw_type: type) -> Any:
        if self._services is not None:
            service = self._services.find(raw_type)
            if service is not None:
                return service
            if isinstance(self._services, raw_type):
                return self._services
        if isinstance(self, raw_type):
            return self
        return None

    def _fill_parameters(
        self, constructor: Any, args: tuple, kwargs: dict[str, Any]
    ) -> dict[str, Any]:
        kwargs = dict(kwargs)
        injectable = (
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        )
        for index, (param, raw_type) in enumerate(
            zip(constructor.parameters, constructor.parameter_types, strict=False)
        ):
            if param.kind not in injectable or param.name in kwargs:
                continue
            if param.kind is not inspect.Parameter.KEYWORD_ONLY and index < len(args):
                continue
            if raw_type is None or raw_type is object:
                continue
            service = self._resolve(raw_type)
            if service is not None:
                logger.debug(
                    "Injecting %s into parameter '%s' of %s",
                    raw_type.__name__,
                    param.name,
                    constructor.declaring_type.__name__,
                )
                kwargs[param.name] = service
        return kwargs

    def new_instance(self, type_: type[T], *args: Any, **kwargs: Any) -> T:
        augmented = self._generator.augment(type_)
        constructor = augmented.constructors[0]
        kwargs = self._fill_parameters(constructor, args, kwargs)
        return constructor.instantiate(self._services, self, *args, **kwargs)


def instantiator_for(obj: Any) -> Instantiator | None:
    """Return the instantiator an augmented instance was created with."""
    return _instance_state(obj).get(NESTED_ATTR)
