"""
This module validates the use of the `@inject` marker and defines the errors
related to service injection.

`InjectMarkerValidator`:
Checks one marked member. The marker is only valid on an instance-level,
non-final, public or protected property getter (a `property` getter or a
zero-argument `get_<name>` method). Each violation is reported with a
dedicated reason.

`InjectionMarkerAmbiguityError`:
Raised when a marked property is also claimed by another capability. It is
both an `InvalidInjectionMarkerError` and an `AmbiguousPropertyClaimError`,
so it can be handled as either.

`UnknownServiceError`:
Raised by a service registry that cannot supply the requested type.
"""

import inspect

from typeweave._utils import MethodInfo, PropertyDetails, Visibility

from ._formatter import TreeFormatter
from ._generation import AmbiguousPropertyClaimError


class InvalidInjectionMarkerError(ValueError):
    """Raised when `@inject` marks a member that cannot be injected."""

    pass


class InjectionMarkerAmbiguityError(InvalidInjectionMarkerError, AmbiguousPropertyClaimError):
    """Raised when an injected property is claimed by another handler too."""

    def __init__(self, method: MethodInfo, prop: PropertyDetails | str):
        self.method = method
        self.property_name = getattr(prop, "name", prop)
        formatter = TreeFormatter()
        formatter.node("Cannot use @inject annotation on method ")
        formatter.append_method(method)
        formatter.append(f" as property '{self.property_name}' is already claimed")
        formatter.append(" by another capability.")
        ValueError.__init__(self, str(formatter))


class UnknownServiceError(LookupError):
    """Raised when a service registry cannot supply a service."""

    def __init__(self, service_type: type, detail: str | None = None):
        self.service_type = service_type
        formatter = TreeFormatter()
        formatter.node("No service of type ")
        formatter.append_type(service_type)
        formatter.append(" available")
        formatter.append(f" {detail}." if detail else ".")
        super().__init__(str(formatter))


class InjectMarkerValidator:
    """Validates that an `@inject` marked member is an injectable getter."""

    def __init__(self, method: MethodInfo):
        self.method = method

    def _reject(self, reason: str) -> None:
        formatter = TreeFormatter()
        formatter.node("Cannot use @inject annotation on method ")
        formatter.append_method(self.method)
        formatter.append(f" as {reason}.")
        raise InvalidInjectionMarkerError(str(formatter))

    def validate(self) -> None:
        """
        Performs all validation checks.

        Raises:
            InvalidInjectionMarkerError: If the member is static, not a
                property getter, final, private, or lacks a service type.
        """
        if self.method.is_static:
            self._reject("it is static")
        if not self.method.is_get_getter:
            self._reject("it is not a property getter")
        if self.method.is_final:
            self._reject("it is final")
        if self.method.visibility is Visibility.PRIVATE:
            self._reject("it is not public or protected")
        if self.method.return_type is None:
            annotation = self.method.generic_return_type
            if annotation is inspect.Parameter.empty:
                self._reject("it does not declare the service type")
            self._reject(f"its return type {annotation!r} does not name a class")
