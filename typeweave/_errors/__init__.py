"""
This module centralizes custom exception types for the typeweave package,
making them easily importable from a single location.
"""

from ._formatter import TreeFormatter
from ._generation import (
    AbstractMemberOnConcreteTypeError,
    AmbiguousPropertyClaimError,
    TypeGenerationError,
)
from ._injection import (
    InjectionMarkerAmbiguityError,
    InjectMarkerValidator,
    InvalidInjectionMarkerError,
    UnknownServiceError,
)
from ._instantiation import InstantiationError, InvocationError
from ._matrix import InvalidGenerationReportError, _validate_report_type
from ._runtime import (
    DuplicateExtensionError,
    InvalidConventionMappingError,
    MissingValueError,
    UnknownExtensionError,
)

__all__ = [
    "AbstractMemberOnConcreteTypeError",
    "AmbiguousPropertyClaimError",
    "DuplicateExtensionError",
    "InjectMarkerValidator",
    "InjectionMarkerAmbiguityError",
    "InstantiationError",
    "InvalidConventionMappingError",
    "InvalidGenerationReportError",
    "InvalidInjectionMarkerError",
    "InvocationError",
    "MissingValueError",
    "TreeFormatter",
    "TypeGenerationError",
    "UnknownExtensionError",
    "UnknownServiceError",
    "_validate_report_type",
]
