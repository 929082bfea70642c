"""
This module serves as the main entry point for the typeweave package,
exposing its primary public API.
"""

import logging

from typeweave._decorators import conventions, inject, no_convention_mapping, non_extensible
from typeweave._errors import (
    AbstractMemberOnConcreteTypeError,
    AmbiguousPropertyClaimError,
    InjectionMarkerAmbiguityError,
    InstantiationError,
    InvalidInjectionMarkerError,
    InvocationError,
    TypeGenerationError,
    UnknownExtensionError,
    UnknownServiceError,
)
from typeweave.core import (
    AugmentedType,
    ClaimGraph,
    ClaimMatrix,
    DynamicTypeGenerator,
    GeneratedConstructor,
    augment,
)
from typeweave.options import set_typeweave_option
from typeweave.runtime import (
    Action,
    Closure,
    DefaultServiceRegistry,
    DependencyInjectingInstantiator,
    ExtensionAware,
    ExtensionContainer,
    HasMultipleValues,
    IConventionAware,
    ListProperty,
    MapProperty,
    Property,
    ServiceRegistry,
    SetProperty,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# --- Define main API for typeweave module ---
__all__ = [
    "AbstractMemberOnConcreteTypeError",
    "Action",
    "AmbiguousPropertyClaimError",
    "AugmentedType",
    "ClaimGraph",
    "ClaimMatrix",
    "Closure",
    "DefaultServiceRegistry",
    "DependencyInjectingInstantiator",
    "DynamicTypeGenerator",
    "ExtensionAware",
    "ExtensionContainer",
    "GeneratedConstructor",
    "HasMultipleValues",
    "IConventionAware",
    "InjectionMarkerAmbiguityError",
    "InstantiationError",
    "InvalidInjectionMarkerError",
    "InvocationError",
    "ListProperty",
    "MapProperty",
    "Property",
    "ServiceRegistry",
    "SetProperty",
    "TypeGenerationError",
    "UnknownExtensionError",
    "UnknownServiceError",
    "augment",
    "conventions",
    "inject",
    "no_convention_mapping",
    "non_extensible",
    "set_typeweave_option",
]
