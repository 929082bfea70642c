"""
Runtime capabilities mixed into augmented types, and the collaborators they
work with (value containers, callbacks, service registries).
"""

from typeweave.runtime.actions import Action, Closure, ClosureBackedAction, as_action
from typeweave.runtime.conventions import (
    ConventionAwareHelper,
    ConventionMapping,
    IConventionAware,
    MappedProperty,
)
from typeweave.runtime.dynamic import (
    BeanDynamicObject,
    DynamicObject,
    DynamicObjectAware,
    PropertyBag,
)
from typeweave.runtime.extensions import ExtensionAware, ExtensionContainer, ExtraProperties
from typeweave.runtime.providers import (
    HasMultipleValues,
    ListProperty,
    MapProperty,
    Property,
    Provider,
    SetProperty,
)
from typeweave.runtime.services import (
    DefaultServiceRegistry,
    DependencyInjectingInstantiator,
    Instantiator,
    ServiceRegistry,
    instantiator_for,
)

__all__ = [
    "Action",
    "BeanDynamicObject",
    "Closure",
    "ClosureBackedAction",
    "ConventionAwareHelper",
    "ConventionMapping",
    "DefaultServiceRegistry",
    "DependencyInjectingInstantiator",
    "DynamicObject",
    "DynamicObjectAware",
    "ExtensionAware",
    "ExtensionContainer",
    "ExtraProperties",
    "HasMultipleValues",
    "IConventionAware",
    "Instantiator",
    "ListProperty",
    "MapProperty",
    "MappedProperty",
    "Property",
    "PropertyBag",
    "Provider",
    "ServiceRegistry",
    "SetProperty",
    "as_action",
    "instantiator_for",
]
