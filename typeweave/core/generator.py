"""
This module provides the default type generator and the `augment` entry point.

`DynamicTypeGenerator` materializes augmented types at runtime: its
inspection visitor collects the traits the handlers report and its builder
creates a subclass of the specification type with `type()`.

`augment(type_)` is a shortcut for `default_generator.augment(type_)`; all
callers of the shortcut share one cache.
"""

import sys

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from ._abstracts import AbstractTypeGenerator
from .builder import _InspectionVisitor
from .descriptor import AugmentedType


class DynamicTypeGenerator(AbstractTypeGenerator):
    """Generates augmented types as runtime subclasses."""

    @override
    def start(self, type_: type) -> _InspectionVisitor:
        return _InspectionVisitor(type_)


default_generator = DynamicTypeGenerator()


def augment(type_: type) -> AugmentedType:
    """
    Augment a specification type with the default generator.

    Example:
        >>> from typeweave import augment, DefaultServiceRegistry
        >>> widget_type = augment(Widget)
        >>> ctor = widget_type.constructors[0]
        >>> widget = ctor.instantiate(DefaultServiceRegistry(PaintService()), None)

    Args:
        type_ (type): The specification type.

    Returns:
        AugmentedType: The generated type and its metadata.
    """
    return default_generator.augment(type_)
