"""
This module aggregates the decorators and metadata structures from the
sub-modules, making them accessible under the 'typeweave._decorators'
namespace.
"""

from typeweave._decorators._meta import ConventionMeta, GenerationReport, InjectMeta
from typeweave._decorators.conventions import (
    _collect_convention_values,
    _has_conventions,
    conventions,
)
from typeweave._decorators.markers import (
    _declares_no_convention_mapping,
    _is_injected,
    _is_non_extensible,
    inject,
    no_convention_mapping,
    non_extensible,
)

__all__ = [
    "ConventionMeta",
    "GenerationReport",
    "InjectMeta",
    "_collect_convention_values",
    "_declares_no_convention_mapping",
    "_has_conventions",
    "_is_injected",
    "_is_non_extensible",
    "conventions",
    "inject",
    "no_convention_mapping",
    "non_extensible",
]
