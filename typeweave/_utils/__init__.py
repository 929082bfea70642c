"""
This module exposes utility functions from sub-modules for use
within the typeweave package.
"""

from typeweave._utils.config import _get_option, set_typeweave_option
from typeweave._utils.helpers import _dump_str_to_list, _mark_synthetic, _type_name
from typeweave._utils.inspect import (
    MemberKind,
    MethodInfo,
    PropertyDetails,
    TypeDetails,
    Visibility,
    _inspect_type,
    _positional_arity,
    _raw_type,
    _resolve_annotations,
)
from typeweave._utils.loaders import _load_convention_data
from typeweave._utils.parsers import _ConfigReader

# Define main API for internal _utils module
# only contains methods/objects used within the package
__all__ = [
    "MemberKind",
    "MethodInfo",
    "PropertyDetails",
    "TypeDetails",
    "Visibility",
    "_ConfigReader",
    "_dump_str_to_list",
    "_get_option",
    "_inspect_type",
    "_load_convention_data",
    "_mark_synthetic",
    "_positional_arity",
    "_raw_type",
    "_resolve_annotations",
    "_type_name",
    "set_typeweave_option",
]
