"""
Per-instance state shared between the generated types and the runtime
capabilities.

Generated members and mix-ins keep their state in the instance `__dict__`
under the attribute names below, so that they never collide with attributes
of the specification type. Services supplied at construction time reach the
generated `__init__` through `_SERVICES_FOR_NEXT_OBJECT`; the constructor
consumes the value on read, so nested constructions start from a clean slate.
"""

from contextvars import ContextVar
from typing import Any

SERVICES_ATTR = "_typeweave_services"
NESTED_ATTR = "_typeweave_nested"
EXTENSIONS_ATTR = "_typeweave_extensions"
CONVENTION_MAPPING_ATTR = "_typeweave_convention_mapping"
DYNAMIC_OBJECT_ATTR = "_typeweave_dynamic_object"
INJECTED_ATTR = "_typeweave_injected"
EXPLICIT_ATTR = "_typeweave_explicit"

_SERVICES_FOR_NEXT_OBJECT: ContextVar[tuple[Any, Any] | None] = ContextVar(
    "_SERVICES_FOR_NEXT_OBJECT", default=None
)


def _instance_state(obj: object) -> dict[str, Any]:
    """Return the instance dictionary, creating no attributes."""
    try:
        return object.__getattribute__(obj, "__dict__")
    except AttributeError as e:
        raise TypeError(
            f"Instances of {type(obj).__name__} need a __dict__ to carry generated state."
        ) from e
