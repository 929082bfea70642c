"""
This module provides small, general-purpose helpers shared across the
`typeweave` package.

`_dump_str_to_list` standardizes an argument that can be either a single
string or a list of strings (e.g. the `include`/`exclude` filters of the
`@conventions` decorator). `_mark_synthetic` stamps a function the engine
generated so that later inspection passes recognise it as synthetic, and
`_type_name` renders annotations for diagnostics.
"""

import inspect
from collections.abc import Callable
from typing import Any


def _dump_str_to_list(s: str | list | tuple | None) -> list[str] | None:
    """Convert a string to a list of strings."""
    if s is None:
        return None
    if isinstance(s, str):
        return [s]
    if isinstance(s, (list, tuple)):
        return list(s)
    raise TypeError("Argument must be a string or a list of strings.")


def _mark_synthetic(f: Callable, name: str, owner_qualname: str, module: str) -> Callable:
    """Name a generated function after the member it implements and flag it."""
    f.__name__ = name
    f.__qualname__ = f"{owner_qualname}.{name}"
    f.__module__ = module
    f.__synthetic__ = True
    return f


def _type_name(t: Any) -> str:
    if t is None or t is inspect.Parameter.empty:
        return "?"
    if isinstance(t, type):
        return t.__name__
    return str(t).replace("typing.", "")
