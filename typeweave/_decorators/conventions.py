"""
This module implements the `@conventions` decorator, which declares fallback
values for the properties of a specification type in external files.

Core Functionality:
- **Value Externalization**: Instead of hardcoding default values, a type can
  keep them in configuration files (YAML, JSON, TOML). Each top-level key names
  a property.
- **Lazy Loading**: Files are read when the type is augmented, not when the
  module is imported, so the `conventions_path` option can be set first.
- **Extensible File Support**: The `custom_engine` parameter registers reader
  functions for other formats, such as CSVs via `pandas.read_csv`; a tabular
  result is stored under the file stem.

Fallback values declared in files apply only to properties with convention
support. An explicitly assigned value always wins over them, and a mapping
registered at runtime through `convention_mapping.map` replaces them.

Conventions are inherited: values declared on a base class apply to its
subclasses, and a subclass declaring the same key overrides the base value.
"""

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from typeweave._utils import _dump_str_to_list, _load_convention_data

from ._meta import ConventionMeta


def conventions(
    _cls: type | None = None,
    *,
    file: str | None = None,
    path: str | Path | None = None,
    feed_file: str | Path | None = None,
    include: str | Iterable[str] | None = None,
    exclude: str | Iterable[str] | None = None,
    custom_engine: dict[str, Callable] | None = None,
) -> type | Callable:
    """
    Declare file-based fallback values for a specification type.

    Args:
        _cls (type | None): The class to decorate. Allows the decorator to be
            used with or without arguments.
        file (str | None): Name of a single file inside `path` (or the default
            directory) to read. Defaults to None (all supported files).
        path (str | Path | None): Directory to search. Defaults to the
            `conventions_path` option, else the directory of the module that
            defines the class.
        feed_file (str | Path | None): Full path of a single file to read.
            Takes precedence over `path` and `file`.
        include (str | Iterable[str] | None): Only read files whose name
            contains one of these fragments.
        exclude (str | Iterable[str] | None): Skip files whose name contains
            one of these fragments.
        custom_engine (dict[str, Callable] | None): Additional readers keyed by
            file extension.

    Returns:
        type | Callable: The decorated class, carrying `ConventionMeta`.

    Raises:
        ValueError: If both `include` and `exclude`, or both `file` and
            `feed_file`, are given.
        TypeError: If applied to something other than a class.
    """
    if include and exclude:
        raise ValueError("Cannot specify both 'exclude' and 'include'.")
    if file and feed_file:
        raise ValueError("Cannot specify both 'file' and 'feed_file'.")

    def decorator(cls):
        if not isinstance(cls, type):
            raise TypeError("@conventions can only decorate classes.")
        cls._convention_meta = ConventionMeta(
            _conventions=True,
            _path=str(path) if path is not None else None,
            _file=file,
            _feed_file=str(feed_file) if feed_file is not None else None,
            _include=_dump_str_to_list(include),
            _exclude=_dump_str_to_list(exclude),
            _custom_engine=custom_engine,
        )
        return cls

    if _cls is None:
        return decorator
    return decorator(_cls)


def _has_conventions(cls: type) -> bool:
    return isinstance(vars(cls).get("_convention_meta"), ConventionMeta)


def _collect_convention_values(type_: type) -> dict[str, Any]:
    """Load and merge the file-based fallback values of a type and its bases."""
    values: dict[str, Any] = {}
    for cls in reversed(type_.__mro__):
        if not _has_conventions(cls):
            continue
        meta = cls._convention_meta
        values.update(
            _load_convention_data(
                obj=cls,
                path=meta._path,
                include=meta._include,
                exclude=meta._exclude,
                specific_file=meta._file,
                feed_file=meta._feed_file,
                custom_engine=meta._custom_engine,
            )
        )
    return values
