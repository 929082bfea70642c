"""
This module finds, reads and merges the configuration files that declare
fallback values for specification types. It is the engine behind the
`@conventions` decorator.

`_load_convention_data` is the entry point. It:
- resolves the directory to search (explicit `path`, the `conventions_path`
  option, or the directory of the decorated type's source file);
- loads either one file (`feed_file` or `specific_file`) or every file with a
  supported extension in that directory;
- filters discovered files with `include`/`exclude` name fragments;
- merges all parsed content into a single dictionary.

Custom engines may return a `pandas.DataFrame` (e.g. `pandas.read_csv`); such
a result is stored under the file stem so it can be mapped onto a property of
the same name.
"""

from collections.abc import Callable, Iterable
from inspect import getfile
from pathlib import Path
from typing import Any

from pandas import DataFrame

from .config import _get_option
from .parsers import _ConfigReader


def _filter_files(
    files: Iterable[str | Path],
    patterns: Iterable[str] | str | None = None,
    include: bool = True,
) -> list:
    """Keep (include=True) or drop (include=False) files whose name contains a pattern."""
    if not patterns:
        return list(files)

    if isinstance(patterns, str):
        patterns = [patterns]

    if not isinstance(patterns, Iterable):
        raise TypeError("Argument 'patterns' must be a string or an iterable.")

    return [
        file
        for file in files
        if include is any(pattern in Path(file).name for pattern in patterns)
    ]


def _supported_patterns(custom_engine: dict[str, Any] | None = None) -> list[str]:
    """Glob patterns of all readable extensions, custom ones included."""
    patterns = ["*.json", "*.yaml", "*.yml", "*.toml"]
    if custom_engine and isinstance(custom_engine, dict):
        for ext in custom_engine:
            patterns.append(f"*.{ext.lstrip('*').lstrip('.')}")

    return patterns


def _validate_load_args(
    exclude: Iterable[str] | None,
    include: Iterable[str] | None,
    specific_file: str | None,
    custom_engine: dict[str, Any] | None,
) -> None:
    if exclude and include:
        raise ValueError("Cannot specify both 'exclude' and 'include'.")

    if (exclude or include) and specific_file:
        raise ValueError("Cannot specify both 'specific_file' and 'exclude/include'.")

    if not (custom_engine is None or isinstance(custom_engine, dict)):
        raise TypeError(
            "Custom engine must be a dict mapping file extensions to read function."
        )


def _normalize(data: Any, source: Path) -> dict[str, Any]:
    """Wrap tabular results under the file stem."""
    if isinstance(data, DataFrame):
        return {} if data.empty else {source.stem: data}
    return data or {}


def _load_single_file(
    config_path: Path, custom_engine: dict[str, Any] | None
) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Specified convention file not found: {config_path}")

    data = _ConfigReader(config_path, custom_engine=custom_engine).read()
    return _normalize(data, config_path)


def _load_directory(
    parent_dir: Path,
    exclude: Iterable[str] | None,
    include: Iterable[str] | None,
    custom_engine: dict[str, Any] | None,
) -> dict[str, Any]:
    files = []
    for pattern in _supported_patterns(custom_engine):
        files.extend(sorted(parent_dir.glob(pattern)))

    if not files:
        raise FileNotFoundError(f"No convention files found in {parent_dir}.")

    files = _filter_files(files, include or exclude, include=include is not None)

    data: dict[str, Any] = {}
    for file in files:
        content = _normalize(
            _ConfigReader(file, custom_engine=custom_engine).read(), Path(file)
        )
        duplicates = set(content) & set(data)
        if duplicates:
            raise ValueError(
                f"Duplicate convention keys {sorted(duplicates)} found in {Path(file).name}."
            )
        data.update(content)

    return data


def _load_convention_data(
    *,
    obj: Callable | None = None,
    path: str | Path | None = None,
    exclude: Iterable[str] | None = None,
    include: Iterable[str] | None = None,
    specific_file: str | None = None,
    feed_file: str | Path | None = None,
    custom_engine: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Find, read and merge convention files for a specification type."""

    _validate_load_args(exclude, include, specific_file, custom_engine)

    if feed_file is not None:
        return _load_single_file(Path(feed_file), custom_engine)

    path = path if path is not None else _get_option("conventions_path")
    if isinstance(path, (str, Path)):
        parent_dir = Path(path)
        if not parent_dir.exists():
            raise FileNotFoundError(f"Specified path not found: {parent_dir}")
    elif obj is not None:
        parent_dir = Path(getfile(obj)).parent
    else:
        raise ValueError("Either 'obj', 'path' or 'feed_file' must be specified.")

    if specific_file:
        return _load_single_file(parent_dir / specific_file, custom_engine)

    return _load_directory(parent_dir, exclude, include, custom_engine)
