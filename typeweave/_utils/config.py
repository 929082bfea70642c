"""
This module manages global configuration settings for the typeweave package.

It offers a simple, centralized mechanism for setting and retrieving
package-level options that affect how specification types are augmented. This
is particularly useful for defining environment-wide settings without having to
pass them repeatedly to every generator or decorator.

Supported options:
- `conventions_path`: default directory searched by the `@conventions`
  decorator when it is given neither a `path` nor a `feed_file`.
- `strict_abstract_members`: when True, unclaimed abstract members are
  rejected on every specification type, not only on types the interpreter
  itself considers abstract.
- `generated_type_suffix`: suffix appended to the name of every generated type.

The module exposes `set_typeweave_option` to modify settings and an internal
`_get_option` to retrieve them, providing a controlled interface to a private,
module-level settings dictionary.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

# A private dictionary to hold all package settings.
_settings = {
    "conventions_path": None,
    "strict_abstract_members": False,
    "generated_type_suffix": "_Decorated",
}

# Accepted value types per option
_option_types = {
    "conventions_path": (str, Path),
    "strict_abstract_members": (bool,),
    "generated_type_suffix": (str,),
}


def set_typeweave_option(options: Iterable[str] | str, values: Iterable[Any] | Any) -> None:
    """
    Set one or more configuration options for the typeweave package.

    Args:
        options (Iterable[str] | str): The name(s) of the option(s) to set
            (e.g., 'conventions_path').
        values (Iterable[Any] | Any): The value(s) to set, in the same order
            as `options`.

    Raises:
        KeyError: If an option name is unknown.
        TypeError: If an option name is not a string or a value has the wrong
            type for its option.
    """

    if isinstance(options, str):
        options = [options]

    if isinstance(values, (str, Path, bool)):
        values = [values]

    if not isinstance(options, Iterable):
        raise TypeError("Key must be a string or an iterable of strings.")

    if not isinstance(values, Iterable):
        raise TypeError("Value must be a single value or an iterable of values.")

    for option, value in zip(options, values, strict=False):
        if not isinstance(option, str):
            raise TypeError("Key must be a string.")

        if option not in _settings:
            raise KeyError(
                f"Invalid option key: {option!r}. Valid options are: {list(_settings.keys())}"
            )

        expected = _option_types[option]
        if not isinstance(value, expected):
            names = " or ".join(t.__name__ for t in expected)
            raise TypeError(f"Value for option {option!r} must be of type {names}.")

        _settings[option] = value


def _get_option(key: str) -> Any:
    """
    Get a configuration option for the typeweave package.

    Args:
        key (str): The name of the option to get.
    """
    return _settings.get(key)
