"""
This module defines the exceptions raised by the runtime capabilities that
augmented types mix in: the extension container, the convention mapping and
the managed value containers.
"""


class UnknownExtensionError(KeyError):
    """Raised when an extension is requested that was never registered."""

    def __init__(self, key: str | type):
        name = key.__name__ if isinstance(key, type) else key
        self.key = key
        super().__init__(f"Extension of type/name '{name}' does not exist.")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateExtensionError(ValueError):
    """Raised when an extension name is registered twice."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot add extension with name '{name}', as there is an extension "
            "already registered with that name."
        )


class InvalidConventionMappingError(ValueError):
    """Raised when a mapping targets a property that has no convention support."""

    def __init__(self, type_: type, property_name: str):
        self.type = type_
        self.property_name = property_name
        super().__init__(
            f"Cannot map property '{property_name}' for object of type "
            f"{type_.__name__} as it does not have a property with that name."
        )


class MissingValueError(ValueError):
    """Raised when a value is requested from a provider that has none."""

    def __init__(self, detail: str = "Cannot query the value of this provider because it has no value available."):
        super().__init__(detail)
