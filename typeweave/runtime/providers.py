"""
This module implements the managed value containers: objects that hold the
value of a property and are configured through `set` rather than by
replacing the container itself.

- `Provider`: a lazily computed, possibly absent value.
- `Property`: a single settable value with an optional convention (fallback).
- `HasMultipleValues` with `ListProperty` and `SetProperty`: collections built
  from elements and element providers.
- `MapProperty`: a mapping built from entries and mapping providers.

A property whose declared type is one of these containers is read-only in
the specification type; the augmented type adds a setter that forwards to
the container's `set`, so `obj.label = "x"` and `obj.label.set("x")` are
equivalent.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Generic, TypeVar

from typeweave._errors import MissingValueError

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


def _unpack(value: Any) -> Any:
    if isinstance(value, Provider):
        return value.get_or_none()
    return value


class Provider(Generic[T]):
    """A container for a value that may be computed lazily or be absent."""

    def __init__(self, factory: Callable[[], T | None] | None = None):
        self._factory = factory

    @classmethod
    def of(cls, value: T) -> "Provider[T]":
        return cls(lambda: value)

    def _calculate(self) -> T | None:
        return None if self._factory is None else self._factory()

    def get(self) -> T:
        value = self._calculate()
        if value is None:
            raise MissingValueError()
        return value

    def get_or_none(self) -> T | None:
        return self._calculate()

    def get_or_else(self, default: T) -> T:
        value = self._calculate()
        return default if value is None else value

    def is_present(self) -> bool:
        return self._calculate() is not None

    def map(self, transform: Callable[[T], Any]) -> "Provider":
        def mapped():
            value = self._calculate()
            return None if value is None else transform(value)

        return Provider(mapped)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_or_none()!r})"


class Property(Provider[T]):
    """A single settable value, with an optional convention."""

    def __init__(self, value_type: type | None = None, value: T | Provider[T] | None = None):
        super().__init__()
        self.value_type = value_type
        self._value = None
        self._convention = None
        if value is not None:
            self.set(value)

    def _check(self, value: Any) -> None:
        if (
            self.value_type is not None
            and value is not None
            and not isinstance(value, (Provider, self.value_type))
        ):
            raise TypeError(
                f"Cannot set the value of a property of type {self.value_type.__name__} "
                f"using an instance of type {type(value).__name__}."
            )

    def _calculate(self) -> T | None:
        value = _unpack(self._value)
        return _unpack(self._convention) if value is None else value

    def set(self, value: T | Provider[T] | None) -> None:
        """Set the value, a provider of the value, or None to clear it."""
        self._check(value)
        self._value = value

    def value(self, value: T | Provider[T] | None) -> "Property[T]":
        self.set(value)
        return self

    def convention(self, value: T | Provider[T] | None) -> "Property[T]":
        """Set the value used while no explicit value is present."""
        self._check(value)
        self._convention = value
        return self


class HasMultipleValues(Provider[T]):
    """Base class of the collection containers."""

    _collection_factory: Callable[[Iterable], Any] = list

    def __init__(self, element_type: type | None = None):
        super().__init__()
        self.element_type = element_type
        self._items: list[Any] = []
        self._present = True

    def _calculate(self):
        if not self._present:
            return None
        values = []
        for item in self._items:
            if isinstance(item, _Many):
                resolved = _unpack(item.source)
                if resolved is None:
                    return None
                values.extend(resolved)
            else:
                values.append(_unpack(item))
        return self._collection_factory(values)

    def set(self, values: Iterable | Provider | None) -> None:
        """Replace the content. None makes the value absent."""
        if values is None:
            self._items, self._present = [], False
            return
        self._present = True
        if isinstance(values, Provider):
            self._items = [_Many(values)]
        elif isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise TypeError(
                f"Cannot set the value of {type(self).__name__} "
                f"using an instance of type {type(values).__name__}."
            )
        else:
            self._items = list(values)

    def add(self, element: Any) -> None:
        self._present = True
        self._items.append(element)

    def add_all(self, *elements: Any) -> None:
        for element in elements:
            self.add(element)

    def empty(self) -> "HasMultipleValues":
        self.set(())
        return self


class _Many:
    """Placeholder for a provider that supplies several elements at once."""

    def __init__(self, source: Provider):
        self.source = source


class ListProperty(HasMultipleValues[list[T]]):
    _collection_factory = list


class SetProperty(HasMultipleValues[set[T]]):
    _collection_factory = set


class MapProperty(Provider[dict[K, V]], Generic[K, V]):
    """A mapping assembled from entries and mapping providers."""

    def __init__(self, key_type: type | None = None, value_type: type | None = None):
        super().__init__()
        self.key_type = key_type
        self.value_type = value_type
        self._sources: list[Any] = []
        self._present = True

    def _calculate(self) -> dict[K, V] | None:
        if not self._present:
            return None
        result = {}
        for source in self._sources:
            resolved = _unpack(source)
            if resolved is None:
                return None
            result.update({k: _unpack(v) for k, v in resolved.items()})
        return result

    def set(self, entries: Mapping | Provider | None) -> None:
        if entries is None:
            self._sources, self._present = [], False
            return
        if not isinstance(entries, (Mapping, Provider)):
            raise TypeError(
                f"Cannot set the value of {type(self).__name__} "
                f"using an instance of type {type(entries).__name__}."
            )
        self._present = True
        self._sources = [entries if isinstance(entries, Provider) else dict(entries)]

    def put(self, key: K, value: V | Provider[V]) -> None:
        self._present = True
        self._sources.append({key: value})

    def put_all(self, entries: Mapping | Provider) -> None:
        self._present = True
        self._sources.append(entries if isinstance(entries, Provider) else dict(entries))
