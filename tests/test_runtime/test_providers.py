import pytest

from typeweave import ListProperty, MapProperty, Property, SetProperty
from typeweave._errors import MissingValueError
from typeweave.runtime import Provider


def test_provider_basics():
    provider = Provider.of(3)
    assert provider.get() == 3
    assert provider.is_present()
    assert provider.map(lambda v: v * 2).get() == 6

    empty = Provider()
    assert empty.get_or_none() is None
    assert empty.get_or_else("fallback") == "fallback"
    assert empty.map(str).get_or_none() is None
    with pytest.raises(MissingValueError, match="has no value available"):
        empty.get()


def test_property_set_and_convention():
    prop = Property(str)
    assert not prop.is_present()

    prop.convention("default")
    assert prop.get() == "default"

    prop.set("explicit")
    assert prop.get() == "explicit"

    prop.set(None)
    assert prop.get() == "default"


def test_property_accepts_providers():
    source = Property(str, "a")
    prop = Property(str).value(source.map(str.upper))
    assert prop.get() == "A"
    source.set("b")
    assert prop.get() == "B"


def test_property_type_check():
    prop = Property(int)
    with pytest.raises(TypeError, match="property of type int"):
        prop.set("not an int")


def test_list_property():
    items = ListProperty(str)
    items.add("a")
    items.add_all("b", Provider.of("c"))
    assert items.get() == ["a", "b", "c"]

    items.set(["x"])
    assert items.get() == ["x"]

    items.set(None)
    assert not items.is_present()
    items.add("y")
    assert items.get() == ["y"]

    with pytest.raises(TypeError):
        items.set("abc")


def test_list_property_from_provider():
    source = ListProperty(str)
    source.set(["a", "b"])
    target = ListProperty(str)
    target.set(source)
    source.add("c")
    assert target.get() == ["a", "b", "c"]


def test_set_property_and_empty():
    values = SetProperty(int)
    values.set([1, 1, 2])
    assert values.get() == {1, 2}
    assert values.empty().get() == set()


def test_map_property():
    mapping = MapProperty(str, int)
    mapping.put("a", 1)
    mapping.put("b", Provider.of(2))
    mapping.put_all({"c": 3})
    assert mapping.get() == {"a": 1, "b": 2, "c": 3}

    mapping.set({"z": 26})
    assert mapping.get() == {"z": 26}

    mapping.set(None)
    assert mapping.get_or_none() is None

    with pytest.raises(TypeError):
        mapping.set(["not", "a", "mapping"])
