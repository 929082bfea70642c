import logging

import pytest

from typeweave import IConventionAware
from typeweave._errors import InvalidConventionMappingError
from typeweave.runtime import ConventionAwareHelper, MappedProperty


class Source:
    name = "source"


def test_explicit_value_wins():
    helper = ConventionAwareHelper(Source(), ["target"])
    helper.map("target", "jvm")
    assert helper.get_convention_value("native", "target", is_explicit_value=True) == "native"
    assert helper.get_convention_value(None, "target") == "jvm"


def test_unmapped_property_returns_actual():
    helper = ConventionAwareHelper(Source(), ["target"])
    assert helper.get_convention_value("actual", "target") == "actual"


def test_non_empty_collection_wins_over_mapping():
    helper = ConventionAwareHelper(Source(), ["flags"])
    helper.map("flags", ["-O2"])
    assert helper.get_convention_value([], "flags") == ["-O2"]
    assert helper.get_convention_value(["-g"], "flags") == ["-g"]
    assert helper.get_convention_value({}, "flags") == ["-O2"]


def test_callable_mappings():
    source = Source()
    helper = ConventionAwareHelper(source, ["target", "owner"])
    helper.map("target", lambda: "computed")
    helper.map("owner", lambda obj: obj.name)
    assert helper.get_convention_value(None, "target") == "computed"
    assert helper.get_convention_value(None, "owner") == "source"


def test_cached_mapping_evaluates_once():
    calls = []

    def compute():
        calls.append(1)
        return len(calls)

    mapped = MappedProperty(compute).cache()
    assert mapped.get_value(None) == 1
    assert mapped.get_value(None) == 1
    assert calls == [1]


def test_mapping_unknown_property():
    helper = ConventionAwareHelper(Source(), ["target"])
    with pytest.raises(InvalidConventionMappingError, match="'missing' for object of type Source"):
        helper.map("missing", 1)


def test_map_from_file_skips_unknown_keys(caplog):
    helper = ConventionAwareHelper(Source(), ["target"])
    with caplog.at_level(logging.WARNING, logger="typeweave.runtime.conventions"):
        helper.map_from_file({"target": "jvm", "unknown": 1})
    assert helper.get_convention_value(None, "target") == "jvm"
    assert "Ignoring convention value for 'unknown'" in caplog.text


def test_convention_aware_mixin_seeds_from_class_attributes():
    class Seeded(IConventionAware):
        __convention_properties__ = ("target",)
        __convention_defaults__ = {"target": "wasm"}

    first = Seeded()
    assert first.convention_mapping is first.convention_mapping
    assert first.convention_mapping.property_names == frozenset({"target"})
    assert first.convention_mapping.get_convention_value(None, "target") == "wasm"
    assert Seeded().convention_mapping is not first.convention_mapping
