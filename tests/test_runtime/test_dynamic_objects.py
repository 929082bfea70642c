import pytest

from typeweave import ExtensionAware
from typeweave.runtime import BeanDynamicObject, DynamicObjectAware, PropertyBag


class Settings:
    def __init__(self):
        self.level = 1


class Bean(ExtensionAware, DynamicObjectAware, PropertyBag):
    def __init__(self):
        self.version = "1.0"
        self._title = "bean"

    @property
    def title(self) -> str:
        return self._title

    @property
    def kind(self) -> str:
        return "bean"

    @title.setter
    def title(self, value: str) -> None:
        self._title = value

    def describe(self, prefix: str = "") -> str:
        return f"{prefix}{self.title}"


def test_bean_properties():
    bean = Bean()
    dynamic = bean.as_dynamic_object
    assert isinstance(dynamic, BeanDynamicObject)
    assert bean.as_dynamic_object is dynamic

    assert dynamic.has_property("title")
    assert dynamic.has_property("version")
    assert not dynamic.has_property("describe")
    assert not dynamic.has_property("_title")
    assert dynamic.get_property("version") == "1.0"

    dynamic.set_property("title", "renamed")
    assert bean.title == "renamed"


def test_read_only_and_unknown_properties():
    dynamic = Bean().as_dynamic_object
    with pytest.raises(AttributeError, match="read-only property 'kind'"):
        dynamic.set_property("kind", "other")
    with pytest.raises(AttributeError, match="unknown property 'missing'"):
        dynamic.get_property("missing")
    with pytest.raises(AttributeError, match="unknown property 'missing'"):
        dynamic.set_property("missing", 1)


def test_extensions_and_extra_properties_are_visible():
    bean = Bean()
    settings = bean.extensions.create("settings", Settings)
    bean.extensions.extra_properties.set("channel", "beta")

    assert bean.has_property("settings")
    assert bean.get_property("settings") is settings
    assert bean.get_property("channel") == "beta"

    bean.set_property("channel", "stable")
    assert bean.extensions.extra_properties.get("channel") == "stable"


def test_invoke_method():
    bean = Bean()
    settings = bean.extensions.create("settings", Settings)

    assert bean.invoke_method("describe", prefix="> ") == "> bean"
    # One argument on a writable property name assigns it
    bean.invoke_method("title", "called")
    assert bean.title == "called"
    # A callable argument on an extension name configures it
    bean.invoke_method("settings", lambda s: setattr(s, "level", 9))
    assert settings.level == 9

    with pytest.raises(AttributeError, match=r"Could not find method nope\(\)"):
        bean.invoke_method("nope", 1, 2)
