import pytest

from typeweave._errors import TreeFormatter
from typeweave._utils import MethodInfo


class Widget:
    def configure(self, value: int, other) -> None: ...


def test_nested_nodes_render_indented():
    formatter = TreeFormatter()
    formatter.node("Could not generate a decorated class for type ")
    formatter.append_type(Widget)
    formatter.append(".")
    formatter.start_children()
    formatter.node("first")
    formatter.start_children()
    formatter.node("nested")
    formatter.end_children()
    formatter.node("second")
    formatter.end_children()

    assert str(formatter) == (
        "Could not generate a decorated class for type Widget.\n"
        "  - first\n"
        "      - nested\n"
        "  - second"
    )


def test_append_method_uses_signature_text():
    method = MethodInfo("configure", Widget, Widget.configure)
    assert str(TreeFormatter().node("on ").append_method(method)) == (
        "on Widget.configure(int, ?)"
    )


def test_append_without_node_starts_one():
    assert str(TreeFormatter().append("text")) == "text"


def test_unbalanced_children_raise():
    with pytest.raises(RuntimeError):
        TreeFormatter().start_children()
    with pytest.raises(RuntimeError):
        TreeFormatter().node("root").end_children()
