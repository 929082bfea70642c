import pytest

from typeweave import augment, conventions
from typeweave._decorators import ConventionMeta, GenerationReport, InjectMeta


def test_inject_meta_immutable():
    """Tests that InjectMeta is immutable."""
    meta = InjectMeta(_inject=True, _marked_name="service")
    with pytest.raises(AttributeError):
        meta._inject = False
    with pytest.raises(AttributeError):
        meta._marked_name = "other"


def test_convention_meta_immutable():
    """Tests that ConventionMeta is immutable."""
    meta = ConventionMeta(
        _conventions=True,
        _path="a",
        _file="b.yaml",
        _include=["c"],
        _custom_engine={"csv": print},
    )
    with pytest.raises(AttributeError):
        meta._conventions = False
    with pytest.raises(AttributeError):
        meta._path = "x"
    with pytest.raises(AttributeError):
        meta._include = ["x"]
    with pytest.raises(AttributeError):
        meta._custom_engine = {}


def test_convention_meta_containers_copy_on_access():
    """
    Tests that ConventionMeta's list and dict attributes are returned as copies
    and are unchanged by external mutations.
    """
    meta = ConventionMeta(
        _conventions=True, _include=["a"], _exclude=["b"], _custom_engine={"csv": print}
    )

    i1 = meta._include
    i1.append("x")
    assert meta._include == ["a"]
    assert i1 is not meta._include

    e1 = meta._exclude
    e1.clear()
    assert meta._exclude == ["b"]

    c1 = meta._custom_engine
    c1["xlsx"] = print
    assert list(meta._custom_engine) == ["csv"]


def test_generation_report_immutable(widget_type):
    """Tests that the report of a generation pass cannot be rebound."""
    report = augment(widget_type).report
    with pytest.raises(AttributeError):
        report._claims = {}
    with pytest.raises(AttributeError):
        report._members = []
    with pytest.raises(AttributeError):
        report._handlers = []


def test_generation_report_containers_copy_on_access(widget_type):
    report = augment(widget_type).report

    claims = report._claims
    claims["label"] = "dsl"
    assert report._claims["label"] == "property-type"
    assert claims is not report._claims

    members = report._members
    members.clear()
    assert report._members

    handlers = report._handlers
    handlers.reverse()
    assert report._handlers == ["extensible", "dsl", "property-type", "injection"]

    mixins = report._mixins
    mixins.append("Other")
    assert "Other" not in report._mixins


def test_generation_report_members_for(widget_type):
    report = augment(widget_type).report

    members = report.members_for("paint_service")
    assert {kind for _, _, _, kind in members} >= {"injector property", "injected getter"}
    assert all(prop == "paint_service" for _, prop, _, _ in members)
    assert report.members_for("missing") == []


def test_decorated_class_meta_is_attached(test_data_path):
    @conventions(path=test_data_path, include=["compiler", "naming"])
    class Spec:
        pass

    meta = Spec._convention_meta
    assert isinstance(meta, ConventionMeta)
    assert meta._path == str(test_data_path)
    assert meta._include == ["compiler", "naming"]
    assert meta._exclude is None
