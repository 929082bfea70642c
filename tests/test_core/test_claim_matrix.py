import pandas as pd
import pytest

from typeweave import ClaimMatrix, augment
from typeweave._decorators import GenerationReport
from typeweave._errors import InvalidGenerationReportError


def _report(**overrides) -> GenerationReport:
    fields = {
        "_type_name": "Spec",
        "_generated_name": "Spec_Decorated",
        "_claims": {},
        "_fallback_properties": [],
        "_members": [],
        "_mixins": [],
        "_injected_services": [],
        "_handlers": [],
    }
    fields.update(overrides)
    return GenerationReport(**fields)


@pytest.mark.claimmatrix
@pytest.mark.smoke
def test_widget_matrix(widget_type):
    df = ClaimMatrix(augment(widget_type)).build()

    assert list(df.columns) == ["extensible", "dsl", "property-type", "injection"]
    assert list(df.index) == ["extensions", "label", "paint_service"]
    assert df.loc["label", "property-type"] == "claimed / synthesized"
    assert df.loc["paint_service", "injection"] == "claimed / synthesized"
    assert df.loc["extensions", "extensible"] == "synthesized"
    assert df.loc["label", "injection"] == ""


@pytest.mark.claimmatrix
@pytest.mark.conventions
def test_convention_properties_are_marked_fallback(compiler_type):
    df = ClaimMatrix(augment(compiler_type)).build()

    assert {"target", "flags", "name"} <= set(df.index)
    assert df.loc["target", "extensible"] == "fallback"
    assert df.loc["flags", "extensible"] == "fallback"
    assert df.loc["name", "dsl"] == "synthesized"
    assert df.loc["flags", "dsl"] == ""


@pytest.mark.claimmatrix
def test_matrix_from_report_cells():
    report = _report(
        _claims={"a": "h1", "b": "h2"},
        _fallback_properties=["c"],
        _members=[
            ("h1", "a", "a", "getter"),
            ("h2", "c", "c", "convention setter"),
            ("h1", "c", "c", "convention getter"),
            ("h2", "", "__getattr__", "dynamic fallback"),
        ],
        _handlers=["h1", "h2"],
    )
    df = ClaimMatrix(report).build()

    expected = pd.DataFrame(
        {
            "h1": ["claimed / synthesized", "", "fallback"],
            "h2": ["", "claimed", "fallback"],
        },
        index=["a", "b", "c"],
        columns=["h1", "h2"],
    )
    pd.testing.assert_frame_equal(df, expected)


@pytest.mark.claimmatrix
def test_matrix_empty_report():
    df = ClaimMatrix(_report()).build()
    assert isinstance(df, pd.DataFrame)
    assert df.empty


@pytest.mark.claimmatrix
def test_matrix_handlers_without_rows():
    df = ClaimMatrix(_report(_handlers=["h1"])).build()
    assert list(df.columns) == ["h1"]
    assert df.empty


@pytest.mark.claimmatrix
def test_matrix_none_raises():
    with pytest.raises(InvalidGenerationReportError, match="report must not be None"):
        ClaimMatrix(None)


@pytest.mark.claimmatrix
@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"_claims": [("a", "h")]}, "Claims must be a dictionary"),
        ({"_claims": {"a": 1}}, "Claims must map strings to strings"),
        ({"_fallback_properties": [1]}, "Fallback properties must be strings"),
        ({"_handlers": [None]}, "Handler names must be strings"),
        ({"_members": [("h", "p")]}, "Members must be"),
    ],
)
def test_matrix_malformed_report(overrides, message):
    with pytest.raises(InvalidGenerationReportError, match=message):
        ClaimMatrix(_report(**overrides))


@pytest.mark.claimmatrix
def test_matrix_missing_section():
    class Partial:
        _claims = {}

    with pytest.raises(InvalidGenerationReportError, match="Missing section '_fallback_properties'"):
        ClaimMatrix(Partial())
