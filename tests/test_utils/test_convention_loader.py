from pathlib import Path

import pandas as pd
import pytest
from pandas import DataFrame, read_csv

from typeweave._utils.loaders import (
    _filter_files,
    _load_convention_data,
    _supported_patterns,
)
from typeweave.options import set_typeweave_option


def test_filter_files():
    """Keep or drop files by name fragment."""
    assert _filter_files(["a", "b", "c"], None) == ["a", "b", "c"]
    assert _filter_files(["a", "b", "c"], "a") == ["a"]
    assert _filter_files(("a", "b", "c"), ("a", "b")) == ["a", "b"]
    assert _filter_files(["a", "b", "c"], "d") == []
    assert _filter_files(["a", "b", "c"], ["a", "b"], include=False) == ["c"]


def test_filter_files_with_path():
    files = [
        Path("/home/user/compiler_defaults.json"),
        Path("/home/user/compiler_defaults.toml"),
        Path("/home/user/widget.yaml"),
    ]
    assert _filter_files(files, "widget") == [Path("/home/user/widget.yaml")]
    assert _filter_files(files, "compiler") == files[:2]


def test_supported_patterns_with_custom_engine():
    patterns = _supported_patterns({"csv": read_csv, ".parquet": pd.read_parquet})
    assert "*.csv" in patterns
    assert "*.parquet" in patterns
    assert "*.yaml" in patterns


def test_load_single_feed_file(test_data_path: Path):
    data = _load_convention_data(feed_file=test_data_path / "compiler.yaml")
    assert data == {"target": "jvm", "flags": ["-O2", "-g"]}


def test_load_specific_file(test_data_path: Path):
    data = _load_convention_data(path=test_data_path, specific_file="naming.json")
    assert data == {"name": "default-compiler"}


def test_load_directory_merges_all_files(test_data_path: Path):
    data = _load_convention_data(path=test_data_path)
    assert data["target"] == "jvm"
    assert data["name"] == "default-compiler"
    assert data["options"] == {"verbose": True}
    assert "matrix" not in data


def test_load_directory_include_and_exclude(test_data_path: Path):
    included = _load_convention_data(path=test_data_path, include=["naming"])
    assert included == {"name": "default-compiler"}

    excluded = _load_convention_data(path=test_data_path, exclude=["naming", "extra"])
    assert set(excluded) == {"target", "flags"}


def test_load_custom_engine_dataframe(test_data_path: Path):
    data = _load_convention_data(
        path=test_data_path, include=["matrix"], custom_engine={"csv": read_csv}
    )
    assert isinstance(data["matrix"], DataFrame)
    assert list(data["matrix"]["handler"]) == ["extensible", "dsl"]


def test_load_uses_conventions_path_option(test_data_path: Path):
    set_typeweave_option("conventions_path", test_data_path)
    data = _load_convention_data(specific_file="naming.json")
    assert data == {"name": "default-compiler"}


def test_load_duplicate_keys_raise(tmp_path: Path):
    (tmp_path / "a.json").write_text('{"target": "jvm"}')
    (tmp_path / "b.yaml").write_text("target: native\n")
    with pytest.raises(ValueError, match="Duplicate convention keys"):
        _load_convention_data(path=tmp_path)


def test_load_specific_file_not_found(test_data_path: Path):
    """Test error when specific file doesn't exist."""
    with pytest.raises(FileNotFoundError, match="Specified convention file not found"):
        _load_convention_data(path=test_data_path, specific_file="nonexistent.json")


def test_load_path_not_found(test_data_path: Path):
    with pytest.raises(FileNotFoundError, match="Specified path not found"):
        _load_convention_data(path=test_data_path / "no_dir")


def test_load_no_convention_files(test_data_path: Path):
    with pytest.raises(FileNotFoundError, match="No convention files found"):
        _load_convention_data(path=test_data_path / "empty_dir")


def test_load_both_include_exclude_error():
    with pytest.raises(ValueError, match="Cannot specify both 'exclude' and 'include'"):
        _load_convention_data(path="/tmp", include=["a"], exclude=["b"])


def test_load_specific_file_with_include_error():
    with pytest.raises(
        ValueError, match="Cannot specify both 'specific_file' and 'exclude/include'"
    ):
        _load_convention_data(path="/tmp", specific_file="config.json", include=["a"])


def test_load_invalid_custom_engine():
    with pytest.raises(TypeError, match="Custom engine must be a dict"):
        _load_convention_data(path="/tmp", custom_engine=[read_csv])


def test_load_without_location_raises():
    with pytest.raises(ValueError, match="Either 'obj', 'path' or 'feed_file'"):
        _load_convention_data()
