import pytest

from statesugar.protocol.errors import InvalidPathError
from statesugar.protocol.path import destructure, format_path, normalize


def test_string_and_list_paths_are_equivalent():
    assert normalize("a.b[c]") == normalize(["a", "b", "c"]) == ["a", "b", "c"]


def test_consecutive_delimiters_collapse():
    assert normalize("..a..b[[0]].c.") == ["a", "b", "0", "c"]


def test_absent_path_is_root():
    assert normalize(None) == []
    assert normalize("") == []


def test_sequence_keys_are_kept_as_given():
    keys = ("items", 0, "name")
    assert normalize(keys) == ["items", 0, "name"]


def test_bare_key_is_single_key_path():
    assert normalize(3) == [3]


def test_custom_delimiters():
    assert normalize("a/b/c", delimiters="/") == ["a", "b", "c"]
    assert normalize("a.b/c", delimiters="/") == ["a.b", "c"]


def test_mapping_is_not_a_path():
    with pytest.raises(InvalidPathError):
        normalize({"a": 1})


def test_destructure():
    assert destructure("a.b.c") == ("a", ["b", "c"])
    assert destructure(["a", "b"]) == ("a", ["b"])
    assert destructure("a") == ("a", None)


def test_destructure_does_not_consume_caller_list():
    keys = ["a", "b"]
    destructure(keys)
    assert keys == ["a", "b"]


def test_destructure_empty_path_fails():
    with pytest.raises(InvalidPathError):
        destructure(None)
    with pytest.raises(InvalidPathError):
        destructure("...")


def test_format_path():
    assert format_path(["a", 0, "b"]) == "a[0].b"
    assert format_path([0, "a"]) == "[0].a"
    assert format_path(None) == ""
