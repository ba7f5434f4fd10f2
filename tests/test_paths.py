"""Tests for canonical path helpers."""

import pytest

from commonjs_loader.paths import is_relative_marker
from commonjs_loader.paths import join_path
from commonjs_loader.paths import normalize_path
from commonjs_loader.paths import split_path


def test_split_absolute_path_keeps_marker():
    assert split_path("/dir/a.js") == ["", "dir", "a.js"]


def test_join_round_trips_split():
    assert join_path(split_path("/dir/a.js")) == "/dir/a.js"


@pytest.mark.parametrize(
    "components,expected",
    [
        (["", "dir", ".", "a"], ["", "dir", "a"]),
        (["", "dir", "a", "..", "b"], ["", "dir", "b"]),
        (["", "dir", "", "", "a"], ["", "dir", "a"]),
        (["", "a", "b", "c", "..", "..", "..", "d"], ["", "d"]),
        (["a", "b", ".."], ["a"]),
        (["", ""], [""]),
    ],
)
def test_normalize_path(components, expected):
    assert normalize_path(components) == expected


def test_dot_segments_normalize_identically():
    assert normalize_path(split_path("/x/./a/../b")) == normalize_path(split_path("/x/b"))


def test_ascending_above_root_fails():
    assert normalize_path(["", ".."]) is None
    assert normalize_path(["", "dir", "..", "..", "a"]) is None


def test_ascending_above_relative_start_fails():
    assert normalize_path([".."]) is None
    assert normalize_path(["a", "..", ".."]) is None


@pytest.mark.parametrize("segment,expected", [("", True), (".", True), ("..", True), ("lodash", False), ("...", False)])
def test_is_relative_marker(segment, expected):
    assert is_relative_marker(segment) is expected
