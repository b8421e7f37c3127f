"""Tests for path normalization helpers."""

import os
from pathlib import Path

import pytest

from projsync.utils.paths import is_dir, is_within, normalize_path, resolve_child

pytestmark = pytest.mark.skipif(os.name == "nt", reason="POSIX path fixtures")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("/proj/src/", "/proj/src"),
        ("/proj/src///", "/proj/src"),
        ("/proj//src/./a.swift", "/proj/src/a.swift"),
        ("/proj/src/../lib", "/proj/lib"),
        ("/", "/"),
        ("relative/dir/", "relative/dir"),
    ],
)
def test_normalize_path(raw, expected):
    """Test separators are collapsed and trailing ones stripped."""
    assert normalize_path(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["/proj/src/", "/a//b/../c/", "~/work/", "/", "x/y/z", "/proj/with space/file.txt"],
)
def test_normalize_path_is_idempotent(raw):
    """Test normalizing twice gives the same result."""
    once = normalize_path(raw)
    assert normalize_path(once) == once


@pytest.mark.parametrize("value", ["", None, 42, ["/a"]])
def test_normalize_path_returns_non_paths_unchanged(value):
    """Test empty or non-path input is passed through."""
    assert normalize_path(value) == value


def test_normalize_path_accepts_path_objects():
    """Test pathlib paths are converted to strings."""
    assert normalize_path(Path("/proj/src/")) == "/proj/src"


def test_normalize_path_expands_home():
    """Test a leading tilde is expanded."""
    assert normalize_path("~/work/") == os.path.join(os.path.expanduser("~"), "work")


def test_resolve_child(tmp_path):
    """Test names typed by the user resolve to absolute paths under the directory."""
    assert resolve_child(tmp_path, "a/b.swift") == str(tmp_path / "a" / "b.swift")
    assert resolve_child(f"{tmp_path}/", "dir/") == str(tmp_path / "dir")


def test_is_within():
    """Test containment is checked per path component."""
    assert is_within("/proj/src/a.swift", "/proj")
    assert is_within("/proj", "/proj/")
    assert is_within("/proj/src", "/")
    assert not is_within("/proj-other/a.swift", "/proj")
    assert not is_within("/tmp/a.swift", "/proj")
    assert not is_within("", "/proj")


def test_is_dir(tmp_path):
    """Test directory detection for existing, missing and file paths."""
    file_path = tmp_path / "a.txt"
    file_path.write_text("a")
    assert is_dir(tmp_path)
    assert not is_dir(file_path)
    assert not is_dir(tmp_path / "missing")
    assert not is_dir(None)
