import os

import pytest

from limebuild import enumeration
from limebuild.enumeration import enum_files, enum_files_recursive
from limebuild.exceptions import PathNotADirectoryError
from limebuild.paths import as_path, pwd


def _make_tree(root):
    (root / "sub").mkdir()
    (root / "a.txt").write_text("a")
    (root / "notes.md").write_text("n")
    (root / ".hidden").write_text("h")
    (root / "sub" / "b.txt").write_text("b")


def test_enum_files_matches_pattern(tmp_path):
    _make_tree(tmp_path)
    root = as_path(tmp_path)

    assert enum_files(tmp_path, "*.txt") == [root / "a.txt"]


def test_enum_files_returns_absolute_paths_for_relative_directory(tmp_path, monkeypatch):
    _make_tree(tmp_path)
    monkeypatch.chdir(tmp_path)

    results = enum_files("sub", "*")
    assert results == [pwd() / "sub/b.txt"]
    assert all(path.is_absolute for path in results)


@pytest.mark.parametrize("pattern", ["*", ".*"])
def test_enum_files_never_returns_pseudo_entries(tmp_path, pattern):
    _make_tree(tmp_path)
    names = {path.get_filename() for path in enum_files(tmp_path, pattern)}
    assert "." not in names
    assert ".." not in names


def test_enum_files_dot_pattern_lists_hidden_entries(tmp_path):
    _make_tree(tmp_path)
    assert enum_files(tmp_path, ".*") == [as_path(tmp_path) / ".hidden"]


def test_enum_files_skips_names_with_backslash(tmp_path, caplog):
    (tmp_path / "a\\b.txt").write_text("x")
    (tmp_path / "c.txt").write_text("c")

    results = enum_files(tmp_path, "*.txt")
    assert results == [as_path(tmp_path) / "c.txt"]
    assert all(os.path.exists(path) for path in results)
    assert any("backslash" in record.getMessage() for record in caplog.records)


def test_enum_files_rejects_non_directory(tmp_path):
    (tmp_path / "file").write_text("")
    with pytest.raises(PathNotADirectoryError):
        enum_files(tmp_path / "file", "*")
    with pytest.raises(PathNotADirectoryError):
        enum_files(tmp_path / "missing", "*")


def test_enum_files_leaves_working_directory_alone_on_failure(tmp_path, monkeypatch):
    _make_tree(tmp_path)
    before = os.getcwd()

    def broken_glob(*args, **kwargs):
        raise RuntimeError("pattern expansion failed")

    monkeypatch.setattr(enumeration.glob, "glob", broken_glob)
    with pytest.raises(RuntimeError):
        enum_files(tmp_path / "sub", "*")
    assert os.getcwd() == before


def test_enum_files_recursive_descends_into_subdirectories(tmp_path):
    _make_tree(tmp_path)
    root = as_path(tmp_path)

    results = enum_files_recursive(tmp_path, "*.txt")
    assert set(results) == {root / "a.txt", root / "sub/b.txt"}
    assert len(results) == 2


def test_enum_files_recursive_replaces_matching_directories_with_contents(tmp_path):
    (tmp_path / "assets.txt").mkdir()
    (tmp_path / "assets.txt" / "c.txt").write_text("c")
    (tmp_path / "deep" / "deeper").mkdir(parents=True)
    (tmp_path / "deep" / "deeper" / "d.txt").write_text("d")
    root = as_path(tmp_path)

    results = enum_files_recursive(tmp_path, "*.txt")
    assert set(results) == {root / "assets.txt/c.txt", root / "deep/deeper/d.txt"}


def test_enum_files_recursive_on_empty_directory(tmp_path):
    assert enum_files_recursive(tmp_path, "*") == []
