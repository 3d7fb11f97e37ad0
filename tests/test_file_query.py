"""Tests for file discovery."""

import os

import pytest

from codemods.file_query import FileQuery, has_extension, is_js_file, is_python_file


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "tree"
    (root / "pkg" / "sub").mkdir(parents=True)
    (root / "node_modules" / "lib").mkdir(parents=True)
    (root / "top.py").write_text("")
    (root / "notes.txt").write_text("")
    (root / "pkg" / "mod.py").write_text("")
    (root / "pkg" / "sub" / "deep.py").write_text("")
    (root / "pkg" / "app.ts").write_text("")
    (root / "node_modules" / "lib" / "index.js").write_text("")
    return root


def names(query, root):
    return sorted(os.path.relpath(p, root) for p in query.generate_file_paths())


def test_directory_without_recursion(tree):
    assert names(FileQuery.dir(str(tree)), tree) == ["notes.txt", "top.py"]


def test_recursive_with_filter(tree):
    query = FileQuery.dir(str(tree), path_filter=is_python_file, recursive=True)
    assert names(query, tree) == ["pkg/mod.py", "pkg/sub/deep.py", "top.py"]


def test_default_ignores_node_modules(tree):
    query = FileQuery.dir(str(tree), path_filter=is_js_file, recursive=True)
    assert names(query, tree) == ["pkg/app.ts"]


def test_custom_ignored_globs(tree):
    query = FileQuery.dir(str(tree), path_filter=is_js_file, recursive=True, ignored_globs=["*/pkg/*"])
    assert names(query, tree) == ["node_modules/lib/index.js"]


def test_single_file(tree):
    query = FileQuery.single(str(tree / "notes.txt"))
    assert query.target_exists
    assert list(query.generate_file_paths()) == [str(tree / "notes.txt")]


def test_missing_targets(tree):
    assert not FileQuery.dir(str(tree / "missing")).target_exists
    assert not FileQuery.single(str(tree / "missing.py")).target_exists
    # A directory is not a single-file target and vice versa.
    assert not FileQuery.single(str(tree)).target_exists
    assert not FileQuery.dir(str(tree / "top.py")).target_exists


def test_follow_links(tree, tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "linked.py").write_text("")
    os.symlink(outside, tree / "link")

    following = FileQuery.dir(str(tree), path_filter=is_python_file, recursive=True)
    assert "link/linked.py" in names(following, tree)

    not_following = FileQuery.dir(str(tree), path_filter=is_python_file, recursive=True, follow_links=False)
    assert "link/linked.py" not in names(not_following, tree)


def test_has_extension_accepts_bare_suffixes():
    is_doc = has_extension("md", ".rst")
    assert is_doc("README.md")
    assert is_doc("index.rst")
    assert not is_doc("setup.py")
