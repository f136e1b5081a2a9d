"""Tests for the semtree command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from semtree.cli.app import app

runner = CliRunner()

SOURCE = """\
use std::io;

fn b() {}

struct A {
    x: i32,
}
"""


@pytest.fixture
def rust_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.rs"
    path.write_text(SOURCE)
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SEMTREE_SORT_CHILDREN", "SEMTREE_PREVIEW_LENGTH", "SEMTREE_TRACE_DEPTH", "SEMTREE_STRICT"):
        monkeypatch.delenv(name, raising=False)


def test_short_help_flag() -> None:
    result = runner.invoke(app, ["-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_missing_path_is_a_usage_error() -> None:
    result = runner.invoke(app, [])
    assert result.exit_code != 0
    assert "Usage" in result.output


def test_prints_document_as_json(rust_file: Path) -> None:
    result = runner.invoke(app, [str(rust_file)])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["imports"] == [{"name": "use std::io;"}]
    assert [f["name"] for f in data["functions"]] == ["b"]
    assert data["structs"][0]["fields"][0] == {"name": "x", "type": "i32", "attributes": []}


def test_tree_only(rust_file: Path) -> None:
    result = runner.invoke(app, [str(rust_file), "--tree-only"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["kind"] == "Root"
    assert [(c["kind"], c["name"]) for c in data["children"]] == [
        ("Import", "std"),
        ("Function", "b"),
        ("Struct", "A"),
    ]


def test_sort_children_option(rust_file: Path) -> None:
    result = runner.invoke(app, [str(rust_file), "--tree-only", "--sort-children"])

    assert result.exit_code == 0
    kinds = [c["kind"] for c in json.loads(result.stdout)["children"]]
    assert kinds == ["Import", "Struct", "Function"]


def test_missing_file_exits_non_zero(tmp_path: Path) -> None:
    result = runner.invoke(app, [str(tmp_path / "nope.rs")])
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_strict_mode_fails_on_syntax_errors(tmp_path: Path) -> None:
    path = tmp_path / "broken.rs"
    path.write_text("fn broken( {\n")

    result = runner.invoke(app, [str(path), "--strict"])

    assert result.exit_code == 1
    assert "syntax errors" in result.output


def test_verbose_traces_traversal(rust_file: Path) -> None:
    result = runner.invoke(app, [str(rust_file), "--tree-only", "-v"])

    assert result.exit_code == 0
    assert "source_file" in result.output


def test_deeply_nested_source(tmp_path: Path) -> None:
    path = tmp_path / "deep.rs"
    path.write_text("fn f() { " + "if a { " * 300 + "}" * 300 + " }\n")

    result = runner.invoke(app, [str(path)])

    assert result.exit_code == 0
    assert result.stdout.count('"kind": "If"') == 300
