"""Shared fixtures and helpers for tests."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_parser

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: everything under tests/unit is a unit test
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# FakeNode: hand-built syntax nodes for shapes the parser never emits
# ---------------------------------------------------------------------------


@dataclass
class FakeNode:
    type: str
    start_byte: int = 0
    end_byte: int = 0
    children: list["FakeNode"] = field(default_factory=list)
    fields: dict[str, "FakeNode"] = field(default_factory=dict)
    named: bool = True

    @property
    def named_children(self) -> Sequence["FakeNode"]:
        return [child for child in self.children if child.named]

    def child_by_field_name(self, name: str, /) -> "FakeNode | None":
        return self.fields.get(name)


def fake_span(source: str, text: str, node_type: str, **kwargs: object) -> FakeNode:
    """Build a FakeNode covering the first occurrence of ``text`` in ``source``."""
    start = source.encode("utf-8").index(text.encode("utf-8"))
    return FakeNode(node_type, start, start + len(text.encode("utf-8")), **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def rust_parser() -> Parser:
    """Return a tree-sitter parser for Rust."""
    return get_parser("rust")


@pytest.fixture
def parse_rust(rust_parser: Parser) -> Callable[[str], tuple[Node, bytes]]:
    """Return a helper that parses Rust source into (root node, source bytes)."""

    def _parse(source: str) -> tuple[Node, bytes]:
        source_bytes = source.encode("utf-8")
        return rust_parser.parse(source_bytes).root_node, source_bytes

    return _parse
