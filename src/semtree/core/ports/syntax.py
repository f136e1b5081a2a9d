from collections.abc import Sequence
from typing import Protocol


class SyntaxNode(Protocol):
    """Read-only view of a concrete syntax tree node; ``tree_sitter.Node`` satisfies it."""

    @property
    def type(self) -> str: ...

    @property
    def start_byte(self) -> int: ...

    @property
    def end_byte(self) -> int: ...

    @property
    def children(self) -> Sequence["SyntaxNode"]: ...

    @property
    def named_children(self) -> Sequence["SyntaxNode"]: ...

    def child_by_field_name(self, name: str, /) -> "SyntaxNode | None": ...
