import logging
from dataclasses import dataclass, field

from semtree.config import ExtractionSettings
from semtree.core.kinds import KIND_ORDER, is_identifier_tag, kind_for
from semtree.core.ports.syntax import SyntaxNode
from semtree.core.text import TextResolver
from semtree.models import DocumentElement, RelationEdge, SemanticKind

logger = logging.getLogger(__name__)

_TRACE_PREVIEW = 18


class NameCell:
    """Single-assignment slot for an element's inferred name: the first claim wins."""

    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: str | None = None

    @property
    def value(self) -> str | None:
        return self._value

    def claim(self, value: str) -> bool:
        if self._value is not None:
            return False
        self._value = value
        return True


@dataclass
class _Frame:
    kind: SemanticKind
    text: str
    name: NameCell = field(default_factory=NameCell)
    children: list["_Frame"] = field(default_factory=list)
    relations: list[RelationEdge] = field(default_factory=list)

    def attach(self, child: "_Frame") -> None:
        self.children.append(child)
        self.relations.append(RelationEdge(parent=self.kind, child=child.kind))


def _sort_key(element: DocumentElement) -> tuple[int, str]:
    return KIND_ORDER[element.kind], element.name or ""


class TreeBuilder:
    """Shapes a syntax tree into a tree of classified document elements.

    Nodes whose tag has no semantic kind get no element; their descendants
    attach to the nearest classified ancestor instead. Identifier tokens name
    the element they sit under unless it already has a name. Root elements are
    never named this way.
    """

    def __init__(self, resolver: TextResolver, settings: ExtractionSettings | None = None) -> None:
        self._resolver = resolver
        self._settings = settings or ExtractionSettings()

    def build(self, root: SyntaxNode) -> DocumentElement:
        return self._freeze(self._walk(root))

    def _display_text(self, node: SyntaxNode) -> str:
        limit = self._settings.preview_length
        if limit is None:
            return self._resolver.text(node)
        return self._resolver.preview(node, limit)

    def _trace(self, node: SyntaxNode, depth: int) -> None:
        if depth > self._settings.trace_depth or not logger.isEnabledFor(logging.DEBUG):
            return
        preview = self._resolver.preview(node, _TRACE_PREVIEW).replace("\n", " ")
        logger.debug("%s%d: %s ·%s·", "  " * depth, depth, node.type, preview)

    def _walk(self, root: SyntaxNode) -> _Frame:
        self._trace(root, 0)
        root_kind = kind_for(root.type)
        top = _Frame(
            kind=SemanticKind.ROOT if root_kind is SemanticKind.UNDEFINED else root_kind,
            text=self._display_text(root),
        )

        # Explicit stack, children pushed in reverse so they pop in document order.
        stack: list[tuple[SyntaxNode, _Frame, int]] = [(child, top, 1) for child in reversed(root.children)]
        while stack:
            node, parent, depth = stack.pop()
            self._trace(node, depth)

            if is_identifier_tag(node.type) and parent.kind is not SemanticKind.ROOT:
                parent.name.claim(self._resolver.text(node))

            match kind_for(node.type):
                case SemanticKind.UNDEFINED:
                    owner = parent
                case kind:
                    owner = _Frame(kind=kind, text=self._display_text(node))
                    parent.attach(owner)

            stack.extend((child, owner, depth + 1) for child in reversed(node.children))
        return top

    def _freeze(self, top: _Frame) -> DocumentElement:
        preorder: list[_Frame] = []
        pending = [top]
        while pending:
            frame = pending.pop()
            preorder.append(frame)
            pending.extend(frame.children)

        # Reverse pre-order visits every subtree before its parent.
        frozen: dict[int, DocumentElement] = {}
        for frame in reversed(preorder):
            children = [frozen.pop(id(child)) for child in frame.children]
            if self._settings.sort_children:
                children.sort(key=_sort_key)
            frozen[id(frame)] = DocumentElement(
                kind=frame.kind,
                name=frame.name.value,
                text=frame.text,
                children=children,
                relations=list(frame.relations),
            )
        return frozen[id(top)]
