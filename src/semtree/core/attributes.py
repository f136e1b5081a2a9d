import logging
from collections.abc import Iterator

from semtree.core.kinds import ATTRIBUTE, ATTRIBUTE_TAGS, INNER_ATTRIBUTE_ITEM, is_comment_tag
from semtree.core.ports.syntax import SyntaxNode
from semtree.core.text import TextResolver
from semtree.models import Attribute

logger = logging.getLogger(__name__)

_DERIVE_MARKER = "derive"
_FOREIGN_KEY_MARKER = "foreign_key"


def _has_attribute_body(node: SyntaxNode) -> bool:
    return any(child.type == ATTRIBUTE for child in node.named_children)


def read_attribute(node: SyntaxNode, resolver: TextResolver) -> Attribute | None:
    """Return the raw text of an attribute item, or None when it has no inner attribute."""
    if node.type not in ATTRIBUTE_TAGS:
        return None
    if not _has_attribute_body(node):
        logger.warning("Skipping malformed %s at byte %d: no inner attribute", node.type, node.start_byte)
        return None
    return Attribute(attribute=resolver.text(node))


def scan_attributes(node: SyntaxNode, resolver: TextResolver) -> list[Attribute]:
    """Collect the attribute items among the direct children of ``node``."""
    attributes: list[Attribute] = []
    for child in node.children:
        attribute = read_attribute(child, resolver)
        if attribute is not None:
            attributes.append(attribute)
    return attributes


def iter_with_outer_attributes(
    node: SyntaxNode,
    resolver: TextResolver,
    transparent: frozenset[str] = frozenset(),
) -> Iterator[tuple[SyntaxNode, list[Attribute]]]:
    """Yield each non-attribute named child of ``node`` with the attributes written above it.

    tree-sitter emits ``#[...]`` as a sibling preceding the item it decorates, so
    consecutive attribute siblings are buffered and handed to the next item.
    Comments and ``transparent`` tags in between neither break the run nor get
    yielded. Inner attributes (``#![...]``) describe the enclosing node and are
    never handed on.
    """
    pending: list[Attribute] = []
    for child in node.named_children:
        if child.type in ATTRIBUTE_TAGS:
            attribute = read_attribute(child, resolver)
            if attribute is not None and child.type != INNER_ATTRIBUTE_ITEM:
                pending.append(attribute)
            continue
        if is_comment_tag(child.type) or child.type in transparent:
            continue
        yield child, pending
        pending = []


def is_derive(attribute: Attribute) -> bool:
    return _DERIVE_MARKER in attribute.attribute


def is_foreign_key(attribute: Attribute) -> bool:
    return _FOREIGN_KEY_MARKER in attribute.attribute
