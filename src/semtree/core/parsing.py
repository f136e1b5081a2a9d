import logging
from pathlib import Path
from typing import cast

from tree_sitter import Tree
from tree_sitter_language_pack import SupportedLanguage, get_parser

from semtree.errors import ParseError

logger = logging.getLogger(__name__)

LANGUAGE = "rust"


def read_source(path: str | Path) -> bytes:
    file_path = Path(path)
    try:
        return file_path.read_bytes()
    except FileNotFoundError:
        raise FileNotFoundError(f"File not found: {path}") from None


def parse_source(source_bytes: bytes, *, strict: bool = False) -> Tree:
    """Parse Rust source into a tree-sitter tree.

    Undecodable input is fatal. Syntax errors are fatal only when ``strict`` is
    set; otherwise the partial tree is returned and extraction skips what it
    can't make sense of.
    """
    try:
        source_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"Source is not valid UTF-8: {exc}") from exc

    tree = get_parser(cast(SupportedLanguage, LANGUAGE)).parse(source_bytes)
    if tree is None:
        raise ParseError("Parser produced no syntax tree")
    if tree.root_node.has_error:
        if strict:
            raise ParseError("Source contains syntax errors")
        logger.warning("Source contains syntax errors; extracting the parts that parsed")
    return tree
