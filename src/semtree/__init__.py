from semtree.config import ExtractionSettings, load_settings
from semtree.core.document import (
    assemble_document,
    build_tree_from_file,
    build_tree_from_source,
    extract_document_from_file,
    extract_document_from_source,
)
from semtree.errors import ExtractionError, ParseError
from semtree.models import DocumentElement, ExtractionDocument, SemanticKind

__all__ = [
    "DocumentElement",
    "ExtractionDocument",
    "ExtractionError",
    "ExtractionSettings",
    "ParseError",
    "SemanticKind",
    "assemble_document",
    "build_tree_from_file",
    "build_tree_from_source",
    "extract_document_from_file",
    "extract_document_from_source",
    "load_settings",
]
