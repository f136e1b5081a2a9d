from pathlib import Path

from semtree.config import ExtractionSettings
from semtree.core.extractors import CategoryExtractor
from semtree.core.parsing import parse_source, read_source
from semtree.core.ports.syntax import SyntaxNode
from semtree.core.schema import infer_schemas
from semtree.core.text import TextResolver
from semtree.core.tree import TreeBuilder
from semtree.models import DocumentElement, ExtractionDocument


def assemble_document(
    root: SyntaxNode, source: bytes, settings: ExtractionSettings | None = None
) -> ExtractionDocument:
    """Run the tree builder and every category extractor over ``root`` once."""
    settings = settings or ExtractionSettings()
    resolver = TextResolver(source)
    extractor = CategoryExtractor(resolver)
    structs = extractor.structs(root)

    return ExtractionDocument(
        imports=extractor.imports(root),
        functions=extractor.functions(root),
        structs=structs,
        enums=extractor.enums(root),
        relations=extractor.relations(root),
        constants=extractor.constants(root),
        modules_and_impls=extractor.modules_and_impls(root),
        metadata=extractor.metadata(root),
        nested_items=TreeBuilder(resolver, settings).build(root),
        globals=extractor.globals(root),
        schemas=infer_schemas(structs),
    )


def extract_document_from_source(
    source_bytes: bytes, settings: ExtractionSettings | None = None
) -> ExtractionDocument:
    settings = settings or ExtractionSettings()
    tree = parse_source(source_bytes, strict=settings.strict)
    return assemble_document(tree.root_node, source_bytes, settings)


def extract_document_from_file(path: str | Path, settings: ExtractionSettings | None = None) -> ExtractionDocument:
    return extract_document_from_source(read_source(path), settings)


def build_tree_from_source(source_bytes: bytes, settings: ExtractionSettings | None = None) -> DocumentElement:
    """Only the shaped tree, without the category reports."""
    settings = settings or ExtractionSettings()
    tree = parse_source(source_bytes, strict=settings.strict)
    return TreeBuilder(TextResolver(source_bytes), settings).build(tree.root_node)


def build_tree_from_file(path: str | Path, settings: ExtractionSettings | None = None) -> DocumentElement:
    return build_tree_from_source(read_source(path), settings)
