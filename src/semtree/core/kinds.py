from semtree.models import SemanticKind

_KIND_TABLE: dict[str, SemanticKind] = {
    "source_file": SemanticKind.ROOT,
    "line_comment": SemanticKind.COMMENT,
    "block_comment": SemanticKind.COMMENT,
    "use_declaration": SemanticKind.IMPORT,
    "extern_crate_declaration": SemanticKind.IMPORT,
    "struct_item": SemanticKind.STRUCT,
    "union_item": SemanticKind.STRUCT,
    "enum_item": SemanticKind.ENUM,
    "attribute_item": SemanticKind.DERIVE,
    "inner_attribute_item": SemanticKind.DERIVE,
    "function_item": SemanticKind.FUNCTION,
    "function_signature_item": SemanticKind.METHOD,
    "field_declaration": SemanticKind.FIELD,
    "let_declaration": SemanticKind.VARIABLE,
    "const_item": SemanticKind.VARIABLE,
    "static_item": SemanticKind.VARIABLE,
    "type_item": SemanticKind.TYPE,
    "trait_item": SemanticKind.TRAIT,
    "impl_item": SemanticKind.IMPL,
    "if_expression": SemanticKind.IF,
    "else_clause": SemanticKind.ELSE,
    "loop_expression": SemanticKind.LOOP,
    "while_expression": SemanticKind.LOOP,
    "for_expression": SemanticKind.LOOP,
    "tuple_expression": SemanticKind.TUPLE,
    "array_expression": SemanticKind.ARRAY,
    "call_expression": SemanticKind.FUNCTION_CALL,
}

_IDENTIFIER_TAGS = frozenset({"identifier", "type_identifier", "field_identifier"})

# Taxonomy order, used as the primary key when children are sorted.
KIND_ORDER: dict[SemanticKind, int] = {kind: index for index, kind in enumerate(SemanticKind)}

# Structural tags the extractors look for that carry no semantic kind of their own.
MOD_ITEM = "mod_item"
CONST_ITEM = "const_item"
STATIC_ITEM = "static_item"
ATTRIBUTE_ITEM = "attribute_item"
INNER_ATTRIBUTE_ITEM = "inner_attribute_item"
ATTRIBUTE = "attribute"
FIELD_DECLARATION = "field_declaration"
ORDERED_FIELD_DECLARATION_LIST = "ordered_field_declaration_list"
ENUM_VARIANT = "enum_variant"
BLOCK = "block"
EXPRESSION_STATEMENT = "expression_statement"
SELF_PARAMETER = "self_parameter"
MUTABLE_SPECIFIER = "mutable_specifier"
REFERENCE_TYPE = "reference_type"
VISIBILITY_MODIFIER = "visibility_modifier"

ATTRIBUTE_TAGS = frozenset({ATTRIBUTE_ITEM, INNER_ATTRIBUTE_ITEM})


def classify(tag: str) -> SemanticKind | None:
    """Return the semantic kind for a syntax tag, or None when the tag is unmapped."""
    return _KIND_TABLE.get(tag)


def kind_for(tag: str) -> SemanticKind:
    kind = classify(tag)
    return SemanticKind.UNDEFINED if kind is None else kind


def is_identifier_tag(tag: str) -> bool:
    return tag in _IDENTIFIER_TAGS


def is_comment_tag(tag: str) -> bool:
    return classify(tag) is SemanticKind.COMMENT
