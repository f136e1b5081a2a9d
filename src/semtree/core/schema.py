from collections.abc import Sequence

from semtree.core.attributes import is_foreign_key
from semtree.models import Schema, SchemaRelationship, StructField, StructItem


def _relationships(fields: Sequence[StructField]) -> list[SchemaRelationship]:
    return [
        SchemaRelationship(field=field.name)
        for field in fields
        if any(is_foreign_key(attribute) for attribute in field.attributes)
    ]


def infer_schemas(structs: Sequence[StructItem]) -> list[Schema]:
    """Derive one schema per struct, linking fields annotated as foreign keys."""
    return [
        Schema(
            struct=item.name,
            attributes=[attribute.model_copy() for attribute in item.attributes],
            fields=[field.model_copy(deep=True) for field in item.fields],
            relationships=_relationships(item.fields),
        )
        for item in structs
    ]
