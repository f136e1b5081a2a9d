from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from semtree.serialization import dump_json


class SemanticKind(str, Enum):
    ROOT = "Root"
    COMMENT = "Comment"
    IMPORT = "Import"
    STRUCT = "Struct"
    ENUM = "Enum"
    DERIVE = "Derive"
    FUNCTION = "Function"
    METHOD = "Method"
    FIELD = "Field"
    VARIABLE = "Variable"
    TYPE = "Type"
    TRAIT = "Trait"
    IMPL = "Impl"
    IF = "If"
    ELSE = "Else"
    LOOP = "Loop"
    TUPLE = "Tuple"
    ARRAY = "Array"
    FUNCTION_CALL = "FunctionCall"
    UNDEFINED = "Undefined"


class RelationEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    parent: SemanticKind
    child: SemanticKind


class DocumentElement(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: SemanticKind
    name: str | None = None
    text: str
    children: list["DocumentElement"] = Field(default_factory=list)
    relations: list[RelationEdge] = Field(default_factory=list)

    def to_plain(self) -> dict[str, Any]:
        """JSON-ready dicts for the whole subtree, built without recursion."""
        top: dict[str, Any] = {}
        pending: list[tuple[DocumentElement, dict[str, Any]]] = [(self, top)]
        while pending:
            element, out = pending.pop()
            children: list[dict[str, Any]] = [{} for _ in element.children]
            out.update(
                kind=element.kind.value,
                name=element.name,
                text=element.text,
                children=children,
                relations=[edge.model_dump(mode="json") for edge in element.relations],
            )
            pending.extend(zip(element.children, children))
        return top

    def to_json(self, indent: int = 2) -> str:
        return dump_json(self.to_plain(), indent)


DocumentElement.model_rebuild()  # necessary for recursive types


class Attribute(BaseModel):
    attribute: str


class ImportItem(BaseModel):
    name: str


class Parameter(BaseModel):
    name: str
    type: str | None = None
    is_mutable: bool = False
    is_reference: bool = False
    default_value: str | None = None


class CalledMethod(BaseModel):
    name: str


class LocalVariable(BaseModel):
    name: str
    type: str | None = None
    value: str | None = None


class FunctionItem(BaseModel):
    name: str
    parameters: list[Parameter] = Field(default_factory=list)
    body: str
    called_methods: list[CalledMethod] = Field(default_factory=list)
    local_variables: list[LocalVariable] = Field(default_factory=list)


class StructField(BaseModel):
    name: str
    type: str | None = None
    attributes: list[Attribute] = Field(default_factory=list)


class StructItem(BaseModel):
    name: str
    fields: list[StructField] = Field(default_factory=list)
    # Outer attributes of the struct itself; only surfaced through schemas.
    attributes: list[Attribute] = Field(default_factory=list, exclude=True)


class EnumVariant(BaseModel):
    name: str


class EnumItem(BaseModel):
    name: str
    variants: list[EnumVariant] = Field(default_factory=list)


class ImplRelation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["impl"] = "impl"
    for_type: str = Field(alias="for")
    trait: str | None = None
    generics: str | None = None


class DeriveRelation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["derive"] = "derive"
    for_type: str | None = Field(default=None, alias="for")
    details: Attribute


Relation = Annotated[ImplRelation | DeriveRelation, Field(discriminator="type")]


class ValueItem(BaseModel):
    name: str
    value: str


class NestedItem(BaseModel):
    type: str
    name: str


class ModuleItem(BaseModel):
    type: str
    name: str
    children: list[NestedItem] = Field(default_factory=list)


class SchemaRelationship(BaseModel):
    field: str
    relationship: Literal["foreign_key"] = "foreign_key"


class Schema(BaseModel):
    struct: str
    attributes: list[Attribute] = Field(default_factory=list)
    fields: list[StructField] = Field(default_factory=list)
    relationships: list[SchemaRelationship] = Field(default_factory=list)


class ExtractionDocument(BaseModel):
    imports: list[ImportItem] = Field(default_factory=list)
    functions: list[FunctionItem] = Field(default_factory=list)
    structs: list[StructItem] = Field(default_factory=list)
    enums: list[EnumItem] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    constants: list[ValueItem] = Field(default_factory=list)
    modules_and_impls: list[ModuleItem] = Field(default_factory=list)
    metadata: list[Attribute] = Field(default_factory=list)
    nested_items: DocumentElement
    globals: list[ValueItem] = Field(default_factory=list)
    schemas: list[Schema] = Field(default_factory=list)

    def to_json(self, indent: int = 2) -> str:
        """Render every section in declaration order; the tree is written iteratively."""
        sections = self.model_dump(mode="json", by_alias=True, exclude={"nested_items"})
        sections["nested_items"] = self.nested_items.to_plain()
        return dump_json({name: sections[name] for name in type(self).model_fields}, indent)
