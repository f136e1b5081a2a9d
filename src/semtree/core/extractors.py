import logging
from collections.abc import Iterator

from semtree.core.attributes import (
    is_derive,
    iter_with_outer_attributes,
    read_attribute,
    scan_attributes,
)
from semtree.core.kinds import (
    ATTRIBUTE_ITEM,
    ATTRIBUTE_TAGS,
    BLOCK,
    CONST_ITEM,
    ENUM_VARIANT,
    EXPRESSION_STATEMENT,
    FIELD_DECLARATION,
    MOD_ITEM,
    MUTABLE_SPECIFIER,
    ORDERED_FIELD_DECLARATION_LIST,
    REFERENCE_TYPE,
    SELF_PARAMETER,
    STATIC_ITEM,
    VISIBILITY_MODIFIER,
    is_comment_tag,
    kind_for,
)
from semtree.core.ports.syntax import SyntaxNode
from semtree.core.text import TextResolver
from semtree.models import (
    Attribute,
    CalledMethod,
    DeriveRelation,
    EnumItem,
    EnumVariant,
    FunctionItem,
    ImplRelation,
    ImportItem,
    LocalVariable,
    ModuleItem,
    NestedItem,
    Parameter,
    SemanticKind,
    StructField,
    StructItem,
    ValueItem,
)

logger = logging.getLogger(__name__)

_POSITIONAL_TRANSPARENT = frozenset({VISIBILITY_MODIFIER})


def _has_child(node: SyntaxNode, tag: str) -> bool:
    return any(child.type == tag for child in node.children)


class CategoryExtractor:
    """Per-category reports over the direct children of a node.

    Each report is a shallow scan: only the children of the node passed in are
    inspected (callables additionally look at the statements of their own
    body). A missing name on an item skips that item with a warning.
    """

    def __init__(self, resolver: TextResolver) -> None:
        self._resolver = resolver

    def _text(self, node: SyntaxNode) -> str:
        return self._resolver.text(node)

    def _optional_text(self, node: SyntaxNode | None) -> str | None:
        return None if node is None else self._resolver.text(node)

    def _required_field(self, node: SyntaxNode, field: str) -> SyntaxNode | None:
        child = node.child_by_field_name(field)
        if child is None:
            logger.warning("Skipping %s at byte %d: missing '%s'", node.type, node.start_byte, field)
        return child

    def _item_name_node(self, node: SyntaxNode) -> SyntaxNode | None:
        if kind_for(node.type) is SemanticKind.IMPL:
            return node.child_by_field_name("type")
        return node.child_by_field_name("name")

    # -- imports -------------------------------------------------------------

    def imports(self, node: SyntaxNode) -> list[ImportItem]:
        return [
            ImportItem(name=self._text(child))
            for child in node.children
            if kind_for(child.type) is SemanticKind.IMPORT
        ]

    # -- callables -----------------------------------------------------------

    def functions(self, node: SyntaxNode) -> list[FunctionItem]:
        functions: list[FunctionItem] = []
        for child in node.children:
            if kind_for(child.type) is not SemanticKind.FUNCTION:
                continue
            name_node = self._required_field(child, "name")
            if name_node is None:
                continue
            functions.append(
                FunctionItem(
                    name=self._text(name_node),
                    parameters=self.parameters(child),
                    body=self._text(child),
                    called_methods=self.called_methods(child),
                    local_variables=self.local_variables(child),
                )
            )
        return functions

    def parameters(self, function_node: SyntaxNode) -> list[Parameter]:
        parameters_node = function_node.child_by_field_name("parameters")
        if parameters_node is None:
            return []
        return [
            self._parameter(param)
            for param in parameters_node.named_children
            if param.type not in ATTRIBUTE_TAGS and not is_comment_tag(param.type)
        ]

    def _parameter(self, param: SyntaxNode) -> Parameter:
        text = self._text(param)
        pattern = param.child_by_field_name("pattern")
        type_node = param.child_by_field_name("type")
        if pattern is not None:
            name = self._text(pattern)
        elif param.type == SELF_PARAMETER:
            name = "self"
        else:
            name = text

        by_reference = type_node is not None and type_node.type == REFERENCE_TYPE
        is_mutable = _has_child(param, MUTABLE_SPECIFIER) or (
            by_reference and type_node is not None and _has_child(type_node, MUTABLE_SPECIFIER)
        )
        return Parameter(
            name=name,
            type=self._optional_text(type_node),
            is_mutable=is_mutable,
            is_reference=text.startswith("&") or by_reference,
            default_value=self._optional_text(param.child_by_field_name("default_value")),
        )

    def _callable_level(self, function_node: SyntaxNode) -> Iterator[SyntaxNode]:
        """The function's children, with its body block opened up one statement deep."""
        for child in function_node.children:
            if child.type != BLOCK:
                yield child
                continue
            for statement in child.named_children:
                if statement.type == EXPRESSION_STATEMENT:
                    yield from statement.named_children
                else:
                    yield statement

    def called_methods(self, function_node: SyntaxNode) -> list[CalledMethod]:
        called: list[CalledMethod] = []
        for node in self._callable_level(function_node):
            if kind_for(node.type) is not SemanticKind.FUNCTION_CALL:
                continue
            target = self._required_field(node, "function")
            if target is not None:
                called.append(CalledMethod(name=self._text(target)))
        return called

    def local_variables(self, function_node: SyntaxNode) -> list[LocalVariable]:
        variables: list[LocalVariable] = []
        for node in self._callable_level(function_node):
            if kind_for(node.type) is not SemanticKind.VARIABLE:
                continue
            # let bindings name a pattern; local const/static items have a plain name.
            name_node = node.child_by_field_name("pattern")
            if name_node is None:
                name_node = self._required_field(node, "name")
            if name_node is None:
                continue
            variables.append(
                LocalVariable(
                    name=self._text(name_node),
                    type=self._optional_text(node.child_by_field_name("type")),
                    value=self._optional_text(node.child_by_field_name("value")),
                )
            )
        return variables

    # -- aggregates ----------------------------------------------------------

    def structs(self, node: SyntaxNode) -> list[StructItem]:
        structs: list[StructItem] = []
        for child, attributes in iter_with_outer_attributes(node, self._resolver):
            if kind_for(child.type) is not SemanticKind.STRUCT:
                continue
            name_node = self._required_field(child, "name")
            if name_node is None:
                continue
            structs.append(
                StructItem(
                    name=self._text(name_node),
                    fields=self.fields(child),
                    attributes=[*attributes, *scan_attributes(child, self._resolver)],
                )
            )
        return structs

    def fields(self, struct_node: SyntaxNode) -> list[StructField]:
        body = struct_node.child_by_field_name("body")
        if body is None:
            return []
        if body.type == ORDERED_FIELD_DECLARATION_LIST:
            return self._positional_fields(body)

        fields: list[StructField] = []
        for child, attributes in iter_with_outer_attributes(body, self._resolver):
            if child.type != FIELD_DECLARATION:
                logger.warning("Skipping %s at byte %d: not a field declaration", child.type, child.start_byte)
                continue
            name_node = self._required_field(child, "name")
            if name_node is None:
                continue
            fields.append(
                StructField(
                    name=self._text(name_node),
                    type=self._optional_text(child.child_by_field_name("type")),
                    attributes=[*attributes, *scan_attributes(child, self._resolver)],
                )
            )
        return fields

    def _positional_fields(self, body: SyntaxNode) -> list[StructField]:
        return [
            StructField(name=str(position), type=self._text(child), attributes=attributes)
            for position, (child, attributes) in enumerate(
                iter_with_outer_attributes(body, self._resolver, _POSITIONAL_TRANSPARENT)
            )
        ]

    # -- enumerations --------------------------------------------------------

    def enums(self, node: SyntaxNode) -> list[EnumItem]:
        enums: list[EnumItem] = []
        for child in node.children:
            if kind_for(child.type) is not SemanticKind.ENUM:
                continue
            name_node = self._required_field(child, "name")
            if name_node is None:
                continue
            enums.append(EnumItem(name=self._text(name_node), variants=self.variants(child)))
        return enums

    def variants(self, enum_node: SyntaxNode) -> list[EnumVariant]:
        body = enum_node.child_by_field_name("body")
        if body is None:
            return []
        variants: list[EnumVariant] = []
        for child, _ in iter_with_outer_attributes(body, self._resolver):
            if child.type != ENUM_VARIANT:
                logger.warning("Skipping %s at byte %d: not an enum variant", child.type, child.start_byte)
                continue
            name_node = self._required_field(child, "name")
            if name_node is not None:
                variants.append(EnumVariant(name=self._text(name_node)))
        return variants

    # -- relations -----------------------------------------------------------

    def relations(self, node: SyntaxNode) -> list[ImplRelation | DeriveRelation]:
        relations: list[ImplRelation | DeriveRelation] = []
        derives: list[Attribute] = []
        for child in node.named_children:
            match kind_for(child.type):
                case SemanticKind.DERIVE:
                    attribute = read_attribute(child, self._resolver)
                    if child.type == ATTRIBUTE_ITEM and attribute is not None and is_derive(attribute):
                        derives.append(attribute)
                    continue
                case SemanticKind.COMMENT:
                    continue
            target = self._optional_text(self._item_name_node(child))
            relations.extend(DeriveRelation(for_type=target, details=attribute) for attribute in derives)
            derives = []
            if kind_for(child.type) is SemanticKind.IMPL:
                impl = self._impl_relation(child)
                if impl is not None:
                    relations.append(impl)
        # Derives with no item after them.
        relations.extend(DeriveRelation(details=attribute) for attribute in derives)
        return relations

    def _impl_relation(self, impl_node: SyntaxNode) -> ImplRelation | None:
        type_node = self._required_field(impl_node, "type")
        if type_node is None:
            return None
        return ImplRelation(
            for_type=self._text(type_node),
            trait=self._optional_text(impl_node.child_by_field_name("trait")),
            generics=self._optional_text(impl_node.child_by_field_name("type_parameters")),
        )

    # -- constants and globals -----------------------------------------------

    def constants(self, node: SyntaxNode) -> list[ValueItem]:
        return self._value_items(node, CONST_ITEM)

    def globals(self, node: SyntaxNode) -> list[ValueItem]:
        return self._value_items(node, STATIC_ITEM)

    def _value_items(self, node: SyntaxNode, tag: str) -> list[ValueItem]:
        items: list[ValueItem] = []
        for child in node.children:
            if child.type != tag:
                continue
            name_node = self._required_field(child, "name")
            if name_node is None:
                continue
            value_node = child.child_by_field_name("value")
            value = self._text(child if value_node is None else value_node)
            items.append(ValueItem(name=self._text(name_node), value=value))
        return items

    # -- modules and impls ---------------------------------------------------

    def modules_and_impls(self, node: SyntaxNode) -> list[ModuleItem]:
        modules: list[ModuleItem] = []
        for child in node.children:
            if child.type != MOD_ITEM and kind_for(child.type) is not SemanticKind.IMPL:
                continue
            name_node = self._item_name_node(child)
            if name_node is None:
                logger.warning("Skipping %s at byte %d: no name", child.type, child.start_byte)
                continue
            modules.append(ModuleItem(type=child.type, name=self._text(name_node), children=self.nested(child)))
        return modules

    def nested(self, node: SyntaxNode) -> list[NestedItem]:
        """Named items directly inside ``node``'s body; one level only."""
        body = node.child_by_field_name("body")
        if body is None:
            return []
        nested: list[NestedItem] = []
        for item in body.named_children:
            name_node = self._item_name_node(item)
            if name_node is not None:
                nested.append(NestedItem(type=item.type, name=self._text(name_node)))
        return nested

    # -- metadata ------------------------------------------------------------

    def metadata(self, node: SyntaxNode) -> list[Attribute]:
        return scan_attributes(node, self._resolver)
