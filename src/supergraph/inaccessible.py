"""Removal of ``@inaccessible`` types and fields from a composed schema."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Set

from graphql import (
    GraphQLDirective,
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    get_named_type,
    is_input_object_type,
    is_interface_type,
    is_object_type,
)
from graphql.pyutils import Undefined

from supergraph.directives import has_directive
from supergraph.transform import TypeTransformer, transform_schema

logger = logging.getLogger(__name__)

DEFAULT_INACCESSIBLE_DIRECTIVE = "inaccessible"


@dataclass(frozen=True)
class InaccessibleReport:
    """Names of the types and fields a filter pass removes, in schema order.

    ``retained_types`` lists removed types that arguments or input fields
    still reference; those come back into the filtered schema.
    """

    removed_types: tuple[str, ...] = ()
    removed_fields: tuple[str, ...] = ()
    retained_types: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """Return True when nothing would be removed."""
        return not self.removed_types and not self.removed_fields


def compute_types_to_remove(
    schema: GraphQLSchema, directive: GraphQLDirective
) -> Set[GraphQLNamedType]:
    """Return the named types whose own definition carries ``directive``.

    The result is keyed by type identity. Types without an AST node
    (built-in scalars, programmatically built types) are never marked.
    """
    return {
        named_type
        for named_type in schema.type_map.values()
        if named_type.ast_node is not None and has_directive(directive, named_type.ast_node)
    }


def is_field_inaccessible(
    field: GraphQLField,
    directive: GraphQLDirective,
    types_to_remove: Set[GraphQLNamedType],
) -> bool:
    """Return True when ``field`` must not survive the filter."""
    # A field returning a removed type would add that type back to the schema.
    if get_named_type(field.type) in types_to_remove:
        return True
    return field.ast_node is not None and has_directive(directive, field.ast_node)


def remove_inaccessible_fields(
    fields: Mapping[str, GraphQLField],
    directive: GraphQLDirective,
    types_to_remove: Set[GraphQLNamedType],
) -> Dict[str, GraphQLField]:
    """Return the surviving fields, in their original order."""
    return {
        name: field
        for name, field in fields.items()
        if not is_field_inaccessible(field, directive, types_to_remove)
    }


def find_retained_types(
    schema: GraphQLSchema,
    directive: GraphQLDirective,
    types_to_remove: Set[GraphQLNamedType],
) -> List[GraphQLNamedType]:
    """Return removed types still referenced by surviving arguments or input fields.

    Arguments are never pruned, so a removed enum, scalar or input type used
    as an argument type is carried back into the rewritten schema, along with
    the removed input types it references in turn. Result is in schema order.
    """
    pending: List[GraphQLNamedType] = []
    for named_type in schema.type_map.values():
        if named_type in types_to_remove:
            continue
        if is_object_type(named_type) or is_interface_type(named_type):
            for field in named_type.fields.values():
                if not is_field_inaccessible(field, directive, types_to_remove):
                    pending.extend(get_named_type(arg.type) for arg in field.args.values())
        elif is_input_object_type(named_type):
            pending.extend(get_named_type(field.type) for field in named_type.fields.values())
    for schema_directive in schema.directives:
        pending.extend(get_named_type(arg.type) for arg in schema_directive.args.values())

    retained: Set[GraphQLNamedType] = set()
    while pending:
        referenced = pending.pop()
        if referenced not in types_to_remove or referenced in retained:
            continue
        retained.add(referenced)
        if is_input_object_type(referenced):
            pending.extend(get_named_type(field.type) for field in referenced.fields.values())

    return [named_type for named_type in schema.type_map.values() if named_type in retained]


def make_inaccessible_transformer(
    directive: GraphQLDirective, types_to_remove: Set[GraphQLNamedType]
) -> TypeTransformer:
    """Build the per-type callback for ``transform_schema``.

    Each decision only looks at the given type and the precomputed removal
    set, so types can be visited in any order.
    """

    def transform_type(named_type: GraphQLNamedType):
        if named_type in types_to_remove:
            return None

        if is_object_type(named_type):
            kwargs = named_type.to_kwargs()
            return GraphQLObjectType(
                **{
                    **kwargs,
                    "fields": remove_inaccessible_fields(
                        kwargs["fields"], directive, types_to_remove
                    ),
                }
            )
        if is_interface_type(named_type):
            kwargs = named_type.to_kwargs()
            return GraphQLInterfaceType(
                **{
                    **kwargs,
                    "fields": remove_inaccessible_fields(
                        kwargs["fields"], directive, types_to_remove
                    ),
                }
            )
        return Undefined

    return transform_type


def remove_inaccessible_elements(
    schema: GraphQLSchema, directive_name: str = DEFAULT_INACCESSIBLE_DIRECTIVE
) -> GraphQLSchema:
    """Return ``schema`` without the types and fields marked ``@<directive_name>``.

    Fields returning a removed type (through any list/non-null wrapping) are
    removed as well. When the schema does not declare the directive, the
    input schema itself is returned.
    """
    directive = schema.get_directive(directive_name)
    if directive is None:
        logger.debug("Directive @%s is not declared; schema left unchanged", directive_name)
        return schema

    # Computed up front: the transformer needs it to drop fields whose type is removed.
    types_to_remove = compute_types_to_remove(schema, directive)
    logger.debug("Removing %d types marked @%s", len(types_to_remove), directive_name)

    retained = find_retained_types(schema, directive, types_to_remove)
    if retained:
        logger.warning(
            "Types marked @%s are still referenced by arguments or input fields and stay "
            "in the schema: %s",
            directive_name,
            ", ".join(named_type.name for named_type in retained),
        )

    return transform_schema(schema, make_inaccessible_transformer(directive, types_to_remove))


def collect_inaccessible_report(
    schema: GraphQLSchema, directive_name: str = DEFAULT_INACCESSIBLE_DIRECTIVE
) -> InaccessibleReport:
    """Describe what ``remove_inaccessible_elements`` would remove, without rebuilding."""
    directive = schema.get_directive(directive_name)
    if directive is None:
        return InaccessibleReport()

    types_to_remove = compute_types_to_remove(schema, directive)
    removed_types: list[str] = []
    removed_fields: list[str] = []
    for named_type in schema.type_map.values():
        if named_type in types_to_remove:
            removed_types.append(named_type.name)
            continue
        if not (is_object_type(named_type) or is_interface_type(named_type)):
            continue
        for field_name, field in named_type.fields.items():
            if is_field_inaccessible(field, directive, types_to_remove):
                removed_fields.append(f"{named_type.name}.{field_name}")

    retained = find_retained_types(schema, directive, types_to_remove)

    return InaccessibleReport(
        removed_types=tuple(removed_types),
        removed_fields=tuple(removed_fields),
        retained_types=tuple(named_type.name for named_type in retained),
    )
