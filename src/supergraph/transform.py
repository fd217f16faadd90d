"""Generic GraphQL schema rewrite.

``transform_schema`` visits every named type of a schema once and lets a
callback decide its fate:

- ``None`` removes the type,
- ``Undefined`` keeps it as-is,
- a ``GraphQLNamedType`` replaces it.

Surviving types are then rebuilt so that every reference they hold (field
and argument types, implemented interfaces, union members, input fields)
points at the rebuilt type of the same name. The input schema is never
mutated.
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, Dict, List, Mapping, Optional, Union

from graphql import (
    GraphQLArgument,
    GraphQLDirective,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLType,
    GraphQLUnionType,
    is_input_object_type,
    is_interface_type,
    is_introspection_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_specified_directive,
    is_union_type,
)
from graphql.pyutils import Undefined, UndefinedType

logger = logging.getLogger(__name__)

TransformResult = Optional[Union[GraphQLNamedType, UndefinedType]]
TypeTransformer = Callable[[GraphQLNamedType], TransformResult]

TypeMap = Dict[str, GraphQLNamedType]


def transform_schema(schema: GraphQLSchema, transform_type: TypeTransformer) -> GraphQLSchema:
    """Return a new schema with ``transform_type`` applied to every named type.

    Introspection types are never offered to the callback; the schema
    constructor adds them back on its own.

    References to removed types are repaired where a collection allows it:
    implemented interfaces and union members drop them. Field and argument
    types that name a removed type keep pointing at the original type
    object, so callers removing types must also prune the fields that
    return them.
    """
    kept: List[GraphQLNamedType] = []
    removed = 0
    for old_type in schema.type_map.values():
        if is_introspection_type(old_type):
            continue

        result = transform_type(old_type)
        if result is None:
            removed += 1
            continue
        kept.append(old_type if result is Undefined else result)

    # Filled completely before any thunk below is resolved by GraphQLSchema.
    type_map: TypeMap = {}
    for named_type in kept:
        type_map[named_type.name] = _rebuild_named_type(named_type, type_map)

    logger.debug("Schema rewrite kept %d types and removed %d", len(type_map), removed)

    schema_kwargs = schema.to_kwargs()
    return GraphQLSchema(
        **{
            **schema_kwargs,
            "query": _replace_root_type(schema_kwargs["query"], type_map),
            "mutation": _replace_root_type(schema_kwargs["mutation"], type_map),
            "subscription": _replace_root_type(schema_kwargs["subscription"], type_map),
            "types": list(type_map.values()),
            "directives": [
                _rebuild_directive(directive, type_map)
                for directive in schema_kwargs["directives"]
            ],
        }
    )


def _rebuild_named_type(named_type: GraphQLNamedType, type_map: TypeMap) -> GraphQLNamedType:
    if is_object_type(named_type):
        kwargs = named_type.to_kwargs()
        return GraphQLObjectType(
            **{
                **kwargs,
                "interfaces": lambda: _replace_type_list(kwargs["interfaces"], type_map),
                "fields": lambda: _replace_fields(kwargs["fields"], type_map),
            }
        )
    if is_interface_type(named_type):
        kwargs = named_type.to_kwargs()
        return GraphQLInterfaceType(
            **{
                **kwargs,
                "interfaces": lambda: _replace_type_list(kwargs["interfaces"], type_map),
                "fields": lambda: _replace_fields(kwargs["fields"], type_map),
            }
        )
    if is_union_type(named_type):
        kwargs = named_type.to_kwargs()
        return GraphQLUnionType(
            **{
                **kwargs,
                "types": lambda: _replace_type_list(kwargs["types"], type_map),
            }
        )
    if is_input_object_type(named_type):
        kwargs = named_type.to_kwargs()
        return GraphQLInputObjectType(
            **{
                **kwargs,
                "fields": lambda: _replace_input_fields(kwargs["fields"], type_map),
            }
        )
    # Scalars and enums hold no type references.
    return named_type


def _replace_type(type_: GraphQLType, type_map: TypeMap) -> GraphQLType:
    if is_list_type(type_):
        return GraphQLList(_replace_type(type_.of_type, type_map))
    if is_non_null_type(type_):
        return GraphQLNonNull(_replace_type(type_.of_type, type_map))
    return type_map.get(type_.name, type_)


def _replace_type_list(types: Collection[GraphQLNamedType], type_map: TypeMap) -> list:
    return [type_map[type_.name] for type_ in types if type_.name in type_map]


def _replace_root_type(
    root_type: Optional[GraphQLObjectType], type_map: TypeMap
) -> Optional[GraphQLNamedType]:
    if root_type is None:
        return None
    return type_map.get(root_type.name)


def _replace_args(
    args: Mapping[str, GraphQLArgument], type_map: TypeMap
) -> Dict[str, GraphQLArgument]:
    return {
        name: GraphQLArgument(**{**arg.to_kwargs(), "type_": _replace_type(arg.type, type_map)})
        for name, arg in args.items()
    }


def _replace_fields(
    fields: Mapping[str, GraphQLField], type_map: TypeMap
) -> Dict[str, GraphQLField]:
    return {
        name: GraphQLField(
            **{
                **field.to_kwargs(),
                "type_": _replace_type(field.type, type_map),
                "args": _replace_args(field.args, type_map),
            }
        )
        for name, field in fields.items()
    }


def _replace_input_fields(
    fields: Mapping[str, GraphQLInputField], type_map: TypeMap
) -> Dict[str, GraphQLInputField]:
    return {
        name: GraphQLInputField(
            **{**field.to_kwargs(), "type_": _replace_type(field.type, type_map)}
        )
        for name, field in fields.items()
    }


def _rebuild_directive(directive: GraphQLDirective, type_map: TypeMap) -> GraphQLDirective:
    if is_specified_directive(directive):
        return directive
    return GraphQLDirective(
        **{**directive.to_kwargs(), "args": _replace_args(directive.args, type_map)}
    )
