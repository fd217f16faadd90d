"""Tests for the generic schema rewrite."""

from graphql import GraphQLObjectType, build_schema, print_schema
from graphql.pyutils import Undefined

from supergraph.transform import transform_schema

SDL = """
directive @tag(filter: TagFilter) on FIELD_DEFINITION

schema {
  query: Query
  mutation: Mutation
}

type Query {
  me: User
  search: [SearchResult!]
}

type Mutation {
  rename(input: RenameInput!): User
}

interface Node {
  id: ID!
}

type User implements Node {
  id: ID!
  name: String @tag
  secret: Secret
}

type Secret implements Node {
  id: ID!
}

union SearchResult = User | Secret

input RenameInput {
  id: ID!
  filter: TagFilter
}

input TagFilter {
  name: String
}
"""


def _keep(_named_type):
    return Undefined


def _remove(*names):
    def transform_type(named_type):
        if named_type.name in names:
            return None
        return Undefined

    return transform_type


def test_keep_everything_rebuilds_an_equivalent_schema():
    """Keeping every type yields a new, structurally identical schema."""
    schema = build_schema(SDL)

    new_schema = transform_schema(schema, _keep)

    assert new_schema is not schema
    assert print_schema(new_schema) == print_schema(schema)
    assert new_schema.type_map["User"] is not schema.type_map["User"]


def test_references_point_at_rebuilt_types():
    """Fields, arguments, interfaces and union members use the rebuilt types."""
    schema = build_schema(SDL)

    new_schema = transform_schema(schema, _keep)
    types = new_schema.type_map

    assert types["Query"].fields["me"].type is types["User"]
    assert types["User"].interfaces[0] is types["Node"]
    assert types["SearchResult"].types[0] is types["User"]
    rename_input = types["Mutation"].fields["rename"].args["input"].type
    assert rename_input.of_type is types["RenameInput"]
    assert types["RenameInput"].fields["filter"].type is types["TagFilter"]
    assert new_schema.get_directive("tag").args["filter"].type is types["TagFilter"]
    assert new_schema.query_type is types["Query"]
    assert new_schema.mutation_type is types["Mutation"]


def test_introspection_types_are_not_offered():
    """The callback never sees introspection types."""
    schema = build_schema(SDL)
    seen = []

    def transform_type(named_type):
        seen.append(named_type.name)
        return Undefined

    new_schema = transform_schema(schema, transform_type)

    assert seen
    assert not [name for name in seen if name.startswith("__")]
    assert "__Schema" in new_schema.type_map


def test_removed_type_is_dropped_from_unions_and_interfaces():
    """Collections referencing a removed type lose that reference."""
    schema = build_schema(SDL)

    new_schema = transform_schema(schema, _remove("Node"))

    assert "Node" not in new_schema.type_map
    assert list(new_schema.type_map["User"].interfaces) == []
    assert list(new_schema.type_map["User"].fields) == ["id", "name", "secret"]


def test_removed_union_member():
    """Union member lists are repaired."""
    schema = build_schema(
        """
        type Query { search: [SearchResult] }
        type User { id: ID }
        type Secret { id: ID }
        union SearchResult = User | Secret
        """
    )

    new_schema = transform_schema(schema, _remove("Secret"))

    assert [member.name for member in new_schema.type_map["SearchResult"].types] == ["User"]


def test_field_reference_to_removed_type_falls_back_to_original():
    """Field types naming a removed type keep the original type object."""
    schema = build_schema(
        """
        type Query { user: User }
        type User { secret: Secret }
        type Secret { value: String }
        """
    )

    new_schema = transform_schema(schema, _remove("Secret"))

    secret_type = new_schema.type_map["User"].fields["secret"].type
    assert secret_type is schema.type_map["Secret"]
    assert new_schema.type_map["Secret"] is schema.type_map["Secret"]


def test_removed_root_type_is_unset():
    """Removing a root operation type clears it on the schema."""
    schema = build_schema(SDL)

    new_schema = transform_schema(schema, _remove("Mutation"))

    assert new_schema.mutation_type is None
    assert new_schema.query_type is new_schema.type_map["Query"]


def test_replacement_type_is_used():
    """A returned named type replaces the original."""
    schema = build_schema(SDL)

    def transform_type(named_type):
        if named_type.name == "User":
            return GraphQLObjectType(**{**named_type.to_kwargs(), "description": "replaced"})
        return Undefined

    new_schema = transform_schema(schema, transform_type)

    assert new_schema.type_map["User"].description == "replaced"
    assert new_schema.type_map["Query"].fields["me"].type is new_schema.type_map["User"]
    assert schema.type_map["User"].description is None


def test_scalars_and_enums_are_reused():
    """Types without references are passed through as the same objects."""
    schema = build_schema(
        """
        type Query { role: Role when: Date }
        enum Role { ADMIN MEMBER }
        scalar Date
        """
    )

    new_schema = transform_schema(schema, _keep)

    assert new_schema.type_map["Role"] is schema.type_map["Role"]
    assert new_schema.type_map["Date"] is schema.type_map["Date"]
    assert new_schema.type_map["String"] is schema.type_map["String"]
