"""Shared supergraph fixtures."""

import pytest
from graphql import build_schema

SUPERGRAPH_SDL = '''
directive @inaccessible on FIELD_DEFINITION | OBJECT | INTERFACE | UNION

type Query {
  me: User
  node(id: ID!): Node
  secrets: [Secret!]!
  search(term: String): [SearchResult]
}

interface Node {
  id: ID!
  legacy: String @inaccessible
}

"""A registered user."""
type User implements Node {
  id: ID!
  name: String
  legacy: String
  secret: Secret
  email: String @inaccessible
  createdAt: String
}

type Secret @inaccessible {
  value: String
}

union SearchResult = User | Secret

enum Role {
  ADMIN
  MEMBER
}
'''


@pytest.fixture
def supergraph_sdl() -> str:
    """Supergraph SDL marking one type and two fields inaccessible."""
    return SUPERGRAPH_SDL


@pytest.fixture
def supergraph(supergraph_sdl):
    """Supergraph schema built from ``supergraph_sdl``."""
    return build_schema(supergraph_sdl)
