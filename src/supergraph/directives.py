"""Directive lookups on GraphQL AST nodes."""

from __future__ import annotations

from typing import Any

from graphql import GraphQLDirective


def has_directive(directive: GraphQLDirective, node: Any) -> bool:
    """Return whether ``node`` directly carries an application of ``directive``.

    Matching is by exact directive name only; arguments are not inspected.
    Nodes without a ``directives`` list (or with an empty one) never match.
    """
    directives = getattr(node, "directives", None)
    if not directives:
        return False

    return any(directive_node.name.value == directive.name for directive_node in directives)
