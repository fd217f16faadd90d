"""Supergraph API schema: removal of @inaccessible elements from composed schemas."""

from supergraph.api_schema import build_api_schema, build_supergraph_schema, print_api_schema
from supergraph.directives import has_directive
from supergraph.errors import ErrorCode, SupergraphSchemaError
from supergraph.inaccessible import (
    DEFAULT_INACCESSIBLE_DIRECTIVE,
    InaccessibleReport,
    collect_inaccessible_report,
    compute_types_to_remove,
    find_retained_types,
    make_inaccessible_transformer,
    remove_inaccessible_elements,
    remove_inaccessible_fields,
)
from supergraph.settings import FilterSettings
from supergraph.transform import transform_schema

__all__ = [
    "DEFAULT_INACCESSIBLE_DIRECTIVE",
    "ErrorCode",
    "FilterSettings",
    "InaccessibleReport",
    "SupergraphSchemaError",
    "build_api_schema",
    "build_supergraph_schema",
    "collect_inaccessible_report",
    "compute_types_to_remove",
    "find_retained_types",
    "has_directive",
    "make_inaccessible_transformer",
    "print_api_schema",
    "remove_inaccessible_elements",
    "remove_inaccessible_fields",
    "transform_schema",
]
