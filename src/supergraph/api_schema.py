"""Build the public API schema from supergraph SDL."""

from __future__ import annotations

import logging
from typing import Optional

from graphql import (
    GraphQLError,
    GraphQLSchema,
    GraphQLSyntaxError,
    build_schema,
    print_schema,
    validate_schema,
)

from common.telemetry import Telemetry
from supergraph.errors import ErrorCode, SupergraphSchemaError
from supergraph.inaccessible import collect_inaccessible_report, remove_inaccessible_elements
from supergraph.settings import FilterSettings

logger = logging.getLogger(__name__)


def build_supergraph_schema(sdl: str, *, assume_valid_sdl: bool = False) -> GraphQLSchema:
    """Build a schema from supergraph SDL, mapping graphql-core failures to our errors."""
    try:
        return build_schema(sdl, assume_valid_sdl=assume_valid_sdl)
    except GraphQLSyntaxError as exc:
        raise SupergraphSchemaError(
            ErrorCode.SDL_SYNTAX_ERROR, f"Supergraph SDL could not be parsed: {exc.message}"
        ) from exc
    except (GraphQLError, TypeError) as exc:
        raise SupergraphSchemaError(
            ErrorCode.SDL_INVALID, "Supergraph SDL is not a valid schema.", str(exc).split("\n\n")
        ) from exc


def build_api_schema(sdl: str, *, settings: Optional[FilterSettings] = None) -> GraphQLSchema:
    """Build the supergraph and strip its inaccessible types and fields.

    Args:
        sdl: Supergraph schema definition language.
        settings: Filter options; read from the environment when omitted.

    Returns:
        The API schema.

    Raises:
        SupergraphSchemaError: when the SDL cannot be built, when the API
            schema cannot be assembled, or when
            ``settings.validate_output`` is set and the API schema is invalid.
    """
    if settings is None:
        settings = FilterSettings.from_env()

    with Telemetry.start_span(
        "supergraph.build_api_schema",
        attributes={"supergraph.directive_name": settings.directive_name},
    ) as span:
        try:
            supergraph = build_supergraph_schema(sdl, assume_valid_sdl=settings.assume_valid_sdl)

            report = collect_inaccessible_report(supergraph, settings.directive_name)
            Telemetry.set_span_attributes(
                span,
                {
                    "supergraph.removed_types": len(report.removed_types),
                    "supergraph.removed_fields": len(report.removed_fields),
                    "supergraph.retained_types": report.retained_types,
                },
            )
            logger.info(
                "Removing %d types and %d fields marked @%s",
                len(report.removed_types),
                len(report.removed_fields),
                settings.directive_name,
            )

            if settings.validate_output and report.retained_types:
                raise SupergraphSchemaError(
                    ErrorCode.API_SCHEMA_INVALID,
                    f"Types marked @{settings.directive_name} are still referenced by "
                    "arguments or input fields.",
                    report.retained_types,
                )

            try:
                api_schema = remove_inaccessible_elements(supergraph, settings.directive_name)
            except TypeError as exc:
                # Raised by GraphQLSchema when a retained type drags in a second copy
                # of a type that was rebuilt.
                raise SupergraphSchemaError(
                    ErrorCode.API_SCHEMA_INVALID,
                    "API schema could not be assembled.",
                    [str(exc)],
                ) from exc

            if settings.validate_output:
                errors = validate_schema(api_schema)
                if errors:
                    raise SupergraphSchemaError(
                        ErrorCode.API_SCHEMA_INVALID,
                        "API schema failed validation.",
                        [error.message for error in errors],
                    )
        except SupergraphSchemaError as exc:
            Telemetry.set_span_attributes(span, {"supergraph.error_code": exc.code.value})
            Telemetry.set_span_status(span, False, exc)
            raise

        Telemetry.set_span_status(span, True)
        return api_schema


def print_api_schema(sdl: str, *, settings: Optional[FilterSettings] = None) -> str:
    """Return the API schema built from ``sdl`` as SDL text."""
    return print_schema(build_api_schema(sdl, settings=settings))
