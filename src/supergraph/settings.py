"""Runtime settings for building API schemas."""

from __future__ import annotations

import re

from pydantic import BaseModel, ValidationError, field_validator

from common.config.env import get_env_bool, get_env_str
from supergraph.errors import ErrorCode, SupergraphSchemaError
from supergraph.inaccessible import DEFAULT_INACCESSIBLE_DIRECTIVE

_GRAPHQL_NAME = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class FilterSettings(BaseModel):
    """Options for the inaccessible-element filter and its SDL entry point.

    Attributes:
        directive_name: Name of the directive marking inaccessible elements.
        validate_output: Validate the resulting API schema and fail on errors.
        assume_valid_sdl: Skip SDL validation when building the supergraph, so
            supergraph documents using undeclared directives can be loaded.
    """

    directive_name: str = DEFAULT_INACCESSIBLE_DIRECTIVE
    validate_output: bool = False
    assume_valid_sdl: bool = False

    model_config = {"frozen": True}

    @field_validator("directive_name", mode="before")
    @classmethod
    def _normalize_directive_name(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        name = value.strip().lstrip("@")
        if not _GRAPHQL_NAME.match(name):
            raise ValueError(f"'{value}' is not a valid GraphQL directive name.")
        return name

    @classmethod
    def from_env(cls) -> "FilterSettings":
        """Build settings from SUPERGRAPH_* environment variables."""
        try:
            return cls(
                directive_name=get_env_str(
                    "SUPERGRAPH_INACCESSIBLE_DIRECTIVE", DEFAULT_INACCESSIBLE_DIRECTIVE
                ),
                validate_output=get_env_bool("SUPERGRAPH_VALIDATE_API_SCHEMA", False),
                assume_valid_sdl=get_env_bool("SUPERGRAPH_ASSUME_VALID_SDL", False),
            )
        except (ValueError, ValidationError) as exc:
            raise SupergraphSchemaError(
                ErrorCode.CONFIG_INVALID, f"Invalid supergraph settings: {exc}"
            ) from exc
