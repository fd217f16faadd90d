"""Error taxonomy for the API schema pipeline step."""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class ErrorCode(str, Enum):
    """Bounded error codes surfaced to callers and telemetry."""

    SDL_SYNTAX_ERROR = "SDL_SYNTAX_ERROR"
    SDL_INVALID = "SDL_INVALID"
    API_SCHEMA_INVALID = "API_SCHEMA_INVALID"
    CONFIG_INVALID = "CONFIG_INVALID"


class SupergraphSchemaError(ValueError):
    """Raised when a supergraph cannot be turned into an API schema."""

    def __init__(self, code: ErrorCode, message: str, details: Iterable[str] = ()):
        super().__init__(message)
        self.code = code
        self.details = tuple(details)

    def __str__(self) -> str:
        message = super().__str__()
        if not self.details:
            return message
        return message + "\n" + "\n".join(f"- {detail}" for detail in self.details)
