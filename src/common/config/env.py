"""Typed environment variable parsing helpers."""

import os
from typing import Optional

_TRUTHY = ("true", "1", "yes", "on")
_FALSEY = ("false", "0", "no", "off", "")


def _read(name: str, required: bool) -> Optional[str]:
    value = os.getenv(name)
    if value is None and required:
        raise KeyError(f"Environment variable '{name}' is required but not set.")
    return value


def get_env_str(name: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
    """Get an environment variable as a string."""
    value = _read(name, required)
    if value is None:
        return default
    return value


def get_env_bool(
    name: str, default: Optional[bool] = None, required: bool = False
) -> Optional[bool]:
    """Get an environment variable as a boolean.

    Truthy: true, 1, yes, on
    Falsey: false, 0, no, off, (empty string)
    """
    value = _read(name, required)
    if value is None:
        return default

    val_lower = value.strip().lower()
    if val_lower in _TRUTHY:
        return True
    if val_lower in _FALSEY:
        return False

    raise ValueError(f"Environment variable '{name}' must be a boolean, got '{value}'.")
