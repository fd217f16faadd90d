"""Unit test environment helpers."""

import os

import pytest


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Clear supergraph settings so tests start from the documented defaults."""
    for key in list(os.environ):
        if key.startswith("SUPERGRAPH_"):
            monkeypatch.delenv(key, raising=False)
    yield
