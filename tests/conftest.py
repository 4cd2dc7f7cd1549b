"""Shared fixtures: isolate tests from SURREAL_SCHEMA_* / LOG_* environment."""

import pytest

from surreal_schema.config import reset_defaults

_ENV_VARS = (
    "SURREAL_SCHEMA_EXISTS",
    "SURREAL_SCHEMA_FIELDS",
    "SURREAL_SCHEMA_MISSING",
    "SURREAL_SCHEMA_EMIT_DEFAULTS",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()
