# ============================================================================
# PACKAGE IMPORT TESTS
# ============================================================================
# STATUS: Tests - Package surface
# PURPOSE: Verify every module imports and every exported name resolves
# CREATED: 18 OCT 2026
# ============================================================================
"""
Package Import Tests

Covers:
1. Every module of the package imports cleanly
2. Every name in an __all__ list resolves
3. LogContext builds a fresh extra dict per instance

Run with:
    pytest tests/test_package.py -v
"""

import importlib

import pytest

import surreal_schema
from surreal_schema.logging import LogContext


MODULES = [
    "surreal_schema",
    "surreal_schema.config",
    "surreal_schema.contracts",
    "surreal_schema.errors",
    "surreal_schema.factories",
    "surreal_schema.logging",
    "surreal_schema.models",
    "surreal_schema.models.base",
    "surreal_schema.models.composites",
    "surreal_schema.models.issues",
    "surreal_schema.models.primitives",
    "surreal_schema.models.record_id",
    "surreal_schema.models.table",
    "surreal_schema.models.wrappers",
    "surreal_schema.registry",
    "surreal_schema.schema",
    "surreal_schema.schema.ddl_utils",
    "surreal_schema.schema.lowering",
    "surreal_schema.schema.printer",
    "surreal_schema.schema.surql_generator",
    "surreal_schema.validation",
    "surreal_schema.validation.composite",
]


class TestImports:

    @pytest.mark.parametrize("name", MODULES)
    def test_module_exports_resolve(self, name):
        module = importlib.import_module(name)
        for export in getattr(module, "__all__", []):
            assert hasattr(module, export), f"{name}.{export}"

    def test_version(self):
        assert isinstance(surreal_schema.__version__, str)

    def test_log_context_extra_not_shared(self):
        first, second = LogContext(), LogContext()
        first.extra["k"] = "v"
        assert second.extra == {}
        assert LogContext(field="name").to_dict() == {"field": "name"}
