# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - DDL generation
# PURPOSE: Type lowering and SurrealQL statement generation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Module

Compiles schema nodes to SurrealQL type expressions and DDL statements.
"""

from surreal_schema.schema.lowering import lower, lower_field, LoweredField, LoweringContext
from surreal_schema.schema.printer import to_sexpr
from surreal_schema.schema.surql_generator import (
    DefineTableOptions,
    RemoveTableOptions,
    SurqlGenerator,
    SurqlQuery,
)

__all__ = [
    "lower",
    "lower_field",
    "LoweredField",
    "LoweringContext",
    "to_sexpr",
    "DefineTableOptions",
    "RemoveTableOptions",
    "SurqlGenerator",
    "SurqlQuery",
]
