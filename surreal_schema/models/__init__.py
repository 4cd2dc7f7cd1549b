# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for schema node types and validation results
# CREATED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Schema nodes for the SurrealDB schema compiler.

Single Source of Truth Pattern:
    - Schema nodes define structure and validation
    - SurqlGenerator lowers the same nodes to DDL
    - SurrealDB schema generated from TableSchemas
"""

from surreal_schema.models.base import UNDEFINED, ParsePayload, SchemaNode, ValidationContext
from surreal_schema.models.issues import Issue, SafeParseResult, SchemaValidationError
from surreal_schema.models.primitives import (
    AnySchema,
    UnknownSchema,
    NeverSchema,
    UndefinedSchema,
    VoidSchema,
    NullSchema,
    BooleanSchema,
    StringSchema,
    EmailSchema,
    UrlSchema,
    UuidSchema,
    NumberSchema,
    BigIntSchema,
    DateSchema,
    EnumSchema,
    LiteralSchema,
    Symbol,
    SymbolSchema,
    FunctionSchema,
    PromiseSchema,
    CustomSchema,
)
from surreal_schema.models.wrappers import (
    OptionalSchema,
    NullableSchema,
    NonOptionalSchema,
    DefaultSchema,
    PrefaultSchema,
    CatchSchema,
    ReadonlySchema,
    TransformSchema,
    PipeSchema,
    LazySchema,
)
from surreal_schema.models.composites import (
    ObjectSchema,
    ArraySchema,
    SetSchema,
    TupleSchema,
    RecordSchema,
    MapSchema,
    UnionSchema,
    IntersectionSchema,
)
from surreal_schema.models.record_id import RecordId, RecordIdSchema
from surreal_schema.models.table import TableSchema

__all__ = [
    # Base
    "UNDEFINED",
    "ParsePayload",
    "SchemaNode",
    "ValidationContext",
    # Issues
    "Issue",
    "SafeParseResult",
    "SchemaValidationError",
    # Primitives
    "AnySchema",
    "UnknownSchema",
    "NeverSchema",
    "UndefinedSchema",
    "VoidSchema",
    "NullSchema",
    "BooleanSchema",
    "StringSchema",
    "EmailSchema",
    "UrlSchema",
    "UuidSchema",
    "NumberSchema",
    "BigIntSchema",
    "DateSchema",
    "EnumSchema",
    "LiteralSchema",
    "Symbol",
    "SymbolSchema",
    "FunctionSchema",
    "PromiseSchema",
    "CustomSchema",
    # Wrappers
    "OptionalSchema",
    "NullableSchema",
    "NonOptionalSchema",
    "DefaultSchema",
    "PrefaultSchema",
    "CatchSchema",
    "ReadonlySchema",
    "TransformSchema",
    "PipeSchema",
    "LazySchema",
    # Composites
    "ObjectSchema",
    "ArraySchema",
    "SetSchema",
    "TupleSchema",
    "RecordSchema",
    "MapSchema",
    "UnionSchema",
    "IntersectionSchema",
    # Records & tables
    "RecordId",
    "RecordIdSchema",
    "TableSchema",
]
