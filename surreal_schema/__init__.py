# ============================================================================
# SURREAL SCHEMA PACKAGE
# ============================================================================
# STATUS: Package initialization
# PURPOSE: Export schema factories, table schemas and the DDL generator
# CREATED: 18 OCT 2026
# ============================================================================
"""
surreal_schema - SurrealDB schema compiler and validator.

One schema tree serves two purposes:
    - validation:  schema.parse(value) / await schema.parse_async(value)
    - DDL:         SurqlGenerator().define_table(table, fields=True)

Usage:
    from surreal_schema import sz

    post = sz.table("post").schemafull().fields({"title": sz.string()})
    print(post.to_surql("define", fields=True))
"""

from surreal_schema.__version__ import __version__
from surreal_schema.contracts import (
    ExistsPolicy,
    IssueCode,
    MissingPolicy,
    StatementKind,
    SurrealType,
    TableType,
)
from surreal_schema.errors import (
    AsyncValidationError,
    DuplicateTableError,
    InvalidRecordIdValueError,
    LoweringError,
    RecursiveTypeError,
    TableNotFoundError,
    UnsupportedFieldTypeError,
    UnsupportedFormatError,
    UnsupportedKeyTypeError,
)
from surreal_schema.models import (
    UNDEFINED,
    Issue,
    RecordId,
    RecordIdSchema,
    SafeParseResult,
    SchemaNode,
    SchemaValidationError,
    TableSchema,
)
from surreal_schema import factories as sz
from surreal_schema.registry import TableRegistry
from surreal_schema.schema import (
    DefineTableOptions,
    RemoveTableOptions,
    SurqlGenerator,
    SurqlQuery,
    lower,
    to_sexpr,
)

__all__ = [
    "__version__",
    "sz",
    # Enums
    "ExistsPolicy",
    "IssueCode",
    "MissingPolicy",
    "StatementKind",
    "SurrealType",
    "TableType",
    # Errors
    "AsyncValidationError",
    "DuplicateTableError",
    "InvalidRecordIdValueError",
    "LoweringError",
    "RecursiveTypeError",
    "TableNotFoundError",
    "UnsupportedFieldTypeError",
    "UnsupportedFormatError",
    "UnsupportedKeyTypeError",
    # Models
    "UNDEFINED",
    "Issue",
    "RecordId",
    "RecordIdSchema",
    "SafeParseResult",
    "SchemaNode",
    "SchemaValidationError",
    "TableSchema",
    "TableRegistry",
    # DDL
    "DefineTableOptions",
    "RemoveTableOptions",
    "SurqlGenerator",
    "SurqlQuery",
    "lower",
    "to_sexpr",
]
