# ============================================================================
# ERRORS
# ============================================================================
# STATUS: Foundation - Exception hierarchy
# PURPOSE: Configuration-time faults raised by lowering and table building
# CREATED: 18 OCT 2026
# ============================================================================
"""
Exception hierarchy.

Lowering errors are configuration-time faults: they abort DDL generation
for the whole table before anything reaches the storage engine.
Data problems are never raised from here; they travel as Issues.
"""

from typing import Optional


# ============================================================================
# LOWERING ERRORS
# ============================================================================

class LoweringError(ValueError):
    """Base error for schema nodes that cannot be compiled to DDL."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{message} (field '{field}')"
        super().__init__(message)


class UnsupportedFieldTypeError(LoweringError):
    """Construct is not valid as a field type (promise, function, ...)."""

    def __init__(self, construct: str, field: Optional[str] = None):
        self.construct = construct
        super().__init__(f"{construct} type cannot be used as a field type", field)


class UnsupportedFormatError(LoweringError):
    """Numeric or bigint sub-format has no SurrealQL equivalent."""

    def __init__(self, kind: str, fmt: str, field: Optional[str] = None):
        self.format = fmt
        super().__init__(f"Unsupported {kind} format: {fmt}", field)


class UnsupportedKeyTypeError(LoweringError):
    """Record or map key type is not string- or number-like."""

    def __init__(self, key_type: str, field: Optional[str] = None):
        self.key_type = key_type
        super().__init__(f"Unsupported key type: {key_type}", field)


class RecursiveTypeError(LoweringError):
    """Node reached itself without going through a lazy indirection."""

    def __init__(self, kind: str, field: Optional[str] = None):
        super().__init__(f"Recursive type detected while lowering {kind}", field)


# ============================================================================
# BUILDER ERRORS
# ============================================================================

class SchemaBuildError(ValueError):
    """Base error for invalid schema construction."""
    pass


class InvalidRecordIdValueError(SchemaBuildError):
    """Schema is not usable as the value part of a record id."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"{kind} is not valid as a RecordId's value")


class RegistryError(Exception):
    """Base error for table registry lookups."""
    pass


class TableNotFoundError(RegistryError):
    """Raised when a table is not found in the registry."""
    def __init__(self, table_name: str, reason: Optional[str] = None):
        self.table_name = table_name
        super().__init__(reason or f"Table not registered: {table_name}")


class DuplicateTableError(RegistryError):
    """Raised when a table name is already registered."""
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Table already registered: {table_name}")


# ============================================================================
# VALIDATION ERRORS
# ============================================================================

class AsyncValidationError(RuntimeError):
    """Synchronous parse encountered an asynchronous validator."""

    def __init__(self):
        super().__init__(
            "Encountered an asynchronous validator during synchronous parse, "
            "use parse_async() instead"
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "LoweringError",
    "UnsupportedFieldTypeError",
    "UnsupportedFormatError",
    "UnsupportedKeyTypeError",
    "RecursiveTypeError",
    "SchemaBuildError",
    "InvalidRecordIdValueError",
    "RegistryError",
    "TableNotFoundError",
    "DuplicateTableError",
    "AsyncValidationError",
]
