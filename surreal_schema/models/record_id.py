# ============================================================================
# RECORD IDS
# ============================================================================
# STATUS: Core model - Record references
# PURPOSE: RecordId value type and the record-reference schema node
# CREATED: 18 OCT 2026
# EXPORTS: RecordId, RecordIdSchema, VALID_ID_KINDS
# DEPENDENCIES: None (stdlib only)
# ============================================================================
"""
Record IDs

A record id names one record: the table it lives in plus an identifier
value (string, number, uuid, object or array). RecordIdSchema restricts
the permitted tables and validates the identifier value with an inner
schema; its issues are reported under the "id" path segment.

Usage:
    user_ref = RecordIdSchema().table("user", "admin")
    user_ref.parse(RecordId("user", "alice"))
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

from surreal_schema.contracts import IssueCode, SurrealType
from surreal_schema.errors import InvalidRecordIdValueError
from surreal_schema.models.base import ParsePayload, RunResult, SchemaNode, ValidationContext, then
from surreal_schema.models.issues import prefix_issues
from surreal_schema.models.primitives import AnySchema


# Node kinds accepted as the identifier part of a record id
VALID_ID_KINDS = frozenset({
    "any", "unknown", "string", "number", "bigint", "uuid", "object", "array",
})


# ============================================================================
# VALUE TYPE
# ============================================================================

@dataclass(frozen=True)
class RecordId:
    """Reference to a single record: table name plus identifier value."""
    table: str
    id: Any

    @classmethod
    def parse(cls, text: str) -> "RecordId":
        """
        Parse "table:id" text.

        The table part may be wrapped in backticks to contain a colon;
        the identifier is kept as a string.

        Raises:
            ValueError: If the text has no table separator
        """
        if text.startswith("`"):
            end = text.find("`", 1)
            if end == -1 or text[end + 1:end + 2] != ":":
                raise ValueError(f"Invalid record id: {text!r}")
            return cls(text[1:end], _unquote_id(text[end + 2:]))
        table, sep, ident = text.partition(":")
        if not sep or not table:
            raise ValueError(f"Invalid record id: {text!r}")
        return cls(table, _unquote_id(ident))

    def __str__(self) -> str:
        from surreal_schema.schema.ddl_utils import escape_ident, escape_literal

        if isinstance(self.id, str):
            ident = escape_ident(self.id)
        elif isinstance(self.id, int) and not isinstance(self.id, bool):
            ident = str(self.id)
        else:
            ident = escape_literal(self.id)
        return f"{escape_ident(self.table)}:{ident}"


def _unquote_id(ident: str) -> str:
    if len(ident) >= 2 and ident[0] == "`" and ident[-1] == "`":
        return ident[1:-1]
    if len(ident) >= 2 and ident[0] == "⟨" and ident[-1] == "⟩":
        return ident[1:-1]
    return ident


# ============================================================================
# SCHEMA NODE
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class RecordIdSchema(SchemaNode):
    """
    Reference to a record in one of the permitted tables.

    tables=None permits any table. value validates the identifier part.
    """
    kind = "record_id"
    surreal_type = SurrealType.RECORD

    tables: Optional[Tuple[str, ...]] = None
    value: SchemaNode = field(default_factory=AnySchema)

    def table(self, *names: str) -> "RecordIdSchema":
        """Restrict to the given tables (a single list is also accepted)."""
        if len(names) == 1 and isinstance(names[0], (list, tuple)):
            names = tuple(names[0])
        return replace(self, tables=tuple(names))

    def anytable(self) -> "RecordIdSchema":
        return replace(self, tables=None)

    def type(self, value: SchemaNode) -> "RecordIdSchema":
        """
        Set the identifier value schema.

        Raises:
            InvalidRecordIdValueError: If the node cannot identify a record
        """
        if value.kind not in VALID_ID_KINDS:
            raise InvalidRecordIdValueError(value.kind)
        return replace(self, value=value)

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        record = payload.value
        if not isinstance(record, RecordId):
            return payload.invalid_type("RecordId")

        if self.tables is not None and record.table not in self.tables:
            if len(self.tables) == 1:
                expected = self.tables[0]
            else:
                expected = f"one of {' | '.join(self.tables)}"
            payload.add_issue(
                IssueCode.INVALID_VALUE,
                f"Expected RecordId's table to be {expected} but found {record.table}",
                values=list(self.tables),
            )
            return payload

        def _rebuild(result: ParsePayload) -> ParsePayload:
            if result.issues:
                payload.issues.extend(prefix_issues("id", result.issues))
                return payload
            if result.value is not record.id:
                payload.value = RecordId(record.table, result.value)
            return payload

        return then(self.value.run(ParsePayload(record.id), ctx), _rebuild)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "VALID_ID_KINDS",
    "RecordId",
    "RecordIdSchema",
]
