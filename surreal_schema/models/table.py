# ============================================================================
# TABLE SCHEMA
# ============================================================================
# STATUS: Core model - Table schema builder
# PURPOSE: Named object schema with id normalization and table metadata
# CREATED: 18 OCT 2026
# EXPORTS: TableSchema
# DEPENDENCIES: None (stdlib only)
# ============================================================================
"""
Table Schema

A TableSchema is an object schema that also describes a SurrealDB table:
name, storage mode, relation endpoints, drop flag and comment.

Field normalization (done once, at construction):
    id      always present; a record id restricted to this table
    in/out  relation tables only; record ids restricted to the endpoints
    ...     declared fields, in declaration order

Every mutator returns a new TableSchema; the receiver is never changed.

Usage:
    user = table("user").schemafull().fields({"name": string()})
    user.parse({"id": RecordId("user", "alice"), "name": "Alice"})
    user.to_surql("define", fields=True)
"""

from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from surreal_schema.contracts import StatementKind, SurrealType, TableType
from surreal_schema.models.base import ParsePayload, RunResult, SchemaNode, ValidationContext
from surreal_schema.models.primitives import NeverSchema, UnknownSchema
from surreal_schema.models.record_id import RecordIdSchema
from surreal_schema.models.wrappers import OptionalSchema
from surreal_schema.validation.composite import validate_object


Endpoint = Union[str, Iterable[str], RecordIdSchema]


def _to_record_id(endpoint: Endpoint) -> RecordIdSchema:
    if isinstance(endpoint, RecordIdSchema):
        return endpoint
    if isinstance(endpoint, str):
        return RecordIdSchema(tables=(endpoint,))
    return RecordIdSchema(tables=tuple(endpoint))


@dataclass(frozen=True, eq=False, kw_only=True)
class TableSchema(SchemaNode):
    """
    Object schema bound to a SurrealDB table.

    The catchall defaults to unknown (schemaless); schemafull() sets it
    to never so unknown keys are reported.
    """
    kind = "table"
    surreal_type = SurrealType.OBJECT

    table_name: str
    declared_fields: Dict[str, SchemaNode] = field(default_factory=dict)
    catchall: SchemaNode = field(default_factory=UnknownSchema)
    table_type: TableType = TableType.ANY
    in_field: Optional[RecordIdSchema] = None
    out_field: Optional[RecordIdSchema] = None
    drops: bool = False
    table_comment: Optional[str] = None
    is_dto: bool = False

    def __post_init__(self):
        # normalize eagerly so an invalid id fails at build time
        self.shape

    # =========================================================================
    # NORMALIZATION
    # =========================================================================

    @cached_property
    def shape(self) -> Dict[str, SchemaNode]:
        """Normalized fields: id, then in/out for relations, then declared."""
        shape: Dict[str, SchemaNode] = {"id": self._normalized_id()}

        reserved = {"id"}
        if self.table_type is TableType.RELATION:
            shape["in"] = self._endpoint_field("in", self.in_field)
            shape["out"] = self._endpoint_field("out", self.out_field)
            reserved.update(("in", "out"))

        for name, node in self.declared_fields.items():
            if name not in reserved:
                shape[name] = node
        return shape

    def _normalized_id(self) -> SchemaNode:
        declared = self.declared_fields.get("id")
        base = RecordIdSchema(tables=(self.table_name,))
        if declared is None:
            node: SchemaNode = base
        elif isinstance(declared, RecordIdSchema):
            node = declared.table(self.table_name)
        else:
            node = base.type(declared)
        if self.is_dto:
            node = OptionalSchema(inner=node)
        return node

    def _endpoint_field(self, name: str, endpoint: Optional[RecordIdSchema]) -> SchemaNode:
        if endpoint is not None:
            return endpoint
        declared = self.declared_fields.get(name)
        if isinstance(declared, RecordIdSchema):
            return declared
        return RecordIdSchema()

    # =========================================================================
    # ACCESSORS
    # =========================================================================

    @property
    def is_schemafull(self) -> bool:
        return self.catchall.kind == "never"

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(self.shape)

    @property
    def relation_endpoints(self) -> Tuple[Optional[Tuple[str, ...]], Optional[Tuple[str, ...]]]:
        """Permitted (from, to) table sets; None means any table."""
        return (
            self.in_field.tables if self.in_field is not None else None,
            self.out_field.tables if self.out_field is not None else None,
        )

    def record(self) -> SchemaNode:
        """Schema of this table's record ids."""
        return self.shape["id"]

    # =========================================================================
    # MUTATORS
    # =========================================================================

    def name(self, name: str) -> "TableSchema":
        return replace(self, table_name=name)

    def fields(self, fields: Optional[Mapping[str, SchemaNode]] = None, **more: SchemaNode) -> "TableSchema":
        """Replace the declared fields."""
        return replace(self, declared_fields={**(fields or {}), **more})

    def schemafull(self) -> "TableSchema":
        return replace(self, catchall=NeverSchema())

    def schemaless(self) -> "TableSchema":
        return replace(self, catchall=UnknownSchema())

    def any(self) -> "TableSchema":
        return replace(self, table_type=TableType.ANY)

    def normal(self) -> "TableSchema":
        return replace(self, table_type=TableType.NORMAL)

    def relation(self) -> "TableSchema":
        return replace(self, table_type=TableType.RELATION)

    def from_(self, endpoint: Endpoint) -> "TableSchema":
        """Restrict the in side of a relation (implies relation())."""
        return replace(self, table_type=TableType.RELATION, in_field=_to_record_id(endpoint))

    def to(self, endpoint: Endpoint) -> "TableSchema":
        """Restrict the out side of a relation (implies relation())."""
        return replace(self, table_type=TableType.RELATION, out_field=_to_record_id(endpoint))

    in_ = from_
    out = to

    def drop(self) -> "TableSchema":
        return replace(self, drops=True)

    def nodrop(self) -> "TableSchema":
        return replace(self, drops=False)

    def comment(self, text: Optional[str]) -> "TableSchema":
        return replace(self, table_comment=text)

    def dto(self) -> "TableSchema":
        """Variant whose id is optional, for records not yet created."""
        return replace(self, is_dto=True)

    def entity(self) -> "TableSchema":
        return replace(self, is_dto=False)

    # =========================================================================
    # VALIDATION & DDL
    # =========================================================================

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        return validate_object(self.shape, self.catchall, payload, ctx)

    def to_surql(self, statement: Union[str, StatementKind] = StatementKind.DEFINE, **options: Any) -> str:
        """
        Render a DDL statement for this table.

        Args:
            statement: define, remove, info or structure
            **options: Statement options (exists, fields, missing)

        Returns:
            SurrealQL text
        """
        from surreal_schema.schema.surql_generator import SurqlGenerator
        return SurqlGenerator().to_surql(self, statement, **options).query

    def __repr__(self) -> str:
        return f"<TableSchema name={self.table_name} type={self.table_type.value}>"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TableSchema",
]
