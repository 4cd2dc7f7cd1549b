# ============================================================================
# SURREALQL STATEMENT GENERATOR
# ============================================================================
# STATUS: Core - DDL generation from table schemas
# PURPOSE: Generate SurrealQL DEFINE/REMOVE/INFO statements for TableSchemas
# CREATED: 18 OCT 2026
# EXPORTS: SurqlGenerator, SurqlQuery, DefineTableOptions, RemoveTableOptions
# DEPENDENCIES: pydantic
# ============================================================================
"""
TableSchema to SurrealQL Generator.

Generates SurrealQL DDL statements from table schemas.
Table schemas are the SINGLE SOURCE OF TRUTH for both validation and DDL.

Statements:
    define     DEFINE TABLE, then one DEFINE FIELD per field when fields=True
    remove     REMOVE TABLE [IF EXISTS]
    info       INFO FOR TABLE
    structure  INFO FOR TABLE ... STRUCTURE

Nested objects are flattened into dotted field paths, depth-first:
    DEFINE FIELD address ON TABLE user TYPE object;
    DEFINE FIELD address.city ON TABLE user TYPE string;

Usage:
    generator = SurqlGenerator(registry)
    for statement in generator.generate_all():
        print(statement)

    generator.execute(conn, dry_run=True)
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel

from surreal_schema.config import GeneratorDefaults, get_defaults
from surreal_schema.contracts import ExistsPolicy, MissingPolicy, StatementKind, TableType
from surreal_schema.logging import ComponentType, get_logger, log_context
from surreal_schema.models.base import SchemaNode
from surreal_schema.models.table import TableSchema
from surreal_schema.registry import TableRegistry
from surreal_schema.schema.ddl_utils import ClauseBuilder, escape_ident, field_path
from surreal_schema.schema.lowering import lower_field

logger = get_logger(__name__, ComponentType.GENERATOR)


# ============================================================================
# OPTIONS & RESULTS
# ============================================================================

class DefineTableOptions(BaseModel):
    """Options for DEFINE statements; None falls back to GeneratorDefaults."""
    exists: Optional[ExistsPolicy] = None
    fields: Optional[bool] = None
    emit_defaults: Optional[bool] = None

    model_config = {"frozen": True, "extra": "forbid"}

    def resolve(self, defaults: GeneratorDefaults) -> "DefineTableOptions":
        return DefineTableOptions(
            exists=self.exists if self.exists is not None else defaults.exists,
            fields=self.fields if self.fields is not None else defaults.fields,
            emit_defaults=self.emit_defaults if self.emit_defaults is not None else defaults.emit_defaults,
        )


class RemoveTableOptions(BaseModel):
    """Options for REMOVE statements; None falls back to GeneratorDefaults."""
    missing: Optional[MissingPolicy] = None

    model_config = {"frozen": True, "extra": "forbid"}

    def resolve(self, defaults: GeneratorDefaults) -> "RemoveTableOptions":
        return RemoveTableOptions(
            missing=self.missing if self.missing is not None else defaults.missing,
        )


@dataclass
class SurqlQuery:
    """Ordered statements for one table; query joins them one per line."""
    statements: List[str] = field(default_factory=list)

    @property
    def query(self) -> str:
        return "\n".join(self.statements)

    def __iter__(self) -> Iterator[str]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def __str__(self) -> str:
        return self.query


# ============================================================================
# GENERATOR
# ============================================================================

class SurqlGenerator:
    """
    Convert TableSchemas to SurrealQL DDL statements.

    Field types come from the lowering engine; this class only formats
    statements and their modifiers.
    """

    def __init__(
        self,
        registry: Optional[TableRegistry] = None,
        defaults: Optional[GeneratorDefaults] = None,
    ):
        """
        Initialize the generator.

        Args:
            registry: Tables for generate_all() and name-based lazy references
            defaults: Statement defaults (environment defaults if None)
        """
        self.registry = registry
        self.defaults = defaults or get_defaults().generator

    # =========================================================================
    # OPTIONS
    # =========================================================================

    def _define_options(self, options: Optional[DefineTableOptions], overrides: dict) -> DefineTableOptions:
        if options is None:
            options = DefineTableOptions(**overrides)
        elif overrides:
            options = options.model_copy(update=DefineTableOptions(**overrides).model_dump(exclude_none=True))
        return options.resolve(self.defaults)

    def _remove_options(self, options: Optional[RemoveTableOptions], overrides: dict) -> RemoveTableOptions:
        if options is None:
            options = RemoveTableOptions(**overrides)
        elif overrides:
            options = options.model_copy(update=RemoveTableOptions(**overrides).model_dump(exclude_none=True))
        return options.resolve(self.defaults)

    # =========================================================================
    # DEFINE
    # =========================================================================

    def table_statement(self, table: TableSchema, exists: ExistsPolicy) -> str:
        """Build the DEFINE TABLE statement."""
        parts = [f"DEFINE TABLE{ClauseBuilder.exists(exists)} {escape_ident(table.table_name)}"]
        parts.append(f" TYPE {table.table_type.value.upper()}")

        if table.table_type is TableType.RELATION:
            from_tables, to_tables = table.relation_endpoints
            parts.append(ClauseBuilder.tables("FROM", from_tables))
            parts.append(ClauseBuilder.tables("TO", to_tables))

        if table.drops:
            parts.append(" DROP")

        parts.append(" SCHEMAFULL" if table.is_schemafull else " SCHEMALESS")
        parts.append(ClauseBuilder.comment(table.table_comment))
        return "".join(parts) + ";"

    def define_fields(
        self,
        table: TableSchema,
        options: Optional[DefineTableOptions] = None,
        **overrides: Any,
    ) -> List[str]:
        """
        Build DEFINE FIELD statements for every field of a table.

        Args:
            table: Table schema
            options: Define options (exists, emit_defaults)

        Returns:
            Statements in field order, nested paths depth-first

        Raises:
            LoweringError: If a field has no SurrealQL type
        """
        opts = self._define_options(options, overrides)
        statements: List[str] = []
        seen = (table.table_name,)

        for name, node in table.shape.items():
            if name == "id":
                node = _id_value(node)
            statements.extend(self._field_statements(table, (name,), node, (), seen, opts))
        return statements

    def _field_statements(
        self,
        table: TableSchema,
        path: Tuple[str, ...],
        node: SchemaNode,
        ancestors: Iterable[int],
        seen: Tuple[str, ...],
        opts: DefineTableOptions,
    ) -> List[str]:
        name = field_path(path)
        with log_context(field=name):
            lowered = lower_field(node, registry=self.registry, seen_tables=seen, ancestors=ancestors)

        parts = [
            f"DEFINE FIELD{ClauseBuilder.exists(opts.exists)} {name}",
            f" ON TABLE {escape_ident(table.table_name)} TYPE {lowered.type}",
        ]
        if lowered.flexible:
            parts.append(" FLEXIBLE")
        if opts.emit_defaults and lowered.has_default and path != ("id",):
            parts.append(ClauseBuilder.default(lowered.default))
        parts.append(ClauseBuilder.comment(node.description))
        statement = "".join(parts) + ";"
        logger.debug(f"Generated field statement: {statement}")

        statements = [statement]
        for child in lowered.children:
            statements.extend(self._field_statements(
                table, path + child.path, child.node, child.ancestors, seen, opts,
            ))
        return statements

    def define_table(
        self,
        table: TableSchema,
        options: Optional[DefineTableOptions] = None,
        **overrides: Any,
    ) -> SurqlQuery:
        """
        Generate DEFINE TABLE, plus DEFINE FIELD statements if requested.

        Args:
            table: Table schema
            options: Define options; keyword overrides take precedence

        Returns:
            SurqlQuery with the table statement first
        """
        opts = self._define_options(options, overrides)
        with log_context(table=table.table_name, statement=StatementKind.DEFINE.value):
            statements = [self.table_statement(table, opts.exists)]
            if opts.fields:
                statements.extend(self.define_fields(table, opts))
            logger.info(f"Generated {len(statements)} DEFINE statements for table {table.table_name}")
        return SurqlQuery(statements)

    # =========================================================================
    # REMOVE & INFO
    # =========================================================================

    def remove_table(
        self,
        table: TableSchema,
        options: Optional[RemoveTableOptions] = None,
        **overrides: Any,
    ) -> SurqlQuery:
        opts = self._remove_options(options, overrides)
        return SurqlQuery([
            f"REMOVE TABLE{ClauseBuilder.missing(opts.missing)} {escape_ident(table.table_name)};"
        ])

    def info_table(self, table: TableSchema, structure: bool = False) -> SurqlQuery:
        suffix = " STRUCTURE" if structure else ""
        return SurqlQuery([f"INFO FOR TABLE {escape_ident(table.table_name)}{suffix};"])

    def to_surql(
        self,
        table: TableSchema,
        statement: Union[str, StatementKind] = StatementKind.DEFINE,
        options: Optional[BaseModel] = None,
        **overrides: Any,
    ) -> SurqlQuery:
        """
        Dispatch to the generator for a statement kind.

        Raises:
            ValueError: If statement is not define, remove, info or structure
        """
        try:
            kind = StatementKind(statement)
        except ValueError:
            raise ValueError(f"Invalid statement: {statement!r}") from None

        if kind is StatementKind.DEFINE:
            return self.define_table(table, options, **overrides)
        if kind is StatementKind.REMOVE:
            return self.remove_table(table, options, **overrides)
        return self.info_table(table, structure=kind is StatementKind.STRUCTURE)

    # =========================================================================
    # COMPLETE SCHEMA GENERATION
    # =========================================================================

    def generate_all(
        self,
        tables: Optional[Iterable[TableSchema]] = None,
        options: Optional[DefineTableOptions] = None,
        **overrides: Any,
    ) -> List[str]:
        """
        Generate DDL for several tables.

        Args:
            tables: Tables to define (registry tables if None)
            options: Define options; fields default to True here

        Returns:
            All statements, table by table
        """
        if tables is None:
            tables = list(self.registry) if self.registry is not None else []
        overrides.setdefault("fields", True)

        statements: List[str] = []
        for table in tables:
            statements.extend(self.define_table(table, options, **overrides))

        logger.info(f"Generated {len(statements)} DDL statements")
        return statements

    def execute(
        self,
        conn,
        tables: Optional[Iterable[TableSchema]] = None,
        dry_run: bool = False,
        **overrides: Any,
    ) -> int:
        """
        Execute all DDL statements.

        Args:
            conn: SurrealDB connection exposing query(text)
            tables: Tables to define (registry tables if None)
            dry_run: If True, log statements but don't execute

        Returns:
            Number of statements executed
        """
        statements = self.generate_all(tables, **overrides)

        if dry_run:
            for stmt in statements:
                logger.info(f"[DRY RUN] {stmt[:100]}")
            return len(statements)

        for stmt in statements:
            conn.query(stmt)

        logger.info(f"Executed {len(statements)} DDL statements")
        return len(statements)


def _id_value(node: SchemaNode) -> SchemaNode:
    """Identifier value schema of a (possibly optional) record id field."""
    while node.kind == "optional":
        node = node.inner
    return node.value if node.kind == "record_id" else node


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "DefineTableOptions",
    "RemoveTableOptions",
    "SurqlQuery",
    "SurqlGenerator",
]
