# ============================================================================
# TABLE REGISTRY
# ============================================================================
# STATUS: Core - Table registration and lookup
# PURPOSE: Resolve name-based lazy references and batch DDL generation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Table Registry

Registry of table schemas by name. Lazy references written as a table
name ("user") are resolved through the registry passed to parse() or
to the statement generator; there is no process-wide registry.

Design:
- Registry is a simple dict (table_name -> TableSchema)
- Fail-fast on duplicate registration
- Iteration follows registration order
"""

from typing import Dict, Iterable, Iterator, List, Optional

from surreal_schema.errors import DuplicateTableError, TableNotFoundError
from surreal_schema.logging import ComponentType, get_logger
from surreal_schema.models.table import TableSchema

logger = get_logger(__name__, ComponentType.REGISTRY)


class TableRegistry:
    """Ordered mapping of table name to TableSchema."""

    def __init__(self, tables: Optional[Iterable[TableSchema]] = None):
        self._tables: Dict[str, TableSchema] = {}
        for table in tables or ():
            self.register(table)

    def register(self, table: TableSchema, replace: bool = False) -> TableSchema:
        """
        Register a table under its name.

        Args:
            table: Table schema to register
            replace: Allow replacing an existing registration

        Returns:
            The registered table

        Raises:
            DuplicateTableError: If the name is taken and replace is False
        """
        name = table.table_name
        if name in self._tables and not replace:
            raise DuplicateTableError(name)
        self._tables[name] = table
        logger.debug(f"Registered table: {name}")
        return table

    def unregister(self, name: str) -> None:
        if name not in self._tables:
            raise TableNotFoundError(name)
        del self._tables[name]

    def get(self, name: str) -> TableSchema:
        """
        Look up a table by name.

        Raises:
            TableNotFoundError: If no table has that name
        """
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFoundError(name) from None

    def names(self) -> List[str]:
        return list(self._tables)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __iter__(self) -> Iterator[TableSchema]:
        return iter(list(self._tables.values()))

    def __len__(self) -> int:
        return len(self._tables)

    def __repr__(self) -> str:
        return f"<TableRegistry tables={self.names()}>"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TableRegistry",
]
