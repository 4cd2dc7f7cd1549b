# ============================================================================
# TYPE LOWERING ENGINE
# ============================================================================
# STATUS: Core engine - Schema node -> SurrealQL type expression
# PURPOSE: Recursive descent producing DDL type strings and child field declarations
# CREATED: 18 OCT 2026
# EXPORTS: lower, lower_field, LoweringContext, LoweringState, LoweredField, ChildField
# DEPENDENCIES: surreal_schema.logging
# ============================================================================
"""
Type Lowering Engine.

Compiles a schema node into a SurrealQL type expression such as
"string | none", "array<int>" or "record<user | admin>".

Each visit adds atoms to the current context's ordered atom set, or
recurses through LoweringContext.enter():
    - same context:  optional, nullable, default, union options, ...
    - fresh context: array/set elements, tuple elements, nonoptional

Objects never lower inline: they contribute "object" and queue one
ChildField per property. The statement emitter lowers the queued
children afterwards as dotted-path fields (parent.child, parent.*.child).

Cycles:
    - A node reached again through plain nesting -> RecursiveTypeError
    - A lazy node resolving to an ancestor, or to a table whose DDL is
      being generated -> "any" (logged at debug)

Usage:
    from surreal_schema.schema.lowering import lower

    lower(string().optional())            # "string | none"
    lower(array(number().int()))          # "array<int>"
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Set, Tuple

from surreal_schema.contracts import SurrealType
from surreal_schema.errors import (
    RecursiveTypeError, UnsupportedFieldTypeError, UnsupportedKeyTypeError,
)
from surreal_schema.logging import ComponentType, get_logger
from surreal_schema.models.base import UNDEFINED, SchemaNode
from surreal_schema.schema.ddl_utils import escape_ident, escape_literal, get_number_type

if TYPE_CHECKING:
    from surreal_schema.registry import TableRegistry

logger = get_logger(__name__, ComponentType.LOWERING)


# ============================================================================
# CONTEXT
# ============================================================================

@dataclass(frozen=True)
class ChildField:
    """Property discovered while lowering an object, lowered afterwards."""
    path: Tuple[str, ...]
    node: SchemaNode
    ancestors: FrozenSet[int] = frozenset()


@dataclass
class LoweringState:
    """State shared by every context of one top-level lowering."""
    ancestors: Set[int] = field(default_factory=set)
    seen_tables: Set[str] = field(default_factory=set)
    children: List[ChildField] = field(default_factory=list)
    default: Any = UNDEFINED
    flexible: bool = False
    registry: Optional["TableRegistry"] = None


class LoweringContext:
    """
    Ordered atom set plus a handle on the shared lowering state.

    path is the position of this context below the field being lowered;
    root is True while atoms still describe the field itself rather than
    an element nested inside it.
    """

    def __init__(
        self,
        state: Optional[LoweringState] = None,
        path: Tuple[str, ...] = (),
        root: bool = True,
    ):
        self.state = state if state is not None else LoweringState()
        self.path = path
        self.root = root
        self.atoms: Dict[str, None] = {}

    @classmethod
    def for_field(
        cls,
        registry: Optional["TableRegistry"] = None,
        seen_tables: Iterable[str] = (),
        ancestors: Iterable[int] = (),
    ) -> "LoweringContext":
        state = LoweringState(
            ancestors=set(ancestors),
            seen_tables=set(seen_tables),
            registry=registry,
        )
        return cls(state)

    def add(self, atom: Any) -> None:
        self.atoms[atom.value if isinstance(atom, SurrealType) else str(atom)] = None

    def fresh(self, segment: Optional[str] = None) -> "LoweringContext":
        """Nested context with its own atom set, sharing the state."""
        if segment is None:
            return LoweringContext(self.state, self.path, self.root)
        return LoweringContext(self.state, self.path + (segment,), root=False)

    def enter(self, node: SchemaNode, fresh: bool = False, segment: Optional[str] = None) -> "LoweringContext":
        """
        Lower node into this context or a fresh one.

        Returns:
            The context the node's atoms were added to

        Raises:
            RecursiveTypeError: If node is already being lowered
        """
        key = id(node)
        if key in self.state.ancestors:
            raise RecursiveTypeError(node.kind)
        target = self.fresh(segment) if fresh else self
        self.state.ancestors.add(key)
        try:
            _dispatch(node, target)
        finally:
            self.state.ancestors.discard(key)
        return target

    def queue_child(self, name: str, node: SchemaNode) -> None:
        self.state.children.append(
            ChildField(self.path + (name,), node, frozenset(self.state.ancestors))
        )

    def result(self) -> str:
        """Compose the atom set into a DDL type expression."""
        if not self.atoms or SurrealType.ANY.value in self.atoms:
            return SurrealType.ANY.value
        return " | ".join(self.atoms)


# ============================================================================
# VARIANT RULES
# ============================================================================

REJECTED_KINDS = {
    "promise": "Promise",
    "function": "Function",
    "custom": "Custom",
    "symbol": "Symbol",
    "table": "Table",
}

# Atoms a record/map key may lower to
KEY_ATOMS = frozenset({"string", "number", "int", "float"})


def _lower_number(node, ctx: LoweringContext) -> None:
    ctx.add(get_number_type(node.kind, node.format))


def _lower_optional(node, ctx: LoweringContext) -> None:
    ctx.enter(node.inner)
    ctx.add(SurrealType.NONE)


def _lower_nullable(node, ctx: LoweringContext) -> None:
    ctx.enter(node.inner)
    ctx.add(SurrealType.NULL)


def _lower_nonoptional(node, ctx: LoweringContext) -> None:
    inner = ctx.enter(node.inner, fresh=True)
    atoms = list(inner.atoms)
    if len(atoms) > 1 and SurrealType.NONE.value in atoms:
        atoms.remove(SurrealType.NONE.value)
    for atom in atoms:
        ctx.add(atom)


def _lower_default(node, ctx: LoweringContext) -> None:
    if ctx.root and ctx.state.default is UNDEFINED and not callable(node.default_value):
        ctx.state.default = node.default_value
    ctx.enter(node.inner)


def _lower_inner(node, ctx: LoweringContext) -> None:
    ctx.enter(node.inner)


def _lower_pipe(node, ctx: LoweringContext) -> None:
    if node.source.kind == "transform":
        ctx.enter(node.target)
    else:
        ctx.enter(node.source)


def _lower_object(node, ctx: LoweringContext) -> None:
    ctx.add(SurrealType.OBJECT)
    if ctx.root and node.is_flexible:
        ctx.state.flexible = True
    for name, child in node.shape.items():
        ctx.queue_child(name, child)


def _lower_array(node, ctx: LoweringContext) -> None:
    element = ctx.enter(node.element, fresh=True, segment="*").result()
    if element == SurrealType.ANY.value:
        ctx.add(SurrealType.ARRAY)
    else:
        ctx.add(f"array<{element}>")


def _lower_record(node, ctx: LoweringContext) -> None:
    key_ctx = LoweringContext.for_field(
        registry=ctx.state.registry, ancestors=ctx.state.ancestors
    )
    key_ctx.enter(node.key)
    key_type = key_ctx.result()
    for atom in key_ctx.atoms:
        if atom not in KEY_ATOMS and not _is_literal_key(atom):
            raise UnsupportedKeyTypeError(key_type)
    ctx.add(SurrealType.OBJECT)
    ctx.queue_child("*", node.value)


def _is_literal_key(atom: str) -> bool:
    if atom.startswith('"'):
        return True
    try:
        float(atom)
    except ValueError:
        return False
    return True


def _lower_tuple(node, ctx: LoweringContext) -> None:
    if node.rest is not None:
        ctx.add(SurrealType.ARRAY)
        return
    elements: Dict[str, None] = {}
    for item in node.items:
        elements[ctx.enter(item, fresh=True, segment="*").result()] = None
    ctx.add(f"[{', '.join(elements)}]")


def _lower_union(node, ctx: LoweringContext) -> None:
    for option in node.options:
        ctx.enter(option)


def _lower_literals(node, ctx: LoweringContext) -> None:
    for value in node.values:
        ctx.add(escape_literal(value))


def _lower_lazy(node, ctx: LoweringContext) -> None:
    resolved = node.resolve(ctx.state.registry)
    if id(resolved) in ctx.state.ancestors:
        logger.debug(f"Lazy reference to ancestor {resolved.kind} lowered as any")
        ctx.add(SurrealType.ANY)
        return
    if resolved.kind == "table" and resolved.table_name in ctx.state.seen_tables:
        logger.debug(f"Lazy reference to table '{resolved.table_name}' lowered as any")
        ctx.add(SurrealType.ANY)
        return
    ctx.enter(resolved)


def _lower_record_id(node, ctx: LoweringContext) -> None:
    if node.tables:
        ctx.add(f"record<{' | '.join(escape_ident(t) for t in node.tables)}>")
    else:
        ctx.add(SurrealType.RECORD)


_LOWERERS: Dict[str, Callable[[Any, LoweringContext], None]] = {
    "number": _lower_number,
    "bigint": _lower_number,
    "optional": _lower_optional,
    "nullable": _lower_nullable,
    "nonoptional": _lower_nonoptional,
    "default": _lower_default,
    "prefault": _lower_default,
    "catch": _lower_inner,
    "readonly": _lower_inner,
    "pipe": _lower_pipe,
    "object": _lower_object,
    "array": _lower_array,
    "set": _lower_array,
    "record": _lower_record,
    "map": _lower_record,
    "tuple": _lower_tuple,
    "union": _lower_union,
    "enum": _lower_literals,
    "literal": _lower_literals,
    "lazy": _lower_lazy,
    "record_id": _lower_record_id,
}


def _dispatch(node: SchemaNode, ctx: LoweringContext) -> None:
    kind = node.kind
    if kind in REJECTED_KINDS:
        raise UnsupportedFieldTypeError(REJECTED_KINDS[kind])
    lowerer = _LOWERERS.get(kind)
    if lowerer is None:
        # leaf: the node declares its own atom
        ctx.add(node.surreal_type)
        return
    lowerer(node, ctx)


# ============================================================================
# ENTRY POINTS
# ============================================================================

@dataclass
class LoweredField:
    """Everything the statement emitter needs for one field."""
    type: str
    flexible: bool = False
    default: Any = UNDEFINED
    children: List[ChildField] = field(default_factory=list)

    @property
    def has_default(self) -> bool:
        return self.default is not UNDEFINED


def lower(node: SchemaNode, context: Optional[LoweringContext] = None) -> str:
    """
    Lower a schema node to a SurrealQL type expression.

    Args:
        node: Schema node to compile
        context: Existing context to accumulate into (fresh one if None)

    Returns:
        DDL type string

    Raises:
        LoweringError: If the node (or a descendant) has no field type
    """
    ctx = context if context is not None else LoweringContext()
    ctx.enter(node)
    return ctx.result()


def lower_field(
    node: SchemaNode,
    registry: Optional["TableRegistry"] = None,
    seen_tables: Iterable[str] = (),
    ancestors: Iterable[int] = (),
) -> LoweredField:
    """
    Lower one field and collect its modifiers and queued children.

    Args:
        node: Field schema
        registry: Registry for name-based lazy references
        seen_tables: Tables whose DDL is being generated
        ancestors: Ancestor node ids inherited from the parent field

    Returns:
        LoweredField with type, flexible flag, static default and children
    """
    ctx = LoweringContext.for_field(registry, seen_tables, ancestors)
    type_ = lower(node, ctx)
    state = ctx.state
    return LoweredField(
        type=type_,
        flexible=state.flexible,
        default=state.default,
        children=list(state.children),
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ChildField",
    "LoweringState",
    "LoweringContext",
    "LoweredField",
    "lower",
    "lower_field",
]
