# ============================================================================
# WRAPPER SCHEMA NODES
# ============================================================================
# STATUS: Core model - Single-child modifiers
# PURPOSE: Optionality, defaults, fallbacks, pipelines and lazy references
# CREATED: 18 OCT 2026
# EXPORTS: OptionalSchema, NullableSchema, DefaultSchema, PipeSchema, LazySchema, ...
# DEPENDENCIES: None (stdlib only)
# ============================================================================
"""
Wrapper Schema Nodes

Each wrapper owns exactly one inner node (pipe owns two) and changes
either how absence is handled or what happens to the validated value.

LazySchema is the only node that does not own its child: it holds a
resolver, either a zero-argument callable or a table name looked up in
the TableRegistry carried by the validation or lowering context.
"""

import inspect
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

from surreal_schema.errors import TableNotFoundError
from surreal_schema.models.base import (
    UNDEFINED, ParsePayload, RunResult, SchemaNode, ValidationContext, ensure_sync, then,
)

if TYPE_CHECKING:
    from surreal_schema.registry import TableRegistry


# ============================================================================
# ABSENCE HANDLING
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class OptionalSchema(SchemaNode):
    """Accepts an absent value, otherwise defers to inner."""
    kind = "optional"

    inner: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if payload.value is UNDEFINED:
            return payload
        return self.inner.run(payload, ctx)

    def unwrap(self) -> SchemaNode:
        return self.inner


@dataclass(frozen=True, eq=False, kw_only=True)
class NullableSchema(SchemaNode):
    kind = "nullable"

    inner: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if payload.value is None:
            return payload
        return self.inner.run(payload, ctx)

    def unwrap(self) -> SchemaNode:
        return self.inner


@dataclass(frozen=True, eq=False, kw_only=True)
class NonOptionalSchema(SchemaNode):
    """Rejects a value that is still absent after inner ran."""
    kind = "nonoptional"

    inner: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        def _require(result: ParsePayload) -> ParsePayload:
            if not result.issues and result.value is UNDEFINED:
                result.invalid_type("nonoptional")
            return result
        return then(self.inner.run(payload, ctx), _require)

    def unwrap(self) -> SchemaNode:
        return self.inner


def _resolve_value(value: Any) -> Any:
    return value() if callable(value) else value


@dataclass(frozen=True, eq=False, kw_only=True)
class DefaultSchema(SchemaNode):
    """
    Substitutes default_value for an absent input.

    The default is returned as-is without validation; a callable is
    invoked on every use.
    """
    kind = "default"

    inner: SchemaNode
    default_value: Any

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if payload.value is UNDEFINED:
            payload.value = _resolve_value(self.default_value)
            return payload
        return self.inner.run(payload, ctx)

    def unwrap(self) -> SchemaNode:
        return self.inner


@dataclass(frozen=True, eq=False, kw_only=True)
class PrefaultSchema(DefaultSchema):
    """Like default, but the substituted value is validated by inner."""
    kind = "prefault"

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if payload.value is UNDEFINED:
            payload.value = _resolve_value(self.default_value)
        return self.inner.run(payload, ctx)


@dataclass(frozen=True, eq=False, kw_only=True)
class CatchSchema(SchemaNode):
    """
    Replaces a failing value with catch_value and drops the issues.

    A callable catch_value receives the issue list.
    """
    kind = "catch"

    inner: SchemaNode
    catch_value: Any

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        def _recover(result: ParsePayload) -> ParsePayload:
            if not result.issues:
                return result
            issues = list(result.issues)
            result.issues.clear()
            result.value = self.catch_value(issues) if callable(self.catch_value) else self.catch_value
            return result
        return then(self.inner.run(payload, ctx), _recover)

    def unwrap(self) -> SchemaNode:
        return self.inner


# ============================================================================
# VALUE SHAPING
# ============================================================================

def freeze(value: Any) -> Any:
    """Shallow immutable view of a container value."""
    if isinstance(value, list):
        return tuple(value)
    if isinstance(value, dict):
        return MappingProxyType(value)
    if isinstance(value, set):
        return frozenset(value)
    return value


@dataclass(frozen=True, eq=False, kw_only=True)
class ReadonlySchema(SchemaNode):
    kind = "readonly"

    inner: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        def _freeze(result: ParsePayload) -> ParsePayload:
            if not result.issues:
                result.value = freeze(result.value)
            return result
        return then(self.inner.run(payload, ctx), _freeze)

    def unwrap(self) -> SchemaNode:
        return self.inner


@dataclass(frozen=True, eq=False, kw_only=True)
class TransformSchema(SchemaNode):
    """
    Maps the value through fn.

    fn may be a coroutine function when validating with parse_async().
    """
    kind = "transform"

    fn: Callable[[Any], Any]

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        output = self.fn(payload.value)
        ensure_sync(output, ctx)
        if inspect.isawaitable(output):
            async def _await(pending: Awaitable[Any]) -> ParsePayload:
                payload.value = await pending
                return payload
            return _await(output)
        payload.value = output
        return payload


@dataclass(frozen=True, eq=False, kw_only=True)
class PipeSchema(SchemaNode):
    """Runs source, then feeds its output to target if it passed."""
    kind = "pipe"

    source: SchemaNode
    target: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        def _forward(result: ParsePayload) -> RunResult:
            if result.issues:
                return result
            return self.target.run(result, ctx)
        return then(self.source.run(payload, ctx), _forward)


# ============================================================================
# LAZY REFERENCES
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class LazySchema(SchemaNode):
    """
    Deferred reference to another node.

    getter is either a zero-argument callable returning a node or the
    name of a table registered in a TableRegistry.
    """
    kind = "lazy"

    getter: Union[Callable[[], SchemaNode], str]

    def resolve(self, registry: Optional["TableRegistry"] = None) -> SchemaNode:
        """
        Resolve the referenced node.

        Args:
            registry: Registry used for table-name references

        Returns:
            The referenced schema node

        Raises:
            TableNotFoundError: If a table name cannot be resolved
        """
        if isinstance(self.getter, str):
            if registry is None:
                raise TableNotFoundError(
                    self.getter, f"Lazy reference to table '{self.getter}' needs a TableRegistry"
                )
            return registry.get(self.getter)
        return self.getter()

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        return self.resolve(ctx.registry).run(payload, ctx)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
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
    "freeze",
]
