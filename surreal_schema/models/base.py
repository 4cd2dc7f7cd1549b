# ============================================================================
# SCHEMA NODE BASE
# ============================================================================
# STATUS: Core model - Base of the schema node tree
# PURPOSE: Shared node contract, parse entry points and fluent wrappers
# CREATED: 18 OCT 2026
# EXPORTS: SchemaNode, ParsePayload, ValidationContext, UNDEFINED, Refinement
# DEPENDENCIES: pydantic (via issues)
# ============================================================================
"""
Schema Node Base

Every node in a schema tree is an immutable dataclass carrying:
- kind: closed variant tag used by the lowering engine for dispatch
- surreal_type: the SurrealQL classification of a leaf node
- checks: refinements run after the node's own validation

Validation protocol:
    node.run(payload, ctx) returns either a ParsePayload (sync) or an
    awaitable resolving to one (async). Composites fan out over children
    and join awaitables with asyncio.gather.

Usage:
    from surreal_schema import sz

    schema = sz.string().optional()
    schema.parse("hello")
    await schema.parse_async("hello")
"""

import asyncio
import inspect
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import (
    TYPE_CHECKING, Any, Awaitable, Callable, ClassVar, List, Optional, Tuple, Union,
)

from surreal_schema.contracts import IssueCode, SurrealType
from surreal_schema.errors import AsyncValidationError
from surreal_schema.models.issues import Issue, SafeParseResult, SchemaValidationError

if TYPE_CHECKING:
    from surreal_schema.registry import TableRegistry


# ============================================================================
# ABSENCE SENTINEL
# ============================================================================

class _Undefined:
    """Marker for an absent value (a key that was never supplied)."""
    _instance: Optional["_Undefined"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNDEFINED = _Undefined()


def describe_input(value: Any) -> str:
    """Name the runtime kind of a value for issue messages."""
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, datetime):
        return "date"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, (set, frozenset)):
        return "set"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


# ============================================================================
# PAYLOAD & CONTEXT
# ============================================================================

@dataclass
class ParsePayload:
    """Value being validated plus the issues reported for it so far."""
    value: Any
    issues: List[Issue] = field(default_factory=list)

    def add_issue(self, code: IssueCode, message: str, **details: Any) -> None:
        """Append an issue about the current value."""
        details.setdefault("input", self.value)
        self.issues.append(Issue(code=code, message=message, **details))

    def invalid_type(self, expected: str) -> "ParsePayload":
        """Report a wrong runtime kind."""
        self.add_issue(
            IssueCode.INVALID_TYPE,
            f"Expected {expected}, received {describe_input(self.value)}",
            expected=expected,
        )
        return self


@dataclass
class ValidationContext:
    """
    Per-call validation state.

    Created once per top-level parse and discarded on completion.
    """
    async_mode: bool = False
    registry: Optional["TableRegistry"] = None


RunResult = Union[ParsePayload, Awaitable[ParsePayload]]


def discard(awaitable: Any) -> None:
    """
    Close an un-awaited coroutine so it does not warn on collection.

    A coroutine that never started still holds the awaitables passed
    to it as arguments; those are closed first. Lists are walked.
    """
    if isinstance(awaitable, list):
        for item in awaitable:
            discard(item)
        return
    if not inspect.iscoroutine(awaitable):
        return
    if inspect.getcoroutinestate(awaitable) == inspect.CORO_CREATED:
        for argument in list(awaitable.cr_frame.f_locals.values()):
            discard(argument)
    awaitable.close()


def ensure_sync(result: Any, ctx: ValidationContext) -> None:
    """Reject awaitables when validating synchronously."""
    if not ctx.async_mode and inspect.isawaitable(result):
        discard(result)
        raise AsyncValidationError()


def then(result: RunResult, continuation: Callable[[ParsePayload], RunResult]) -> RunResult:
    """Apply continuation to a run result, sync or async."""
    if inspect.isawaitable(result):
        async def _chain(pending: Awaitable[ParsePayload]) -> ParsePayload:
            payload = await pending
            out = continuation(payload)
            if inspect.isawaitable(out):
                out = await out
            return out
        return _chain(result)
    return continuation(result)


# ============================================================================
# REFINEMENTS
# ============================================================================

@dataclass(frozen=True)
class Refinement:
    """User check attached to a node; may return an awaitable bool."""
    check: Callable[[Any], Union[bool, Awaitable[bool]]]
    message: str = "Invalid input"

    def issue(self, value: Any) -> Issue:
        return Issue(code=IssueCode.CUSTOM, message=self.message, input=value)


# ============================================================================
# SCHEMA NODE
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class SchemaNode:
    """
    Base of every schema node.

    Nodes are immutable: every fluent method returns a new node and
    the receiver is never modified. Equality is identity, which the
    lowering engine relies on for cycle detection.
    """
    kind: ClassVar[str] = "any"
    surreal_type: ClassVar[SurrealType] = SurrealType.ANY

    checks: Tuple[Refinement, ...] = ()
    description: Optional[str] = None

    # =========================================================================
    # VALIDATION PROTOCOL
    # =========================================================================

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        """Validate payload.value; overridden by every variant."""
        return payload

    def run(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        """Validate, then apply refinements if the node itself passed."""
        result = self._parse(payload, ctx)
        if not self.checks:
            return result
        return then(result, lambda p: self._apply_checks(p, ctx))

    def _apply_checks(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if payload.issues or payload.value is UNDEFINED:
            return payload

        outcomes = []
        has_pending = False
        for refinement in self.checks:
            outcome = refinement.check(payload.value)
            ensure_sync(outcome, ctx)
            has_pending = has_pending or inspect.isawaitable(outcome)
            outcomes.append(outcome)

        if not has_pending:
            for refinement, ok in zip(self.checks, outcomes):
                if not ok:
                    payload.issues.append(refinement.issue(payload.value))
            return payload

        async def _join(pending: List[Any]) -> ParsePayload:
            resolved = await asyncio.gather(*(
                o if inspect.isawaitable(o) else _completed(o) for o in pending
            ))
            for refinement, ok in zip(self.checks, resolved):
                if not ok:
                    payload.issues.append(refinement.issue(payload.value))
            return payload

        return _join(outcomes)

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    def safe_parse(self, value: Any, registry: Optional["TableRegistry"] = None) -> SafeParseResult:
        """Validate synchronously, returning issues instead of raising."""
        ctx = ValidationContext(async_mode=False, registry=registry)
        result = self.run(ParsePayload(value), ctx)
        ensure_sync(result, ctx)
        return _to_result(result)

    def parse(self, value: Any, registry: Optional["TableRegistry"] = None) -> Any:
        """Validate synchronously, raising SchemaValidationError on issues."""
        result = self.safe_parse(value, registry)
        if not result.success:
            raise result.error
        return result.data

    async def safe_parse_async(
        self, value: Any, registry: Optional["TableRegistry"] = None
    ) -> SafeParseResult:
        """Validate allowing asynchronous refinements and transforms."""
        ctx = ValidationContext(async_mode=True, registry=registry)
        result = self.run(ParsePayload(value), ctx)
        if inspect.isawaitable(result):
            result = await result
        return _to_result(result)

    async def parse_async(self, value: Any, registry: Optional["TableRegistry"] = None) -> Any:
        result = await self.safe_parse_async(value, registry)
        if not result.success:
            raise result.error
        return result.data

    # =========================================================================
    # FLUENT WRAPPERS
    # =========================================================================

    def refine(self, check: Callable[[Any], Any], message: str = "Invalid input") -> "SchemaNode":
        return replace(self, checks=self.checks + (Refinement(check, message),))

    def describe(self, description: str) -> "SchemaNode":
        return replace(self, description=description)

    def optional(self) -> "SchemaNode":
        from surreal_schema.models.wrappers import OptionalSchema
        return OptionalSchema(inner=self)

    def nullable(self) -> "SchemaNode":
        from surreal_schema.models.wrappers import NullableSchema
        return NullableSchema(inner=self)

    def nullish(self) -> "SchemaNode":
        return self.nullable().optional()

    def nonoptional(self) -> "SchemaNode":
        from surreal_schema.models.wrappers import NonOptionalSchema
        return NonOptionalSchema(inner=self)

    def default(self, value: Any) -> "SchemaNode":
        from surreal_schema.models.wrappers import DefaultSchema
        return DefaultSchema(inner=self, default_value=value)

    def prefault(self, value: Any) -> "SchemaNode":
        from surreal_schema.models.wrappers import PrefaultSchema
        return PrefaultSchema(inner=self, default_value=value)

    def catch(self, value: Any) -> "SchemaNode":
        from surreal_schema.models.wrappers import CatchSchema
        return CatchSchema(inner=self, catch_value=value)

    def readonly(self) -> "SchemaNode":
        from surreal_schema.models.wrappers import ReadonlySchema
        return ReadonlySchema(inner=self)

    def pipe(self, target: "SchemaNode") -> "SchemaNode":
        from surreal_schema.models.wrappers import PipeSchema
        return PipeSchema(source=self, target=target)

    def transform(self, fn: Callable[[Any], Any]) -> "SchemaNode":
        from surreal_schema.models.wrappers import TransformSchema
        return self.pipe(TransformSchema(fn=fn))

    def array(self) -> "SchemaNode":
        from surreal_schema.models.composites import ArraySchema
        return ArraySchema(element=self)

    def or_(self, other: "SchemaNode") -> "SchemaNode":
        from surreal_schema.models.composites import UnionSchema
        return UnionSchema(options=(self, other))

    def and_(self, other: "SchemaNode") -> "SchemaNode":
        from surreal_schema.models.composites import IntersectionSchema
        return IntersectionSchema(left=self, right=other)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} kind={self.kind}>"


async def _completed(value: Any) -> Any:
    return value


def _to_result(payload: ParsePayload) -> SafeParseResult:
    if payload.issues:
        return SafeParseResult(success=False, error=SchemaValidationError(payload.issues))
    return SafeParseResult(success=True, data=payload.value)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "UNDEFINED",
    "describe_input",
    "ParsePayload",
    "ValidationContext",
    "RunResult",
    "discard",
    "ensure_sync",
    "then",
    "Refinement",
    "SchemaNode",
]
