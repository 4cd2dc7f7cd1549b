# ============================================================================
# COMPOSITE SCHEMA NODES
# ============================================================================
# STATUS: Core model - Multi-child nodes
# PURPOSE: Objects, collections, keyed maps, tuples, unions, intersections
# CREATED: 18 OCT 2026
# EXPORTS: ObjectSchema, ArraySchema, SetSchema, RecordSchema, MapSchema, TupleSchema,
#          UnionSchema, IntersectionSchema
# DEPENDENCIES: None (stdlib only)
# ============================================================================
"""
Composite Schema Nodes

Every composite validates all of its children before reporting, using
the same fan-out/join as the object validator, and prefixes child
issues with the key or index they belong to.
"""

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from surreal_schema.contracts import IssueCode, SurrealType
from surreal_schema.models.base import (
    UNDEFINED, ParsePayload, RunResult, SchemaNode, ValidationContext, discard,
)
from surreal_schema.models.issues import Issue, prefix_issues
from surreal_schema.models.primitives import EnumSchema, NeverSchema, UnknownSchema
from surreal_schema.models.wrappers import OptionalSchema
from surreal_schema.validation.composite import FieldEntry, FieldJob, fan_out, join_results, validate_object


# ============================================================================
# OBJECTS
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class ObjectSchema(SchemaNode):
    """
    Ordered shape of named fields.

    catchall decides what happens to keys outside the shape: None strips
    them, never rejects them, unknown keeps them, any other node
    validates them.
    """
    kind = "object"
    surreal_type = SurrealType.OBJECT

    shape: Dict[str, SchemaNode] = field(default_factory=dict)
    catchall: Optional[SchemaNode] = None

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        return validate_object(self.shape, self.catchall, payload, ctx)

    # =========================================================================
    # CATCHALL MODES
    # =========================================================================

    def strict(self) -> "ObjectSchema":
        return replace(self, catchall=NeverSchema())

    def loose(self) -> "ObjectSchema":
        return replace(self, catchall=UnknownSchema())

    passthrough = loose
    flexible = loose

    def strip(self) -> "ObjectSchema":
        return replace(self, catchall=None)

    def rest(self, node: SchemaNode) -> "ObjectSchema":
        return replace(self, catchall=node)

    @property
    def is_flexible(self) -> bool:
        return self.catchall is not None and self.catchall.kind == "unknown"

    # =========================================================================
    # SHAPE HELPERS
    # =========================================================================

    def extend(self, shape: Mapping) -> "ObjectSchema":
        return replace(self, shape={**self.shape, **shape})

    def pick(self, *keys: str) -> "ObjectSchema":
        return replace(self, shape={k: v for k, v in self.shape.items() if k in keys})

    def omit(self, *keys: str) -> "ObjectSchema":
        return replace(self, shape={k: v for k, v in self.shape.items() if k not in keys})

    def partial(self) -> "ObjectSchema":
        return replace(self, shape={
            k: v if v.kind == "optional" else OptionalSchema(inner=v)
            for k, v in self.shape.items()
        })

    def keyof(self) -> EnumSchema:
        return EnumSchema(values=tuple(self.shape))


# ============================================================================
# SEQUENCES
# ============================================================================

def _length_issues(payload: ParsePayload, size: int, label: str,
                   minimum: Optional[int], maximum: Optional[int]) -> None:
    if minimum is not None and size < minimum:
        payload.add_issue(IssueCode.TOO_SMALL, f"{label} must contain at least {minimum} element(s)")
    if maximum is not None and size > maximum:
        payload.add_issue(IssueCode.TOO_BIG, f"{label} must contain at most {maximum} element(s)")


@dataclass(frozen=True, eq=False, kw_only=True)
class ArraySchema(SchemaNode):
    kind = "array"
    surreal_type = SurrealType.ARRAY

    element: SchemaNode
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    def min(self, length: int) -> "ArraySchema":
        return replace(self, min_length=length)

    def max(self, length: int) -> "ArraySchema":
        return replace(self, max_length=length)

    def length(self, length: int) -> "ArraySchema":
        return replace(self, min_length=length, max_length=length)

    def nonempty(self) -> "ArraySchema":
        return self.min(1)

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value
        if not isinstance(value, (list, tuple)):
            return payload.invalid_type("array")
        _length_issues(payload, len(value), "Array", self.min_length, self.max_length)

        entries = fan_out(((index, True, self.element, item) for index, item in enumerate(value)), ctx)
        return join_results(entries, lambda done: _assemble_list(payload, done))


def _assemble_list(payload: ParsePayload, completed: Sequence[FieldEntry]) -> ParsePayload:
    output: List[Any] = []
    for index, _, result in completed:
        payload.issues.extend(prefix_issues(index, result.issues))
        output.append(result.value)
    payload.value = output
    return payload


@dataclass(frozen=True, eq=False, kw_only=True)
class SetSchema(SchemaNode):
    """Set of unique elements; lowers like an array."""
    kind = "set"
    surreal_type = SurrealType.ARRAY

    element: SchemaNode
    min_size: Optional[int] = None
    max_size: Optional[int] = None

    def min(self, size: int) -> "SetSchema":
        return replace(self, min_size=size)

    def max(self, size: int) -> "SetSchema":
        return replace(self, max_size=size)

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value
        if not isinstance(value, (set, frozenset)):
            return payload.invalid_type("set")
        _length_issues(payload, len(value), "Set", self.min_size, self.max_size)

        entries = fan_out(((None, True, self.element, item) for item in value), ctx)

        def _assemble(completed: Sequence[FieldEntry]) -> ParsePayload:
            output = set()
            for _, _, result in completed:
                payload.issues.extend(result.issues)
                output.add(result.value)
            payload.value = output
            return payload

        return join_results(entries, _assemble)


@dataclass(frozen=True, eq=False, kw_only=True)
class TupleSchema(SchemaNode):
    """
    Fixed-position elements, optionally followed by a rest element.

    Trailing optional elements may be omitted from the input.
    """
    kind = "tuple"
    surreal_type = SurrealType.ARRAY

    items: Tuple[SchemaNode, ...] = ()
    rest: Optional[SchemaNode] = None

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value
        if not isinstance(value, (list, tuple)):
            return payload.invalid_type("tuple")

        required = len(self.items)
        while required and self.items[required - 1].kind == "optional":
            required -= 1
        if len(value) < required:
            payload.add_issue(IssueCode.TOO_SMALL, f"Tuple must contain at least {required} element(s)")
            return payload
        if self.rest is None and len(value) > len(self.items):
            payload.add_issue(IssueCode.TOO_BIG, f"Tuple must contain at most {len(self.items)} element(s)")
            return payload

        entries = fan_out((
            (index, True, self.items[index] if index < len(self.items) else self.rest, item)
            for index, item in enumerate(value)
        ), ctx)
        return join_results(entries, lambda done: _assemble_list(payload, done))


# ============================================================================
# KEYED COLLECTIONS
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class RecordSchema(SchemaNode):
    """
    Mapping whose keys and values are each validated by one schema.

    Keys failing the key schema produce an invalid_key issue at the
    key's path.
    """
    kind = "record"
    surreal_type = SurrealType.OBJECT

    key: SchemaNode
    value: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if not isinstance(payload.value, Mapping):
            return payload.invalid_type(self.kind)

        def _jobs() -> Iterator[FieldJob]:
            for key, item in payload.value.items():
                yield key, True, self.key, key
                yield key, True, self.value, item

        entries = fan_out(_jobs(), ctx)

        def _assemble(completed: Sequence[FieldEntry]) -> ParsePayload:
            output: Dict[Any, Any] = {}
            for i in range(0, len(completed), 2):
                key, _, key_result = completed[i]
                _, _, value_result = completed[i + 1]
                if key_result.issues:
                    payload.issues.append(Issue(
                        code=IssueCode.INVALID_KEY,
                        path=[key],
                        message=f"Invalid key in {self.kind}",
                        errors=[list(key_result.issues)],
                        input=key,
                    ))
                    continue
                payload.issues.extend(prefix_issues(key, value_result.issues))
                if value_result.value is not UNDEFINED:
                    output[key_result.value] = value_result.value
            payload.value = output
            return payload

        return join_results(entries, _assemble)


@dataclass(frozen=True, eq=False, kw_only=True)
class MapSchema(RecordSchema):
    kind = "map"


# ============================================================================
# UNIONS & INTERSECTIONS
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class UnionSchema(SchemaNode):
    """
    First option that accepts the value wins, in declaration order.

    When every option fails a single invalid_union issue carries each
    option's issues.
    """
    kind = "union"

    options: Tuple[SchemaNode, ...] = ()

    def or_(self, other: SchemaNode) -> "UnionSchema":
        return replace(self, options=self.options + (other,))

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        entries: List[FieldEntry] = []
        waiting = False
        for index, option in enumerate(self.options):
            try:
                result = option.run(ParsePayload(payload.value), ctx)
            except Exception:
                for _, _, earlier in entries:
                    discard(earlier)
                raise
            if inspect.isawaitable(result):
                waiting = True
            elif not result.issues and not waiting:
                # earlier options all failed synchronously
                payload.value = result.value
                return payload
            entries.append((index, True, result))

        def _pick(completed: Sequence[FieldEntry]) -> ParsePayload:
            for _, _, result in completed:
                if not result.issues:
                    payload.value = result.value
                    return payload
            payload.add_issue(
                IssueCode.INVALID_UNION,
                "Invalid input",
                errors=[list(result.issues) for _, _, result in completed],
            )
            return payload

        return join_results(entries, _pick)


def _merge_values(left: Any, right: Any) -> Tuple[bool, Any]:
    if left is right or left == right:
        return True, left
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        merged = dict(left)
        for key, item in right.items():
            if key in merged:
                ok, merged[key] = _merge_values(merged[key], item)
                if not ok:
                    return False, None
            else:
                merged[key] = item
        return True, merged
    if isinstance(left, list) and isinstance(right, list) and len(left) == len(right):
        output = []
        for a, b in zip(left, right):
            ok, item = _merge_values(a, b)
            if not ok:
                return False, None
            output.append(item)
        return True, output
    return False, None


@dataclass(frozen=True, eq=False, kw_only=True)
class IntersectionSchema(SchemaNode):
    """Value must satisfy both sides; object outputs are merged."""
    kind = "intersection"

    left: SchemaNode
    right: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        entries = fan_out([
            ("left", True, self.left, payload.value),
            ("right", True, self.right, payload.value),
        ], ctx)

        def _merge(completed: Sequence[FieldEntry]) -> ParsePayload:
            left, right = completed[0][2], completed[1][2]
            payload.issues.extend(left.issues)
            payload.issues.extend(right.issues)
            if payload.issues:
                return payload
            ok, merged = _merge_values(left.value, right.value)
            if not ok:
                payload.add_issue(IssueCode.INVALID_TYPE, "Intersection results could not be merged")
                return payload
            payload.value = merged
            return payload

        return join_results(entries, _merge)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ObjectSchema",
    "ArraySchema",
    "SetSchema",
    "TupleSchema",
    "RecordSchema",
    "MapSchema",
    "UnionSchema",
    "IntersectionSchema",
]
