# ============================================================================
# PRIMITIVE SCHEMA NODES
# ============================================================================
# STATUS: Core model - Leaf nodes
# PURPOSE: Scalar validators and their SurrealQL classification
# CREATED: 18 OCT 2026
# EXPORTS: AnySchema, StringSchema, NumberSchema, BigIntSchema, DateSchema, ...
# DEPENDENCIES: pydantic (TypeAdapter for uuid/url/datetime formats)
# ============================================================================
"""
Primitive Schema Nodes

Leaf nodes validate a single scalar. Format leaves (url, uuid, date)
delegate to pydantic TypeAdapters rather than carrying their own
parsers; email uses one compiled pattern. The SurrealQL type a leaf
lowers to is declared on the class.

Promise, function, custom and symbol nodes validate values but are
rejected by the lowering engine: they have no field type.
"""

import inspect
import math
import re
import sys
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Tuple, Type
from uuid import UUID

from pydantic import AnyUrl, TypeAdapter, ValidationError

from surreal_schema.contracts import IssueCode, SurrealType
from surreal_schema.models.base import (
    UNDEFINED, ParsePayload, RunResult, SchemaNode, ValidationContext, ensure_sync,
)


_UUID_ADAPTER = TypeAdapter(UUID)
_URL_ADAPTER = TypeAdapter(AnyUrl)
_DATETIME_ADAPTER = TypeAdapter(datetime)

_EMAIL_PATTERN = re.compile(
    r"^(?!\.)(?!.*\.\.)([A-Za-z0-9_'+\-\.]*)[A-Za-z0-9_+\-]@([A-Za-z0-9][A-Za-z0-9\-]*\.)+[A-Za-z]{2,}$"
)


# ============================================================================
# NUMERIC FORMAT RANGES
# ============================================================================

FLOAT32_MAX = 3.4028234663852886e38

# format -> (minimum, maximum, integer_only)
NUMBER_FORMAT_RANGES = {
    "safeint": (-(2 ** 53 - 1), 2 ** 53 - 1, True),
    "int32": (-(2 ** 31), 2 ** 31 - 1, True),
    "uint32": (0, 2 ** 32 - 1, True),
    "float32": (-FLOAT32_MAX, FLOAT32_MAX, False),
    "float64": (-sys.float_info.max, sys.float_info.max, False),
}

BIGINT_FORMAT_RANGES = {
    "int64": (-(2 ** 63), 2 ** 63 - 1),
    "uint64": (0, 2 ** 64 - 1),
}


# ============================================================================
# UNCONSTRAINED & EMPTY
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class AnySchema(SchemaNode):
    kind = "any"
    surreal_type = SurrealType.ANY


@dataclass(frozen=True, eq=False, kw_only=True)
class UnknownSchema(SchemaNode):
    kind = "unknown"
    surreal_type = SurrealType.ANY


@dataclass(frozen=True, eq=False, kw_only=True)
class NeverSchema(SchemaNode):
    kind = "never"
    surreal_type = SurrealType.NONE

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        return payload.invalid_type("never")


@dataclass(frozen=True, eq=False, kw_only=True)
class UndefinedSchema(SchemaNode):
    kind = "undefined"
    surreal_type = SurrealType.NONE

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if payload.value is UNDEFINED:
            return payload
        return payload.invalid_type(self.kind)


@dataclass(frozen=True, eq=False, kw_only=True)
class VoidSchema(UndefinedSchema):
    kind = "void"


@dataclass(frozen=True, eq=False, kw_only=True)
class NullSchema(SchemaNode):
    kind = "null"
    surreal_type = SurrealType.NULL

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if payload.value is None:
            return payload
        return payload.invalid_type("null")


@dataclass(frozen=True, eq=False, kw_only=True)
class BooleanSchema(SchemaNode):
    kind = "boolean"
    surreal_type = SurrealType.BOOL

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if isinstance(payload.value, bool):
            return payload
        return payload.invalid_type("boolean")


# ============================================================================
# STRINGS
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class StringSchema(SchemaNode):
    """String with optional length bounds and pattern."""
    kind = "string"
    surreal_type = SurrealType.STRING

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    coerce: bool = False

    def min(self, length: int) -> "StringSchema":
        return replace(self, min_length=length)

    def max(self, length: int) -> "StringSchema":
        return replace(self, max_length=length)

    def length(self, length: int) -> "StringSchema":
        return replace(self, min_length=length, max_length=length)

    def regex(self, pattern: str) -> "StringSchema":
        return replace(self, pattern=pattern)

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if self.coerce and payload.value is not UNDEFINED and not isinstance(payload.value, str):
            payload.value = "null" if payload.value is None else str(payload.value)
        value = payload.value
        if not isinstance(value, str):
            return payload.invalid_type("string")

        if self.min_length is not None and len(value) < self.min_length:
            payload.add_issue(
                IssueCode.TOO_SMALL,
                f"String must contain at least {self.min_length} character(s)",
            )
        if self.max_length is not None and len(value) > self.max_length:
            payload.add_issue(
                IssueCode.TOO_BIG,
                f"String must contain at most {self.max_length} character(s)",
            )
        if self.pattern is not None and not re.search(self.pattern, value):
            payload.add_issue(IssueCode.INVALID_FORMAT, f"Invalid string: must match pattern {self.pattern}")

        if not payload.issues:
            self._check_format(payload)
        return payload

    def _check_format(self, payload: ParsePayload) -> None:
        """Format leaves validate the string body here."""
        return None


@dataclass(frozen=True, eq=False, kw_only=True)
class EmailSchema(StringSchema):
    kind = "email"

    def _check_format(self, payload: ParsePayload) -> None:
        if not _EMAIL_PATTERN.match(payload.value):
            payload.add_issue(IssueCode.INVALID_FORMAT, "Invalid email address")


@dataclass(frozen=True, eq=False, kw_only=True)
class UrlSchema(StringSchema):
    """URL string; the value is kept as given unless normalize is set."""
    kind = "url"

    protocols: Optional[Tuple[str, ...]] = None
    normalize: bool = False

    def _check_format(self, payload: ParsePayload) -> None:
        try:
            url = _URL_ADAPTER.validate_python(payload.value)
        except ValidationError:
            payload.add_issue(IssueCode.INVALID_FORMAT, "Invalid URL")
            return
        if self.protocols is not None and url.scheme not in self.protocols:
            payload.add_issue(IssueCode.INVALID_FORMAT, f"Invalid URL protocol: {url.scheme}")
            return
        if self.normalize:
            payload.value = str(url)


_UUID_VERSIONS = {"uuidv4": 4, "uuidv6": 6, "uuidv7": 7}


@dataclass(frozen=True, eq=False, kw_only=True)
class UuidSchema(SchemaNode):
    """
    UUID leaf.

    Accepts UUID instances or canonical strings and outputs a UUID.
    format is one of guid, uuid, uuidv4, uuidv6, uuidv7: guid accepts
    any 8-4-4-4-12 hex value, the others require the RFC 4122 variant.
    """
    kind = "uuid"
    surreal_type = SurrealType.UUID

    format: str = "uuid"

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value
        if isinstance(value, UUID):
            parsed = value
        elif isinstance(value, str):
            try:
                parsed = _UUID_ADAPTER.validate_python(value)
            except ValidationError:
                payload.add_issue(IssueCode.INVALID_FORMAT, f"Invalid {self.format.upper()}")
                return payload
        else:
            return payload.invalid_type("uuid")

        if self.format != "guid":
            version = _UUID_VERSIONS.get(self.format)
            if parsed.variant != "specified in RFC 4122" and parsed.int not in (0, 2 ** 128 - 1):
                payload.add_issue(IssueCode.INVALID_FORMAT, "Invalid UUID")
                return payload
            if version is not None and parsed.version != version:
                payload.add_issue(IssueCode.INVALID_FORMAT, f"Invalid UUIDv{version}")
                return payload

        payload.value = parsed
        return payload


# ============================================================================
# NUMBERS
# ============================================================================

@dataclass(frozen=True, eq=False, kw_only=True)
class NumberSchema(SchemaNode):
    """
    Finite number with an optional sub-format and bounds.

    Formats: safeint, int32, uint32 (integer-valued) and float32,
    float64. The lowering engine maps the format to int/float.
    """
    kind = "number"
    surreal_type = SurrealType.NUMBER

    format: Optional[str] = None
    minimum: Optional[float] = None
    min_inclusive: bool = True
    maximum: Optional[float] = None
    max_inclusive: bool = True
    coerce: bool = False

    def gt(self, value: float) -> "NumberSchema":
        return replace(self, minimum=value, min_inclusive=False)

    def gte(self, value: float) -> "NumberSchema":
        return replace(self, minimum=value, min_inclusive=True)

    def lt(self, value: float) -> "NumberSchema":
        return replace(self, maximum=value, max_inclusive=False)

    def lte(self, value: float) -> "NumberSchema":
        return replace(self, maximum=value, max_inclusive=True)

    min = gte
    max = lte

    def positive(self) -> "NumberSchema":
        return self.gt(0)

    def nonnegative(self) -> "NumberSchema":
        return self.gte(0)

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if self.coerce and isinstance(payload.value, str):
            try:
                payload.value = float(payload.value)
            except ValueError:
                return payload.invalid_type("number")

        value = payload.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return payload.invalid_type("number")
        if isinstance(value, float) and not math.isfinite(value):
            return payload.invalid_type("number")

        low, high, integer_only = NUMBER_FORMAT_RANGES.get(self.format, (None, None, False))
        if integer_only and isinstance(value, float) and not value.is_integer():
            return payload.invalid_type("int")
        if low is not None and value < low:
            payload.add_issue(IssueCode.TOO_SMALL, f"Number must be greater than or equal to {low}")
        if high is not None and value > high:
            payload.add_issue(IssueCode.TOO_BIG, f"Number must be less than or equal to {high}")

        self._check_bounds(payload)
        return payload

    def _check_bounds(self, payload: ParsePayload) -> None:
        value = payload.value
        if self.minimum is not None:
            ok = value >= self.minimum if self.min_inclusive else value > self.minimum
            if not ok:
                relation = "greater than or equal to" if self.min_inclusive else "greater than"
                payload.add_issue(IssueCode.TOO_SMALL, f"Number must be {relation} {self.minimum}")
        if self.maximum is not None:
            ok = value <= self.maximum if self.max_inclusive else value < self.maximum
            if not ok:
                relation = "less than or equal to" if self.max_inclusive else "less than"
                payload.add_issue(IssueCode.TOO_BIG, f"Number must be {relation} {self.maximum}")


@dataclass(frozen=True, eq=False, kw_only=True)
class BigIntSchema(SchemaNode):
    """Arbitrary-precision integer; int64/uint64 formats bound the range."""
    kind = "bigint"
    surreal_type = SurrealType.INT

    format: Optional[str] = None

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value
        if isinstance(value, bool) or not isinstance(value, int):
            return payload.invalid_type("bigint")
        bounds = BIGINT_FORMAT_RANGES.get(self.format)
        if bounds is not None:
            low, high = bounds
            if value < low:
                payload.add_issue(IssueCode.TOO_SMALL, f"BigInt must be greater than or equal to {low}")
            elif value > high:
                payload.add_issue(IssueCode.TOO_BIG, f"BigInt must be less than or equal to {high}")
        return payload


@dataclass(frozen=True, eq=False, kw_only=True)
class DateSchema(SchemaNode):
    kind = "date"
    surreal_type = SurrealType.DATETIME

    coerce: bool = False

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value
        if isinstance(value, datetime):
            return payload
        if self.coerce and isinstance(value, (str, int, float)) and not isinstance(value, bool):
            try:
                payload.value = _DATETIME_ADAPTER.validate_python(value)
                return payload
            except ValidationError:
                payload.add_issue(IssueCode.INVALID_FORMAT, "Invalid date")
                return payload
        return payload.invalid_type("date")


# ============================================================================
# ENUMS & LITERALS
# ============================================================================

def _same_literal(expected: Any, value: Any) -> bool:
    # True == 1 in Python; literals compare by kind as well as value
    if isinstance(expected, bool) or isinstance(value, bool):
        return type(expected) is type(value) and expected == value
    return expected == value


@dataclass(frozen=True, eq=False, kw_only=True)
class EnumSchema(SchemaNode):
    """
    One of a fixed set of values. Enum members are accepted by value.

    Lowers to the union of its literal values, not to surreal_type.
    """
    kind = "enum"

    values: Tuple[Any, ...]

    @classmethod
    def from_enum(cls, enum_cls: Type[Enum]) -> "EnumSchema":
        return cls(values=tuple(member.value for member in enum_cls))

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value.value if isinstance(payload.value, Enum) else payload.value
        if any(_same_literal(expected, value) for expected in self.values):
            payload.value = value
            return payload
        payload.add_issue(
            IssueCode.INVALID_VALUE,
            f"Invalid option: expected one of {' | '.join(repr(v) for v in self.values)}",
            values=list(self.values),
        )
        return payload


@dataclass(frozen=True, eq=False, kw_only=True)
class LiteralSchema(SchemaNode):
    """Exact values; lowers like an enum."""
    kind = "literal"

    values: Tuple[Any, ...]

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if any(_same_literal(expected, payload.value) for expected in self.values):
            return payload
        if len(self.values) == 1:
            message = f"Invalid input: expected {self.values[0]!r}"
        else:
            message = f"Invalid option: expected one of {' | '.join(repr(v) for v in self.values)}"
        payload.add_issue(IssueCode.INVALID_VALUE, message, values=list(self.values))
        return payload


# ============================================================================
# NON-FIELD TYPES
# ============================================================================

class Symbol:
    """Unique opaque token, compared by identity."""

    def __init__(self, description: Optional[str] = None):
        self.description = description

    def __repr__(self) -> str:
        return f"Symbol({self.description or ''})"


@dataclass(frozen=True, eq=False, kw_only=True)
class SymbolSchema(SchemaNode):
    kind = "symbol"

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if isinstance(payload.value, Symbol):
            return payload
        return payload.invalid_type("symbol")


@dataclass(frozen=True, eq=False, kw_only=True)
class FunctionSchema(SchemaNode):
    kind = "function"

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if callable(payload.value):
            return payload
        return payload.invalid_type("function")


@dataclass(frozen=True, eq=False, kw_only=True)
class PromiseSchema(SchemaNode):
    """Awaitable whose resolved value is validated by inner."""
    kind = "promise"

    inner: SchemaNode

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        value = payload.value
        if not inspect.isawaitable(value):
            return self.inner.run(payload, ctx)
        ensure_sync(value, ctx)

        async def _resolve(pending: Awaitable[Any]) -> ParsePayload:
            payload.value = await pending
            result = self.inner.run(payload, ctx)
            if inspect.isawaitable(result):
                result = await result
            return result

        return _resolve(value)


@dataclass(frozen=True, eq=False, kw_only=True)
class CustomSchema(SchemaNode):
    """Value accepted by an arbitrary predicate (any value when absent)."""
    kind = "custom"

    check: Optional[Callable[[Any], Any]] = None
    message: str = "Invalid input"

    def _parse(self, payload: ParsePayload, ctx: ValidationContext) -> RunResult:
        if self.check is None:
            return payload
        outcome = self.check(payload.value)
        ensure_sync(outcome, ctx)

        def _judge(ok: Any) -> ParsePayload:
            if not ok:
                payload.add_issue(IssueCode.CUSTOM, self.message)
            return payload

        if inspect.isawaitable(outcome):
            async def _await(pending: Awaitable[Any]) -> ParsePayload:
                return _judge(await pending)
            return _await(outcome)
        return _judge(outcome)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "NUMBER_FORMAT_RANGES",
    "BIGINT_FORMAT_RANGES",
    "AnySchema",
    "UnknownSchema",
    "NeverSchema",
    "UndefinedSchema",
    "VoidSchema",
    "NullSchema",
    "BooleanSchema",
    "StringSchema",
    "EmailSchema",
    "UrlSchema",
    "UuidSchema",
    "NumberSchema",
    "BigIntSchema",
    "DateSchema",
    "EnumSchema",
    "LiteralSchema",
    "Symbol",
    "SymbolSchema",
    "FunctionSchema",
    "PromiseSchema",
    "CustomSchema",
]
