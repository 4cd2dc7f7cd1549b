# ============================================================================
# SCHEMA FACTORIES
# ============================================================================
# STATUS: Public API - Builder functions for schema nodes
# PURPOSE: Short constructors for every node kind, imported as `sz`
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Factories

Builder functions for every schema node kind. Import the module as a
namespace:

    from surreal_schema import sz

    user = sz.table("user").schemafull().fields({
        "name": sz.string().min(1),
        "email": sz.email().optional(),
        "friends": sz.array(sz.record_id("user")),
    })

Builders named after container builtins carry a trailing underscore
(enum_, set_, map_, tuple_) so the builtins stay usable in this module.
"""

from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Type, Union

from surreal_schema.contracts import TableType
from surreal_schema.models.base import SchemaNode
from surreal_schema.models.composites import (
    ArraySchema, IntersectionSchema, MapSchema, ObjectSchema, RecordSchema, SetSchema,
    TupleSchema, UnionSchema,
)
from surreal_schema.models.primitives import (
    AnySchema, BigIntSchema, BooleanSchema, CustomSchema, DateSchema, EmailSchema, EnumSchema,
    FunctionSchema, LiteralSchema, NeverSchema, NullSchema, NumberSchema, PromiseSchema,
    StringSchema, SymbolSchema, UndefinedSchema, UnknownSchema, UrlSchema, UuidSchema, VoidSchema,
)
from surreal_schema.models.record_id import RecordIdSchema
from surreal_schema.models.table import TableSchema
from surreal_schema.models.wrappers import LazySchema, NullableSchema, OptionalSchema


# ============================================================================
# PRIMITIVES
# ============================================================================

def any() -> AnySchema:
    return AnySchema()


def unknown() -> UnknownSchema:
    return UnknownSchema()


def never() -> NeverSchema:
    return NeverSchema()


def undefined() -> UndefinedSchema:
    return UndefinedSchema()


def void() -> VoidSchema:
    return VoidSchema()


def null() -> NullSchema:
    return NullSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def string(coerce: bool = False) -> StringSchema:
    return StringSchema(coerce=coerce)


def email() -> EmailSchema:
    return EmailSchema()


def url(protocols: Optional[Iterable[str]] = None, normalize: bool = False) -> UrlSchema:
    return UrlSchema(protocols=tuple(protocols) if protocols is not None else None, normalize=normalize)


def uuid() -> UuidSchema:
    return UuidSchema(format="uuid")


def guid() -> UuidSchema:
    return UuidSchema(format="guid")


def uuidv4() -> UuidSchema:
    return UuidSchema(format="uuidv4")


def uuidv6() -> UuidSchema:
    return UuidSchema(format="uuidv6")


def uuidv7() -> UuidSchema:
    return UuidSchema(format="uuidv7")


def number(coerce: bool = False) -> NumberSchema:
    return NumberSchema(coerce=coerce)


def int() -> NumberSchema:
    """Safe integer (lowers to int)."""
    return NumberSchema(format="safeint")


def int32() -> NumberSchema:
    return NumberSchema(format="int32")


def uint32() -> NumberSchema:
    return NumberSchema(format="uint32")


def float32() -> NumberSchema:
    return NumberSchema(format="float32")


def float64() -> NumberSchema:
    return NumberSchema(format="float64")


def bigint() -> BigIntSchema:
    return BigIntSchema()


def int64() -> BigIntSchema:
    return BigIntSchema(format="int64")


def uint64() -> BigIntSchema:
    return BigIntSchema(format="uint64")


def date(coerce: bool = False) -> DateSchema:
    return DateSchema(coerce=coerce)


def enum_(values: Union[Sequence[Any], Type[Enum]]) -> EnumSchema:
    """Enum of literal values, or of a Python Enum's member values."""
    if isinstance(values, type) and issubclass(values, Enum):
        return EnumSchema.from_enum(values)
    return EnumSchema(values=tuple(values))


def native_enum(enum_cls: Type[Enum]) -> EnumSchema:
    return EnumSchema.from_enum(enum_cls)


def literal(*values: Any) -> LiteralSchema:
    return LiteralSchema(values=values)


def symbol() -> SymbolSchema:
    return SymbolSchema()


def function() -> FunctionSchema:
    return FunctionSchema()


def promise(inner: SchemaNode) -> PromiseSchema:
    return PromiseSchema(inner=inner)


def custom(check: Optional[Callable[[Any], Any]] = None, message: str = "Invalid input") -> CustomSchema:
    return CustomSchema(check=check, message=message)


# ============================================================================
# COMPOSITES
# ============================================================================

def object(shape: Optional[Mapping[str, SchemaNode]] = None) -> ObjectSchema:
    """Object that strips unknown keys."""
    return ObjectSchema(shape=dict(shape or {}))


def strict_object(shape: Optional[Mapping[str, SchemaNode]] = None) -> ObjectSchema:
    return object(shape).strict()


def loose_object(shape: Optional[Mapping[str, SchemaNode]] = None) -> ObjectSchema:
    return object(shape).loose()


def array(element: SchemaNode) -> ArraySchema:
    return ArraySchema(element=element)


def set_(element: SchemaNode) -> SetSchema:
    return SetSchema(element=element)


def record(key: SchemaNode, value: SchemaNode) -> RecordSchema:
    return RecordSchema(key=key, value=value)


def map_(key: SchemaNode, value: SchemaNode) -> MapSchema:
    return MapSchema(key=key, value=value)


def tuple_(items: Sequence[SchemaNode], rest: Optional[SchemaNode] = None) -> TupleSchema:
    return TupleSchema(items=tuple(items), rest=rest)


def union(options: Sequence[SchemaNode]) -> UnionSchema:
    return UnionSchema(options=tuple(options))


def intersection(left: SchemaNode, right: SchemaNode) -> IntersectionSchema:
    return IntersectionSchema(left=left, right=right)


# ============================================================================
# WRAPPERS
# ============================================================================

def optional(inner: SchemaNode) -> OptionalSchema:
    return OptionalSchema(inner=inner)


def nullable(inner: SchemaNode) -> NullableSchema:
    return NullableSchema(inner=inner)


def nullish(inner: SchemaNode) -> OptionalSchema:
    return OptionalSchema(inner=NullableSchema(inner=inner))


def lazy(getter: Union[Callable[[], SchemaNode], str]) -> LazySchema:
    """Deferred reference: a zero-argument callable or a registered table name."""
    return LazySchema(getter=getter)


# ============================================================================
# RECORDS & TABLES
# ============================================================================

def record_id(*tables: str) -> RecordIdSchema:
    """Record reference restricted to tables (any table when none given)."""
    node = RecordIdSchema()
    return node.table(*tables) if tables else node


def table(name: str) -> TableSchema:
    return TableSchema(table_name=name)


def normal_table(name: str) -> TableSchema:
    return TableSchema(table_name=name, table_type=TableType.NORMAL)


def relation_table(name: str) -> TableSchema:
    return TableSchema(table_name=name, table_type=TableType.RELATION)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "any", "unknown", "never", "undefined", "void", "null", "boolean",
    "string", "email", "url", "uuid", "guid", "uuidv4", "uuidv6", "uuidv7",
    "number", "int", "int32", "uint32", "float32", "float64",
    "bigint", "int64", "uint64", "date",
    "enum_", "native_enum", "literal", "symbol", "function", "promise", "custom",
    "object", "strict_object", "loose_object", "array", "set_",
    "record", "map_", "tuple_", "union", "intersection",
    "optional", "nullable", "nullish", "lazy",
    "record_id", "table", "normal_table", "relation_table",
]
