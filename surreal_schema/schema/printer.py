# ============================================================================
# SCHEMA PRINTER
# ============================================================================
# STATUS: Utility - Debug rendering of schema trees
# PURPOSE: Compact s-expression view of a schema node for logs and tests
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Printer.

Renders a schema tree as an s-expression:

    to_sexpr(string().min(1).optional())   # (optional (string [min:1]))
    to_sexpr(array(number()))              # (array (number))

Objects and tables print as (object)/(table name) without their fields;
lazy nodes print their target name and are never resolved.
"""

from typing import List

from surreal_schema.models.base import SchemaNode

_SINGLE_CHILD = ("optional", "nullable", "nonoptional", "default", "prefault",
                 "catch", "readonly", "promise")


def _constraints(node: SchemaNode) -> List[str]:
    parts: List[str] = []
    kind = node.kind
    if kind in ("string", "email", "url"):
        if node.min_length is not None:
            parts.append(f"min:{node.min_length}")
        if node.max_length is not None:
            parts.append(f"max:{node.max_length}")
        if node.pattern is not None:
            parts.append(f"regex:{node.pattern}")
        if kind != "string":
            parts.append(f"format:{kind}")
    elif kind == "uuid":
        parts.append(f"format:{node.format}")
    elif kind in ("number", "bigint"):
        if node.format is not None:
            parts.append(f"format:{node.format}")
        if kind == "number" and node.minimum is not None:
            parts.append(f"{'>=' if node.min_inclusive else '>'}{node.minimum}")
        if kind == "number" and node.maximum is not None:
            parts.append(f"{'<=' if node.max_inclusive else '<'}{node.maximum}")
    if node.checks:
        parts.append(f"refine:{len(node.checks)}")
    return parts


def to_sexpr(node: SchemaNode) -> str:
    """Render node as an s-expression string."""
    kind = node.kind

    if kind in ("string", "email", "url", "uuid", "number", "bigint"):
        constraints = _constraints(node)
        label = "string" if kind in ("email", "url") else kind
        return f"({label} [{' '.join(constraints)}])" if constraints else f"({label})"

    if kind in _SINGLE_CHILD:
        return f"({kind} {to_sexpr(node.inner)})"
    if kind in ("array", "set"):
        return f"({kind} {to_sexpr(node.element)})"
    if kind in ("record", "map"):
        return f"({kind} {to_sexpr(node.key)} {to_sexpr(node.value)})"
    if kind == "tuple":
        items = " ".join(to_sexpr(item) for item in node.items)
        return f"(tuple {items})" if items else "(tuple)"
    if kind == "union":
        return f"(union {' '.join(to_sexpr(option) for option in node.options)})"
    if kind == "intersection":
        return f"(intersection {to_sexpr(node.left)} {to_sexpr(node.right)})"
    if kind == "pipe":
        return f"(pipe {to_sexpr(node.source)} {to_sexpr(node.target)})"
    if kind in ("enum", "literal"):
        return f"({kind} {' '.join(repr(v) for v in node.values)})"
    if kind == "record_id":
        tables = " | ".join(node.tables) if node.tables else "*"
        return f"(record_id {tables} {to_sexpr(node.value)})"
    if kind == "table":
        return f"(table {node.table_name})"
    if kind == "lazy":
        target = node.getter if isinstance(node.getter, str) else "?"
        return f"(lazy {target})"
    return f"({kind})"


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "to_sexpr",
]
