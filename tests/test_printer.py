"""
Schema Printer Tests

Covers the s-expression rendering used in log messages.

Run with:
    pytest tests/test_printer.py -v
"""

import pytest

from surreal_schema import sz
from surreal_schema.schema.printer import to_sexpr


@pytest.mark.parametrize("node, expected", [
    (sz.string(), "(string)"),
    (sz.string().min(1).max(5), "(string [min:1 max:5])"),
    (sz.email(), "(string [format:email])"),
    (sz.uuidv7(), "(uuid [format:uuidv7])"),
    (sz.int(), "(number [format:safeint])"),
    (sz.number().gt(0).lte(10), "(number [>0 <=10])"),
    (sz.boolean(), "(boolean)"),
    (sz.string().optional(), "(optional (string))"),
    (sz.array(sz.number()), "(array (number))"),
    (sz.record(sz.string(), sz.boolean()), "(record (string) (boolean))"),
    (sz.tuple_([sz.string(), sz.number()]), "(tuple (string) (number))"),
    (sz.union([sz.string(), sz.null()]), "(union (string) (null))"),
    (sz.enum_(["a", "b"]), "(enum 'a' 'b')"),
    (sz.record_id("user"), "(record_id user (any))"),
    (sz.record_id(), "(record_id * (any))"),
    (sz.table("user"), "(table user)"),
    (sz.lazy("user"), "(lazy user)"),
    (sz.lazy(lambda: sz.string()), "(lazy ?)"),
])
def test_to_sexpr(node, expected):
    assert to_sexpr(node) == expected


def test_refinement_count():
    node = sz.string().refine(bool).refine(len)
    assert to_sexpr(node) == "(string [refine:2])"


def test_object_fields_not_printed():
    assert to_sexpr(sz.object({"a": sz.string()})) == "(object)"
