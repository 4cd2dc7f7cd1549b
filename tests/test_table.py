# ============================================================================
# TABLE SCHEMA TESTS
# ============================================================================
# STATUS: Tests - Table schema builder
# PURPOSE: Verify id normalization, relation fields, mutators and validation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Table Schema Tests

Covers:
1. id is always present and restricted to the table
2. Declared id schemas are normalized (record id or id value)
3. Relation tables get in/out fields after id
4. Mutators return new tables and leave the receiver unchanged
5. dto() makes the id optional, entity() restores it
6. Schemafull tables reject unknown keys, schemaless keep them
7. Lazy table references resolve through an explicit registry

Run with:
    pytest tests/test_table.py -v
"""

import pytest

from surreal_schema import sz
from surreal_schema.contracts import IssueCode, TableType
from surreal_schema.errors import DuplicateTableError, InvalidRecordIdValueError, TableNotFoundError
from surreal_schema.models import RecordId, RecordIdSchema
from surreal_schema.registry import TableRegistry


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def user():
    return sz.table("user").schemafull().fields({
        "name": sz.string(),
        "age": sz.number().optional(),
    })


@pytest.fixture
def like():
    return (
        sz.relation_table("like")
        .from_("user")
        .to(["post", "comment"])
        .fields({"created_at": sz.string()})
    )


# ============================================================================
# NORMALIZATION
# ============================================================================

class TestIdNormalization:

    def test_id_always_first(self, user):
        assert user.field_names == ("id", "name", "age")

    def test_default_id_is_record_of_table(self, user):
        record = user.record()
        assert isinstance(record, RecordIdSchema)
        assert record.tables == ("user",)
        assert record.value.kind == "any"

    def test_declared_record_id_restricted(self):
        table = sz.table("user").fields({"id": sz.record_id("other").type(sz.string())})
        assert table.record().tables == ("user",)
        assert table.record().value.kind == "string"

    def test_declared_value_schema(self):
        table = sz.table("user").fields({"id": sz.number()})
        assert table.record().value.kind == "number"

    def test_invalid_id_value(self):
        with pytest.raises(InvalidRecordIdValueError):
            sz.table("user").fields({"id": sz.boolean()})

    def test_rename_renormalizes_id(self, user):
        renamed = user.name("member")
        assert renamed.record().tables == ("member",)
        assert user.record().tables == ("user",)


# ============================================================================
# RELATIONS
# ============================================================================

class TestRelations:

    def test_relation_field_order(self, like):
        assert like.field_names == ("id", "in", "out", "created_at")

    def test_endpoints(self, like):
        assert like.relation_endpoints == (("user",), ("post", "comment"))
        assert like.shape["in"].tables == ("user",)
        assert like.shape["out"].tables == ("post", "comment")

    def test_from_implies_relation(self):
        assert sz.table("like").from_("user").table_type is TableType.RELATION
        assert sz.table("like").out("post").table_type is TableType.RELATION

    def test_unrestricted_relation(self):
        table = sz.relation_table("link")
        assert table.relation_endpoints == (None, None)
        assert table.shape["in"].tables is None

    def test_normal_table_has_no_endpoints(self):
        assert "in" not in sz.normal_table("user").shape

    def test_fields_keeps_endpoints(self, like):
        replaced = like.fields({"weight": sz.number()})
        assert replaced.field_names == ("id", "in", "out", "weight")

    def test_relation_validation(self, like):
        ok = like.safe_parse({
            "id": RecordId("like", 1),
            "in": RecordId("user", "a"),
            "out": RecordId("post", "b"),
            "created_at": "now",
        })
        assert ok.success
        bad = like.safe_parse({
            "id": RecordId("like", 1),
            "in": RecordId("post", "a"),
            "out": RecordId("user", "b"),
            "created_at": "now",
        })
        assert [issue.path for issue in bad.issues] == [["in"], ["out"]]


# ============================================================================
# MUTATORS
# ============================================================================

class TestMutators:

    def test_receiver_unchanged(self, user):
        user.schemaless().drop().comment("x").relation()
        assert user.is_schemafull
        assert user.drops is False
        assert user.table_comment is None
        assert user.table_type is TableType.ANY

    def test_schema_modes(self):
        table = sz.table("t")
        assert table.is_schemafull is False
        assert table.schemafull().is_schemafull is True
        assert table.schemafull().schemaless().is_schemafull is False

    def test_table_types(self):
        table = sz.table("t")
        assert table.normal().table_type is TableType.NORMAL
        assert table.normal().any().table_type is TableType.ANY

    def test_drop_and_nodrop(self):
        assert sz.table("t").drop().drops is True
        assert sz.table("t").drop().nodrop().drops is False

    def test_dto_and_entity(self, user):
        assert user.dto().record().kind == "optional"
        assert user.dto().entity().record().kind == "record_id"

    def test_fields_kwargs(self):
        table = sz.table("t").fields(name=sz.string())
        assert table.field_names == ("id", "name")


# ============================================================================
# VALIDATION
# ============================================================================

class TestTableValidation:

    def test_valid_record(self, user):
        data = user.parse({"id": RecordId("user", "ada"), "name": "Ada"})
        assert data == {"id": RecordId("user", "ada"), "name": "Ada"}

    def test_id_required_on_entity(self, user):
        result = user.safe_parse({"name": "Ada"})
        assert result.issues[0].path == ["id"]

    def test_dto_allows_missing_id(self, user):
        assert user.dto().parse({"name": "Ada"}) == {"name": "Ada"}

    def test_id_from_other_table(self, user):
        result = user.safe_parse({"id": RecordId("post", 1), "name": "Ada"})
        assert result.issues[0].code is IssueCode.INVALID_VALUE

    def test_schemafull_rejects_unknown_keys(self, user):
        result = user.safe_parse({"id": RecordId("user", 1), "name": "Ada", "x": 1})
        assert result.issues[0].code is IssueCode.UNRECOGNIZED_KEYS
        assert result.issues[0].keys == ["x"]

    def test_schemaless_keeps_unknown_keys(self, user):
        data = user.schemaless().parse({"id": RecordId("user", 1), "name": "Ada", "x": 1})
        assert data["x"] == 1


# ============================================================================
# REGISTRY
# ============================================================================

class TestRegistry:

    def test_lazy_table_reference(self, user):
        registry = TableRegistry([user])
        post = sz.table("post").fields({"author": sz.lazy("user")})
        record = {
            "id": RecordId("post", 1),
            "author": {"id": RecordId("user", 1), "name": "Ada"},
        }
        assert post.parse(record, registry=registry)["author"]["name"] == "Ada"

    def test_lazy_without_registry(self):
        post = sz.table("post").fields({"author": sz.lazy("user")})
        with pytest.raises(TableNotFoundError, match="needs a TableRegistry"):
            post.parse({"id": RecordId("post", 1), "author": {}})

    def test_duplicate_registration(self, user):
        registry = TableRegistry([user])
        with pytest.raises(DuplicateTableError, match="Table already registered: user"):
            registry.register(user)
        registry.register(user.name("user"), replace=True)
        assert len(registry) == 1

    def test_lookup_and_iteration(self, user, like):
        registry = TableRegistry([user, like])
        assert registry.get("like") is like
        assert "user" in registry
        assert registry.names() == ["user", "like"]
        assert [t.table_name for t in registry] == ["user", "like"]

    def test_unknown_table(self):
        with pytest.raises(TableNotFoundError, match="Table not registered: ghost"):
            TableRegistry().get("ghost")

    def test_unregister(self, user):
        registry = TableRegistry([user])
        registry.unregister("user")
        assert len(registry) == 0
        with pytest.raises(TableNotFoundError):
            registry.unregister("user")
