# ============================================================================
# COMPOSITE OBJECT VALIDATOR TESTS
# ============================================================================
# STATUS: Tests - Object validation fan-out/join
# PURPOSE: Verify issue paths, catchall modes, absence handling and async joins
# CREATED: 18 OCT 2026
# ============================================================================
"""
Composite Object Validator Tests

Covers:
1. Non-mapping input yields a single invalid_type issue
2. Issues are prefixed with field names at every nesting level
3. No short-circuit: every failing field is reported, in declaration order
4. Catchall modes: strip, never (strict), unknown (loose), schema (rest)
5. Absent keys are omitted unless a default fills them
6. Async refinements are fanned out and joined with asyncio.gather
7. Synchronous parse of an async schema raises AsyncValidationError
8. Checks already started are closed when a later field raises

Run with:
    pytest tests/test_object_validator.py -v
"""

import asyncio
import inspect

import pytest

from surreal_schema import sz
from surreal_schema.contracts import IssueCode
from surreal_schema.errors import AsyncValidationError, TableNotFoundError
from surreal_schema.models import SchemaValidationError
from surreal_schema.models.base import UNDEFINED, ParsePayload, ValidationContext
from surreal_schema.validation.composite import join_results, validate_object


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def person():
    """Object with a nested address and a tag list."""
    return sz.object({
        "name": sz.string(),
        "age": sz.number().optional(),
        "address": sz.object({
            "city": sz.string(),
            "zip": sz.string().optional(),
        }),
        "tags": sz.array(sz.string()),
    })


# ============================================================================
# BASIC VALIDATION
# ============================================================================

class TestObjectValidation:

    def test_valid_input(self, person):
        data = person.parse({
            "name": "Ada",
            "address": {"city": "London"},
            "tags": ["math"],
        })
        assert data == {"name": "Ada", "address": {"city": "London"}, "tags": ["math"]}

    def test_non_mapping_input(self, person):
        result = person.safe_parse("Ada")
        assert not result.success
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.code is IssueCode.INVALID_TYPE
        assert issue.expected == "object"
        assert issue.path == []
        assert issue.message == "Expected object, received string"

    def test_none_is_not_an_object(self, person):
        result = person.safe_parse(None)
        assert result.issues[0].message == "Expected object, received null"

    def test_nested_issue_paths(self, person):
        result = person.safe_parse({
            "name": "Ada",
            "address": {"city": 42},
            "tags": ["ok", 7],
        })
        assert [issue.path for issue in result.issues] == [["address", "city"], ["tags", 1]]

    def test_every_field_reported_in_order(self, person):
        result = person.safe_parse({"name": 1, "age": "x", "address": {}, "tags": None})
        assert [issue.path[0] for issue in result.issues] == ["name", "age", "address", "tags"]

    def test_missing_required_field(self, person):
        result = person.safe_parse({"address": {"city": "Paris"}, "tags": []})
        assert result.issues[0].path == ["name"]
        assert result.issues[0].message == "Expected string, received undefined"

    def test_parse_raises_with_issues(self, person):
        with pytest.raises(SchemaValidationError) as exc_info:
            person.parse({"name": 1, "address": {"city": "x"}, "tags": []})
        assert exc_info.value.issues[0].path == ["name"]
        assert "name: Expected string" in str(exc_info.value)


# ============================================================================
# ABSENCE
# ============================================================================

class TestAbsentKeys:

    def test_absent_optional_key_not_written(self):
        schema = sz.object({"a": sz.string().optional()})
        assert schema.parse({}) == {}

    def test_default_fills_absent_key(self):
        schema = sz.object({"a": sz.string().default("x")})
        assert schema.parse({}) == {"a": "x"}

    def test_callable_default_called_per_parse(self):
        schema = sz.object({"items": sz.array(sz.string()).default(list)})
        first = schema.parse({})
        second = schema.parse({})
        assert first == {"items": []}
        assert first["items"] is not second["items"]

    def test_present_none_is_kept(self):
        schema = sz.object({"a": sz.string().nullable()})
        assert schema.parse({"a": None}) == {"a": None}

    def test_present_undefined_is_written(self):
        schema = sz.object({"a": sz.string().optional()})
        assert schema.parse({"a": UNDEFINED}) == {"a": UNDEFINED}


# ============================================================================
# CATCHALL MODES
# ============================================================================

class TestCatchall:

    def test_default_strips_unknown_keys(self):
        schema = sz.object({"a": sz.string()})
        assert schema.parse({"a": "x", "b": 1}) == {"a": "x"}

    def test_strict_reports_all_extra_keys_once(self):
        schema = sz.strict_object({"a": sz.string()})
        result = schema.safe_parse({"a": "x", "b": 1, "c": 2})
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.code is IssueCode.UNRECOGNIZED_KEYS
        assert issue.keys == ["b", "c"]
        assert issue.path == []

    def test_strict_still_validates_declared_fields(self):
        schema = sz.object({"a": sz.string()}).strict()
        result = schema.safe_parse({"a": 1, "b": 1})
        assert [i.code for i in result.issues] == [IssueCode.INVALID_TYPE, IssueCode.UNRECOGNIZED_KEYS]

    def test_loose_passes_extra_keys_through(self):
        schema = sz.loose_object({"a": sz.string()})
        assert schema.parse({"a": "x", "b": [1]}) == {"a": "x", "b": [1]}

    def test_rest_validates_extra_keys(self):
        schema = sz.object({"a": sz.string()}).rest(sz.number())
        assert schema.parse({"a": "x", "b": 1}) == {"a": "x", "b": 1}
        result = schema.safe_parse({"a": "x", "b": "nope"})
        assert result.issues[0].path == ["b"]

    def test_catchall_modes_are_exclusive(self):
        base = sz.object({"a": sz.string()})
        assert base.strict().loose().parse({"a": "x", "b": 1}) == {"a": "x", "b": 1}
        assert base.loose().strip().parse({"a": "x", "b": 1}) == {"a": "x"}


# ============================================================================
# OBJECT HELPERS
# ============================================================================

class TestObjectHelpers:

    def test_extend_pick_omit(self):
        base = sz.object({"a": sz.string(), "b": sz.number()})
        assert list(base.extend({"c": sz.boolean()}).shape) == ["a", "b", "c"]
        assert list(base.pick("b").shape) == ["b"]
        assert list(base.omit("b").shape) == ["a"]

    def test_partial(self):
        schema = sz.object({"a": sz.string(), "b": sz.number()}).partial()
        assert schema.parse({}) == {}

    def test_keyof(self):
        keys = sz.object({"a": sz.string(), "b": sz.number()}).keyof()
        assert keys.parse("a") == "a"
        assert not keys.safe_parse("c").success

    def test_receiver_unchanged(self):
        base = sz.object({"a": sz.string()})
        base.strict()
        assert base.catchall is None


# ============================================================================
# ASYNC FAN-OUT
# ============================================================================

async def _slow_true(delay: float) -> bool:
    await asyncio.sleep(delay)
    return True


class TestAsyncFanOut:

    def test_async_refinement_requires_parse_async(self):
        schema = sz.object({"a": sz.string().refine(lambda v: _slow_true(0))})
        with pytest.raises(AsyncValidationError):
            schema.parse({"a": "x"})

    def test_async_transform_requires_parse_async(self):
        async def upper(value):
            return value.upper()

        schema = sz.object({"a": sz.string().transform(upper)})
        with pytest.raises(AsyncValidationError):
            schema.safe_parse({"a": "x"})
        assert asyncio.run(schema.parse_async({"a": "x"})) == {"a": "X"}

    def test_output_in_declaration_order(self):
        schema = sz.object({
            "slow": sz.string().refine(lambda v: _slow_true(0.05)),
            "fast": sz.string().refine(lambda v: _slow_true(0)),
            "sync": sz.string(),
        })
        data = asyncio.run(schema.parse_async({"sync": "c", "fast": "b", "slow": "a"}))
        assert list(data) == ["slow", "fast", "sync"]

    def test_issues_in_declaration_order(self):
        async def late_reject(value):
            await asyncio.sleep(0.02)
            return False

        schema = sz.object({
            "a": sz.string().refine(late_reject, "late a"),
            "b": sz.number(),
        })
        result = asyncio.run(schema.safe_parse_async({"a": "x", "b": "not a number"}))
        assert [issue.path for issue in result.issues] == [["a"], ["b"]]
        assert result.issues[0].message == "late a"

    @pytest.mark.parametrize("build, value", [
        (lambda check: sz.object({"a": sz.string().refine(check), "b": sz.lazy("ghost")}),
         {"a": "x", "b": {}}),
        (lambda check: sz.tuple_([sz.string().refine(check), sz.lazy("ghost")]),
         ["x", {}]),
    ])
    def test_started_checks_closed_when_later_field_raises(self, build, value):
        """A name-based lazy field with no registry raises after field a queued its check."""
        started = []

        async def reject(value):
            return False

        def check(value):
            coro = reject(value)
            started.append(coro)
            return coro

        with pytest.raises(TableNotFoundError):
            asyncio.run(build(check).safe_parse_async(value))
        assert len(started) == 1
        assert inspect.getcoroutinestate(started[0]) == inspect.CORO_CLOSED

    def test_fields_run_concurrently(self):
        """Field a waits for an event only field b sets; sequential awaiting would hang."""

        async def scenario():
            ready = asyncio.Event()

            async def wait_for_b(value):
                await asyncio.wait_for(ready.wait(), timeout=1)
                return True

            async def release(value):
                ready.set()
                return True

            schema = sz.object({
                "a": sz.string().refine(wait_for_b),
                "b": sz.string().refine(release),
            })
            return await schema.parse_async({"a": "x", "b": "y"})

        assert asyncio.run(scenario()) == {"a": "x", "b": "y"}

    def test_async_failures_prefixed(self):
        async def reject(value):
            return False

        schema = sz.object({"inner": sz.object({"a": sz.string().refine(reject, "bad a")})})
        result = asyncio.run(schema.safe_parse_async({"inner": {"a": "x"}}))
        assert result.issues[0].path == ["inner", "a"]
        assert result.issues[0].message == "bad a"
        assert result.issues[0].code is IssueCode.CUSTOM

    def test_sync_schema_through_parse_async(self, person):
        data = asyncio.run(person.parse_async({"name": "A", "address": {"city": "B"}, "tags": []}))
        assert data["name"] == "A"


# ============================================================================
# LOW-LEVEL HELPERS
# ============================================================================

class TestJoinResults:

    def test_sync_entries_assembled_immediately(self):
        entries = [("a", True, ParsePayload(1)), ("b", True, ParsePayload(2))]
        result = join_results(entries, lambda done: [key for key, _, _ in done])
        assert result == ["a", "b"]

    def test_validate_object_direct(self):
        payload = ParsePayload({"a": "x", "b": 2})
        result = validate_object({"a": sz.string()}, None, payload, ValidationContext())
        assert result.value == {"a": "x"}
        assert result.issues == []
