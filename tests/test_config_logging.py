# ============================================================================
# CONFIG & LOGGING TESTS
# ============================================================================
# STATUS: Tests - Defaults and structured logging
# PURPOSE: Verify environment overrides, context stacking and formatters
# CREATED: 18 OCT 2026
# ============================================================================
"""
Config & Logging Tests

Covers:
1. GeneratorDefaults / LoggingDefaults read environment overrides
2. get_defaults caches until reset_defaults
3. log_context nests and unwinds
4. StructuredFormatter emits JSON with context
5. configure_logging installs a single stdout handler
6. Module loggers carry their component onto every record

Run with:
    pytest tests/test_config_logging.py -v
"""

import json
import logging

import pytest

from surreal_schema import registry, sz
from surreal_schema.config import (
    Defaults,
    GeneratorDefaults,
    LoggingDefaults,
    get_defaults,
    reset_defaults,
)
from surreal_schema.contracts import ExistsPolicy, MissingPolicy
from surreal_schema.logging import (
    ComponentType,
    ContextLogger,
    HumanFormatter,
    StructuredFormatter,
    configure_logging,
    get_current_context,
    get_logger,
    log_context,
)
from surreal_schema.registry import TableRegistry
from surreal_schema.schema import lowering, surql_generator
from surreal_schema.validation import composite


# ============================================================================
# CONFIG
# ============================================================================

class TestDefaults:

    def test_builtin_defaults(self):
        defaults = GeneratorDefaults.from_env()
        assert defaults.exists is ExistsPolicy.ERROR
        assert defaults.missing is MissingPolicy.ERROR
        assert defaults.fields is False
        assert defaults.emit_defaults is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SURREAL_SCHEMA_EXISTS", "ignore")
        monkeypatch.setenv("SURREAL_SCHEMA_MISSING", "ignore")
        monkeypatch.setenv("SURREAL_SCHEMA_FIELDS", "yes")
        monkeypatch.setenv("SURREAL_SCHEMA_EMIT_DEFAULTS", "0")
        defaults = GeneratorDefaults.from_env()
        assert defaults.exists is ExistsPolicy.IGNORE
        assert defaults.missing is MissingPolicy.IGNORE
        assert defaults.fields is True
        assert defaults.emit_defaults is False

    def test_invalid_policy(self, monkeypatch):
        monkeypatch.setenv("SURREAL_SCHEMA_EXISTS", "sometimes")
        with pytest.raises(ValueError):
            GeneratorDefaults.from_env()

    def test_logging_defaults(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        assert LoggingDefaults.from_env() == LoggingDefaults(level="DEBUG", format="json")

    def test_cached_until_reset(self, monkeypatch):
        first = get_defaults()
        assert get_defaults() is first
        monkeypatch.setenv("SURREAL_SCHEMA_FIELDS", "true")
        assert get_defaults().generator.fields is False
        reset_defaults()
        assert get_defaults().generator.fields is True

    def test_container(self):
        assert isinstance(Defaults().generator, GeneratorDefaults)


# ============================================================================
# LOGGING
# ============================================================================

def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("surreal_schema.test", logging.INFO, __file__, 1, message, None, None)


class TestLogContext:

    def test_nested_context_inherits(self):
        with log_context(table="user"):
            with log_context(field="name") as inner:
                assert inner.table == "user"
                assert inner.field == "name"
            assert get_current_context().field is None
        assert get_current_context().table is None

    def test_context_unwound_on_error(self):
        with pytest.raises(RuntimeError):
            with log_context(table="user"):
                raise RuntimeError("boom")
        assert get_current_context().table is None


class TestComponentLoggers:

    @pytest.mark.parametrize("module, component", [
        (lowering, ComponentType.LOWERING),
        (surql_generator, ComponentType.GENERATOR),
        (composite, ComponentType.VALIDATION),
        (registry, ComponentType.REGISTRY),
    ])
    def test_module_logger_component(self, module, component):
        assert isinstance(module.logger, ContextLogger)
        assert module.logger.extra == {"component": component}
        assert module.logger.logger.name == module.__name__

    def test_component_attached_to_record(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="surreal_schema.registry"):
            TableRegistry([sz.table("user")])
        records = [r for r in caplog.records if r.name == "surreal_schema.registry"]
        assert records[0].extra == {"component": "registry"}

    def test_context_component_wins(self, caplog):
        logger = get_logger("surreal_schema.test", ComponentType.LOWERING)
        with caplog.at_level(logging.INFO, logger="surreal_schema.test"):
            with log_context(component="custom", table="user"):
                logger.info("lowered")
        assert caplog.records[0].extra == {"component": "custom", "table": "user"}


class TestFormatters:

    def test_structured_output(self):
        with log_context(table="user", statement="define"):
            output = json.loads(StructuredFormatter().format(_record("generated")))
        assert output["message"] == "generated"
        assert output["level"] == "INFO"
        assert output["context"] == {"table": "user", "statement": "define"}
        assert output["timestamp"].endswith("Z")

    def test_human_output(self):
        with log_context(table="user", field="name"):
            output = HumanFormatter().format(_record("lowered"))
        assert "[table=user, field=name]" in output
        assert output.endswith("surreal_schema.test [table=user, field=name]: lowered")


class TestConfigureLogging:

    @pytest.fixture
    def root_handlers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        yield root
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    def test_json_handler(self, root_handlers):
        configure_logging("DEBUG", json_output=True)
        assert root_handlers.level == logging.DEBUG
        assert len(root_handlers.handlers) == 1
        assert isinstance(root_handlers.handlers[0].formatter, StructuredFormatter)

    def test_environment_fallback(self, monkeypatch, root_handlers):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        reset_defaults()
        configure_logging()
        assert root_handlers.level == logging.WARNING
        assert isinstance(root_handlers.handlers[0].formatter, HumanFormatter)
