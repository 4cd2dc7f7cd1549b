# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for statement generation and logging
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides the defaults used when a statement options record leaves a
value unspecified. They can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from surreal_schema.contracts import ExistsPolicy, MissingPolicy


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GeneratorDefaults:
    """
    Defaults for SurrealQL statement generation.

    Controls existence policies and which optional clauses are emitted.
    """
    # DEFINE ... [IF NOT EXISTS | OVERWRITE]
    exists: ExistsPolicy = ExistsPolicy.ERROR

    # Emit DEFINE FIELD statements after DEFINE TABLE
    fields: bool = False

    # REMOVE ... [IF EXISTS]
    missing: MissingPolicy = MissingPolicy.ERROR

    # Emit DEFAULT clauses for static field defaults
    emit_defaults: bool = True

    @classmethod
    def from_env(cls) -> "GeneratorDefaults":
        """Create from environment variables."""
        return cls(
            exists=ExistsPolicy(os.getenv("SURREAL_SCHEMA_EXISTS", ExistsPolicy.ERROR.value)),
            fields=_env_bool("SURREAL_SCHEMA_FIELDS", False),
            missing=MissingPolicy(os.getenv("SURREAL_SCHEMA_MISSING", MissingPolicy.ERROR.value)),
            emit_defaults=_env_bool("SURREAL_SCHEMA_EMIT_DEFAULTS", True),
        )


@dataclass(frozen=True)
class LoggingDefaults:
    """Defaults for log output."""
    level: str = "INFO"
    format: str = "human"  # "human" or "json"

    @classmethod
    def from_env(cls) -> "LoggingDefaults":
        """Create from environment variables."""
        return cls(
            level=os.getenv("LOG_LEVEL", "INFO").upper(),
            format=os.getenv("LOG_FORMAT", "human").lower(),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    generator: GeneratorDefaults = field(default_factory=GeneratorDefaults)
    logging: LoggingDefaults = field(default_factory=LoggingDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            generator=GeneratorDefaults.from_env(),
            logging=LoggingDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "GeneratorDefaults",
    "LoggingDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
