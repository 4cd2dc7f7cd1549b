# ============================================================================
# VERSION - SURREAL SCHEMA
# ============================================================================
"""
Version information for surreal_schema.

This is the single source of truth for the package version.
Updated manually for each release.
"""
# Version format: major.minor.patch
__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Build metadata
BUILD_DATE = "2026-10-18"
