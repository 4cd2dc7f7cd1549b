# ============================================================================
# VALIDATION ISSUES
# ============================================================================
# STATUS: Core model - Issue contract and parse results
# PURPOSE: Path-prefixed, machine-readable validation issues
# CREATED: 18 OCT 2026
# EXPORTS: Issue, SchemaValidationError, SafeParseResult, prefix_issues
# DEPENDENCIES: pydantic
# ============================================================================
"""
Validation Issues

Structural validation problems are data, not exceptions: every node
reports Issues into its payload and composites prefix them with the
field name or index they came from.

Only the top-level parse() turns a non-empty issue list into a
SchemaValidationError.
"""

from dataclasses import dataclass
from typing import Any, Generic, List, Optional, Sequence, TypeVar, Union

from pydantic import BaseModel, Field

from surreal_schema.contracts import IssueCode


PathSegment = Union[str, int]
T = TypeVar("T")


class Issue(BaseModel):
    """
    A single validation problem.

    Path is relative to the node that reported it until a composite
    prefixes it; at the top level it is absolute.
    """
    code: IssueCode
    path: List[PathSegment] = Field(default_factory=list)
    message: str = ""
    expected: Optional[str] = None
    values: Optional[List[Any]] = None
    keys: Optional[List[str]] = None
    errors: Optional[List[List["Issue"]]] = None
    input: Any = Field(default=None, repr=False)

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def with_prefix(self, *segments: PathSegment) -> "Issue":
        """Return a copy with segments prepended to the path."""
        return self.model_copy(update={"path": [*segments, *self.path]})

    def format(self) -> str:
        """Human-readable single line."""
        location = ".".join(str(p) for p in self.path) or "<root>"
        return f"{location}: {self.message or self.code.value}"


Issue.model_rebuild()


def prefix_issues(segment: PathSegment, issues: Sequence[Issue]) -> List[Issue]:
    """Prefix every issue path with a field name or index."""
    return [issue.with_prefix(segment) for issue in issues]


class SchemaValidationError(ValueError):
    """Raised by parse() when validation produced issues."""

    def __init__(self, issues: Sequence[Issue]):
        self.issues: List[Issue] = list(issues)
        lines = "\n".join(f"  - {issue.format()}" for issue in self.issues)
        super().__init__(f"Validation failed with {len(self.issues)} issue(s):\n{lines}")


@dataclass
class SafeParseResult(Generic[T]):
    """Outcome of safe_parse(): either data or the error carrying issues."""
    success: bool
    data: Optional[T] = None
    error: Optional[SchemaValidationError] = None

    @property
    def issues(self) -> List[Issue]:
        return self.error.issues if self.error else []


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "PathSegment",
    "Issue",
    "prefix_issues",
    "SchemaValidationError",
    "SafeParseResult",
]
