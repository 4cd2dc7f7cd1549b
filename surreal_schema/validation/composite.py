# ============================================================================
# COMPOSITE OBJECT VALIDATOR
# ============================================================================
# STATUS: Core engine - Object and table validation
# PURPOSE: Fan out field validation, join async results, assemble in order
# CREATED: 18 OCT 2026
# EXPORTS: validate_object, fan_out, join_results
# DEPENDENCIES: asyncio
# ============================================================================
"""
Composite Object Validator

Validates a mapping against an ordered shape of field schemas:

    1. Fan-out: every declared field (and every extra key when the catchall
       validates) is run before anything is awaited.
    2. Join: awaitable results are gathered together.
    3. Assembly: results are written in declaration order, issues are
       prefixed with the field name.

There is no short-circuit: a failing field never prevents the others
from being validated, so a single parse reports every problem.

Catchall handling:
    None      -> extra keys are stripped
    never     -> one unrecognized_keys issue listing every extra key
    unknown   -> extra keys copied through unchanged
    other     -> extra keys validated like declared fields
"""

import asyncio
import inspect
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from surreal_schema.contracts import IssueCode
from surreal_schema.logging import ComponentType, get_logger
from surreal_schema.models.base import (
    UNDEFINED, ParsePayload, RunResult, SchemaNode, ValidationContext, discard,
)
from surreal_schema.models.issues import prefix_issues

logger = get_logger(__name__, ComponentType.VALIDATION)


# (key, key was present in the input, field result)
FieldEntry = Tuple[Any, bool, RunResult]

# (key, key was present in the input, schema node, value to run it on)
FieldJob = Tuple[Any, bool, SchemaNode, Any]


def fan_out(jobs: Iterable[FieldJob], ctx: ValidationContext) -> List[FieldEntry]:
    """
    Run every job before anything is awaited.

    If a node raises part way through, the awaitables already collected
    are closed before the error propagates.

    Args:
        jobs: Jobs in declaration order; consumed lazily
        ctx: Validation context of the current parse

    Returns:
        One FieldEntry per job, results possibly awaitable
    """
    entries: List[FieldEntry] = []
    try:
        for key, present, node, value in jobs:
            entries.append((key, present, node.run(ParsePayload(value), ctx)))
    except Exception:
        for _, _, result in entries:
            discard(result)
        raise
    return entries


def join_results(entries: Sequence[FieldEntry], assemble) -> RunResult:
    """
    Join field results and hand them to assemble in order.

    Args:
        entries: Field entries in declaration order
        assemble: Callable receiving the entries with every result resolved

    Returns:
        The assembled payload, or an awaitable resolving to it
    """
    pending = [i for i, (_, _, result) in enumerate(entries) if inspect.isawaitable(result)]
    if not pending:
        return assemble(entries)

    async def _gather(awaitables: List[Any]) -> ParsePayload:
        resolved = await asyncio.gather(*awaitables)
        completed = list(entries)
        for index, result in zip(pending, resolved):
            key, present, _ = completed[index]
            completed[index] = (key, present, result)
        return assemble(completed)

    return _gather([entries[i][2] for i in pending])


def validate_object(
    shape: Mapping,
    catchall: Optional[SchemaNode],
    payload: ParsePayload,
    ctx: ValidationContext,
) -> RunResult:
    """
    Validate payload.value against an ordered shape.

    Args:
        shape: Field name -> schema node, in declaration order
        catchall: Schema for keys not in shape, or None to strip them
        payload: Payload holding the input mapping
        ctx: Validation context of the current parse

    Returns:
        Payload with the assembled output dict and prefixed issues
    """
    value = payload.value
    if not isinstance(value, Mapping):
        return payload.invalid_type("object")

    extra_keys = [key for key in value if key not in shape]
    validates_extras = catchall is not None and catchall.kind not in ("never", "unknown")

    def _jobs() -> Iterator[FieldJob]:
        for key, node in shape.items():
            present = key in value
            yield key, present, node, value[key] if present else UNDEFINED
        if validates_extras:
            for key in extra_keys:
                yield key, True, catchall, value[key]

    entries = fan_out(_jobs(), ctx)

    unrecognized: List[str] = []
    if extra_keys and catchall is not None:
        if catchall.kind == "never":
            unrecognized = [str(key) for key in extra_keys]
        elif catchall.kind == "unknown":
            entries.extend((key, True, ParsePayload(value[key])) for key in extra_keys)
    elif extra_keys:
        logger.debug(f"Stripping {len(extra_keys)} unrecognized key(s)")

    def _assemble(completed: Sequence[FieldEntry]) -> ParsePayload:
        output: Dict[Any, Any] = {}
        for key, present, result in completed:
            payload.issues.extend(prefix_issues(key, result.issues))
            if result.value is UNDEFINED and not present:
                continue
            output[key] = result.value
        if unrecognized:
            payload.add_issue(
                IssueCode.UNRECOGNIZED_KEYS,
                f"Unrecognized key(s) in object: {', '.join(repr(k) for k in unrecognized)}",
                keys=unrecognized,
            )
        payload.value = output
        return payload

    return join_results(entries, _assemble)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "FieldEntry",
    "FieldJob",
    "fan_out",
    "join_results",
    "validate_object",
]
