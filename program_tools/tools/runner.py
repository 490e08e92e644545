"""Batch runner - atomic, all-or-nothing execution of tool call batches.

Pipeline:
1. Stamp a deep clone of the program with ephemeral handles and positional ids
2. Translate every call against that snapshot
3. Validate and execute operations in order against the evolving program,
   stopping at the first failure
4. Strip handles from the result

If any operation fails, the caller's program is returned untouched. No
exception escapes the runner; every failure becomes a per-operation result.
"""

from typing import Any

from loguru import logger

from program_tools.diff.program_diff import build_program_diff
from program_tools.errors import (
    AddressResolutionError,
    ExecutionInvariantError,
    OperationValidationError,
    StaleProgramError,
    ToolExecutionError,
)
from program_tools.program.handles import assign_handles, assign_missing_handles, strip_handles
from program_tools.program.hashing import hash_program
from program_tools.program.models import Program
from program_tools.program.renumber import renumber_program
from program_tools.tools.registry import get_tool_handler
from program_tools.tools.translator import TranslatedCall, parse_tool_call, translate_batch
from program_tools.tools.types import BatchResult, OperationResult, ToolCall


def run_batch(translated: list[TranslatedCall], program: Program) -> BatchResult:
    """Validate and execute translated operations in order.

    Each operation is validated against the program as mutated by the
    operations before it. Execution stops at the first failure and the input
    program is returned unchanged.

    Args:
        translated: Per-call translation outcomes, in batch order
        program: Handle-stamped program the batch was translated against

    Returns:
        BatchResult with the edited program on success, the input program otherwise
    """
    logger.info("Running tool batch", operation_count=len(translated))

    current = program
    results: list[OperationResult] = []

    for entry in translated:
        try:
            updated = _apply_one(entry, current)
            diff = build_program_diff(current, updated)
        except ExecutionInvariantError as e:
            logger.exception(
                "Executor invariant violated",
                operation_id=entry.call_id,
                kind=entry.kind,
            )
            results.append(_failure(entry, e))
            break
        except ToolExecutionError as e:
            logger.warning(
                "Operation failed",
                operation_id=entry.call_id,
                kind=entry.kind,
                error_code=e.code,
                errors=e.details,
            )
            results.append(_failure(entry, e))
            break
        except Exception as e:
            logger.exception(
                "Unexpected error while applying operation",
                operation_id=entry.call_id,
                kind=entry.kind,
            )
            results.append(_failure(entry, ExecutionInvariantError(f"Unexpected {type(e).__name__}: {e}")))
            break

        results.append(OperationResult(operation_id=entry.call_id, kind=entry.kind, success=True, diff=diff))
        logger.info(
            "Operation applied",
            operation_id=entry.call_id,
            kind=entry.kind,
            added=len(diff.added),
            removed=len(diff.removed),
            modified=len(diff.modified),
        )
        current = updated
    else:
        logger.info("Tool batch succeeded", operation_count=len(results))
        return BatchResult(success=True, document=current, results=results)

    logger.warning("Tool batch rolled back", applied=len(results) - 1, failed_operation=results[-1].operation_id)
    return BatchResult(success=False, document=program, results=results)


def apply_tool_calls(
    calls: list[ToolCall | dict[str, Any]],
    program: Program,
    *,
    expected_fingerprint: str | None = None,
) -> BatchResult:
    """Apply a batch of position-based tool calls to a program.

    Args:
        calls: Planner-proposed tool calls (ToolCall models or raw dicts)
        program: Current program (never mutated)
        expected_fingerprint: Fingerprint of the program the calls were proposed
            against; when given and stale, the whole batch is rejected

    Returns:
        BatchResult whose document is the handle-free edited program on
        success, or the caller's program on failure
    """
    fingerprint = hash_program(program)
    if expected_fingerprint is not None and expected_fingerprint != fingerprint:
        logger.warning(
            "Program changed since tool calls were proposed",
            expected=expected_fingerprint,
            actual=fingerprint,
        )
        stale = StaleProgramError("Program has changed since these edits were proposed")
        return _reject_all(calls, program, fingerprint, stale)

    try:
        # Stored ids may be stale or missing
        snapshot = renumber_program(assign_handles(program))
    except ToolExecutionError as e:
        logger.exception("Could not prepare program snapshot")
        return _reject_all(calls, program, fingerprint, e)

    translated = translate_batch(calls, snapshot)
    outcome = run_batch(translated, snapshot)

    if not outcome.success:
        return BatchResult(success=False, document=program, results=outcome.results, fingerprint=fingerprint)

    document = strip_handles(outcome.document)
    return BatchResult(
        success=True,
        document=document,
        results=outcome.results,
        fingerprint=hash_program(document),
    )


def _apply_one(entry: TranslatedCall, program: Program) -> Program:
    if entry.error is not None:
        raise entry.error

    handler = get_tool_handler(entry.kind)
    validation = handler.validate(entry.operation, program)
    if not validation.valid:
        if validation.missing_target:
            raise AddressResolutionError(validation.errors)
        raise OperationValidationError(validation.errors)

    updated = handler.execute(program, entry.operation)
    return assign_missing_handles(updated)


def _failure(entry: TranslatedCall, error: ToolExecutionError) -> OperationResult:
    return OperationResult(
        operation_id=entry.call_id,
        kind=entry.kind,
        success=False,
        errors=error.details,
        error_code=error.code,
    )


def _reject_all(
    calls: list[ToolCall | dict[str, Any]],
    program: Program,
    fingerprint: str,
    error: ToolExecutionError,
) -> BatchResult:
    results = []
    for index, raw in enumerate(calls, start=1):
        try:
            call = parse_tool_call(raw)
            call_id, kind = call.id, call.kind
        except OperationValidationError:
            call_id, kind = str(index), "unknown"
        results.append(
            OperationResult(
                operation_id=call_id,
                kind=kind,
                success=False,
                errors=error.details,
                error_code=error.code,
            )
        )
    return BatchResult(success=False, document=program, results=results, fingerprint=fingerprint)
