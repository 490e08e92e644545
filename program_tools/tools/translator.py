"""Tool call translation layer.

Converts position-based tool calls into handle-based operations.

Process:
1. The caller stamps a deep clone of the program with ephemeral handles
2. Every call is resolved against that same pre-batch snapshot
3. Resolved operations address nodes by handle, which stays valid no matter
   how earlier operations in the batch shift positions

Translation is stateless per call and never re-derived mid-batch.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from program_tools.errors import (
    AddressResolutionError,
    OperationValidationError,
    ToolExecutionError,
    UnknownOperationError,
)
from program_tools.program.models import Exercise, Program, Week, WorkoutSession
from program_tools.tools.types import (
    OPERATION_ALIASES,
    AddExerciseArgs,
    AddExerciseOp,
    AddSessionArgs,
    AddSessionOp,
    AddWeekArgs,
    AddWeekOp,
    CopySessionArgs,
    CopySessionOp,
    CreateProgramArgs,
    CreateProgramOp,
    ExerciseRef,
    HandleOperation,
    ModifyExerciseArgs,
    ModifyExerciseOp,
    ModifySessionArgs,
    ModifySessionOp,
    ModifyWeekArgs,
    ModifyWeekOp,
    RemoveExerciseArgs,
    RemoveExerciseOp,
    RemoveSessionArgs,
    RemoveSessionOp,
    RemoveWeekArgs,
    RemoveWeekOp,
    ReorderExercisesArgs,
    ReorderExercisesOp,
    SessionRef,
    ToolCall,
    WeekRef,
)


@dataclass
class TranslatedCall:
    """Per-call translation outcome: exactly one of operation or error is set."""

    call_id: str
    kind: str
    operation: HandleOperation | None = None
    error: ToolExecutionError | None = None


# ============================================================================
# Position lookup
# ============================================================================


def find_week(snapshot: Program, week: int) -> Week | None:
    if week < 1 or week > len(snapshot.weeks):
        return None
    return snapshot.weeks[week - 1]


def find_session(snapshot: Program, week: int, session: int) -> WorkoutSession | None:
    parent = find_week(snapshot, week)
    if parent is None or session < 1 or session > len(parent.sessions):
        return None
    return parent.sessions[session - 1]


def find_exercise(snapshot: Program, week: int, session: int, exercise: int) -> Exercise | None:
    parent = find_session(snapshot, week, session)
    if parent is None or exercise < 1 or exercise > len(parent.exercises):
        return None
    return parent.exercises[exercise - 1]


def _resolve_week(snapshot: Program, ref: WeekRef, label: str = "Week") -> str:
    week = find_week(snapshot, ref.week)
    if week is None:
        raise AddressResolutionError(f"{label} not found at Week {ref.week}")
    return _require_handle(week.handle)


def _resolve_session(snapshot: Program, ref: SessionRef) -> str:
    session = find_session(snapshot, ref.week, ref.session)
    if session is None:
        raise AddressResolutionError(f"Session not found at Week {ref.week}, Session {ref.session}")
    return _require_handle(session.handle)


def _resolve_exercise(snapshot: Program, ref: ExerciseRef) -> str:
    exercise = find_exercise(snapshot, ref.week, ref.session, ref.exercise)
    if exercise is None:
        raise AddressResolutionError(
            f"Exercise not found at Week {ref.week}, Session {ref.session}, Exercise {ref.exercise}"
        )
    return _require_handle(exercise.handle)


def _require_handle(handle: str | None) -> str:
    if handle is None:
        raise AddressResolutionError("Snapshot node has no handle; assign handles before translating")
    return handle


# ============================================================================
# Per-kind translation
# ============================================================================


def _modify_exercise(args: ModifyExerciseArgs, snapshot: Program) -> HandleOperation:
    return ModifyExerciseOp(exercise_handle=_resolve_exercise(snapshot, args), updates=args.updates)


def _add_exercise(args: AddExerciseArgs, snapshot: Program) -> HandleOperation:
    return AddExerciseOp(
        session_handle=_resolve_session(snapshot, args),
        position=args.position,
        exercise=args.exercise,
    )


def _remove_exercise(args: RemoveExerciseArgs, snapshot: Program) -> HandleOperation:
    return RemoveExerciseOp(exercise_handle=_resolve_exercise(snapshot, args))


def _reorder_exercises(args: ReorderExercisesArgs, snapshot: Program) -> HandleOperation:
    return ReorderExercisesOp(exercise_handle=_resolve_exercise(snapshot, args), new_position=args.new_position)


def _modify_session(args: ModifySessionArgs, snapshot: Program) -> HandleOperation:
    return ModifySessionOp(session_handle=_resolve_session(snapshot, args), updates=args.updates)


def _add_session(args: AddSessionArgs, snapshot: Program) -> HandleOperation:
    return AddSessionOp(week_handle=_resolve_week(snapshot, args), position=args.position, session=args.session)


def _remove_session(args: RemoveSessionArgs, snapshot: Program) -> HandleOperation:
    return RemoveSessionOp(session_handle=_resolve_session(snapshot, args))


def _copy_session(args: CopySessionArgs, snapshot: Program) -> HandleOperation:
    source = find_session(snapshot, args.source_week, args.source_session)
    if source is None:
        raise AddressResolutionError(
            f"Source session not found at Week {args.source_week}, Session {args.source_session}"
        )
    target_handle = _resolve_week(snapshot, WeekRef(week=args.target_week), label="Target week")
    return CopySessionOp(
        source_session_handle=_require_handle(source.handle),
        target_week_handle=target_handle,
        position=args.position,
    )


def _modify_week(args: ModifyWeekArgs, snapshot: Program) -> HandleOperation:
    return ModifyWeekOp(week_handle=_resolve_week(snapshot, args), updates=args.updates)


def _add_week(args: AddWeekArgs, snapshot: Program) -> HandleOperation:
    # Position is relative to the whole program; there is no parent to resolve
    return AddWeekOp(position=args.position, weeks=args.weeks)


def _remove_week(args: RemoveWeekArgs, snapshot: Program) -> HandleOperation:
    return RemoveWeekOp(week_handle=_resolve_week(snapshot, args))


def _create_program(args: CreateProgramArgs, snapshot: Program) -> HandleOperation:
    return CreateProgramOp(weeks=args.weeks)


_TRANSLATORS: dict[str, tuple[type[BaseModel], Callable[[Any, Program], HandleOperation]]] = {
    "modify_exercise": (ModifyExerciseArgs, _modify_exercise),
    "add_exercise": (AddExerciseArgs, _add_exercise),
    "remove_exercise": (RemoveExerciseArgs, _remove_exercise),
    "reorder_exercises": (ReorderExercisesArgs, _reorder_exercises),
    "modify_session": (ModifySessionArgs, _modify_session),
    "add_session": (AddSessionArgs, _add_session),
    "remove_session": (RemoveSessionArgs, _remove_session),
    "copy_session": (CopySessionArgs, _copy_session),
    "modify_week": (ModifyWeekArgs, _modify_week),
    "add_week": (AddWeekArgs, _add_week),
    "remove_week": (RemoveWeekArgs, _remove_week),
    "create_program": (CreateProgramArgs, _create_program),
}


def position_args_model(kind: str) -> type[BaseModel]:
    """Return the position-argument model for an operation kind.

    Raises:
        UnknownOperationError: If the kind is not recognized
    """
    kind = normalize_kind(kind)
    if kind not in _TRANSLATORS:
        raise UnknownOperationError(kind)
    return _TRANSLATORS[kind][0]


def normalize_kind(kind: str) -> str:
    return OPERATION_ALIASES.get(kind, kind)


# ============================================================================
# Public API
# ============================================================================


def translate_tool_call(call: ToolCall, snapshot: Program) -> HandleOperation:
    """Translate one position-based tool call into a handle-based operation.

    Args:
        call: Planner-proposed tool call
        snapshot: Handle-stamped pre-batch snapshot

    Returns:
        Handle-based operation

    Raises:
        UnknownOperationError: If the kind is not recognized
        OperationValidationError: If the arguments are malformed
        AddressResolutionError: If a referenced position does not exist
    """
    kind = normalize_kind(call.kind)
    if kind not in _TRANSLATORS:
        raise UnknownOperationError(call.kind)

    args_model, translate = _TRANSLATORS[kind]
    raw_args = _load_arguments(call.arguments)

    try:
        args = args_model.model_validate(raw_args)
    except PydanticValidationError as e:
        raise OperationValidationError(format_validation_errors(e)) from e

    return translate(args, snapshot)


def parse_tool_call(raw: ToolCall | dict[str, Any]) -> ToolCall:
    """Coerce a raw planner payload into a ToolCall.

    Raises:
        OperationValidationError: If the payload is not a valid tool call
    """
    if isinstance(raw, ToolCall):
        return raw
    try:
        return ToolCall.model_validate(raw)
    except PydanticValidationError as e:
        raise OperationValidationError(format_validation_errors(e)) from e


def translate_batch(calls: list[ToolCall | dict[str, Any]], snapshot: Program) -> list[TranslatedCall]:
    """Translate every call against the same snapshot.

    Failures are kept per call instead of aborting, so the runner can report
    the operations before a failing one.
    """
    translated = []
    for index, raw in enumerate(calls, start=1):
        try:
            call = parse_tool_call(raw)
        except OperationValidationError as e:
            call_id, kind = _raw_identity(raw, index)
            logger.warning("Malformed tool call", call_id=call_id, errors=e.details)
            translated.append(TranslatedCall(call_id=call_id, kind=kind, error=e))
            continue

        kind = normalize_kind(call.kind)
        try:
            operation = translate_tool_call(call, snapshot)
            translated.append(TranslatedCall(call_id=call.id, kind=kind, operation=operation))
        except ToolExecutionError as e:
            logger.warning(
                "Tool call translation failed",
                call_id=call.id,
                kind=call.kind,
                error_code=e.code,
                errors=e.details,
            )
            translated.append(TranslatedCall(call_id=call.id, kind=kind, error=e))
    return translated


def _raw_identity(raw: Any, index: int) -> tuple[str, str]:
    if not isinstance(raw, dict):
        return str(index), "unknown"
    return str(raw.get("id", index)), str(raw.get("kind") or raw.get("name") or "unknown")


def format_validation_errors(error: PydanticValidationError) -> list[str]:
    """Flatten a pydantic ValidationError into readable messages."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return messages


def _load_arguments(arguments: dict[str, Any] | str) -> dict[str, Any]:
    if isinstance(arguments, dict):
        return arguments
    try:
        loaded = json.loads(arguments or "{}")
    except json.JSONDecodeError as e:
        raise OperationValidationError(f"Arguments must be a JSON object: {e}") from e
    if not isinstance(loaded, dict):
        raise OperationValidationError("Arguments must be a JSON object")
    return loaded
