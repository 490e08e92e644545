"""Validators for handle-based operations.

One validator per operation kind. Each checks argument shape, required
fields, numeric bounds, insertion positions and handle existence against the
*current* program (as mutated by earlier operations in the batch).

Validators are purely diagnostic: they never mutate and never raise for bad
input, they return a ValidationResult listing every problem found.
"""

from loguru import logger

from program_tools.core.settings import settings
from program_tools.program.handles import find_by_handle
from program_tools.program.models import Program
from program_tools.tools.types import (
    AddExerciseOp,
    AddSessionOp,
    AddWeekOp,
    CopySessionOp,
    CreateProgramOp,
    ExerciseUpdates,
    ModifyExerciseOp,
    ModifySessionOp,
    ModifyWeekOp,
    NewExerciseData,
    NewSessionData,
    NewWeekData,
    Position,
    RemoveExerciseOp,
    RemoveSessionOp,
    RemoveWeekOp,
    ReorderExercisesOp,
    ValidationResult,
)

# camelCase names match the planner-facing argument names used in messages
_NON_NEGATIVE_FIELDS = {
    "working_sets": "workingSets",
    "warmup_sets": "warmupSets",
    "rest_seconds": "restSeconds",
}

# Exercise fields that may be updated but never set to null
_NON_NULLABLE_EXERCISE_FIELDS = {
    "name": "name",
    "reps": "reps",
    "target_load": "targetLoad",
    "working_sets": "workingSets",
    "warmup_sets": "warmupSets",
    "rest_seconds": "restSeconds",
    "skipped": "skipped",
}


# ============================================================================
# Shared checks
# ============================================================================


def validate_insert_position(position: Position, sibling_count: int) -> list[str]:
    """Validate an insertion position against the current sibling count.

    Valid positions are 1..sibling_count+1 or the sentinel "end".
    """
    if position == "end":
        return []
    max_position = sibling_count + 1
    if position < 1 or position > max_position:
        return [f'Invalid position {position}. Must be 1-{max_position} or "end"']
    return []


def validate_non_negative(values: dict, prefix: str = "") -> list[str]:
    errors = []
    for field, label in _NON_NEGATIVE_FIELDS.items():
        value = values.get(field)
        if value is not None and value < 0:
            errors.append(f"{prefix}{label} cannot be negative")
    return errors


def validate_new_exercise(exercise: NewExerciseData, prefix: str = "Exercise") -> list[str]:
    """Check the fields required to create an exercise."""
    errors = []
    if not exercise.name:
        errors.append(f"{prefix} name is required")
    if not exercise.reps:
        errors.append(f"{prefix} reps is required")
    if not exercise.target_load:
        errors.append(f"{prefix} targetLoad is required")
    if exercise.working_sets is None:
        errors.append(f"{prefix} workingSets is required")
    errors.extend(validate_non_negative(exercise.model_dump(), prefix=f"{prefix} "))
    return errors


def validate_new_session(session: NewSessionData, prefix: str = "Session") -> list[str]:
    """Check the fields required to create a session, including its exercises."""
    errors = []
    if not session.name:
        errors.append(f"{prefix} name is required")
    for index, exercise in enumerate(session.exercises, start=1):
        errors.extend(validate_new_exercise(exercise, prefix=f"{prefix} exercise {index}"))
    return errors


def validate_new_week(week: NewWeekData, index: int, *, require_sessions: bool) -> list[str]:
    errors = []
    if require_sessions and not week.sessions:
        errors.append(f"Week {index} must have at least one session")
    for session_index, session in enumerate(week.sessions, start=1):
        errors.extend(validate_new_session(session, prefix=f"Week {index} session {session_index}"))
    return errors


def _validate_exercise_updates(updates: ExerciseUpdates) -> list[str]:
    supplied = updates.model_fields_set
    if not supplied:
        return ["No updates provided"]

    errors = []
    values = updates.model_dump()
    for field, label in _NON_NULLABLE_EXERCISE_FIELDS.items():
        if field in supplied and values[field] is None:
            errors.append(f"{label} cannot be null")
    if "name" in supplied and values["name"] == "":
        errors.append("name cannot be empty")
    errors.extend(validate_non_negative(values))
    return errors


# ============================================================================
# Exercise validators
# ============================================================================


def validate_modify_exercise(op: ModifyExerciseOp, program: Program) -> ValidationResult:
    if find_by_handle(program, op.exercise_handle).exercise is None:
        return ValidationResult.target_not_found(f"Exercise with handle {op.exercise_handle} not found")
    return ValidationResult.from_errors(_validate_exercise_updates(op.updates))


def validate_add_exercise(op: AddExerciseOp, program: Program) -> ValidationResult:
    session = find_by_handle(program, op.session_handle).session
    if session is None:
        return ValidationResult.target_not_found(f"Session with handle {op.session_handle} not found")

    errors = validate_new_exercise(op.exercise)
    errors.extend(validate_insert_position(op.position, len(session.exercises)))
    return ValidationResult.from_errors(errors)


def validate_remove_exercise(op: RemoveExerciseOp, program: Program) -> ValidationResult:
    if find_by_handle(program, op.exercise_handle).exercise is None:
        return ValidationResult.target_not_found(f"Exercise with handle {op.exercise_handle} not found")
    return ValidationResult.from_errors([])


def validate_reorder_exercises(op: ReorderExercisesOp, program: Program) -> ValidationResult:
    lookup = find_by_handle(program, op.exercise_handle)
    if lookup.exercise is None or lookup.parent_session is None:
        return ValidationResult.target_not_found(f"Exercise with handle {op.exercise_handle} not found")

    errors = validate_insert_position(op.new_position, len(lookup.parent_session.exercises))
    return ValidationResult.from_errors(errors)


# ============================================================================
# Session validators
# ============================================================================


def validate_modify_session(op: ModifySessionOp, program: Program) -> ValidationResult:
    if find_by_handle(program, op.session_handle).session is None:
        return ValidationResult.target_not_found(f"Session with handle {op.session_handle} not found")

    supplied = op.updates.model_fields_set
    if not supplied:
        return ValidationResult.from_errors(["No updates provided"])

    errors = []
    if "name" in supplied and not op.updates.name:
        errors.append("name cannot be empty")
    if "warmup" in supplied and op.updates.warmup is None:
        errors.append("warmup cannot be null")
    return ValidationResult.from_errors(errors)


def validate_add_session(op: AddSessionOp, program: Program) -> ValidationResult:
    week = find_by_handle(program, op.week_handle).week
    if week is None:
        return ValidationResult.target_not_found(f"Week with handle {op.week_handle} not found")

    errors = validate_new_session(op.session)
    errors.extend(validate_insert_position(op.position, len(week.sessions)))
    return ValidationResult.from_errors(errors)


def validate_remove_session(op: RemoveSessionOp, program: Program) -> ValidationResult:
    if find_by_handle(program, op.session_handle).session is None:
        return ValidationResult.target_not_found(f"Session with handle {op.session_handle} not found")
    return ValidationResult.from_errors([])


def validate_copy_session(op: CopySessionOp, program: Program) -> ValidationResult:
    errors = []
    source = find_by_handle(program, op.source_session_handle).session
    target_week = find_by_handle(program, op.target_week_handle).week

    if source is None:
        errors.append(f"Source session with handle {op.source_session_handle} not found")
    if target_week is None:
        errors.append(f"Target week with handle {op.target_week_handle} not found")
    if errors:
        return ValidationResult.target_not_found(*errors)

    return ValidationResult.from_errors(validate_insert_position(op.position, len(target_week.sessions)))


# ============================================================================
# Week validators
# ============================================================================


def validate_modify_week(op: ModifyWeekOp, program: Program) -> ValidationResult:
    if find_by_handle(program, op.week_handle).week is None:
        return ValidationResult.target_not_found(f"Week with handle {op.week_handle} not found")
    if not op.updates.model_fields_set:
        return ValidationResult.from_errors(["No updates provided"])
    if "phase" in op.updates.model_fields_set and op.updates.phase is None:
        return ValidationResult.from_errors(["phase cannot be null"])
    return ValidationResult.from_errors([])


def validate_add_week(op: AddWeekOp, program: Program) -> ValidationResult:
    errors = []
    if not op.weeks:
        errors.append("At least one week is required")
    for index, week in enumerate(op.weeks, start=1):
        errors.extend(validate_new_week(week, index, require_sessions=False))
    errors.extend(validate_insert_position(op.position, len(program.weeks)))
    return ValidationResult.from_errors(errors)


def validate_remove_week(op: RemoveWeekOp, program: Program) -> ValidationResult:
    if find_by_handle(program, op.week_handle).week is None:
        return ValidationResult.target_not_found(f"Week with handle {op.week_handle} not found")
    return ValidationResult.from_errors([])


def validate_create_program(op: CreateProgramOp, program: Program) -> ValidationResult:
    errors = []
    if not op.weeks:
        errors.append("At least one week must be provided")

    max_weeks = settings.max_program_weeks
    if len(op.weeks) > max_weeks:
        logger.warning("Program replacement exceeds week limit", week_count=len(op.weeks), max_weeks=max_weeks)
        errors.append(f"Maximum {max_weeks} weeks allowed per program")

    for index, week in enumerate(op.weeks, start=1):
        errors.extend(validate_new_week(week, index, require_sessions=True))

    return ValidationResult.from_errors(errors)
