"""Executors for handle-based operations.

One executor per operation kind, each a pure function
``(program, operation) -> new program``. Every executor works on a deep copy,
applies one structural or field mutation, and renumbers composite ids from
the mutation point onward before returning.

Executors are only invoked after their paired validator passed. A target
that still cannot be found is an internal defect and raises
ExecutionInvariantError.
"""

from program_tools.core.settings import settings
from program_tools.errors import ExecutionInvariantError
from program_tools.program.handles import HandleLookup, clear_handles, find_by_handle
from program_tools.program.loads import invalidates_logged_sets
from program_tools.program.models import Exercise, Program, Week, WorkoutSession
from program_tools.program.renumber import renumber_exercises, renumber_program, renumber_sessions, renumber_weeks
from program_tools.tools.types import (
    AddExerciseOp,
    AddSessionOp,
    AddWeekOp,
    CopySessionOp,
    CreateProgramOp,
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
)

# ============================================================================
# Helpers
# ============================================================================


def _lookup(program: Program, handle: str, kind: str) -> HandleLookup:
    lookup = find_by_handle(program, handle)
    if getattr(lookup, kind) is None:
        raise ExecutionInvariantError(f"{kind.capitalize()} with handle {handle} disappeared after validation")
    return lookup


def _insert_index(position: Position, sibling_count: int) -> int:
    if position == "end":
        return sibling_count
    return min(position - 1, sibling_count)


def build_exercise(data: NewExerciseData) -> Exercise:
    """Construct a new exercise with defaults for omitted optional fields."""
    return Exercise(
        name=data.name or "",
        reps=data.reps or "",
        target_load=data.target_load or "",
        working_sets=data.working_sets or 0,
        warmup_sets=data.warmup_sets or 0,
        rest_seconds=data.rest_seconds if data.rest_seconds is not None else settings.default_rest_seconds,
        notes=data.notes,
        group_label=data.group_label,
        sets=[],
        skipped=False,
    )


def build_session(data: NewSessionData) -> WorkoutSession:
    return WorkoutSession(
        name=data.name or "",
        scheduled_date=data.scheduled_date,
        day_of_week=data.day_of_week,
        warmup=list(data.warmup),
        exercises=[build_exercise(exercise) for exercise in data.exercises],
        notes=data.notes,
        cardio=data.cardio.model_copy(deep=True) if data.cardio else None,
        completed=False,
    )


def build_week(data: NewWeekData) -> Week:
    return Week(
        phase=data.phase,
        start_date=data.start_date,
        end_date=data.end_date,
        description=data.description,
        sessions=[build_session(session) for session in data.sessions],
    )


def _index_of(items: list, node) -> int:
    # Identity, not equality: sibling nodes may compare equal field-for-field
    for index, item in enumerate(items):
        if item is node:
            return index
    raise ExecutionInvariantError("Node is not a child of its resolved parent")


def _session_number(week: Week, session: WorkoutSession) -> int:
    return _index_of(week.sessions, session) + 1


# ============================================================================
# Exercise executors
# ============================================================================


def execute_modify_exercise(program: Program, op: ModifyExerciseOp) -> Program:
    """Merge supplied fields into the exercise.

    Logged sets are cleared when the exercise becomes a different exercise
    (name change) or its load crosses the bodyweight/weighted boundary.
    """
    updated = program.model_copy(deep=True)
    exercise = _lookup(updated, op.exercise_handle, "exercise").exercise

    updates = op.updates.model_dump(include=op.updates.model_fields_set)
    if invalidates_logged_sets(exercise, updates):
        exercise.sets = []

    for field, value in updates.items():
        setattr(exercise, field, value)
    return updated


def execute_add_exercise(program: Program, op: AddExerciseOp) -> Program:
    updated = program.model_copy(deep=True)
    lookup = _lookup(updated, op.session_handle, "session")
    session, week = lookup.session, lookup.parent_week

    index = _insert_index(op.position, len(session.exercises))
    session.exercises.insert(index, build_exercise(op.exercise))
    renumber_exercises(session, week.week_number, _session_number(week, session), index)
    return updated


def execute_remove_exercise(program: Program, op: RemoveExerciseOp) -> Program:
    updated = program.model_copy(deep=True)
    lookup = _lookup(updated, op.exercise_handle, "exercise")
    session, week = lookup.parent_session, lookup.parent_week

    index = _index_of(session.exercises, lookup.exercise)
    session.exercises.pop(index)
    renumber_exercises(session, week.week_number, _session_number(week, session), index)
    return updated


def execute_reorder_exercises(program: Program, op: ReorderExercisesOp) -> Program:
    """Move an exercise so that it ends up at ``new_position``.

    "end" (or one past the last position) moves it to the last slot.
    """
    updated = program.model_copy(deep=True)
    lookup = _lookup(updated, op.exercise_handle, "exercise")
    session, week = lookup.parent_session, lookup.parent_week

    old_index = _index_of(session.exercises, lookup.exercise)
    moved = session.exercises.pop(old_index)
    new_index = _insert_index(op.new_position, len(session.exercises))
    session.exercises.insert(new_index, moved)

    renumber_exercises(session, week.week_number, _session_number(week, session))
    return updated


# ============================================================================
# Session executors
# ============================================================================


def execute_modify_session(program: Program, op: ModifySessionOp) -> Program:
    updated = program.model_copy(deep=True)
    session = _lookup(updated, op.session_handle, "session").session

    updates = op.updates.model_copy(deep=True)
    for field in updates.model_fields_set:
        setattr(session, field, getattr(updates, field))
    return updated


def execute_add_session(program: Program, op: AddSessionOp) -> Program:
    updated = program.model_copy(deep=True)
    week = _lookup(updated, op.week_handle, "week").week

    index = _insert_index(op.position, len(week.sessions))
    week.sessions.insert(index, build_session(op.session))
    renumber_sessions(week, index)
    return updated


def execute_remove_session(program: Program, op: RemoveSessionOp) -> Program:
    updated = program.model_copy(deep=True)
    lookup = _lookup(updated, op.session_handle, "session")
    week = lookup.parent_week

    index = _index_of(week.sessions, lookup.session)
    week.sessions.pop(index)
    renumber_sessions(week, index)
    return updated


def execute_copy_session(program: Program, op: CopySessionOp) -> Program:
    """Copy a session's structure (not its history) into a target week."""
    updated = program.model_copy(deep=True)
    source = _lookup(updated, op.source_session_handle, "session").session
    target_week = _lookup(updated, op.target_week_handle, "week").week

    copy = source.model_copy(deep=True)
    clear_handles(copy)
    copy.completed = False
    copy.started_at = None
    copy.completed_date = None
    if copy.cardio is not None:
        copy.cardio.completed = False
    for exercise in copy.exercises:
        exercise.sets = []
        exercise.skipped = False
        exercise.user_notes = None

    index = _insert_index(op.position, len(target_week.sessions))
    target_week.sessions.insert(index, copy)
    renumber_sessions(target_week, index)
    return updated


# ============================================================================
# Week executors
# ============================================================================


def execute_modify_week(program: Program, op: ModifyWeekOp) -> Program:
    updated = program.model_copy(deep=True)
    week = _lookup(updated, op.week_handle, "week").week

    for field in op.updates.model_fields_set:
        setattr(week, field, getattr(op.updates, field))
    return updated


def execute_add_week(program: Program, op: AddWeekOp) -> Program:
    updated = program.model_copy(deep=True)

    index = _insert_index(op.position, len(updated.weeks))
    updated.weeks[index:index] = [build_week(week) for week in op.weeks]
    renumber_weeks(updated.weeks, index)
    return updated


def execute_remove_week(program: Program, op: RemoveWeekOp) -> Program:
    updated = program.model_copy(deep=True)
    week = _lookup(updated, op.week_handle, "week").week

    index = _index_of(updated.weeks, week)
    updated.weeks.pop(index)
    renumber_weeks(updated.weeks, index)
    return updated


def execute_create_program(program: Program, op: CreateProgramOp) -> Program:
    """Discard the existing program and rebuild it from the supplied weeks."""
    return renumber_program(Program(weeks=[build_week(week) for week in op.weeks]))
