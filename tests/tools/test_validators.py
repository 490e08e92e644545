"""Tests for per-operation validators.

Validators only diagnose; they never mutate the program.
"""

import pytest

from program_tools.core.settings import settings
from program_tools.program.handles import assign_handles
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
    RemoveExerciseOp,
    ReorderExercisesOp,
    SessionUpdates,
    WeekUpdates,
)
from program_tools.tools.validators import (
    validate_add_exercise,
    validate_add_session,
    validate_add_week,
    validate_copy_session,
    validate_create_program,
    validate_insert_position,
    validate_modify_exercise,
    validate_modify_session,
    validate_modify_week,
    validate_remove_exercise,
    validate_reorder_exercises,
)


@pytest.fixture
def snapshot(program: Program) -> Program:
    return assign_handles(program)


def _week(count: int = 1) -> list[NewWeekData]:
    session = NewSessionData(name="Full Body")
    return [NewWeekData(phase=f"Block {n}", sessions=[session]) for n in range(1, count + 1)]


@pytest.mark.parametrize(
    ("position", "errors"),
    [
        (1, []),
        (3, []),
        ("end", []),
        (0, ['Invalid position 0. Must be 1-3 or "end"']),
        (4, ['Invalid position 4. Must be 1-3 or "end"']),
    ],
)
def test_validate_insert_position(position, errors):
    """Test: Positions run from 1 to sibling count + 1, or "end"."""
    assert validate_insert_position(position, sibling_count=2) == errors


def test_modify_exercise_valid(snapshot: Program):
    handle = snapshot.weeks[0].sessions[0].exercises[0].handle
    op = ModifyExerciseOp(exercise_handle=handle, updates=ExerciseUpdates(working_sets=5))

    result = validate_modify_exercise(op, snapshot)

    assert result.valid
    assert result.errors == []


def test_modify_exercise_requires_updates(snapshot: Program):
    """Test: An empty update set is rejected."""
    handle = snapshot.weeks[0].sessions[0].exercises[0].handle
    op = ModifyExerciseOp(exercise_handle=handle, updates=ExerciseUpdates())

    result = validate_modify_exercise(op, snapshot)

    assert not result.valid
    assert result.errors == ["No updates provided"]


def test_modify_exercise_rejects_bad_values(snapshot: Program):
    """Test: Negative counts, empty names and nulled fields are all reported."""
    handle = snapshot.weeks[0].sessions[0].exercises[0].handle
    updates = ExerciseUpdates(name="", working_sets=-1, rest_seconds=-30, reps=None)
    op = ModifyExerciseOp(exercise_handle=handle, updates=updates)

    result = validate_modify_exercise(op, snapshot)

    assert not result.valid
    assert "reps cannot be null" in result.errors
    assert "name cannot be empty" in result.errors
    assert "workingSets cannot be negative" in result.errors
    assert "restSeconds cannot be negative" in result.errors


def test_missing_handle_marks_missing_target(snapshot: Program):
    """Test: A handle that no longer exists is flagged as a missing target."""
    result = validate_remove_exercise(RemoveExerciseOp(exercise_handle="missing"), snapshot)

    assert not result.valid
    assert result.missing_target
    assert result.errors == ["Exercise with handle missing not found"]


def test_add_exercise_reports_every_missing_field(snapshot: Program):
    """Test: All required exercise fields are reported at once."""
    handle = snapshot.weeks[0].sessions[0].handle
    op = AddExerciseOp(session_handle=handle, position=5, exercise=NewExerciseData(warmup_sets=-2))

    result = validate_add_exercise(op, snapshot)

    assert not result.valid
    assert not result.missing_target
    assert result.errors == [
        "Exercise name is required",
        "Exercise reps is required",
        "Exercise targetLoad is required",
        "Exercise workingSets is required",
        "Exercise warmupSets cannot be negative",
        'Invalid position 5. Must be 1-3 or "end"',
    ]


def test_add_exercise_valid(snapshot: Program):
    handle = snapshot.weeks[0].sessions[0].handle
    exercise = NewExerciseData(name="Row", reps="10", target_load="135 lbs", working_sets=3)

    op = AddExerciseOp(session_handle=handle, position="end", exercise=exercise)

    assert validate_add_exercise(op, snapshot).valid


def test_reorder_position_bounds(snapshot: Program):
    """Test: Reorder accepts 1..count+1 or "end" within the parent session."""
    handle = snapshot.weeks[0].sessions[0].exercises[0].handle

    assert validate_reorder_exercises(ReorderExercisesOp(exercise_handle=handle, new_position=2), snapshot).valid
    assert validate_reorder_exercises(ReorderExercisesOp(exercise_handle=handle, new_position="end"), snapshot).valid

    result = validate_reorder_exercises(ReorderExercisesOp(exercise_handle=handle, new_position=0), snapshot)
    assert result.errors == ['Invalid position 0. Must be 1-3 or "end"']


def test_modify_session_rules(snapshot: Program):
    handle = snapshot.weeks[0].sessions[0].handle

    assert validate_modify_session(
        ModifySessionOp(session_handle=handle, updates=SessionUpdates(notes="Deload")), snapshot
    ).valid

    result = validate_modify_session(ModifySessionOp(session_handle=handle, updates=SessionUpdates(name="")), snapshot)
    assert result.errors == ["name cannot be empty"]

    result = validate_modify_session(ModifySessionOp(session_handle=handle, updates=SessionUpdates()), snapshot)
    assert result.errors == ["No updates provided"]


def test_add_session_validates_nested_exercises(snapshot: Program):
    """Test: Exercises inside a new session are validated with their index."""
    handle = snapshot.weeks[1].handle
    session = NewSessionData(name="Upper B", exercises=[NewExerciseData(name="Dips", reps="10", target_load="BW")])

    result = validate_add_session(AddSessionOp(week_handle=handle, position="end", session=session), snapshot)

    assert result.errors == ["Session exercise 1 workingSets is required"]


def test_copy_session_reports_both_missing_handles(snapshot: Program):
    op = CopySessionOp(source_session_handle="gone-1", target_week_handle="gone-2", position=1)

    result = validate_copy_session(op, snapshot)

    assert result.missing_target
    assert result.errors == [
        "Source session with handle gone-1 not found",
        "Target week with handle gone-2 not found",
    ]


def test_add_session_position_bounds(snapshot: Program):
    """Test: A new session can go at most one past the week's last session."""
    handle = snapshot.weeks[1].handle
    session = NewSessionData(name="Upper B")

    assert validate_add_session(AddSessionOp(week_handle=handle, position=2, session=session), snapshot).valid

    result = validate_add_session(AddSessionOp(week_handle=handle, position=3, session=session), snapshot)
    assert result.errors == ['Invalid position 3. Must be 1-2 or "end"']


def test_copy_session_position_bounds(snapshot: Program):
    """Test: The copy position is checked against the target week's sessions."""
    source = snapshot.weeks[0].sessions[1].handle
    target = snapshot.weeks[1].handle

    op = CopySessionOp(source_session_handle=source, target_week_handle=target, position=0)
    result = validate_copy_session(op, snapshot)

    assert not result.missing_target
    assert result.errors == ['Invalid position 0. Must be 1-2 or "end"']


def test_modify_week_rejects_null_phase(snapshot: Program):
    handle = snapshot.weeks[0].handle

    result = validate_modify_week(ModifyWeekOp(week_handle=handle, updates=WeekUpdates(phase=None)), snapshot)

    assert result.errors == ["phase cannot be null"]


def test_modify_week_requires_updates(snapshot: Program):
    handle = snapshot.weeks[0].handle

    result = validate_modify_week(ModifyWeekOp(week_handle=handle, updates=WeekUpdates()), snapshot)

    assert result.errors == ["No updates provided"]


def test_add_week_requires_weeks(snapshot: Program):
    result = validate_add_week(AddWeekOp(position="end", weeks=[]), snapshot)

    assert result.errors == ["At least one week is required"]


def test_add_week_allows_empty_sessions(snapshot: Program):
    """Test: Inserted weeks may start without sessions."""
    op = AddWeekOp(position=1, weeks=[NewWeekData(phase="Deload")])

    assert validate_add_week(op, snapshot).valid


def test_add_week_position_bounds(snapshot: Program):
    """Test: Weeks can be inserted at 1..count+1 only."""
    result = validate_add_week(AddWeekOp(position=4, weeks=_week()), snapshot)

    assert result.errors == ['Invalid position 4. Must be 1-3 or "end"']


def test_create_program_rejects_five_weeks(snapshot: Program):
    """Test: Whole-program replacement is capped at four weeks."""
    result = validate_create_program(CreateProgramOp(weeks=_week(5)), snapshot)

    assert not result.valid
    assert result.errors == ["Maximum 4 weeks allowed per program"]


def test_create_program_week_limit_is_configurable(snapshot: Program, monkeypatch):
    monkeypatch.setattr(settings, "max_program_weeks", 2)

    result = validate_create_program(CreateProgramOp(weeks=_week(3)), snapshot)

    assert result.errors == ["Maximum 2 weeks allowed per program"]


def test_create_program_requires_sessions(snapshot: Program):
    """Test: Every replacement week needs at least one session."""
    weeks = [*_week(1), NewWeekData(phase="Empty")]

    result = validate_create_program(CreateProgramOp(weeks=weeks), snapshot)

    assert result.errors == ["Week 2 must have at least one session"]


def test_create_program_requires_weeks(snapshot: Program):
    result = validate_create_program(CreateProgramOp(weeks=[]), snapshot)

    assert result.errors == ["At least one week must be provided"]
