"""Tests for the program diff engine.

Tests that the diff engine:
- Detects field changes correctly
- Reports only the top-most added or removed node
- Ignores composite ids, so reordering is not a change
- Compares logged sets by count
"""

from program_tools.diff import build_program_diff
from program_tools.program.handles import assign_handles
from program_tools.program.models import Exercise, Program, WorkoutSession
from program_tools.program.renumber import renumber_program


def test_identical_programs_have_empty_diff(program: Program):
    """Test: No changes produce an empty diff."""
    diff = build_program_diff(program, program.model_copy(deep=True))

    assert diff.is_empty


def test_field_change_detected(program: Program):
    """Test: Modified fields are reported with before/after values."""
    after = program.model_copy(deep=True)
    after.weeks[0].sessions[0].exercises[1].reps = "10"
    after.weeks[0].sessions[0].exercises[1].working_sets = 4

    diff = build_program_diff(program, after)

    assert len(diff.modified) == 1
    node = diff.modified[0]
    assert node.kind == "exercise"
    assert node.node_id == "week-1-session-1-exercise-2"
    assert node.name == "Bench"
    assert [(c.field, c.before, c.after) for c in node.changes] == [
        ("reps", "8", "10"),
        ("working_sets", 3, 4),
    ]


def test_logged_sets_compared_by_count(program: Program):
    """Test: Clearing logged sets is reported as a logged_sets change."""
    after = program.model_copy(deep=True)
    after.weeks[0].sessions[0].exercises[0].sets = []

    diff = build_program_diff(program, after)

    change = diff.modified[0].changes[0]
    assert (change.field, change.before, change.after) == ("logged_sets", 3, 0)


def test_added_session_reported_top_most(program: Program):
    """Test: Adding a session reports the session, not its exercises."""
    after = program.model_copy(deep=True)
    after.weeks[1].sessions.append(
        WorkoutSession(name="Upper B", exercises=[Exercise(name="Dips"), Exercise(name="Curl")])
    )
    renumber_program(after)

    diff = build_program_diff(program, after)

    assert [(n.kind, n.node_id, n.name) for n in diff.added] == [("session", "week-2-session-2", "Upper B")]
    assert diff.removed == []


def test_removed_week_reported_top_most(program: Program):
    """Test: Removing a week reports only the week, keyed by handle."""
    before = assign_handles(program)
    after = before.model_copy(deep=True)
    after.weeks.pop(0)
    renumber_program(after)

    diff = build_program_diff(before, after)

    assert [(n.kind, n.name) for n in diff.removed] == [("week", "Accumulation")]
    assert diff.added == []
    # Week 2 became week 1, but renumbering is not a change
    assert diff.modified == []


def test_reorder_with_handles_is_not_a_change(session_program: Program):
    """Test: Moving an exercise changes only its id, which is ignored."""
    before = assign_handles(session_program)
    after = before.model_copy(deep=True)
    exercises = after.weeks[0].sessions[0].exercises
    exercises.append(exercises.pop(0))
    renumber_program(after)

    assert build_program_diff(before, after).is_empty
