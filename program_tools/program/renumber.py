"""Composite identifiers and renumbering.

Composite identifiers are derived solely from array position:
- week-{w}
- week-{w}-session-{s}
- week-{w}-session-{s}-exercise-{e}

Renumbering must run after every structural mutation so that identifiers
always match array order. All functions mutate in place and are idempotent.
"""

from program_tools.program.models import Exercise, Program, Week, WorkoutSession


def week_id(week_number: int) -> str:
    return f"week-{week_number}"


def session_id(week_number: int, session_number: int) -> str:
    return f"week-{week_number}-session-{session_number}"


def exercise_id(week_number: int, session_number: int, exercise_number: int) -> str:
    return f"week-{week_number}-session-{session_number}-exercise-{exercise_number}"


def parse_id(composite_id: str) -> dict[str, int | None] | None:
    """Parse a composite identifier into its ordinals.

    Args:
        composite_id: Identifier such as "week-2-session-3-exercise-1"

    Returns:
        Dictionary with week_number, session_number and exercise_number
        (missing levels are None), or None if the id is not a composite id
    """
    parts = composite_id.split("-")
    if len(parts) not in {2, 4, 6} or parts[0] != "week":
        return None
    if len(parts) >= 4 and parts[2] != "session":
        return None
    if len(parts) == 6 and parts[4] != "exercise":
        return None

    try:
        ordinals = [int(p) for p in parts[1::2]]
    except ValueError:
        return None

    return {
        "week_number": ordinals[0],
        "session_number": ordinals[1] if len(ordinals) > 1 else None,
        "exercise_number": ordinals[2] if len(ordinals) > 2 else None,
    }


def renumber_exercises(session: WorkoutSession, week_number: int, session_number: int, start: int = 0) -> None:
    """Recompute exercise ids from ``start`` to the end of the session."""
    for index in range(start, len(session.exercises)):
        session.exercises[index].id = exercise_id(week_number, session_number, index + 1)


def renumber_sessions(week: Week, start: int = 0) -> None:
    """Recompute session ids (and their exercises) from ``start`` to the end of the week."""
    for index in range(start, len(week.sessions)):
        session_number = index + 1
        session = week.sessions[index]
        session.id = session_id(week.week_number, session_number)
        renumber_exercises(session, week.week_number, session_number)


def renumber_weeks(weeks: list[Week], start: int = 0) -> None:
    """Recompute week numbers and ids (cascading down) from ``start`` onward."""
    for index in range(start, len(weeks)):
        week = weeks[index]
        week.week_number = index + 1
        week.id = week_id(week.week_number)
        renumber_sessions(week)


def renumber_program(program: Program) -> Program:
    renumber_weeks(program.weeks)
    return program


def renumber_sets(exercise: Exercise, start: int = 0) -> None:
    """Make set numbers exactly 1..len(sets) from ``start`` onward."""
    for index in range(start, len(exercise.sets)):
        exercise.sets[index].set_number = index + 1
