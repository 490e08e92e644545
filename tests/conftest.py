"""Root conftest for all tests.

Shared program fixtures used across program, tools and diff tests.
"""

import pytest

from program_tools.program.models import Exercise, Program, SetResult, Week, WorkoutSession
from program_tools.program.renumber import renumber_program


def make_sets(count: int, reps: int = 5, weight: float | None = 225.0) -> list[SetResult]:
    return [
        SetResult(set_number=n, reps=reps, weight=weight, unit="lbs" if weight else None, completed=True)
        for n in range(1, count + 1)
    ]


def make_exercise(name: str, target_load: str = "3-4 RIR", **fields) -> Exercise:
    fields.setdefault("reps", "8")
    fields.setdefault("working_sets", 3)
    return Exercise(name=name, target_load=target_load, **fields)


def build_sample_program() -> Program:
    """Two-week program; Week 1 → Session 1 holds ["Squat", "Bench"]."""
    program = Program(
        weeks=[
            Week(
                phase="Accumulation",
                start_date="2026-01-05",
                end_date="2026-01-11",
                sessions=[
                    WorkoutSession(
                        name="Lower A",
                        day_of_week="Monday",
                        warmup=["Bike 5 min", "Hip openers"],
                        completed=True,
                        started_at="2026-01-05T17:00:00Z",
                        completed_date="2026-01-05",
                        exercises=[
                            make_exercise(
                                "Squat",
                                "225 lbs",
                                reps="5",
                                working_sets=4,
                                sets=make_sets(3),
                                user_notes="Felt strong",
                            ),
                            make_exercise("Bench", "3-4 RIR", sets=make_sets(1, reps=8, weight=185.0)),
                        ],
                    ),
                    WorkoutSession(
                        name="Upper A",
                        day_of_week="Wednesday",
                        exercises=[
                            make_exercise("Pull-up", "bodyweight", reps="6-8"),
                            make_exercise("Overhead Press", "95 lbs"),
                        ],
                    ),
                ],
            ),
            Week(
                phase="Intensification",
                sessions=[
                    WorkoutSession(
                        name="Lower B",
                        day_of_week="Monday",
                        exercises=[make_exercise("Deadlift", "315 lbs", reps="3")],
                    ),
                ],
            ),
        ]
    )
    return renumber_program(program)


@pytest.fixture
def program() -> Program:
    """Sample two-week program without handles."""
    return build_sample_program()


@pytest.fixture
def session_program() -> Program:
    """Single session with exercises A, B, C, D."""
    return renumber_program(
        Program(
            weeks=[
                Week(
                    phase="Base",
                    sessions=[
                        WorkoutSession(name="Full Body", exercises=[make_exercise(name) for name in "ABCD"]),
                    ],
                )
            ]
        )
    )
