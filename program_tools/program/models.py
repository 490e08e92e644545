"""Workout program document model.

The program is a tree: Program → Week → WorkoutSession → Exercise → SetResult.
Composite identifiers (week-2-session-3-exercise-1) are derived from array
position and kept truthful by the renumbering pass.

Handles are ephemeral identity tokens that exist only for one execution pass.
They are excluded from serialization so they can never be persisted.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from program_tools.core.settings import settings

CompletionState = Literal["not_started", "in_progress", "completed"]


class ProgramNode(BaseModel):
    """Base for all document nodes (camelCase JSON, snake_case attributes)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )


class SetResult(ProgramNode):
    """A single logged set.

    Attributes:
        set_number: 1-based position within the exercise (contiguous)
        reps: Actual reps performed
        weight: Optional load used
        unit: Optional unit for weight (lbs, kg)
        rir: Optional reps in reserve
        completed: Whether the set was completed
        notes: Optional free-text notes
    """

    set_number: int = Field(ge=1)
    reps: int = 0
    weight: float | None = None
    unit: str | None = None
    rir: int | None = None
    completed: bool = False
    notes: str | None = None

    handle: str | None = Field(default=None, exclude=True)


class CardioBlock(ProgramNode):
    type: str | None = None
    duration: int | None = None  # minutes
    modality: str | None = None
    instructions: str | None = None
    completed: bool = False


class Exercise(ProgramNode):
    """A prescribed exercise and its logged sets.

    Attributes:
        id: Composite identifier week-{w}-session-{s}-exercise-{e}
        name: Exercise name
        group_label: Optional superset label (letter + ordinal, e.g. "A1")
        warmup_sets: Number of warm-up sets
        working_sets: Number of working sets
        reps: Rep prescription (may be a range, e.g. "8-10")
        target_load: Load prescription ("2-3 RIR", "75%", "bodyweight", "225 lbs")
        rest_seconds: Rest between sets
        notes: Coaching notes
        user_notes: Notes entered by the user
        sets: Logged sets
        skipped: Whether the user skipped this exercise
    """

    id: str = ""
    name: str
    group_label: str | None = None
    warmup_sets: int = 0
    working_sets: int = 0
    reps: str = ""
    target_load: str = ""
    rest_seconds: int = Field(default_factory=lambda: settings.default_rest_seconds)
    notes: str | None = None
    user_notes: str | None = None
    sets: list[SetResult] = Field(default_factory=list)
    skipped: bool = False

    handle: str | None = Field(default=None, exclude=True)


class WorkoutSession(ProgramNode):
    """A training session within a week.

    Completion state is derived from ``completed`` and ``started_at``.
    """

    id: str = ""
    name: str
    scheduled_date: str | None = None
    day_of_week: str | None = None
    warmup: list[str] = Field(default_factory=list)
    exercises: list[Exercise] = Field(default_factory=list)
    notes: str | None = None
    completed: bool = False
    started_at: str | None = None
    completed_date: str | None = None
    cardio: CardioBlock | None = None

    handle: str | None = Field(default=None, exclude=True)

    @property
    def completion_state(self) -> CompletionState:
        if self.completed:
            return "completed"
        if self.started_at:
            return "in_progress"
        return "not_started"


class Week(ProgramNode):
    id: str = ""
    week_number: int = 0
    phase: str = ""
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    sessions: list[WorkoutSession] = Field(default_factory=list)

    handle: str | None = Field(default=None, exclude=True)


class Program(ProgramNode):
    """The full training program document."""

    weeks: list[Week] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Serialize to the persisted camelCase JSON shape (never includes handles)."""
        return self.model_dump(by_alias=True, mode="json")
