"""Tool call and operation types.

Two addressing schemes are kept strictly apart:
- Position references (PositionRef models): 1-based week/session/exercise
  ordinals, as proposed by the planner. Only the translator reads them.
- Handle references (operation models): opaque handles resolved once against
  the pre-batch snapshot. Validators and executors only read these.

Payload fields that an "add" requires are optional here on purpose, so the
validators can report every missing field by name instead of failing parsing.
"""

import uuid
from typing import Annotated, Any, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from program_tools.diff.diff_models import ProgramDiff
from program_tools.program.models import CardioBlock, Program

# Strict so that booleans are never read as ordinals
Position = StrictInt | Literal["end"]

OperationKind = Literal[
    "modify_exercise",
    "add_exercise",
    "remove_exercise",
    "reorder_exercises",
    "modify_session",
    "add_session",
    "remove_session",
    "copy_session",
    "modify_week",
    "add_week",
    "remove_week",
    "create_program",
]

# Legacy tool names accepted from the planner
OPERATION_ALIASES: dict[str, str] = {
    "create_workout_program": "create_program",
}


class ToolModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


# ============================================================================
# Payloads
# ============================================================================


class ExerciseUpdates(ToolModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    reps: str | None = None
    target_load: str | None = None
    working_sets: int | None = None
    warmup_sets: int | None = None
    rest_seconds: int | None = None
    notes: str | None = None
    group_label: str | None = Field(default=None, description="Superset label")
    skipped: bool | None = None


class SessionUpdates(ToolModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    scheduled_date: str | None = None
    day_of_week: str | None = None
    warmup: list[str] | None = None
    cardio: CardioBlock | None = None
    notes: str | None = None


class WeekUpdates(ToolModel):
    model_config = ConfigDict(extra="forbid")

    phase: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None


class NewExerciseData(ToolModel):
    name: str | None = None
    reps: str | None = None
    target_load: str | None = None
    working_sets: int | None = None
    warmup_sets: int | None = None
    rest_seconds: int | None = None
    notes: str | None = None
    group_label: str | None = None


class NewSessionData(ToolModel):
    name: str | None = None
    exercises: list[NewExerciseData] = Field(default_factory=list)
    scheduled_date: str | None = None
    day_of_week: str | None = None
    warmup: list[str] = Field(default_factory=list)
    cardio: CardioBlock | None = None
    notes: str | None = None


class NewWeekData(ToolModel):
    week_number: int | None = None  # ignored; weeks are renumbered on insert
    phase: str = ""
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    sessions: list[NewSessionData] = Field(default_factory=list)


# ============================================================================
# Position references (planner-facing arguments)
# ============================================================================


class WeekRef(ToolModel):
    week: StrictInt = Field(validation_alias=AliasChoices("week", "weekNumber", "week_number"))


class SessionRef(WeekRef):
    session: StrictInt = Field(validation_alias=AliasChoices("session", "sessionNumber", "session_number"))


class ExerciseRef(SessionRef):
    exercise: StrictInt = Field(validation_alias=AliasChoices("exercise", "exerciseNumber", "exercise_number"))


class ModifyExerciseArgs(ExerciseRef):
    updates: ExerciseUpdates


class AddExerciseArgs(SessionRef):
    position: Position
    exercise: NewExerciseData


class RemoveExerciseArgs(ExerciseRef):
    pass


class ReorderExercisesArgs(ExerciseRef):
    new_position: Position


class ModifySessionArgs(SessionRef):
    updates: SessionUpdates


class AddSessionArgs(WeekRef):
    position: Position
    session: NewSessionData


class RemoveSessionArgs(SessionRef):
    pass


class CopySessionArgs(ToolModel):
    source_week: StrictInt = Field(validation_alias=AliasChoices("sourceWeek", "sourceWeekNumber", "source_week"))
    source_session: StrictInt = Field(
        validation_alias=AliasChoices("sourceSession", "sourceSessionNumber", "source_session")
    )
    target_week: StrictInt = Field(validation_alias=AliasChoices("targetWeek", "targetWeekNumber", "target_week"))
    position: Position


class ModifyWeekArgs(WeekRef):
    updates: WeekUpdates


class AddWeekArgs(ToolModel):
    position: Position
    weeks: list[NewWeekData] = Field(default_factory=list)


class RemoveWeekArgs(WeekRef):
    pass


class CreateProgramArgs(ToolModel):
    weeks: list[NewWeekData] = Field(default_factory=list)


# ============================================================================
# Handle-based operations (validator/executor-facing)
# ============================================================================


class ModifyExerciseOp(ToolModel):
    kind: Literal["modify_exercise"] = "modify_exercise"
    exercise_handle: str
    updates: ExerciseUpdates


class AddExerciseOp(ToolModel):
    kind: Literal["add_exercise"] = "add_exercise"
    session_handle: str
    position: Position
    exercise: NewExerciseData


class RemoveExerciseOp(ToolModel):
    kind: Literal["remove_exercise"] = "remove_exercise"
    exercise_handle: str


class ReorderExercisesOp(ToolModel):
    kind: Literal["reorder_exercises"] = "reorder_exercises"
    exercise_handle: str
    new_position: Position


class ModifySessionOp(ToolModel):
    kind: Literal["modify_session"] = "modify_session"
    session_handle: str
    updates: SessionUpdates


class AddSessionOp(ToolModel):
    kind: Literal["add_session"] = "add_session"
    week_handle: str
    position: Position
    session: NewSessionData


class RemoveSessionOp(ToolModel):
    kind: Literal["remove_session"] = "remove_session"
    session_handle: str


class CopySessionOp(ToolModel):
    kind: Literal["copy_session"] = "copy_session"
    source_session_handle: str
    target_week_handle: str
    position: Position


class ModifyWeekOp(ToolModel):
    kind: Literal["modify_week"] = "modify_week"
    week_handle: str
    updates: WeekUpdates


class AddWeekOp(ToolModel):
    kind: Literal["add_week"] = "add_week"
    position: Position
    weeks: list[NewWeekData]


class RemoveWeekOp(ToolModel):
    kind: Literal["remove_week"] = "remove_week"
    week_handle: str


class CreateProgramOp(ToolModel):
    kind: Literal["create_program"] = "create_program"
    weeks: list[NewWeekData]


HandleOperation = Annotated[
    Union[
        ModifyExerciseOp,
        AddExerciseOp,
        RemoveExerciseOp,
        ReorderExercisesOp,
        ModifySessionOp,
        AddSessionOp,
        RemoveSessionOp,
        CopySessionOp,
        ModifyWeekOp,
        AddWeekOp,
        RemoveWeekOp,
        CreateProgramOp,
    ],
    Field(discriminator="kind"),
]


# ============================================================================
# Calls and results
# ============================================================================


class ToolCall(ToolModel):
    """A single planner-proposed operation.

    Attributes:
        id: Operation id echoed back in results
        kind: Operation kind (tool name)
        arguments: Position-based arguments (dict or JSON string)
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    kind: str = Field(validation_alias=AliasChoices("kind", "name"))
    arguments: dict[str, Any] | str = Field(default_factory=dict)


class ValidationResult(BaseModel):
    """Outcome of validating one operation against the current program.

    ``missing_target`` marks failures where an addressed node no longer exists
    (e.g. it was removed earlier in the same batch).
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
    missing_target: bool = False

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(valid=not errors, errors=errors)

    @classmethod
    def target_not_found(cls, *messages: str) -> "ValidationResult":
        return cls(valid=False, errors=list(messages), missing_target=True)


class OperationResult(ToolModel):
    """Outcome of one operation in a batch.

    Attributes:
        operation_id: Id of the originating tool call
        kind: Operation kind
        success: Whether the operation was applied
        errors: Human-readable errors (failures only)
        error_code: Error code from program_tools.errors (failures only)
        diff: Changes made by this operation (successes only)
    """

    operation_id: str
    kind: str
    success: bool
    errors: list[str] | None = None
    error_code: str | None = None
    diff: ProgramDiff | None = None


class BatchResult(ToolModel):
    """Outcome of a whole batch.

    ``document`` is the edited program when ``success`` is True, and the
    untouched original program otherwise.
    """

    success: bool
    document: Program
    results: list[OperationResult] = Field(default_factory=list)
    fingerprint: str | None = None

    def to_payload(self) -> dict:
        """Serialize to the JSON result contract consumed by UI and persistence."""
        payload = {
            "success": self.success,
            "document": self.document.to_document(),
            "results": [r.model_dump(by_alias=True, exclude_unset=True, mode="json") for r in self.results],
        }
        if self.fingerprint is not None:
            payload["fingerprint"] = self.fingerprint
        return payload
