"""Logged-set helpers.

Set numbers are always exactly 1..len(sets); deleting a set renumbers the rest.
All helpers mutate the exercise in place.
"""

from program_tools.program.models import Exercise, SetResult
from program_tools.program.renumber import renumber_sets

_UPDATABLE_SET_FIELDS = {"reps", "weight", "unit", "rir", "completed", "notes"}


def log_set(
    exercise: Exercise,
    reps: int,
    *,
    weight: float | None = None,
    unit: str | None = None,
    rir: int | None = None,
    notes: str | None = None,
    completed: bool = True,
) -> SetResult:
    """Append a logged set with the next set number."""
    logged = SetResult(
        set_number=len(exercise.sets) + 1,
        reps=reps,
        weight=weight,
        unit=unit,
        rir=rir,
        notes=notes,
        completed=completed,
    )
    exercise.sets.append(logged)
    return logged


def update_set(exercise: Exercise, set_number: int, /, **fields) -> SetResult:
    """Update fields of a logged set.

    Raises:
        ValueError: If the set does not exist or a field cannot be updated
    """
    unknown = set(fields) - _UPDATABLE_SET_FIELDS
    if unknown:
        raise ValueError(f"Cannot update set fields: {sorted(unknown)}")

    target = _get_set(exercise, set_number)
    for field, value in fields.items():
        setattr(target, field, value)
    return target


def delete_set(exercise: Exercise, set_number: int) -> SetResult:
    """Delete a logged set and renumber the remaining sets contiguously.

    Raises:
        ValueError: If the set does not exist
    """
    target = _get_set(exercise, set_number)
    index = exercise.sets.index(target)
    exercise.sets.pop(index)
    renumber_sets(exercise, index)
    return target


def _get_set(exercise: Exercise, set_number: int) -> SetResult:
    for logged in exercise.sets:
        if logged.set_number == set_number:
            return logged
    raise ValueError(f"Set {set_number} not found on exercise '{exercise.name}'")
