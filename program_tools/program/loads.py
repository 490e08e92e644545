"""Load prescription heuristics.

Target loads are free-text ("3-4 RIR", "75%", "225 lbs", "bodyweight", "BW").
Modality is detected by substring matching, which is deliberately loose:
any load containing "bw" counts as bodyweight.
"""

from program_tools.program.models import Exercise

BODYWEIGHT_MARKERS = ("bodyweight", "bw")


def is_bodyweight_load(target_load: str | None) -> bool:
    """Return True if a load prescription denotes bodyweight work (case-insensitive)."""
    if not target_load:
        return False
    lowered = target_load.lower()
    return any(marker in lowered for marker in BODYWEIGHT_MARKERS)


def load_modality_changed(before: str | None, after: str | None) -> bool:
    """Return True if a load change crosses the bodyweight/weighted boundary.

    "225 lbs" -> "235 lbs" and "3-4 RIR" -> "5-6 RIR" do not change modality;
    "185 lbs" -> "bodyweight" does.
    """
    return is_bodyweight_load(before) != is_bodyweight_load(after)


def invalidates_logged_sets(exercise: Exercise, updates: dict) -> bool:
    """Decide whether applying ``updates`` makes the exercise's logged sets stale.

    Logged sets are discarded when the exercise becomes a different exercise
    (name change) or its load modality changes.

    Args:
        exercise: Exercise before the update
        updates: Supplied update fields (snake_case attribute names)

    Returns:
        True if logged sets must be cleared
    """
    new_name = updates.get("name")
    if new_name and new_name != exercise.name:
        return True

    new_load = updates.get("target_load")
    if new_load and new_load != exercise.target_load:
        return load_modality_changed(exercise.target_load, new_load)

    return False
