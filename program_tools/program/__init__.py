"""Program document module.

This module provides:
- The Program → Week → WorkoutSession → Exercise → SetResult document model
- Composite identifiers and renumbering
- Ephemeral handle assignment, lookup and stripping
- Logged-set helpers and load-modality heuristics
"""

from program_tools.program.handles import (
    HandleLookup,
    assign_handles,
    assign_missing_handles,
    find_by_handle,
    strip_handles,
)
from program_tools.program.hashing import hash_program
from program_tools.program.models import CardioBlock, Exercise, Program, SetResult, Week, WorkoutSession
from program_tools.program.renumber import renumber_program

__all__ = [
    "CardioBlock",
    "Exercise",
    "HandleLookup",
    "Program",
    "SetResult",
    "Week",
    "WorkoutSession",
    "assign_handles",
    "assign_missing_handles",
    "find_by_handle",
    "hash_program",
    "renumber_program",
    "strip_handles",
]
