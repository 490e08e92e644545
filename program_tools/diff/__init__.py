"""Program diff module - machine-readable before/after changes per operation."""

from program_tools.diff.diff_models import FieldChange, NodeFieldDiff, NodeSummary, ProgramDiff
from program_tools.diff.program_diff import build_program_diff

__all__ = [
    "FieldChange",
    "NodeFieldDiff",
    "NodeSummary",
    "ProgramDiff",
    "build_program_diff",
]
