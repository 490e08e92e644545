"""Utility functions for diff operations."""

from typing import Any

from program_tools.program.models import Exercise, ProgramNode, Week

# Position-derived or ephemeral fields, and child collections
IGNORED_FIELDS = {
    "id",
    "week_number",
    "handle",
    "sessions",
    "exercises",
    "sets",
}


def comparable_dict(node: ProgramNode) -> dict[str, Any]:
    """Extract comparable fields from a program node.

    Removes identifiers and child collections. An exercise's logged sets are
    compared by count only.

    Args:
        node: Week, WorkoutSession or Exercise

    Returns:
        Dictionary of comparable fields
    """
    fields = {k: v for k, v in node.model_dump().items() if k not in IGNORED_FIELDS}
    if isinstance(node, Exercise):
        fields["logged_sets"] = len(node.sets)
    return fields


def node_label(node: ProgramNode) -> str | None:
    if isinstance(node, Week):
        return node.phase or None
    return getattr(node, "name", None)
