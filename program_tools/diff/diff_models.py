"""Diff models for program edit previews.

These models represent machine-readable, deterministic diffs between two
states of a workout program.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NodeKind = Literal["week", "session", "exercise"]


class DiffModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldChange(DiffModel):
    """A single field change on a node."""

    field: str
    before: Any
    after: Any


class NodeFieldDiff(DiffModel):
    """Field-level changes for a modified node."""

    kind: NodeKind
    node_id: str
    name: str | None = None
    changes: list[FieldChange]


class NodeSummary(DiffModel):
    """Summary of an added or removed node."""

    kind: NodeKind
    node_id: str
    name: str | None = None


class ProgramDiff(DiffModel):
    """Complete diff between two program states.

    This is the single source of truth for:
    - Before/after previews
    - Reporting applied changes back to the planner
    """

    added: list[NodeSummary] = Field(default_factory=list)
    removed: list[NodeSummary] = Field(default_factory=list)
    modified: list[NodeFieldDiff] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.modified)
