"""Program-level diffing engine.

Generates machine-readable, deterministic diffs between two program states.
Nodes are matched by handle, so a node that moved (and was renumbered) is
reported as unchanged rather than removed and re-added. Programs without
handles are matched by composite id.
"""

from dataclasses import dataclass

from program_tools.diff.diff_models import FieldChange, NodeFieldDiff, NodeKind, NodeSummary, ProgramDiff
from program_tools.diff.diff_utils import comparable_dict, node_label
from program_tools.program.models import Program, ProgramNode


@dataclass
class _IndexedNode:
    kind: NodeKind
    node: ProgramNode
    parent_key: str | None


def build_program_diff(before: Program, after: Program) -> ProgramDiff:
    """Build a complete diff between two program states.

    This function is pure and deterministic. Only the top-most added or
    removed node is reported (removing a week does not list its sessions).

    Args:
        before: Program before the change
        after: Program after the change

    Returns:
        ProgramDiff with added, removed and modified nodes
    """
    before_index = _index_program(before)
    after_index = _index_program(after)

    added_keys = [key for key in after_index if key not in before_index]
    removed_keys = [key for key in before_index if key not in after_index]

    added = _top_most(added_keys, after_index)
    removed = _top_most(removed_keys, before_index)

    modified = []
    for key, after_entry in after_index.items():
        before_entry = before_index.get(key)
        if before_entry is None:
            continue
        changes = _diff_nodes(before_entry.node, after_entry.node)
        if changes:
            modified.append(
                NodeFieldDiff(
                    kind=after_entry.kind,
                    node_id=after_entry.node.id,
                    name=node_label(after_entry.node),
                    changes=changes,
                )
            )

    return ProgramDiff(added=added, removed=removed, modified=modified)


def _diff_nodes(before: ProgramNode, after: ProgramNode) -> list[FieldChange]:
    before_dict = comparable_dict(before)
    after_dict = comparable_dict(after)

    changes = []
    for field in sorted(set(before_dict) | set(after_dict)):
        before_val = before_dict.get(field)
        after_val = after_dict.get(field)
        if before_val != after_val:
            changes.append(FieldChange(field=field, before=before_val, after=after_val))
    return changes


def _top_most(keys: list[str], index: dict[str, _IndexedNode]) -> list[NodeSummary]:
    key_set = set(keys)
    return [
        NodeSummary(kind=index[key].kind, node_id=index[key].node.id, name=node_label(index[key].node))
        for key in keys
        if index[key].parent_key not in key_set
    ]


def _index_program(program: Program) -> dict[str, _IndexedNode]:
    index: dict[str, _IndexedNode] = {}
    for week in program.weeks:
        week_key = _key("week", week)
        index[week_key] = _IndexedNode("week", week, None)
        for session in week.sessions:
            session_key = _key("session", session)
            index[session_key] = _IndexedNode("session", session, week_key)
            for exercise in session.exercises:
                index[_key("exercise", exercise)] = _IndexedNode("exercise", exercise, session_key)
    return index


def _key(kind: NodeKind, node: ProgramNode) -> str:
    handle = getattr(node, "handle", None)
    if handle:
        return f"handle:{handle}"
    return f"{kind}:{node.id}"
