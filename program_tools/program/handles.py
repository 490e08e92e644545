"""Ephemeral handles for deterministic, position-independent addressing.

Handles exist only during one execution pass, never in persisted data.
A handle identifies a node regardless of where earlier operations in the
same batch have moved it.
"""

import secrets
from collections.abc import Iterator
from dataclasses import dataclass

from program_tools.core.settings import settings
from program_tools.errors import ExecutionInvariantError
from program_tools.program.models import Exercise, Program, ProgramNode, SetResult, Week, WorkoutSession


@dataclass
class HandleLookup:
    """Result of a handle lookup: the matched node plus its parents."""

    week: Week | None = None
    session: WorkoutSession | None = None
    exercise: Exercise | None = None
    set: SetResult | None = None
    parent_week: Week | None = None
    parent_session: WorkoutSession | None = None
    parent_exercise: Exercise | None = None

    @property
    def found(self) -> bool:
        return any(node is not None for node in (self.week, self.session, self.exercise, self.set))


def generate_handle() -> str:
    """Generate a random short handle (e.g. "a3f2", "k9M1")."""
    return "".join(secrets.choice(settings.handle_alphabet) for _ in range(settings.handle_length))


def handle_space_size() -> int:
    """Number of distinct handles the configured alphabet and length can produce."""
    return len(set(settings.handle_alphabet)) ** settings.handle_length


def ensure_unique_handle(existing: set[str]) -> str:
    """Generate a handle not in ``existing``, regenerating on collision.

    The new handle is added to ``existing``.

    Raises:
        ExecutionInvariantError: If every possible handle is already in use
    """
    if len(existing) >= handle_space_size():
        raise ExecutionInvariantError(
            f"Handle space exhausted: {len(existing)} handles in use, "
            f"{handle_space_size()} possible with the configured alphabet and length"
        )
    handle = generate_handle()
    while handle in existing:
        handle = generate_handle()
    existing.add(handle)
    return handle


def iter_nodes(program: Program) -> Iterator[ProgramNode]:
    """Yield every week, session, exercise and set in document order."""
    for week in program.weeks:
        yield week
        for session in week.sessions:
            yield session
            for exercise in session.exercises:
                yield exercise
                yield from exercise.sets


def assign_handles(program: Program) -> Program:
    """Return a deep clone of ``program`` with a fresh unique handle on every node.

    The caller's program is never mutated.
    """
    snapshot = program.model_copy(deep=True)
    existing: set[str] = set()
    for node in iter_nodes(snapshot):
        node.handle = ensure_unique_handle(existing)
    return snapshot


def assign_missing_handles(program: Program) -> Program:
    """Stamp handles on nodes created mid-batch (in place).

    New handles are unique against every handle already present in the tree.
    """
    existing = collect_handles(program)
    for node in iter_nodes(program):
        if node.handle is None:
            node.handle = ensure_unique_handle(existing)
    return program


def clear_handles(node: ProgramNode) -> None:
    """Remove handles from a node and all of its descendants (in place)."""
    node.handle = None
    for child in _children(node):
        clear_handles(child)


def strip_handles(program: Program) -> Program:
    """Return a copy of ``program`` with every handle removed.

    Stripping an already stripped program is a no-op.
    """
    stripped = program.model_copy(deep=True)
    for week in stripped.weeks:
        clear_handles(week)
    return stripped


def collect_handles(program: Program) -> set[str]:
    return {node.handle for node in iter_nodes(program) if node.handle is not None}


def find_by_handle(program: Program, handle: str) -> HandleLookup:
    """Find a node by handle, returning it along with its parents.

    Returns an empty HandleLookup (``found`` is False) if no node matches.
    """
    for week in program.weeks:
        if week.handle == handle:
            return HandleLookup(week=week)

        for session in week.sessions:
            if session.handle == handle:
                return HandleLookup(session=session, parent_week=week)

            for exercise in session.exercises:
                if exercise.handle == handle:
                    return HandleLookup(exercise=exercise, parent_session=session, parent_week=week)

                for logged_set in exercise.sets:
                    if logged_set.handle == handle:
                        return HandleLookup(
                            set=logged_set,
                            parent_exercise=exercise,
                            parent_session=session,
                            parent_week=week,
                        )

    return HandleLookup()


def _children(node: ProgramNode) -> list[ProgramNode]:
    if isinstance(node, Week):
        return list(node.sessions)
    if isinstance(node, WorkoutSession):
        return list(node.exercises)
    if isinstance(node, Exercise):
        return list(node.sets)
    return []
