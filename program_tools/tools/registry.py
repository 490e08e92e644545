"""Operation registry - single source of truth for supported edit operations.

Every operation kind maps to exactly one validator and one executor. The
registry is checked against the OperationKind literal on import, so a kind
can never exist without both halves.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, get_args

from program_tools.errors import UnknownOperationError
from program_tools.program.models import Program
from program_tools.tools import executors, validators
from program_tools.tools.types import OperationKind, ValidationResult


@dataclass(frozen=True)
class ToolHandler:
    """Validator/executor pair for one operation kind."""

    name: str
    description: str
    validate: Callable[[Any, Program], ValidationResult]
    execute: Callable[[Program, Any], Program]


TOOL_REGISTRY: dict[str, ToolHandler] = {
    # Exercise level
    "modify_exercise": ToolHandler(
        name="modify_exercise",
        description="Change fields of an existing exercise",
        validate=validators.validate_modify_exercise,
        execute=executors.execute_modify_exercise,
    ),
    "add_exercise": ToolHandler(
        name="add_exercise",
        description="Insert a new exercise into a session",
        validate=validators.validate_add_exercise,
        execute=executors.execute_add_exercise,
    ),
    "remove_exercise": ToolHandler(
        name="remove_exercise",
        description="Delete an exercise from a session",
        validate=validators.validate_remove_exercise,
        execute=executors.execute_remove_exercise,
    ),
    "reorder_exercises": ToolHandler(
        name="reorder_exercises",
        description="Move an exercise to a new position within its session",
        validate=validators.validate_reorder_exercises,
        execute=executors.execute_reorder_exercises,
    ),
    # Session level
    "modify_session": ToolHandler(
        name="modify_session",
        description="Change fields of an existing session",
        validate=validators.validate_modify_session,
        execute=executors.execute_modify_session,
    ),
    "add_session": ToolHandler(
        name="add_session",
        description="Insert a new session into a week",
        validate=validators.validate_add_session,
        execute=executors.execute_add_session,
    ),
    "remove_session": ToolHandler(
        name="remove_session",
        description="Delete a session from a week",
        validate=validators.validate_remove_session,
        execute=executors.execute_remove_session,
    ),
    "copy_session": ToolHandler(
        name="copy_session",
        description="Copy a session's structure, without its history, into a week",
        validate=validators.validate_copy_session,
        execute=executors.execute_copy_session,
    ),
    # Week level
    "modify_week": ToolHandler(
        name="modify_week",
        description="Change fields of an existing week",
        validate=validators.validate_modify_week,
        execute=executors.execute_modify_week,
    ),
    "add_week": ToolHandler(
        name="add_week",
        description="Insert one or more weeks into the program",
        validate=validators.validate_add_week,
        execute=executors.execute_add_week,
    ),
    "remove_week": ToolHandler(
        name="remove_week",
        description="Delete a week from the program",
        validate=validators.validate_remove_week,
        execute=executors.execute_remove_week,
    ),
    # Program level
    "create_program": ToolHandler(
        name="create_program",
        description="Replace the whole program with new weeks",
        validate=validators.validate_create_program,
        execute=executors.execute_create_program,
    ),
}


def get_tool_handler(kind: str) -> ToolHandler:
    """Get the handler for an operation kind.

    Raises:
        UnknownOperationError: If the kind is not registered
    """
    handler = TOOL_REGISTRY.get(kind)
    if handler is None:
        raise UnknownOperationError(kind)
    return handler


def validate_registry() -> None:
    """Guard: Ensure every operation kind has exactly one registered handler.

    Raises:
        ValueError: If the registry and OperationKind disagree
    """
    declared = set(get_args(OperationKind))
    registered = set(TOOL_REGISTRY)

    missing = declared - registered
    if missing:
        raise ValueError(f"Operation kinds without a handler: {sorted(missing)}")

    extra = registered - declared
    if extra:
        raise ValueError(f"Handlers registered for undeclared kinds: {sorted(extra)}")

    mismatched = [kind for kind, handler in TOOL_REGISTRY.items() if handler.name != kind]
    if mismatched:
        raise ValueError(f"Handler names do not match registry keys: {mismatched}")


# Validate on import
validate_registry()
