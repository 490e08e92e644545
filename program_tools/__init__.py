"""Program tools - deterministic execution of coach-proposed program edits.

This package provides:
- The workout program document model (weeks → sessions → exercises → sets)
- Ephemeral handle assignment for position-independent addressing
- Translation of position-based tool calls into handle-based operations
- Per-operation validation and execution with renumbering
- Atomic, all-or-nothing batch execution
"""

import program_tools.core.logger  # noqa: F401
from program_tools.program.models import Program
from program_tools.tools.runner import apply_tool_calls, run_batch
from program_tools.tools.types import BatchResult, OperationResult, ToolCall

__all__ = [
    "BatchResult",
    "OperationResult",
    "Program",
    "ToolCall",
    "apply_tool_calls",
    "run_batch",
]
