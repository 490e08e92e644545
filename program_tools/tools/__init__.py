"""Tool execution module.

This module provides:
- Position-based tool call and handle-based operation types
- Translation of tool calls against a handle-stamped snapshot
- Per-kind validators and executors, paired in the registry
- The atomic batch runner
"""

from program_tools.tools.registry import TOOL_REGISTRY, ToolHandler, get_tool_handler
from program_tools.tools.runner import apply_tool_calls, run_batch
from program_tools.tools.schemas import build_tool_schemas
from program_tools.tools.translator import TranslatedCall, translate_batch, translate_tool_call
from program_tools.tools.types import BatchResult, HandleOperation, OperationResult, ToolCall, ValidationResult

__all__ = [
    "TOOL_REGISTRY",
    "BatchResult",
    "HandleOperation",
    "OperationResult",
    "ToolCall",
    "ToolHandler",
    "TranslatedCall",
    "ValidationResult",
    "apply_tool_calls",
    "build_tool_schemas",
    "get_tool_handler",
    "run_batch",
    "translate_batch",
    "translate_tool_call",
]
