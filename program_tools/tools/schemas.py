"""Tool schemas exposed to the planner.

Each operation kind is described by the JSON schema of its position-argument
model, so the planner-facing contract cannot drift from what the translator
accepts.
"""

from typing import Any

from program_tools.tools.registry import TOOL_REGISTRY
from program_tools.tools.translator import position_args_model


def build_tool_schemas() -> list[dict[str, Any]]:
    """Build tool definitions for every registered operation kind.

    Returns:
        List of {"name", "description", "input_schema"} dictionaries, in
        registry order
    """
    return [
        {
            "name": name,
            "description": handler.description,
            "input_schema": position_args_model(name).model_json_schema(by_alias=True),
        }
        for name, handler in TOOL_REGISTRY.items()
    ]
