"""Canonical tool execution error types.

Every failure inside the edit engine is one of these types. All of them are
recovered at the batch runner boundary and reported per operation.

Standard error codes:
- ADDRESS_NOT_FOUND: A position reference does not exist in the program snapshot
- INVALID_OPERATION: Well-formed reference but invalid payload or arguments
- UNKNOWN_OPERATION: Operation kind is not registered
- EXECUTION_INVARIANT: Validator passed but the executor could not find its target
- STALE_PROGRAM: The program changed since the tool calls were proposed
"""


class ToolExecutionError(Exception):
    """Base class for tool execution failures.

    Attributes:
        code: Error code (e.g., "ADDRESS_NOT_FOUND", "INVALID_OPERATION")
        details: Human-readable error messages
    """

    code = "TOOL_EXECUTION_FAILED"

    def __init__(self, details: str | list[str]):
        self.details = [details] if isinstance(details, str) else list(details)
        super().__init__("; ".join(self.details))


class AddressResolutionError(ToolExecutionError):
    """Raised when a position reference has no node in the snapshot."""

    code = "ADDRESS_NOT_FOUND"


class OperationValidationError(ToolExecutionError):
    """Raised when operation arguments are malformed or fail validation."""

    code = "INVALID_OPERATION"


class UnknownOperationError(ToolExecutionError):
    """Raised when an operation kind has no registered handler."""

    code = "UNKNOWN_OPERATION"

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown tool: {kind}")


class ExecutionInvariantError(ToolExecutionError):
    """Raised when an executor cannot locate a target its validator accepted.

    This signals an internal defect in translation/validation pairing, not bad input.
    """

    code = "EXECUTION_INVARIANT"


class StaleProgramError(ToolExecutionError):
    """Raised when the program fingerprint no longer matches the proposal's snapshot."""

    code = "STALE_PROGRAM"
