"""Program fingerprinting for detecting changes between proposal and execution."""

import hashlib
import json

from program_tools.program.models import Program

# Position-derived fields; renumbering alone must not change the fingerprint
_IGNORED_KEYS = {"id", "weekNumber"}


def hash_program(program: Program) -> str:
    """Compute a deterministic fingerprint of the program content.

    The fingerprint changes when the user logs sets, modifies exercises, etc.
    Composite identifiers and handles are excluded.

    Args:
        program: Program to fingerprint

    Returns:
        Hex sha256 digest
    """
    document = _drop_ignored(program.to_document())
    payload = json.dumps(document, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _drop_ignored(value):
    if isinstance(value, dict):
        return {k: _drop_ignored(v) for k, v in value.items() if k not in _IGNORED_KEYS}
    if isinstance(value, list):
        return [_drop_ignored(v) for v in value]
    return value
