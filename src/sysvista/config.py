"""Scan configuration constants and tunable heuristics."""

from __future__ import annotations

import os
from dataclasses import dataclass

# Environment variable names
ENV_DEBUG = "SYSVISTA_DEBUG"
ENV_OUTPUT = "SYSVISTA_OUTPUT"
ENV_WORKERS = "SYSVISTA_WORKERS"

DEFAULT_OUTPUT = os.environ.get(ENV_OUTPUT, "sysvista-output.json")

OUTPUT_VERSION = "1"

# ---------------------------------------------------------------------------
# Heuristic defaults - see ScanOptions for the per-scan overrides
# ---------------------------------------------------------------------------

# lines scanned after an http route for payload annotations
PAYLOAD_WINDOW_LINES = 30
# lines after a transport/transform declaration scanned for model names
FLOW_WINDOW_LINES = 50
# lines after a transport declaration scanned for call expressions
CALL_WINDOW_LINES = 80

# names shorter than this are too noisy for whole-word matching
MIN_NAME_LENGTH = 3

# occurrences needed before a name counts as referenced; the declaring
# file needs one extra since the declaration itself matches
REFERENCE_THRESHOLD_DECLARING_FILE = 2
REFERENCE_THRESHOLD_OTHER_FILE = 1

# skip detection for large files (likely bundled/minified)
MAX_FILE_BYTES = 1_000_000

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

# path segments that mark a file as holding service code
SERVICE_DIRS: frozenset[str] = frozenset(
    {
        "services",
        "controllers",
        "handlers",
        "resolvers",
        "middleware",
        "api",
        "crud",
    }
)

# type names never treated as payload models
PRIMITIVE_TYPES: frozenset[str] = frozenset(
    {
        "str",
        "int",
        "float",
        "dict",
        "list",
        "none",
        "bool",
        "any",
        "bytes",
        "object",
        "string",
        "number",
        "void",
        "undefined",
        "optional",
        "union",
    }
)

# receivers of `<alias>.<fn>(` that are never module aliases
CALL_RECEIVER_DENYLIST: frozenset[str] = frozenset(
    {
        "self",
        "cls",
        "db",
        "session",
        "response",
        "request",
        "app",
        "logger",
        "log",
    }
)

# awaited names that are library/runtime calls, not components
AWAIT_DENYLIST: frozenset[str] = frozenset(
    {
        "fetch",
        "sleep",
        "gather",
        "wait",
        "commit",
        "execute",
        "flush",
        "refresh",
        "close",
    }
)


def _default_workers() -> int:
    try:
        return max(1, int(os.environ.get(ENV_WORKERS, "1")))
    except ValueError:
        return 1


@dataclass(frozen=True)
class ScanOptions:
    """Tunable heuristics for a single scan.

    The window sizes and thresholds are empirical; none of them is an
    invariant of the output format.
    """

    payload_window: int = PAYLOAD_WINDOW_LINES
    flow_window: int = FLOW_WINDOW_LINES
    call_window: int = CALL_WINDOW_LINES
    min_name_length: int = MIN_NAME_LENGTH
    declaring_file_threshold: int = REFERENCE_THRESHOLD_DECLARING_FILE
    other_file_threshold: int = REFERENCE_THRESHOLD_OTHER_FILE
    max_file_bytes: int = MAX_FILE_BYTES
    workers: int = 1

    @classmethod
    def from_env(cls, **overrides: int) -> ScanOptions:
        """Build options with the worker count taken from the environment."""
        values: dict[str, int] = {"workers": _default_workers()}
        values.update(overrides)
        return cls(**values)
