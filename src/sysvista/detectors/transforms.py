"""Transform detection - conversion functions and conversion traits."""

from __future__ import annotations

import re

from sysvista.detectors._common import build_component, line_number
from sysvista.schema import Component, ComponentKind

# camelCase languages: prefix followed by an uppercase letter (toDto, fromRow)
_CAMEL_PREFIX = r"(?:to|from|convert|transform)[A-Z]\w*"
# snake_case languages: to_x, from_x, convert..., transform...
_SNAKE_PREFIX = r"(?:to_|from_|convert|transform)\w+"

_TS_PATTERNS = (
    re.compile(
        r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?function\s+("
        + _CAMEL_PREFIX
        + r")",
        re.M,
    ),
    re.compile(
        r"(?:const|let|var)\s+(" + _CAMEL_PREFIX + r")\s*=\s*(?:async\s*)?\(",
        re.M,
    ),
)

# impl From<A> for B - named "From<A> for B"
RUST_FROM_IMPL = re.compile(r"^impl\s+From<(\w+)>\s+for\s+(\w+)", re.M)

_RUST_PATTERNS = (
    RUST_FROM_IMPL,
    re.compile(
        r"^[ \t]*(?:pub(?:\([^)]*\))?\s+)?(?:async\s+)?fn\s+("
        + _SNAKE_PREFIX
        + r")",
        re.M,
    ),
)

_PYTHON_PATTERNS = (
    re.compile(r"^(?:async\s+)?def\s+(" + _SNAKE_PREFIX + r")", re.M),
)

_GO_PATTERNS = (
    re.compile(
        r"^func\s+(?:\([^)]+\)\s+)?((?:To|From|Convert|Transform)[A-Z]\w*)",
        re.M,
    ),
)

_KOTLIN_PATTERNS = (
    re.compile(r"\bfun\s+(?:[\w<>]+\.)?(" + _CAMEL_PREFIX + r")\s*\(", re.M),
)

# java/c#: a return type, then the method name
_JVM_PATTERNS = (
    re.compile(
        r"^[ \t]*(?:(?:public|private|protected|internal|static|final)\s+)*"
        r"(?!return\b|new\b|await\b|throw\b|yield\b)"
        r"[\w<>\[\],?]+\s+("
        + _CAMEL_PREFIX
        + r"|(?:To|From|Convert|Transform)[A-Z]\w*)\s*\(",
        re.M,
    ),
)

TRANSFORM_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "typescript": _TS_PATTERNS,
    "javascript": _TS_PATTERNS,
    "rust": _RUST_PATTERNS,
    "python": _PYTHON_PATTERNS,
    "go": _GO_PATTERNS,
    "kotlin": _KOTLIN_PATTERNS,
    "java": _JVM_PATTERNS,
    "csharp": _JVM_PATTERNS,
}


def detect_transforms(
    content: str, language: str, file: str
) -> list[Component]:
    """Detect data conversion functions in a file."""
    patterns = TRANSFORM_PATTERNS.get(language)
    if not patterns:
        return []

    components = []
    for pattern in patterns:
        for match in pattern.finditer(content):
            if pattern is RUST_FROM_IMPL:
                name = f"From<{match.group(1)}> for {match.group(2)}"
            else:
                name = match.group(1)

            components.append(
                build_component(
                    ComponentKind.TRANSFORM,
                    name,
                    language,
                    file,
                    line_number(content, match.start()),
                )
            )

    return components
