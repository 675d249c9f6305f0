"""Service detection - decorated classes and directory conventions.

Tiers are tried in order and the first one that yields anything wins for
the file:

1. decorator/annotation-tagged classes (any directory)
2. class declarations in a service-like directory
3. exported free functions in a service-like directory
4. public top-level python functions in a service-like directory
"""

from __future__ import annotations

import re

from sysvista.detectors._common import (
    build_component,
    is_service_dir,
    line_number,
)
from sysvista.schema import Component, ComponentKind, Detection, MetadataKey

# optional extra annotations and modifiers between the marker and the class
_ANNOTATIONS = r"(?:\s*@\w+(?:\s*\([^)]*\))?)*"
_CLASS_MODIFIERS = (
    r"(?:(?:export|default|public|abstract|open|final|internal|sealed)\s+)*"
)

DECORATOR_PATTERNS: tuple[re.Pattern[str], ...] = (
    # NestJS / Spring (java, kotlin)
    re.compile(
        r"@(?:Controller|RestController|Injectable|Service)\s*(?:\([^)]*\))?"
        + _ANNOTATIONS
        + r"\s*\n\s*"
        + _CLASS_MODIFIERS
        + r"class\s+(\w+)",
        re.M,
    ),
    # Flask-RESTful / Django / DRF class based views
    re.compile(
        r"^class\s+(\w+)\(.*(?:Resource|View|ViewSet|APIView)\)", re.M
    ),
    # ASP.NET
    re.compile(
        r"\[ApiController\](?:\s*\[(?:[^\[\]]|\[[^\]]*\])*\])*\s*\n\s*"
        r"(?:(?:public|internal|sealed|partial|abstract)\s+)*class\s+(\w+)",
        re.M,
    ),
)

CLASS_PATTERN = re.compile(r"^(?:export\s+)?class\s+(\w+)", re.M)

EXPORT_FUNC_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"^export\s+(?:default\s+)?(?:async\s+)?function\s+(\w+)", re.M
    ),
    # go: capitalized free functions are exported
    re.compile(r"^func\s+([A-Z]\w*)\s*\(", re.M),
)

PYTHON_FUNC_PATTERN = re.compile(r"^(?:async\s+)?def\s+(\w+)\s*\(", re.M)


def _collect(
    patterns: tuple[re.Pattern[str], ...],
    content: str,
    language: str,
    file: str,
    detection: Detection,
    skip_private: bool = False,
) -> list[Component]:
    components = []
    for pattern in patterns:
        for match in pattern.finditer(content):
            name = match.group(1)
            # covers both _private and __dunder__
            if skip_private and name.startswith("_"):
                continue
            components.append(
                build_component(
                    ComponentKind.SERVICE,
                    name,
                    language,
                    file,
                    line_number(content, match.start()),
                    metadata={MetadataKey.DETECTION.value: detection.value},
                )
            )
    return components


def detect_services(content: str, language: str, file: str) -> list[Component]:
    """Detect service units in a file."""
    components = _collect(
        DECORATOR_PATTERNS, content, language, file, Detection.DECORATOR
    )
    if components or not is_service_dir(file):
        return components

    convention = Detection.DIRECTORY_CONVENTION

    components = _collect((CLASS_PATTERN,), content, language, file, convention)
    if components:
        return components

    components = _collect(
        EXPORT_FUNC_PATTERNS, content, language, file, convention
    )
    if components:
        return components

    if language == "python":
        components = _collect(
            (PYTHON_FUNC_PATTERN,),
            content,
            language,
            file,
            convention,
            skip_private=True,
        )

    return components
