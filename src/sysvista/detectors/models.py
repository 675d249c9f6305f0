"""Model detection - structured type declarations per language."""

from __future__ import annotations

import re

from sysvista.detectors._common import build_component, line_number
from sysvista.schema import Component, ComponentKind

# ---------------------------------------------------------------------------
# Declaration Patterns
# ---------------------------------------------------------------------------

_TS_PATTERNS = (
    re.compile(r"^(?:export\s+)?(?:declare\s+)?interface\s+(\w+)", re.M),
    re.compile(r"^(?:export\s+)?type\s+(\w+)\s*(?:<[^=\n]*>)?\s*=", re.M),
    re.compile(r"^(?:export\s+)?(?:const\s+)?enum\s+(\w+)", re.M),
)

_RUST_PATTERNS = (
    re.compile(r"^(?:pub(?:\([^)]*\))?\s+)?struct\s+(\w+)", re.M),
    re.compile(r"^(?:pub(?:\([^)]*\))?\s+)?enum\s+(\w+)", re.M),
)

_PYTHON_PATTERNS = (
    # @dataclass / @dataclass(frozen=True) directly above the class
    re.compile(r"^@dataclass(?:\([^)]*\))?\s*\n\s*class\s+(\w+)", re.M),
    re.compile(
        r"^class\s+(\w+)\((?:\w+\.)?(?:BaseModel|Schema|TypedDict)\)", re.M
    ),
)

_GO_PATTERNS = (re.compile(r"^type\s+(\w+)\s+struct\s*\{", re.M),)

_PROTO_PATTERNS = (re.compile(r"^message\s+(\w+)\s*\{", re.M),)

_KOTLIN_PATTERNS = (
    re.compile(
        r"^[ \t]*(?:(?:public|internal|private)\s+)?data\s+class\s+(\w+)",
        re.M,
    ),
)

_JAVA_PATTERNS = (
    re.compile(
        r"^[ \t]*(?:(?:public|private|protected|static|final)\s+)*"
        r"record\s+(\w+)\s*[(<]",
        re.M,
    ),
)

_GRAPHQL_PATTERNS = (
    re.compile(r"^(?:type|input|enum)\s+(\w+)[^{\n]*\{", re.M),
)

MODEL_PATTERNS: dict[str, tuple[re.Pattern[str], ...]] = {
    "typescript": _TS_PATTERNS,
    "javascript": _TS_PATTERNS,
    "rust": _RUST_PATTERNS,
    "python": _PYTHON_PATTERNS,
    "go": _GO_PATTERNS,
    "protobuf": _PROTO_PATTERNS,
    "kotlin": _KOTLIN_PATTERNS,
    "java": _JAVA_PATTERNS,
    "graphql": _GRAPHQL_PATTERNS,
}

# ---------------------------------------------------------------------------
# Field Extraction
# ---------------------------------------------------------------------------

# languages whose bodies are `name: type` members inside braces
FIELD_LANGUAGES = frozenset({"typescript", "javascript", "rust", "graphql"})

_FIELD_NAME = re.compile(r"^[A-Za-z_$][\w$]*$")
_FIELD_MODIFIER = re.compile(r"^(?:readonly|declare|pub(?:\([^)]*\))?)\s+")
_LINE_COMMENT = re.compile(r"//[^\n]*")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.S)
_HASH_COMMENT = re.compile(r"#[^\n]*")

# the head between a declaration and its `{` stays short and on one
# statement; anything longer means the brace belongs to something else
_MAX_HEAD_NEWLINES = 2

_SEGMENT_BREAKS = frozenset("\n;,")
_OPENERS = frozenset("(<[")
_CLOSERS = frozenset(")>]")


def _split_members(body: str) -> list[str]:
    """Split a block body into member segments.

    Separators nested in `(...)`, `<...>` or `[...]` stay inside the member.
    The `>` of `=>` and `->` does not close a bracket.
    """
    segments: list[str] = []
    current: list[str] = []
    depth = 0
    prev = ""
    for ch in body:
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS and not (ch == ">" and prev in ("=", "-")):
            depth = max(depth - 1, 0)
        elif ch in _SEGMENT_BREAKS and depth == 0:
            segments.append("".join(current))
            current = []
            prev = ch
            continue
        current.append(ch)
        prev = ch
    segments.append("".join(current))
    return segments


def _top_level_body(content: str, brace: int) -> str | None:
    """Text directly inside the block at `brace`, nested blocks removed."""
    depth = 0
    body: list[str] = []
    for ch in content[brace:]:
        if ch == "{":
            depth += 1
            continue
        if ch == "}":
            depth -= 1
            if depth == 0:
                return "".join(body)
            continue
        if depth == 1:
            body.append(ch)
    return None


def extract_fields(
    content: str, start: int, language: str = "typescript"
) -> list[str] | None:
    """Extract ordered member names of the brace body after a declaration.

    Returns None when there is no parseable body or no `name: type` member.
    """
    brace = content.find("{", start)
    if brace == -1:
        return None

    head = content[start:brace]
    if ";" in head or "\n\n" in head or head.count("\n") > _MAX_HEAD_NEWLINES:
        return None

    body = _top_level_body(content, brace)
    if body is None:
        return None

    body = _BLOCK_COMMENT.sub("", body)
    body = _LINE_COMMENT.sub("", body)
    if language == "graphql":
        body = _HASH_COMMENT.sub("", body)

    fields: list[str] = []
    for segment in _split_members(body):
        segment = segment.strip()
        if not segment or ":" not in segment:
            continue
        name = segment.split(":", 1)[0].strip().rstrip("?").strip()
        name = _FIELD_MODIFIER.sub("", name).strip("'\"")
        if _FIELD_NAME.match(name):
            fields.append(name)

    return fields or None


def detect_models(content: str, language: str, file: str) -> list[Component]:
    """Detect model declarations in a file."""
    patterns = MODEL_PATTERNS.get(language)
    if not patterns:
        return []

    components = []
    for pattern in patterns:
        for match in pattern.finditer(content):
            name = match.group(1)
            member_fields = None
            if language in FIELD_LANGUAGES:
                member_fields = extract_fields(content, match.start(), language)

            components.append(
                build_component(
                    ComponentKind.MODEL,
                    name,
                    language,
                    file,
                    line_number(content, match.start()),
                    member_fields=member_fields,
                )
            )

    return components
