"""File extension to language tag classification."""

from __future__ import annotations

from pathlib import PurePath

LANGUAGE_EXTENSIONS: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".rs": "rust",
    ".py": "python",
    ".go": "go",
    ".java": "java",
    ".kt": "kotlin",
    ".kts": "kotlin",
    ".cs": "csharp",
    ".rb": "ruby",
    ".proto": "protobuf",
    ".graphql": "graphql",
    ".gql": "graphql",
}


def detect_language(path: PurePath | str) -> str | None:
    """Return the language tag for a path, or None if unrecognized."""
    return LANGUAGE_EXTENSIONS.get(PurePath(path).suffix)
