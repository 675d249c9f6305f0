"""Structural pass - `imports` and `references` edges.

Imports are resolved against file paths and file stems; references come
from whole-word occurrences of component names in other files.
"""

from __future__ import annotations

import re
from collections import defaultdict
from collections.abc import Callable
from pathlib import PurePosixPath

import structlog

from sysvista.config import ScanOptions
from sysvista.inference.edges import dedup_by_pair
from sysvista.schema import Component, Edge, EdgeLabel

logger = structlog.get_logger(__name__)


def _as_is(target: str) -> str:
    return target


def _python_module(target: str) -> str:
    # from app.models.user import X -> app/models/user
    return target.lstrip(".").replace(".", "/")


def _rust_path(target: str) -> str:
    # use crate::scanner::models -> scanner/models
    for prefix in ("self::", "super::"):
        while target.startswith(prefix):
            target = target[len(prefix) :]
    return target.replace("::", "/")


# one pattern per import syntax, with the normalizer for its target
IMPORT_PATTERNS: tuple[tuple[re.Pattern[str], Callable[[str], str]], ...] = (
    # TypeScript/JavaScript: import ... from "..."
    (
        re.compile(
            r"import\s+(?:type\s+)?[\w*{}\s,$]*?\s*from\s+['\"]([^'\"]+)['\"]",
            re.M,
        ),
        _as_is,
    ),
    # TypeScript/JavaScript: require("...")
    (re.compile(r"require\s*\(\s*['\"]([^'\"]+)['\"]", re.M), _as_is),
    # Rust: use crate::...;
    (re.compile(r"^use\s+(?:crate::)?(\S+);", re.M), _rust_path),
    # Python: from ... import ...
    (re.compile(r"^from\s+(\S+)\s+import", re.M), _python_module),
    # Go: import "..." / import alias "..."
    (re.compile(r"import\s+(?:\w+\s+)?\"([^\"]+)\"", re.M), _as_is),
)

# Go grouped imports: import ( ... )
GO_IMPORT_BLOCK = re.compile(r"^import\s*\(([^)]*)\)", re.M)
GO_IMPORT_SPEC = re.compile(r"\"([^\"]+)\"")


def extract_imports(content: str) -> list[str]:
    """Extract normalized import targets from file text."""
    imports = []
    for pattern, normalize in IMPORT_PATTERNS:
        for match in pattern.finditer(content):
            target = normalize(match.group(1))
            if target:
                imports.append(target)

    for block in GO_IMPORT_BLOCK.finditer(content):
        imports.extend(GO_IMPORT_SPEC.findall(block.group(1)))

    return imports


def build_file_index(components: list[Component]) -> dict[str, list[Component]]:
    """Index components by relative path and by file stem.

    `src/services/user.service.ts` is reachable as the full path and as
    `user.service`.
    """
    index: dict[str, list[Component]] = defaultdict(list)
    for comp in components:
        index[comp.file].append(comp)
        stem = PurePosixPath(comp.file).stem
        if stem:
            index[stem].append(comp)
    return dict(index)


def build_name_index(components: list[Component]) -> dict[str, list[Component]]:
    """Index components by name; several components may share one."""
    index: dict[str, list[Component]] = defaultdict(list)
    for comp in components:
        index[comp.name].append(comp)
    return dict(index)


def resolve_import(
    import_path: str, file_index: dict[str, list[Component]]
) -> list[Component]:
    """Resolve an import target by stem, falling back to its last segment."""
    stem = PurePosixPath(import_path).stem or import_path
    targets = file_index.get(stem)
    if targets is None:
        last_segment = import_path.rsplit("/", 1)[-1]
        targets = file_index.get(last_segment)
    return targets or []


def _count_at_least(pattern: re.Pattern[str], text: str, limit: int) -> bool:
    count = 0
    for _ in pattern.finditer(text):
        count += 1
        if count >= limit:
            return True
    return False


def infer_structural_edges(
    components: list[Component],
    file_contents: dict[str, str],
    options: ScanOptions | None = None,
) -> list[Edge]:
    """Infer `imports` and `references` edges, one edge per (from, to)."""
    options = options or ScanOptions()
    file_index = build_file_index(components)
    name_index = build_name_index(components)

    by_file: dict[str, list[Component]] = defaultdict(list)
    for comp in components:
        by_file[comp.file].append(comp)

    name_patterns = {
        name: re.compile(rf"\b{re.escape(name)}\b")
        for name in name_index
        if len(name) >= options.min_name_length
    }

    edges: list[Edge] = []

    for file in sorted(file_contents):
        sources = by_file.get(file)
        if not sources:
            continue
        content = file_contents[file]

        for import_path in extract_imports(content):
            for target in resolve_import(import_path, file_index):
                if target.file == file:
                    continue
                for source in sources:
                    edges.append(
                        Edge(
                            from_id=source.id,
                            to_id=target.id,
                            label=EdgeLabel.IMPORTS,
                        )
                    )

        for name, pattern in name_patterns.items():
            if name not in content:
                continue
            targets = name_index[name]
            declares = any(t.file == file for t in targets)
            threshold = (
                options.declaring_file_threshold
                if declares
                else options.other_file_threshold
            )
            if not _count_at_least(pattern, content, threshold):
                continue

            for target in targets:
                if target.file == file:
                    continue
                for source in sources:
                    edges.append(
                        Edge(
                            from_id=source.id,
                            to_id=target.id,
                            label=EdgeLabel.REFERENCES,
                        )
                    )

    result = dedup_by_pair(edges)
    logger.debug("structural pass", raw=len(edges), edges=len(result))
    return result
