"""Scan orchestration - walk, detect, infer, assemble.

Detection is per-file and may run in a thread pool; inference only starts
once every file's components and text have been collected.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import structlog

from sysvista.config import ScanOptions
from sysvista.detectors import detect_components
from sysvista.errors import RootNotFoundError
from sysvista.git import WalkedFile, walk_directory
from sysvista.inference import infer_edges
from sysvista.language import detect_language
from sysvista.schema import Component, ScanOutput, ScanStats
from sysvista.workflows import infer_workflows

logger = structlog.get_logger(__name__)


@dataclass
class FileScan:
    """Detection result for one source file."""

    relative_path: str
    language: str
    content: str
    components: list[Component] = field(default_factory=list)


def read_source(path: Path, max_bytes: int) -> str | None:
    """Read a file as UTF-8 text, or None if it should be skipped."""
    try:
        size = path.stat().st_size
        if size > max_bytes:
            logger.debug("skipping oversized file", path=str(path), size=size)
            return None
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("skipping unreadable file", path=str(path), error=str(e))
        return None


def scan_file(
    walked: WalkedFile, language: str, options: ScanOptions
) -> FileScan | None:
    """Read one file and run every detector over it."""
    content = read_source(walked.path, options.max_file_bytes)
    if content is None:
        return None

    return FileScan(
        relative_path=walked.relative_path,
        language=language,
        content=content,
        components=detect_components(
            content,
            language,
            walked.relative_path,
            options.payload_window,
        ),
    )


def dedup_components(components: Iterable[Component]) -> list[Component]:
    """Keep the first component of each id, preserving order."""
    seen: set[str] = set()
    result = []
    for comp in components:
        if comp.id not in seen:
            seen.add(comp.id)
            result.append(comp)
    return result


def _scan_files(
    files: list[tuple[WalkedFile, str]], options: ScanOptions
) -> list[FileScan | None]:
    if options.workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=options.workers) as pool:
            # map() yields in submission order
            return list(
                pool.map(lambda item: scan_file(*item, options), files)
            )
    return [scan_file(walked, language, options) for walked, language in files]


def project_name_for(root: Path) -> str:
    return root.name or "unknown"


def scan(root: Path | str, options: ScanOptions | None = None) -> ScanOutput:
    """Scan a directory tree and build its architecture map.

    Args:
        root: Directory to scan.
        options: Heuristic overrides; defaults apply when omitted.

    Returns:
        The complete scan document.

    Raises:
        RootNotFoundError: If root does not exist or is not a directory.
    """
    options = options or ScanOptions()
    root = Path(root).expanduser()
    try:
        root = root.resolve(strict=True)
    except OSError as e:
        raise RootNotFoundError(root) from e
    if not root.is_dir():
        raise RootNotFoundError(root)

    start = time.perf_counter()
    walked = walk_directory(root)

    candidates = []
    for entry in walked.files:
        language = detect_language(entry.relative_path)
        if language is not None:
            candidates.append((entry, language))

    results = _scan_files(candidates, options)

    files_skipped = walked.skipped
    languages: set[str] = set()
    file_contents: dict[str, str] = {}
    detected: list[Component] = []

    for result in results:
        if result is None:
            files_skipped += 1
            continue
        languages.add(result.language)
        file_contents[result.relative_path] = result.content
        detected.extend(result.components)

    components = dedup_components(detected)
    edges = infer_edges(components, file_contents, options)
    workflows = infer_workflows(components, edges)

    duration_ms = int((time.perf_counter() - start) * 1000)

    logger.debug(
        "scan complete",
        root=str(root),
        files=len(file_contents),
        skipped=files_skipped,
        components=len(components),
        duplicates=len(detected) - len(components),
        edges=len(edges),
        workflows=len(workflows),
        duration_ms=duration_ms,
    )

    return ScanOutput(
        scanned_at=datetime.now(timezone.utc).isoformat(),
        root_dir=str(root),
        project_name=project_name_for(root),
        detected_languages=sorted(languages),
        components=components,
        edges=edges,
        workflows=workflows,
        scan_stats=ScanStats(
            files_scanned=len(file_contents),
            files_skipped=files_skipped,
            scan_duration_ms=duration_ms,
        ),
    )
