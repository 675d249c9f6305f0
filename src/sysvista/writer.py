"""Persisting scan results."""

from __future__ import annotations

from pathlib import Path

import structlog

from sysvista.errors import OutputWriteError
from sysvista.schema import ScanOutput

logger = structlog.get_logger(__name__)


def write_json(output: ScanOutput, path: Path | str) -> Path:
    """Write the scan document as pretty-printed JSON.

    The document is serialized in full before the file is opened.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    path = Path(path)
    text = output.to_json(indent=2)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(path, e.strerror or str(e)) from e

    logger.debug("wrote output", path=str(path), bytes=len(text))
    return path
