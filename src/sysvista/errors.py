"""Exceptions raised by sysvista.

Detection and inference never raise for problems in scanned content; only
the collaborator boundaries (resolving the root, persisting the result)
can fail a run.
"""

from __future__ import annotations

from pathlib import Path


class SysVistaError(Exception):
    """Base class for fatal sysvista errors."""


class RootNotFoundError(SysVistaError):
    """The scan root does not exist or is not a directory."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"cannot resolve path '{self.path}'")


class OutputWriteError(SysVistaError):
    """The output document could not be written."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"error writing output to {self.path}: {reason}")
