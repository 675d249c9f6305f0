"""Shared CLI arguments for commands that run a scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import tyro

from sysvista import console
from sysvista.config import (
    CALL_WINDOW_LINES,
    FLOW_WINDOW_LINES,
    PAYLOAD_WINDOW_LINES,
    ScanOptions,
)
from sysvista.scanner import scan
from sysvista.schema import ScanOutput


@dataclass
class ScanArgs:
    """Options common to every scanning command."""

    path: tyro.conf.Positional[Path] = field(
        default_factory=Path.cwd,
        metadata={"help": "Project directory to scan"},
    )
    workers: int | None = field(
        default=None,
        metadata={"help": "Detector threads (default: SYSVISTA_WORKERS or 1)"},
    )
    payload_window: int = field(
        default=PAYLOAD_WINDOW_LINES,
        metadata={"help": "Lines after a route searched for payload types"},
    )
    flow_window: int = field(
        default=FLOW_WINDOW_LINES,
        metadata={"help": "Lines after a declaration searched for models"},
    )
    call_window: int = field(
        default=CALL_WINDOW_LINES,
        metadata={"help": "Lines after a transport searched for calls"},
    )

    def scan_options(self) -> ScanOptions:
        overrides = {
            "payload_window": self.payload_window,
            "flow_window": self.flow_window,
            "call_window": self.call_window,
        }
        if self.workers is not None:
            overrides["workers"] = max(1, self.workers)
        return ScanOptions.from_env(**overrides)

    def run_scan(self) -> ScanOutput:
        with console.status(f"scanning {self.path}..."):
            return scan(self.path, self.scan_options())
