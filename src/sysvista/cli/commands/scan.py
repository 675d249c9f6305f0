"""Scan command - map a project and write the JSON document."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import tyro

from sysvista import console
from sysvista.cli._common import ScanArgs
from sysvista.config import DEFAULT_OUTPUT
from sysvista.writer import write_json


@dataclass
class Scan(ScanArgs):
    """Scan a project directory and produce a JSON architecture map."""

    output: Annotated[Path, tyro.conf.arg(aliases=("-o",))] = field(
        default=Path(DEFAULT_OUTPUT),
        metadata={"help": "Where to write the JSON document"},
    )

    def run(self) -> int:
        """Execute the scan command."""
        result = self.run_scan()
        stats = result.scan_stats

        console.info(
            f"found {len(result.components)} components, "
            f"{len(result.edges)} edges across "
            f"{len(result.detected_languages)} languages "
            f"({stats.files_scanned} files scanned in "
            f"{stats.scan_duration_ms}ms)"
        )

        path = write_json(result, self.output)
        console.success(f"output written to {path}")
        return 0
