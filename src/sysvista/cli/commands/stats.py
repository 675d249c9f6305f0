"""Stats command - summarize a scan without writing output."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from sysvista import console
from sysvista.cli._common import ScanArgs


@dataclass
class Stats(ScanArgs):
    """Scan a project and print component, edge and workflow counts."""

    def run(self) -> int:
        """Execute the stats command."""
        result = self.run_scan()
        stats = result.scan_stats

        console.header(f"sysvista: {result.project_name}")
        console.key_value("root", result.root_dir)
        console.key_value(
            "languages", ", ".join(result.detected_languages) or "-"
        )

        console.subheader("\nFiles")
        console.key_value("scanned", stats.files_scanned, indent=2)
        console.key_value("skipped", stats.files_skipped, indent=2)
        console.key_value("duration", f"{stats.scan_duration_ms}ms", indent=2)

        console.subheader("\nComponents")
        kinds = Counter(c.kind.value for c in result.components)
        for kind, count in sorted(kinds.items()):
            console.key_value(kind, count, indent=2)

        console.subheader("\nEdges")
        labels = Counter(
            e.label.value if e.label else "unlabeled" for e in result.edges
        )
        for label, count in sorted(labels.items()):
            console.key_value(label, count, indent=2)

        console.subheader("\nWorkflows")
        console.key_value("count", len(result.workflows), indent=2)
        return 0
