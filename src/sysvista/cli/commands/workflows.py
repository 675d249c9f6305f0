"""Workflows command - print reconstructed request paths."""

from __future__ import annotations

from dataclasses import dataclass, field

from sysvista import console
from sysvista.cli._common import ScanArgs


@dataclass
class Workflows(ScanArgs):
    """Scan a project and list the workflows found behind its transports."""

    limit: int | None = field(
        default=None,
        metadata={"help": "Show at most this many workflows"},
    )

    def run(self) -> int:
        """Execute the workflows command."""
        result = self.run_scan()

        if not result.workflows:
            console.dim("no workflows found")
            return 0

        names = {c.id: c for c in result.components}
        shown = result.workflows
        if self.limit:
            shown = shown[: self.limit]

        console.header(f"Workflows ({len(result.workflows)})")
        for workflow in shown:
            console.subheader(f"\n{workflow.name}")
            for step in workflow.steps:
                comp = names.get(step.component_id)
                label = comp.name if comp else step.component_id
                location = f"{comp.file}:{comp.line}" if comp else ""
                console.print(
                    f"  {step.order:>2}. [bold]{step.step_type.value:<8}[/bold]"
                    f" {label} [dim]{location}[/dim]"
                )

        if self.limit and len(result.workflows) > self.limit:
            console.dim(f"\n... and {len(result.workflows) - self.limit} more")
        return 0
