"""sysvista CLI - map the architecture of a codebase.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

from typing import Annotated

import tyro

from sysvista.cli.commands.scan import Scan
from sysvista.cli.commands.stats import Stats
from sysvista.cli.commands.workflows import Workflows
from sysvista.errors import SysVistaError

# Type aliases for subcommand annotations
_Scan = Annotated[Scan, tyro.conf.subcommand("scan")]
_Workflows = Annotated[Workflows, tyro.conf.subcommand("workflows")]
_Stats = Annotated[Stats, tyro.conf.subcommand("stats")]

Command = _Scan | _Workflows | _Stats


def main(args: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    # configure structlog (respects SYSVISTA_DEBUG env var)
    from sysvista.logging_config import configure_logging

    configure_logging()

    try:
        cmd = tyro.cli(
            Command,
            prog="sysvista",
            description="Statically map components, edges and workflows.",
            args=args,
        )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except SysVistaError as e:
        from sysvista import console

        console.error(str(e))
        return 1
