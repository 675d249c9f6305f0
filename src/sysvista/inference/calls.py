"""Call pass - `calls` and `dispatches` edges out of transports.

Only files declaring at least one transport are read. Call sites in the
lines after each transport are resolved through the file's import aliases
first, and by component name otherwise.
"""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from pathlib import PurePosixPath

import structlog

from sysvista.config import AWAIT_DENYLIST, CALL_RECEIVER_DENYLIST, ScanOptions
from sysvista.inference.edges import dedup_by_label
from sysvista.inference.flow import declaration_window
from sysvista.schema import Component, ComponentKind, Edge, EdgeLabel

logger = structlog.get_logger(__name__)

# from pkg import a, b as c / from pkg import (a, b)
FROM_IMPORT_RE = re.compile(
    r"^[ \t]*from\s+([\w.]+)\s+import\s+(\([^)]*\)|[^\n]+)", re.M
)
# import pkg.mod as m
IMPORT_AS_RE = re.compile(r"^[ \t]*import\s+([\w.]+)\s+as\s+(\w+)", re.M)

ATTR_CALL_RE = re.compile(r"(?<![\w.])([A-Za-z_]\w*)\.([A-Za-z_]\w*)\s*\(")
ADD_TASK_RE = re.compile(r"background_tasks\.add_task\(\s*([A-Za-z_]\w*)")
AWAIT_CALL_RE = re.compile(r"\bawait\s+([A-Za-z_]\w*)\s*\(")


@dataclass(frozen=True)
class ImportAlias:
    """A local name bound by an import.

    `module` is the dotted path the name was imported from, `name` the
    imported member itself.
    """

    module: str
    name: str

    @property
    def path(self) -> str:
        """Dotted path of the imported object."""
        return ".".join(p for p in (self.module, self.name) if p)


def _last_segment(dotted: str) -> str:
    return dotted.rsplit(".", 1)[-1]


def parse_aliases(content: str) -> dict[str, ImportAlias]:
    """Map local names to what they import."""
    aliases: dict[str, ImportAlias] = {}

    for match in FROM_IMPORT_RE.finditer(content):
        module = match.group(1).lstrip(".")
        names = match.group(2).strip().strip("()")
        for item in names.split(","):
            item = item.split("#", 1)[0].strip()
            if not item or item == "*":
                continue
            parts = item.split()
            if len(parts) == 3 and parts[1] == "as":
                aliases[parts[2]] = ImportAlias(module, parts[0])
            elif len(parts) == 1:
                aliases[parts[0]] = ImportAlias(module, parts[0])

    for match in IMPORT_AS_RE.finditer(content):
        dotted = match.group(1)
        module, _, name = dotted.rpartition(".")
        aliases[match.group(2)] = ImportAlias(module, name)

    return aliases


def build_module_index(components: list[Component]) -> dict[str, set[str]]:
    """Index declaring files by file stem and by parent directory name."""
    index: dict[str, set[str]] = defaultdict(set)
    for comp in components:
        path = PurePosixPath(comp.file)
        index[path.stem].add(comp.file)
        if path.parent.name:
            index[path.parent.name].add(comp.file)
    return dict(index)


class CallResolver:
    """Resolve call-site names to components."""

    def __init__(self, components: list[Component]):
        self.module_index = build_module_index(components)
        self.by_name: dict[str, list[Component]] = defaultdict(list)
        for comp in components:
            self.by_name[comp.name].append(comp)

    def in_module(self, module: str, name: str) -> list[Component]:
        """Components named `name` declared in files of `module`."""
        files = self.module_index.get(_last_segment(module), set())
        return [c for c in self.by_name.get(name, []) if c.file in files]

    def unique(self, name: str) -> list[Component]:
        """The single component with this name, or nothing if ambiguous."""
        matches = self.by_name.get(name, [])
        return matches if len(matches) == 1 else []

    def all_named(self, name: str) -> list[Component]:
        return list(self.by_name.get(name, []))

    def attribute_call(
        self, receiver: str, fn: str, aliases: dict[str, ImportAlias]
    ) -> list[Component]:
        alias = aliases.get(receiver)
        if alias is not None:
            found = self.in_module(alias.path, fn)
            if found:
                return found
        return self.unique(fn)

    def bare_call(
        self, fn: str, aliases: dict[str, ImportAlias]
    ) -> list[Component]:
        alias = aliases.get(fn)
        if alias is not None and alias.module:
            found = self.in_module(alias.module, alias.name)
            if found:
                return found
        return self.unique(fn)


def _calls_in_window(
    window: str,
    resolver: CallResolver,
    aliases: dict[str, ImportAlias],
) -> list[tuple[Component, EdgeLabel]]:
    targets: list[tuple[Component, EdgeLabel]] = []

    for match in ATTR_CALL_RE.finditer(window):
        receiver, fn = match.group(1), match.group(2)
        if receiver in CALL_RECEIVER_DENYLIST:
            continue
        for target in resolver.attribute_call(receiver, fn, aliases):
            targets.append((target, EdgeLabel.CALLS))

    for match in ADD_TASK_RE.finditer(window):
        for target in resolver.all_named(match.group(1)):
            targets.append((target, EdgeLabel.DISPATCHES))

    for match in AWAIT_CALL_RE.finditer(window):
        fn = match.group(1)
        if fn in AWAIT_DENYLIST:
            continue
        for target in resolver.bare_call(fn, aliases):
            targets.append((target, EdgeLabel.CALLS))

    return targets


def infer_call_edges(
    components: list[Component],
    file_contents: dict[str, str],
    options: ScanOptions | None = None,
) -> list[Edge]:
    """Infer `calls`/`dispatches` edges from transports to what they invoke."""
    options = options or ScanOptions()

    transports_by_file: dict[str, list[Component]] = defaultdict(list)
    for comp in components:
        if comp.kind == ComponentKind.TRANSPORT:
            transports_by_file[comp.file].append(comp)

    if not transports_by_file:
        return []

    resolver = CallResolver(components)
    edges: list[Edge] = []

    for file in sorted(transports_by_file):
        content = file_contents.get(file)
        if content is None:
            continue
        aliases = parse_aliases(content)

        for transport in transports_by_file[file]:
            window = declaration_window(
                content, transport.line, options.call_window
            )
            for target, label in _calls_in_window(window, resolver, aliases):
                if target.id == transport.id:
                    continue
                edges.append(
                    Edge(from_id=transport.id, to_id=target.id, label=label)
                )

    result = dedup_by_label(edges)
    logger.debug(
        "call pass",
        files=len(transports_by_file),
        raw=len(edges),
        edges=len(result),
    )
    return result
