"""Flow pass - `handles`, `persists`, `transforms`, `consumes`, `produces`."""

from __future__ import annotations

import re
from collections import defaultdict

import structlog

from sysvista.config import ScanOptions
from sysvista.inference.edges import dedup_by_label
from sysvista.schema import Component, ComponentKind, Edge, EdgeLabel

logger = structlog.get_logger(__name__)


def declaration_window(content: str, line: int, after: int) -> str:
    """The declaration line plus the `after` lines that follow it."""
    lines = content.split("\n")
    start = max(line - 1, 0)
    return "\n".join(lines[start : start + after + 1])


def _mentioned_models(
    window: str,
    model_patterns: list[tuple[Component, re.Pattern[str]]],
) -> list[Component]:
    return [
        model
        for model, pattern in model_patterns
        if model.name in window and pattern.search(window)
    ]


def infer_flow_edges(
    components: list[Component],
    file_contents: dict[str, str],
    options: ScanOptions | None = None,
) -> list[Edge]:
    """Infer data-flow edges between transports, services and models."""
    options = options or ScanOptions()

    by_file: dict[str, list[Component]] = defaultdict(list)
    for comp in components:
        by_file[comp.file].append(comp)

    models = [c for c in components if c.kind == ComponentKind.MODEL]
    model_patterns = [
        (model, re.compile(rf"\b{re.escape(model.name)}\b"))
        for model in models
        if len(model.name) >= options.min_name_length
    ]

    # the last model declared under a name wins payload lookups
    model_by_name: dict[str, Component] = {}
    for model in models:
        model_by_name[model.name] = model

    edges: list[Edge] = []

    # services handle every transport declared next to them
    for file in sorted(by_file):
        file_components = by_file[file]
        services = [
            c for c in file_components if c.kind == ComponentKind.SERVICE
        ]
        transports = [
            c for c in file_components if c.kind == ComponentKind.TRANSPORT
        ]
        for service in services:
            for transport in transports:
                edges.append(
                    Edge(
                        from_id=service.id,
                        to_id=transport.id,
                        label=EdgeLabel.HANDLES,
                    )
                )

    window_labels = {
        ComponentKind.TRANSPORT: EdgeLabel.PERSISTS,
        ComponentKind.TRANSFORM: EdgeLabel.TRANSFORMS,
    }

    for comp in components:
        label = window_labels.get(comp.kind)
        if label is None:
            continue
        content = file_contents.get(comp.file)
        if content is None:
            continue

        window = declaration_window(content, comp.line, options.flow_window)
        for model in _mentioned_models(window, model_patterns):
            if model.id == comp.id:
                continue
            edges.append(Edge(from_id=comp.id, to_id=model.id, label=label))

    for transport in components:
        if transport.kind != ComponentKind.TRANSPORT:
            continue

        for type_name in transport.consumes or []:
            model = model_by_name.get(type_name)
            if model is not None and model.id != transport.id:
                edges.append(
                    Edge(
                        from_id=model.id,
                        to_id=transport.id,
                        label=EdgeLabel.CONSUMES,
                        payload_type=type_name,
                    )
                )

        for type_name in transport.produces or []:
            model = model_by_name.get(type_name)
            if model is not None and model.id != transport.id:
                edges.append(
                    Edge(
                        from_id=transport.id,
                        to_id=model.id,
                        label=EdgeLabel.PRODUCES,
                        payload_type=type_name,
                    )
                )

    result = dedup_by_label(edges)
    logger.debug("flow pass", raw=len(edges), edges=len(result))
    return result
