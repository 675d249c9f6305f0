"""Relationship inference over the whole component set.

Three passes run in order and are merged into one edge list:

- structural: imports and name references, one edge per (from, to)
- flow: handles/persists/transforms plus payload consumes/produces
- call: calls and background dispatches out of transports

A flow or call edge is added when its label is a payload/call label or
when no earlier edge connects the same pair.
"""

from __future__ import annotations

import structlog

from sysvista.config import ScanOptions
from sysvista.inference.calls import infer_call_edges
from sysvista.inference.edges import (
    dedup_by_label,
    dedup_by_pair,
    merge_edges,
)
from sysvista.inference.flow import infer_flow_edges
from sysvista.inference.structural import infer_structural_edges
from sysvista.schema import CALL_LABELS, PAYLOAD_LABELS, Component, Edge

logger = structlog.get_logger(__name__)


def infer_edges(
    components: list[Component],
    file_contents: dict[str, str],
    options: ScanOptions | None = None,
) -> list[Edge]:
    """Run every inference pass and merge the results."""
    options = options or ScanOptions()

    edges = infer_structural_edges(components, file_contents, options)
    structural_count = len(edges)

    flow = infer_flow_edges(components, file_contents, options)
    edges = merge_edges(edges, flow, PAYLOAD_LABELS)

    calls = infer_call_edges(components, file_contents, options)
    edges = merge_edges(edges, calls, CALL_LABELS)

    logger.debug(
        "edges inferred",
        structural=structural_count,
        flow=len(flow),
        calls=len(calls),
        total=len(edges),
    )
    return edges


__all__ = [
    "dedup_by_label",
    "dedup_by_pair",
    "infer_call_edges",
    "infer_edges",
    "infer_flow_edges",
    "infer_structural_edges",
    "merge_edges",
]
