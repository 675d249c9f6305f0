"""Edge dedup and the shared merge rule for inference passes."""

from __future__ import annotations

from collections.abc import Iterable

from sysvista.schema import Edge, EdgeLabel


def dedup_by_pair(edges: Iterable[Edge]) -> list[Edge]:
    """Sort by (from, to) and keep the first edge of each pair.

    The sort is stable, so among edges sharing a pair the earliest emitted
    survives whatever its label.
    """
    result: list[Edge] = []
    seen: set[tuple[str, str]] = set()
    for edge in sorted(edges, key=lambda e: e.pair):
        if edge.pair not in seen:
            seen.add(edge.pair)
            result.append(edge)
    return result


def dedup_by_label(edges: Iterable[Edge]) -> list[Edge]:
    """Sort by (from, to, label) and keep the first edge of each triple."""
    result: list[Edge] = []
    seen: set[tuple[str, str, str]] = set()
    for edge in sorted(edges, key=lambda e: e.sort_key):
        if edge.sort_key not in seen:
            seen.add(edge.sort_key)
            result.append(edge)
    return result


def merge_edges(
    existing: list[Edge],
    new: Iterable[Edge],
    priority_labels: frozenset[EdgeLabel],
) -> list[Edge]:
    """Append `new` edges to `existing` under the priority rule.

    A new edge is kept when its label is a priority label, or when no
    existing edge connects the same (from, to) pair. Pairs are taken from
    `existing` only, so new edges never shadow each other.
    """
    pairs = {edge.pair for edge in existing}
    merged = list(existing)
    for edge in new:
        if edge.label in priority_labels or edge.pair not in pairs:
            merged.append(edge)
    return merged
