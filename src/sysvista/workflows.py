"""Workflow reconstruction - request paths walked out from each transport."""

from __future__ import annotations

from collections import defaultdict

import structlog

from sysvista.keys import workflow_id
from sysvista.schema import (
    Component,
    ComponentKind,
    Edge,
    EdgeLabel,
    StepType,
    Workflow,
    WorkflowStep,
)

logger = structlog.get_logger(__name__)

_PERSIST_LABELS = frozenset({EdgeLabel.PERSISTS, EdgeLabel.TRANSFORMS})


class _StepBuilder:
    """Collects steps with gapless order, each component at most once."""

    def __init__(self, entry: Component):
        self.steps: list[WorkflowStep] = []
        self.seen: set[str] = set()
        self.add(entry.id, StepType.ENTRY)

    def add(self, component_id: str, step_type: StepType) -> None:
        if component_id in self.seen:
            return
        self.seen.add(component_id)
        self.steps.append(
            WorkflowStep(
                component_id=component_id,
                step_type=step_type,
                order=len(self.steps),
            )
        )


def build_adjacency(
    edges: list[Edge],
) -> dict[str, list[tuple[str, EdgeLabel]]]:
    """Map source id to its (target id, label) pairs in edge order."""
    outgoing: dict[str, list[tuple[str, EdgeLabel]]] = defaultdict(list)
    for edge in edges:
        if edge.label is not None:
            outgoing[edge.from_id].append((edge.to_id, edge.label))
    return dict(outgoing)


def workflow_name(transport: Component) -> str:
    if transport.http_method and transport.http_path:
        return f"{transport.http_method} {transport.http_path}"
    return transport.name


def infer_workflows(
    components: list[Component], edges: list[Edge]
) -> list[Workflow]:
    """Reconstruct one workflow per transport that reaches anything.

    Steps, in order: the transport itself, its call targets, what those
    targets persist or transform, what the transport persists or
    transforms directly, its dispatched tasks, and finally the models it
    responds with. Workflows are sorted by step count, largest first.
    """
    outgoing = build_adjacency(edges)

    model_ids: dict[str, str] = {}
    for comp in components:
        if comp.kind == ComponentKind.MODEL:
            model_ids[comp.name] = comp.id

    workflows: list[Workflow] = []

    for transport in components:
        if transport.kind != ComponentKind.TRANSPORT:
            continue

        own_edges = outgoing.get(transport.id, [])
        builder = _StepBuilder(transport)

        call_targets = [
            to for to, label in own_edges if label == EdgeLabel.CALLS
        ]
        for target in call_targets:
            builder.add(target, StepType.CALL)

        for target in call_targets:
            for to, label in outgoing.get(target, []):
                if label in _PERSIST_LABELS:
                    builder.add(to, StepType.PERSIST)

        for to, label in own_edges:
            if label in _PERSIST_LABELS:
                builder.add(to, StepType.PERSIST)

        for to, label in own_edges:
            if label == EdgeLabel.DISPATCHES:
                builder.add(to, StepType.DISPATCH)

        for type_name in transport.produces or []:
            model_id = model_ids.get(type_name)
            if model_id is not None:
                builder.add(model_id, StepType.RESPONSE)

        if len(builder.steps) <= 1:
            continue

        workflows.append(
            Workflow(
                id=workflow_id(transport.id),
                name=workflow_name(transport),
                entry_point_id=transport.id,
                steps=builder.steps,
            )
        )

    # sorted() is stable, ties keep transport order
    workflows = sorted(workflows, key=lambda w: len(w.steps), reverse=True)
    logger.debug("workflows inferred", count=len(workflows))
    return workflows
