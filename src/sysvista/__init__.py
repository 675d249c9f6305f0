from sysvista.config import ScanOptions
from sysvista.errors import OutputWriteError, RootNotFoundError, SysVistaError
from sysvista.inference import infer_edges
from sysvista.keys import make_id, workflow_id
from sysvista.language import detect_language
from sysvista.scanner import scan
from sysvista.schema import (
    Component,
    ComponentKind,
    Edge,
    EdgeLabel,
    ScanOutput,
    ScanStats,
    StepType,
    TransportProtocol,
    Workflow,
    WorkflowStep,
)
from sysvista.workflows import infer_workflows
from sysvista.writer import write_json

__all__ = [
    "Component",
    "ComponentKind",
    "Edge",
    "EdgeLabel",
    "OutputWriteError",
    "RootNotFoundError",
    "ScanOptions",
    "ScanOutput",
    "ScanStats",
    "StepType",
    "SysVistaError",
    "TransportProtocol",
    "Workflow",
    "WorkflowStep",
    "detect_language",
    "infer_edges",
    "infer_workflows",
    "make_id",
    "scan",
    "workflow_id",
    "write_json",
]
