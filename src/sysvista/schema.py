"""Data model for scan results.

Components, edges and workflows are referenced only by id. Optional fields
are left as None and dropped on serialization.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from sysvista.config import OUTPUT_VERSION


class ComponentKind(str, Enum):
    MODEL = "model"
    SERVICE = "service"
    TRANSPORT = "transport"
    TRANSFORM = "transform"


class TransportProtocol(str, Enum):
    HTTP = "http"
    GRPC = "grpc"
    WEBSOCKET = "websocket"


class StepType(str, Enum):
    ENTRY = "entry"
    CALL = "call"
    PERSIST = "persist"
    DISPATCH = "dispatch"
    RESPONSE = "response"


class EdgeLabel(str, Enum):
    IMPORTS = "imports"
    REFERENCES = "references"
    HANDLES = "handles"
    PERSISTS = "persists"
    TRANSFORMS = "transforms"
    CONSUMES = "consumes"
    PRODUCES = "produces"
    CALLS = "calls"
    DISPATCHES = "dispatches"


# metadata is an open str->str map, but these are the only keys and values
# the detectors write
class MetadataKey(str, Enum):
    DETECTION = "detection"


class Detection(str, Enum):
    DECORATOR = "decorator"
    DIRECTORY_CONVENTION = "directory_convention"


PAYLOAD_LABELS = frozenset({EdgeLabel.CONSUMES, EdgeLabel.PRODUCES})
CALL_LABELS = frozenset({EdgeLabel.CALLS, EdgeLabel.DISPATCHES})


class SourceLocation(BaseModel):
    file: str
    line_start: int | None = None
    line_end: int | None = None


class Component(BaseModel):
    """A recognized structural unit of the scanned codebase."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    kind: ComponentKind
    language: str
    source: SourceLocation
    metadata: dict[str, str] = Field(default_factory=dict)
    transport_protocol: TransportProtocol | None = None
    http_method: str | None = None
    http_path: str | None = None
    # serialized as `model_fields`
    member_fields: list[str] | None = Field(
        default=None, alias="model_fields"
    )
    consumes: list[str] | None = None
    produces: list[str] | None = None

    @field_validator("consumes", "produces")
    @classmethod
    def _normalize_payload(cls, value: list[str] | None) -> list[str] | None:
        # sorted, deduplicated and never empty - absent instead
        if not value:
            return None
        return sorted(set(value))

    @property
    def file(self) -> str:
        return self.source.file

    @property
    def line(self) -> int:
        return self.source.line_start or 1


class Edge(BaseModel):
    """A directed, labeled relationship between two components."""

    from_id: str
    to_id: str
    label: EdgeLabel | None = None
    payload_type: str | None = None

    @model_validator(mode="after")
    def _check_edge(self) -> Edge:
        if self.from_id == self.to_id:
            raise ValueError(f"self edge on {self.from_id}")
        if self.payload_type is not None and self.label not in PAYLOAD_LABELS:
            raise ValueError("payload_type is only valid on consumes/produces")
        return self

    @property
    def pair(self) -> tuple[str, str]:
        return (self.from_id, self.to_id)

    @property
    def sort_key(self) -> tuple[str, str, str]:
        label = self.label.value if self.label else ""
        return (self.from_id, self.to_id, label)


class WorkflowStep(BaseModel):
    component_id: str
    step_type: StepType
    order: int


class Workflow(BaseModel):
    """An ordered request-handling path starting at a transport."""

    id: str
    name: str
    entry_point_id: str
    steps: list[WorkflowStep] = Field(default_factory=list)


class ScanStats(BaseModel):
    files_scanned: int = 0
    files_skipped: int = 0
    scan_duration_ms: int = 0


class ScanOutput(BaseModel):
    """The complete document produced by one scan."""

    version: str = OUTPUT_VERSION
    scanned_at: str
    root_dir: str
    project_name: str
    detected_languages: list[str] = Field(default_factory=list)
    components: list[Component] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)
    workflows: list[Workflow] = Field(default_factory=list)
    scan_stats: ScanStats = Field(default_factory=ScanStats)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict, omitting absent optional fields."""
        return self.model_dump(mode="json", exclude_none=True, by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(
            indent=indent, exclude_none=True, by_alias=True
        )

    def graph_dict(self) -> dict[str, Any]:
        """The wall-clock-independent part of the document."""
        data = self.to_dict()
        data.pop("scanned_at", None)
        data["scan_stats"].pop("scan_duration_ms", None)
        return data
