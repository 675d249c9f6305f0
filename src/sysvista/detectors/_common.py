"""Helpers shared by the component detectors."""

from __future__ import annotations

from pathlib import PurePosixPath

from sysvista.config import SERVICE_DIRS
from sysvista.keys import make_id
from sysvista.schema import (
    Component,
    ComponentKind,
    SourceLocation,
    TransportProtocol,
)


def line_number(content: str, pos: int) -> int:
    """1-based line of a character offset."""
    return content.count("\n", 0, pos) + 1


def is_service_dir(file: str) -> bool:
    """Check whether any path segment is a conventional service directory."""
    return any(
        part.lower() in SERVICE_DIRS for part in PurePosixPath(file).parts
    )


def build_component(
    kind: ComponentKind,
    name: str,
    language: str,
    file: str,
    line: int,
    *,
    metadata: dict[str, str] | None = None,
    transport_protocol: TransportProtocol | None = None,
    http_method: str | None = None,
    http_path: str | None = None,
    member_fields: list[str] | None = None,
    consumes: list[str] | None = None,
    produces: list[str] | None = None,
) -> Component:
    """Construct a component with its deterministic id."""
    return Component(
        id=make_id(kind.value, name, file),
        name=name,
        kind=kind,
        language=language,
        source=SourceLocation(file=file, line_start=line),
        metadata=metadata or {},
        transport_protocol=transport_protocol,
        http_method=http_method,
        http_path=http_path,
        member_fields=member_fields,
        consumes=consumes,
        produces=produces,
    )
