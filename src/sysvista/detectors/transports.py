"""Transport detection - http routes, grpc services, websocket handlers."""

from __future__ import annotations

import re
from dataclasses import dataclass

from sysvista.config import PAYLOAD_WINDOW_LINES, PRIMITIVE_TYPES
from sysvista.detectors._common import build_component, line_number
from sysvista.schema import Component, ComponentKind, TransportProtocol


@dataclass(frozen=True)
class RoutePattern:
    """An http route registration shape."""

    regex: re.Pattern[str]
    method_group: int
    path_group: int
    default_method: str = "GET"


# ---------------------------------------------------------------------------
# Route Extraction Patterns
# ---------------------------------------------------------------------------

HTTP_PATTERNS: tuple[RoutePattern, ...] = (
    # Express/Hono: router.get("/path", ...) or app.post("/path", ...)
    RoutePattern(
        re.compile(
            r"(?:router|app|server)\.(get|post|put|patch|delete|all)"
            r"\s*\(\s*['\"]([^'\"]+)['\"]",
            re.M,
        ),
        method_group=1,
        path_group=2,
    ),
    # NestJS: @Get("/path"), @Post("/path")
    RoutePattern(
        re.compile(
            r"@(Get|Post|Put|Patch|Delete)\s*\(\s*['\"]([^'\"]+)['\"]", re.M
        ),
        method_group=1,
        path_group=2,
    ),
    # FastAPI: @app.get("/path") or @router.post("/path")
    RoutePattern(
        re.compile(
            r"@(?:app|router|api)\.(get|post|put|patch|delete)"
            r"\s*\(\s*['\"]([^'\"]+)['\"]",
            re.M,
        ),
        method_group=1,
        path_group=2,
    ),
    # Spring: @GetMapping("/path"), @PostMapping(value = "/path")
    RoutePattern(
        re.compile(
            r"@(Get|Post|Put|Patch|Delete)Mapping\s*\(\s*(?:value\s*=\s*)?"
            r"['\"]([^'\"]+)['\"]",
            re.M,
        ),
        method_group=1,
        path_group=2,
    ),
    # Flask: @app.route("/path") or @bp.route("/path", methods=["POST"])
    RoutePattern(
        re.compile(
            r"@\w+\.route\s*\(\s*['\"]([^'\"]+)['\"]"
            r"(?:[^)\n]*?methods\s*=\s*[\[(]\s*['\"](\w+)['\"])?",
            re.M,
        ),
        method_group=2,
        path_group=1,
    ),
    # Gin/Echo: r.GET("/path", handler)
    RoutePattern(
        re.compile(
            r"\b\w+\.(GET|POST|PUT|PATCH|DELETE)\s*\(\s*\"([^\"]+)\"", re.M
        ),
        method_group=1,
        path_group=2,
    ),
)

GRPC_PATTERN = re.compile(r"^service\s+(\w+)\s*\{", re.M)

# group 1, when present, is the event name
WEBSOCKET_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b(?:WebSocket|ws|io)\s*\.\s*on\s*\(\s*['\"](\w+)['\"]", re.M),
    re.compile(r"@SubscribeMessage\s*\(\s*['\"]([\w:.-]+)['\"]", re.M),
    re.compile(r"@(?:sio|socketio)\.on\s*\(\s*['\"](\w+)['\"]", re.M),
    re.compile(r"@WebSocketGateway\b", re.M),
)

WEBSOCKET_PLACEHOLDER = "WebSocket"

# ---------------------------------------------------------------------------
# Payload Type Patterns
# ---------------------------------------------------------------------------

RESPONSE_MODEL_RE = re.compile(
    r"response_model\s*=\s*([A-Za-z_][\w.\[\], |]*\w\]?)"
)
BODY_PARAM_RE = re.compile(
    r"(\w+)\s*:\s*([A-Za-z_][\w.\[\]| ]*?)\s*=\s*Body\("
)
# `schemas.X` parameters without Body()
SCHEMA_PARAM_RE = re.compile(r"(\w+)\s*:\s*(schemas\.\w[\w.\[\]| ]*)")
RETURN_TYPE_RE = re.compile(r"\)\s*->\s*([A-Za-z_][\w.\[\], |]*\w\]?)\s*:")


def normalize_types(raw: str) -> list[str]:
    """Normalize a raw type expression into sorted model-like type names.

    Splits unions, unwraps one generic level, strips module prefixes and
    drops primitives and lowercase names.

    Examples:
        list[schemas.Message] -> ["Message"]
        Page[Peer] | None -> ["Peer"]
        dict[str, Item] -> ["Item"]
    """
    results: set[str] = set()

    for part in raw.split("|"):
        part = part.strip()
        if not part:
            continue

        inner = part
        open_pos = part.find("[")
        close_pos = part.rfind("]")
        if open_pos != -1 and close_pos > open_pos:
            inner = part[open_pos + 1 : close_pos]

        for item in inner.split(","):
            name = item.strip().rsplit(".", 1)[-1].strip()
            if not name or name.lower() in PRIMITIVE_TYPES:
                continue
            if name[0].isupper():
                results.add(name)

    return sorted(results)


def extract_payload_types(
    content: str, line: int, window: int = PAYLOAD_WINDOW_LINES
) -> tuple[list[str] | None, list[str] | None]:
    """Find (consumes, produces) type names in the lines after a route.

    The window starts at the route's 1-based `line`.
    """
    lines = content.split("\n")
    start = max(line - 1, 0)
    snippet = "\n".join(lines[start : start + window])

    consumes: list[str] = []
    produces: list[str] = []

    # response model -> produces
    match = RESPONSE_MODEL_RE.search(snippet)
    if match:
        produces.extend(normalize_types(match.group(1)))

    # Body(...) parameter -> consumes
    match = BODY_PARAM_RE.search(snippet)
    if match:
        consumes.extend(normalize_types(match.group(2)))

    if not consumes:
        for match in SCHEMA_PARAM_RE.finditer(snippet):
            consumes.extend(normalize_types(match.group(2)))

    if not produces:
        match = RETURN_TYPE_RE.search(snippet)
        if match:
            produces.extend(normalize_types(match.group(1)))

    return (sorted(set(consumes)) or None, sorted(set(produces)) or None)


def detect_transports(
    content: str,
    language: str,
    file: str,
    payload_window: int = PAYLOAD_WINDOW_LINES,
) -> list[Component]:
    """Detect transport entry points in a file."""
    components = []

    for route in HTTP_PATTERNS:
        for match in route.regex.finditer(content):
            method = (
                match.group(route.method_group) or route.default_method
            ).upper()
            path = match.group(route.path_group)
            line = line_number(content, match.start())
            consumes, produces = extract_payload_types(
                content, line, payload_window
            )

            components.append(
                build_component(
                    ComponentKind.TRANSPORT,
                    f"{method} {path}",
                    language,
                    file,
                    line,
                    transport_protocol=TransportProtocol.HTTP,
                    http_method=method,
                    http_path=path,
                    consumes=consumes,
                    produces=produces,
                )
            )

    if language == "protobuf":
        for match in GRPC_PATTERN.finditer(content):
            components.append(
                build_component(
                    ComponentKind.TRANSPORT,
                    match.group(1),
                    language,
                    file,
                    line_number(content, match.start()),
                    transport_protocol=TransportProtocol.GRPC,
                )
            )

    for pattern in WEBSOCKET_PATTERNS:
        for match in pattern.finditer(content):
            event = match.group(1) if pattern.groups else None
            components.append(
                build_component(
                    ComponentKind.TRANSPORT,
                    f"ws:{event or WEBSOCKET_PLACEHOLDER}",
                    language,
                    file,
                    line_number(content, match.start()),
                    transport_protocol=TransportProtocol.WEBSOCKET,
                )
            )

    return components
