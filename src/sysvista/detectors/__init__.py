"""Component detectors.

Each detector is a pure function of (file text, language tag, relative
path) returning the components it recognizes. Unmatched patterns yield
nothing; detectors never raise for content problems.
"""

from __future__ import annotations

from sysvista.config import PAYLOAD_WINDOW_LINES
from sysvista.detectors.models import detect_models, extract_fields
from sysvista.detectors.services import detect_services
from sysvista.detectors.transforms import detect_transforms
from sysvista.detectors.transports import (
    detect_transports,
    normalize_types,
)
from sysvista.schema import Component


def detect_components(
    content: str,
    language: str,
    file: str,
    payload_window: int = PAYLOAD_WINDOW_LINES,
) -> list[Component]:
    """Run every detector family over one file, in a fixed order."""
    components: list[Component] = []
    components.extend(detect_models(content, language, file))
    components.extend(detect_services(content, language, file))
    components.extend(
        detect_transports(content, language, file, payload_window)
    )
    components.extend(detect_transforms(content, language, file))
    return components


__all__ = [
    "detect_components",
    "detect_models",
    "detect_services",
    "detect_transforms",
    "detect_transports",
    "extract_fields",
    "normalize_types",
]
