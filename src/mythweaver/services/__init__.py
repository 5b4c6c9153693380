"""External services consumed by the engine."""

from mythweaver.services.narration import (
    HttpOpeningNarrator,
    OpeningNarrator,
    OpeningRequest,
    OpeningResponse,
    PlaceholderOpeningNarrator,
    build_narrator,
    fetch_opening,
)

__all__ = [
    "HttpOpeningNarrator",
    "OpeningNarrator",
    "OpeningRequest",
    "OpeningResponse",
    "PlaceholderOpeningNarrator",
    "build_narrator",
    "fetch_opening",
]
