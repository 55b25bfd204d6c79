"""Response dispatch and the asynchronous status protocol."""

from ._dispatcher import (
    MEDIA_CALENDAR,
    MEDIA_CSV,
    MEDIA_HTML,
    MEDIA_JSON,
    MEDIA_PDF,
    MEDIA_SPREADSHEET,
    ResponseDispatcher,
)
from ._envelope import ResponseEnvelope, StatusCode, parse_envelope

__all__ = [
    "MEDIA_CALENDAR",
    "MEDIA_CSV",
    "MEDIA_HTML",
    "MEDIA_JSON",
    "MEDIA_PDF",
    "MEDIA_SPREADSHEET",
    "ResponseDispatcher",
    "ResponseEnvelope",
    "StatusCode",
    "parse_envelope",
]
