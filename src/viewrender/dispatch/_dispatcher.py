"""Response dispatch by content kind."""

import csv
import io
from collections.abc import Iterable, Sequence
from os import PathLike
from pathlib import Path

import orjson
from fastapi import Response
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

from viewrender.config import CorsConfig
from viewrender.exceptions import InvalidArgumentError
from viewrender.templating import lookup_name

from ._envelope import ResponseEnvelope

MEDIA_HTML = "text/html"
MEDIA_JSON = "application/json"
MEDIA_CSV = "text/csv"
MEDIA_CALENDAR = "text/calendar"
MEDIA_SPREADSHEET = "application/vnd.ms-excel"
MEDIA_PDF = "application/pdf"


def _disposition(kind: str, filename: str) -> str:
    if "\r" in filename or "\n" in filename:
        msg = f"filename must not contain line breaks: {filename!r}"
        raise InvalidArgumentError(msg)
    return f"{kind}; filename={filename}"


class ResponseDispatcher:
    """Builds responses for every output kind the views produce.

    Each method returns a complete FastAPI/Starlette ``Response``; payloads
    are fully in memory before the response exists, so a failed read can
    never produce a truncated download.

    | kind        | content-type              | disposition          |
    |-------------|---------------------------|----------------------|
    | html        | text/html                 | inline               |
    | json        | application/json          | inline               |
    | csv         | text/csv                  | attachment; filename |
    | calendar    | text/calendar             | attachment; filename |
    | spreadsheet | application/vnd.ms-excel  | attachment; filename |
    | pdf         | application/pdf           | inline; filename     |
    | binary      | (none)                    | (none)               |
    """

    def __init__(self, cors: CorsConfig | None = None) -> None:
        self._cors: CorsConfig = cors if cors is not None else CorsConfig()

    def _credentials(self) -> dict[str, str]:
        if self._cors.allow_credentials:
            return {"Access-Control-Allow-Credentials": "true"}
        return {}

    def html(self, content: str) -> Response:
        """Send a rendered page or fragment."""
        headers = {
            **self._credentials(),
            "Access-Control-Allow-Origin": self._cors.allow_origin,
        }
        return HTMLResponse(content, headers=headers)

    def json(self, data: bytes | object) -> Response:
        """Send JSON. Bytes are passed through as already serialized JSON."""
        if isinstance(data, bytes):
            body = data
        elif isinstance(data, BaseModel):
            body = orjson.dumps(data.model_dump(mode="json", by_alias=True))
        else:
            body = orjson.dumps(data)
        headers = {
            **self._credentials(),
            "Access-Control-Allow-Methods": ", ".join(self._cors.allow_methods),
            "Access-Control-Allow-Origin": self._cors.allow_origin,
        }
        return Response(body, media_type=MEDIA_JSON, headers=headers)

    def csv(self, records: Iterable[Sequence[object]], filename: str) -> Response:
        """Send rows as a CSV attachment."""
        buffer = io.StringIO()
        csv.writer(buffer, lineterminator="\n").writerows(records)
        return self._attachment(buffer.getvalue(), MEDIA_CSV, filename)

    def calendar(self, calendar: str, filename: str) -> Response:
        """Send an iCalendar document as an attachment."""
        return self._attachment(calendar, MEDIA_CALENDAR, filename)

    def spreadsheet(self, xls: str | bytes, filename: str) -> Response:
        """Send an Office XML spreadsheet as an attachment."""
        return self._attachment(xls, MEDIA_SPREADSHEET, filename)

    def pdf_file(self, path: str | PathLike[str]) -> Response:
        """Send a PDF from disk, named after its last path segment.

        Serving through here rather than linking the file keeps the document
        behind whatever checks guard the calling route.

        Raises:
            OSError: If the file cannot be read. No response is built.
        """
        data = Path(path).read_bytes()
        return self.pdf_bytes(lookup_name(str(path)), data)

    def pdf_bytes(self, filename: str, data: bytes) -> Response:
        """Send an in-memory PDF inline."""
        headers = {
            **self._credentials(),
            "Content-Disposition": _disposition("inline", filename),
        }
        return Response(data, media_type=MEDIA_PDF, headers=headers)

    def binary(self, data: bytes) -> Response:
        """Send bytes with no content type or disposition."""
        return Response(data)

    def _attachment(self, content: str | bytes, media_type: str, filename: str) -> Response:
        headers = {
            **self._credentials(),
            "Content-Disposition": _disposition("attachment", filename),
        }
        return Response(content, media_type=media_type, headers=headers)

    # Status protocol

    def envelope(self, envelope: ResponseEnvelope) -> Response:
        return self.json(envelope.to_json())

    def report_success(self, redirect: str | None = None) -> Response:
        """``{"statusCode":1}``, optionally with a ``redirect`` location."""
        return self.envelope(ResponseEnvelope.for_success(redirect))

    def report_error(self, detail: object) -> Response:
        """``{"statusCode":0,"error":...}``."""
        return self.envelope(ResponseEnvelope.for_error(detail))

    def report_errors(self, errors: Iterable[object]) -> Response:
        """``{"statusCode":0,"errors":[...]}``."""
        return self.envelope(ResponseEnvelope.for_errors(errors))

    def report_message(self, text: str) -> Response:
        """``{"statusCode":0,"msg":...}``."""
        return self.envelope(ResponseEnvelope.for_message(text))

    def report_redirect(self, target: str) -> Response:
        """``{"statusCode":6,"redirectTo":...}``: the client navigates away."""
        return self.envelope(ResponseEnvelope.for_redirect(target))

    def report_reload(self) -> Response:
        """``{"statusCode":5}``: the client reloads the current page."""
        return self.envelope(ResponseEnvelope.for_reload())
