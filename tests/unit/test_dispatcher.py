"""Unit tests for response dispatch."""

from pathlib import Path

import orjson
import pytest
from pydantic import BaseModel

from viewrender.config import CorsConfig
from viewrender.dispatch import (
    MEDIA_CALENDAR,
    MEDIA_CSV,
    MEDIA_PDF,
    MEDIA_SPREADSHEET,
    ResponseDispatcher,
)
from viewrender.exceptions import InvalidArgumentError


@pytest.fixture
def dispatcher() -> ResponseDispatcher:
    return ResponseDispatcher()


class Point(BaseModel):
    x: int
    y: int


class TestHtml:
    def test_content_type_and_cors(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.html("<p>hi</p>")

        assert response.body == b"<p>hi</p>"
        assert response.headers["content-type"].startswith("text/html")
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_no_disposition(self, dispatcher: ResponseDispatcher) -> None:
        assert "content-disposition" not in dispatcher.html("").headers


class TestJson:
    def test_serializes_objects(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.json({"a": [1, 2]})

        assert orjson.loads(response.body) == {"a": [1, 2]}
        assert response.headers["content-type"] == "application/json"
        assert response.headers["access-control-allow-methods"] == (
            "POST, GET, OPTIONS, PUT, DELETE"
        )

    def test_passes_bytes_through(self, dispatcher: ResponseDispatcher) -> None:
        assert dispatcher.json(b'{"raw":true}').body == b'{"raw":true}'

    def test_serializes_models(self, dispatcher: ResponseDispatcher) -> None:
        assert orjson.loads(dispatcher.json(Point(x=1, y=2)).body) == {"x": 1, "y": 2}

    def test_custom_cors(self) -> None:
        dispatcher = ResponseDispatcher(
            CorsConfig(
                allow_origin="https://app.example",
                allow_methods=("GET",),
                allow_credentials=False,
            )
        )

        response = dispatcher.json({})

        assert response.headers["access-control-allow-origin"] == "https://app.example"
        assert response.headers["access-control-allow-methods"] == "GET"
        assert "access-control-allow-credentials" not in response.headers


class TestAttachments:
    def test_csv(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.csv([["name", "total"], ["Ada, L", 3]], "report.csv")

        assert response.body == b'name,total\n"Ada, L",3\n'
        assert response.headers["content-type"].startswith(MEDIA_CSV)
        assert response.headers["content-disposition"] == (
            "attachment; filename=report.csv"
        )

    def test_calendar(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.calendar("BEGIN:VCALENDAR\r\nEND:VCALENDAR", "event.ics")

        assert response.headers["content-type"].startswith(MEDIA_CALENDAR)
        assert response.headers["content-disposition"] == (
            "attachment; filename=event.ics"
        )

    def test_spreadsheet(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.spreadsheet(b"<Workbook/>", "data.xls")

        assert response.body == b"<Workbook/>"
        assert response.headers["content-type"] == MEDIA_SPREADSHEET
        assert response.headers["content-disposition"] == (
            "attachment; filename=data.xls"
        )

    def test_filename_with_line_break_rejected(
        self, dispatcher: ResponseDispatcher
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="line breaks"):
            _ = dispatcher.csv([], "a\r\nSet-Cookie: x=1")


class TestPdf:
    def test_pdf_file_named_by_last_segment(
        self, dispatcher: ResponseDispatcher, tmp_path: Path
    ) -> None:
        path = tmp_path / "docs" / "statement.pdf"
        path.parent.mkdir()
        _ = path.write_bytes(b"%PDF-1.4")

        response = dispatcher.pdf_file(path)

        assert response.body == b"%PDF-1.4"
        assert response.headers["content-type"] == MEDIA_PDF
        assert response.headers["content-disposition"] == (
            "inline; filename=statement.pdf"
        )

    def test_missing_pdf_raises(
        self, dispatcher: ResponseDispatcher, tmp_path: Path
    ) -> None:
        with pytest.raises(OSError):  # noqa: PT011
            _ = dispatcher.pdf_file(tmp_path / "missing.pdf")

    def test_pdf_bytes(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.pdf_bytes("invoice.pdf", b"%PDF")

        assert response.headers["content-disposition"] == "inline; filename=invoice.pdf"


class TestBinary:
    def test_no_type_or_disposition(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.binary(b"\x00\x01")

        assert response.body == b"\x00\x01"
        assert "content-type" not in response.headers
        assert "content-disposition" not in response.headers


class TestStatusProtocol:
    def test_report_redirect(self, dispatcher: ResponseDispatcher) -> None:
        response = dispatcher.report_redirect("/dashboard")

        assert response.body == b'{"statusCode":6,"redirectTo":"/dashboard"}'
        assert response.headers["content-type"] == "application/json"

    def test_report_success(self, dispatcher: ResponseDispatcher) -> None:
        assert dispatcher.report_success().body == b'{"statusCode":1}'

    def test_report_success_with_redirect(self, dispatcher: ResponseDispatcher) -> None:
        assert dispatcher.report_success("/next").body == (
            b'{"statusCode":1,"redirect":"/next"}'
        )

    def test_report_reload(self, dispatcher: ResponseDispatcher) -> None:
        assert dispatcher.report_reload().body == b'{"statusCode":5}'

    def test_report_error(self, dispatcher: ResponseDispatcher) -> None:
        assert dispatcher.report_error("nope").body == (
            b'{"statusCode":0,"error":"nope"}'
        )

    def test_report_errors(self, dispatcher: ResponseDispatcher) -> None:
        assert dispatcher.report_errors(["a", "b"]).body == (
            b'{"statusCode":0,"errors":["a","b"]}'
        )

    def test_report_message(self, dispatcher: ResponseDispatcher) -> None:
        assert dispatcher.report_message("hi").body == b'{"statusCode":0,"msg":"hi"}'
