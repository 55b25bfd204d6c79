"""Status envelopes for asynchronous (fetch/XHR) responses.

Clients read ``statusCode`` first and dispatch on it:

| code | meaning                          | payload field          |
|------|----------------------------------|------------------------|
| 0    | failure                          | ``error`` / ``errors`` |
| 1    | success                          | optional ``redirect``  |
| 5    | reload the current page          | none                   |
| 6    | navigate to a URL                | ``redirectTo``         |

Code 0 is also used with ``msg`` to show a message without treating the
call as successful. Unknown codes are read as failure.
"""

from collections.abc import Iterable, Mapping
from enum import IntEnum
from typing import ClassVar, Self

import orjson
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)


class StatusCode(IntEnum):
    """Fixed status vocabulary understood by clients."""

    FAILURE = 0
    SUCCESS = 1
    RELOAD = 5
    REDIRECT = 6

    @classmethod
    def coerce(cls, value: object) -> Self:
        """Read a wire value, mapping anything unknown to FAILURE."""
        if isinstance(value, bool):
            return cls.FAILURE
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.FAILURE


_PAYLOAD_FIELDS = ("error", "errors", "msg", "redirect", "redirect_to")


class ResponseEnvelope(BaseModel):
    """One status response. Built per response and never stored.

    Attributes:
        status_code: Status from the fixed vocabulary (``statusCode``).
        error: Single failure detail.
        errors: Several failure details.
        msg: Message for the user.
        redirect: Follow-up location for a successful call.
        redirect_to: Location the client must navigate to (``redirectTo``).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore"
    )

    status_code: StatusCode = Field(default=StatusCode.FAILURE, alias="statusCode")
    error: str | None = None
    errors: tuple[str, ...] | None = None
    msg: str | None = None
    redirect: str | None = None
    redirect_to: str | None = Field(default=None, alias="redirectTo")

    @field_validator("status_code", mode="before")
    @classmethod
    def _coerce_status(cls, value: object) -> StatusCode:
        return StatusCode.coerce(value)

    @field_validator("error", "msg", mode="before")
    @classmethod
    def _as_text(cls, value: object) -> object:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("errors", mode="before")
    @classmethod
    def _as_texts(cls, value: object) -> object:
        if isinstance(value, list | tuple):
            return tuple(str(item) for item in value)
        return value

    @model_validator(mode="after")
    def _single_payload(self, info: ValidationInfo) -> Self:
        if info.context and info.context.get("lenient"):
            return self
        present = [name for name in _PAYLOAD_FIELDS if getattr(self, name) is not None]
        if len(present) > 1:
            msg = f"envelope carries more than one payload field: {present}"
            raise ValueError(msg)
        return self

    @classmethod
    def for_success(cls, redirect: str | None = None) -> Self:
        return cls(status_code=StatusCode.SUCCESS, redirect=redirect)

    @classmethod
    def for_error(cls, detail: object) -> Self:
        return cls(status_code=StatusCode.FAILURE, error=str(detail))

    @classmethod
    def for_errors(cls, errors: Iterable[object]) -> Self:
        return cls(status_code=StatusCode.FAILURE, errors=tuple(str(e) for e in errors))

    @classmethod
    def for_message(cls, text: str) -> Self:
        return cls(status_code=StatusCode.FAILURE, msg=text)

    @classmethod
    def for_redirect(cls, target: str) -> Self:
        return cls(status_code=StatusCode.REDIRECT, redirect_to=target)

    @classmethod
    def for_reload(cls) -> Self:
        return cls(status_code=StatusCode.RELOAD)

    @property
    def ok(self) -> bool:
        return self.status_code is not StatusCode.FAILURE

    def to_json(self) -> bytes:
        """Serialize compactly, omitting absent payload fields.

        Examples:
            >>> ResponseEnvelope.for_redirect("/dashboard").to_json()
            b'{"statusCode":6,"redirectTo":"/dashboard"}'
        """
        return orjson.dumps(
            self.model_dump(mode="json", by_alias=True, exclude_none=True)
        )


def parse_envelope(payload: bytes | str | Mapping[str, object]) -> ResponseEnvelope:
    """Read an envelope the way a conforming client does.

    Parsing is lenient: the status code is read first, payload values are
    converted to text, and an envelope carrying several payload fields is
    accepted as is. Envelopes built on the server side still carry at most
    one payload field.

    Args:
        payload: Raw JSON or an already decoded object.

    Returns:
        The envelope. Unknown or missing status codes read as FAILURE.

    Raises:
        orjson.JSONDecodeError: If a raw payload is not valid JSON.
        pydantic.ValidationError: If the payload is not an envelope object.
    """
    data = orjson.loads(payload) if isinstance(payload, bytes | str) else payload
    return ResponseEnvelope.model_validate(data, context={"lenient": True})
