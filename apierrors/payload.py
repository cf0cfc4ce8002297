import json
from collections.abc import Callable
from dataclasses import dataclass
from email.message import Message
from typing import TypeVar

import httpx
from pydantic import BaseModel

from apierrors.entity import ErrorResponse, InnerError, StructuredError
from apierrors.type import HeaderContext

ModelT = TypeVar("ModelT", bound=BaseModel)

Decoder = Callable[[bytes, type[ModelT], HeaderContext], ModelT]

PARSE_FAILURE_CODE = "Unable to parse error response message"
RAW_ERROR_PREFIX = "Raw error: "


@dataclass(frozen=True)
class ParseResult:
    """Outcome of decoding an error body.

    `error` is always present: the decoded error, or a fallback carrying the raw body text
    and the decoder's failure description (also kept in `failure`).
    """

    error: StructuredError
    failure: str | None = None

    @property
    def parsed(self) -> bool:
        return self.failure is None


def content_charset(headers: HeaderContext, default: str = "utf-8") -> str:
    """Charset named by the `Content-Type` header, if any."""
    content_type = httpx.Headers([(name, value) for name, values in headers.items() for value in values])
    if "content-type" not in content_type:
        return default

    message = Message()
    message["content-type"] = content_type.get_list("content-type")[0]
    return message.get_content_charset(default)


def decode_json(raw: bytes, shape: type[ModelT], headers: HeaderContext) -> ModelT:
    """Decode JSON `raw` bytes into `shape` using the response charset."""
    text = raw.decode(content_charset(headers))
    return shape.model_validate(json.loads(text))


def parse_error_response(
    raw: bytes,
    headers: HeaderContext,
    decoder: Decoder = decode_json,
) -> ParseResult:
    """Decode error body `raw` into a structured error, never raising."""
    try:
        response = decoder(raw, ErrorResponse, headers)
        error = response.error.model_copy(update={"raw_payload": response.raw_payload})
    except Exception as exc:  # noqa: BLE001
        failure = str(exc)
        error = StructuredError(
            code=PARSE_FAILURE_CODE,
            message=RAW_ERROR_PREFIX + raw.decode("utf-8", errors="replace"),
            inner_error=InnerError(code=failure),
        )
        return ParseResult(error=error, failure=failure)

    return ParseResult(error=error)
