import json
import logging
from typing import Any

import httpx
from fast_depends import inject
from pydantic import BaseModel

from apierrors.classify import classify, collapse_headers, format_request_headers
from apierrors.error import ServiceError
from apierrors.payload import Decoder, decode_json, parse_error_response
from apierrors.render import TRUNCATION_MARKER
from apierrors.settings import ApiErrorSettings

# Number of bytes shown when being brief about a binary request body
MAX_BYTE_COUNT_BEFORE_TRUNCATION = 8


def format_request_body(payload: Any, *, verbose: bool) -> str | None:  # noqa: ANN401
    """Render the payload that was sent with the failed request."""
    if payload is None:
        return None

    if isinstance(payload, bytes | bytearray):
        values = list(payload)
        if not verbose and len(values) > MAX_BYTE_COUNT_BEFORE_TRUNCATION:
            values = [*values[:MAX_BYTE_COUNT_BEFORE_TRUNCATION], TRUNCATION_MARKER]
        return f"byte[{len(payload)}] {{{', '.join(map(str, values))}}}"

    if isinstance(payload, str):
        return payload

    if isinstance(payload, BaseModel):
        return payload.model_dump_json()

    return json.dumps(payload, default=str)


class ServiceErrorFactory:
    @inject
    def __init__(self, settings: ApiErrorSettings, decoder: Decoder = decode_json) -> None:
        self.settings = settings
        self.decoder = decoder
        self.logger = logging.getLogger("apierrors")

    @property
    def verbose(self) -> bool:
        """Configured verbosity, or whether debug logging is enabled."""
        if self.settings.verbose is not None:
            return self.settings.verbose
        return self.logger.isEnabledFor(logging.DEBUG)

    def from_response(self, response: httpx.Response, payload: Any = None) -> ServiceError:  # noqa: ANN401
        """Build the service error for a failed `response`.

        `payload` is the object sent with the request, used to describe the request body.
        The response body is read once and the response is closed on every path.
        """
        request = response.request
        verbose = self.verbose

        try:
            raw = response.read()
        finally:
            response.close()

        self.logger.debug("Received error response: %s %s", response.status_code, response.reason_phrase)

        headers = response.headers
        context = {name: headers.get_list(name) for name in headers.keys()}  # noqa: SIM118
        result = parse_error_response(raw, context, self.decoder)
        if not result.parsed:
            self.logger.debug("Unable to parse error response: %s", result.failure)

        encoding = request.headers.encoding
        request_headers = format_request_headers(
            (name.decode(encoding), value.decode(encoding)) for name, value in request.headers.raw
        )
        response_headers = collapse_headers(
            (name.decode(headers.encoding), value.decode(headers.encoding)) for name, value in headers.raw
        )

        error = classify(
            method=request.method,
            url=str(request.url),
            request_headers=request_headers,
            request_body=format_request_body(payload, verbose=verbose),
            response_headers=response_headers,
            response_message=response.reason_phrase,
            response_code=response.status_code,
            error=result.error,
            verbose=verbose,
            redact_headers=self.settings.redact_headers,
        )

        self.logger.debug("Created %s service error: %r", error.severity.value, error)

        return error

    def raise_for_status(self, response: httpx.Response, payload: Any = None) -> httpx.Response:  # noqa: ANN401
        """Return successful `response`, raise a service error for a failed one."""
        if response.status_code < httpx.codes.BAD_REQUEST:
            return response
        raise self.from_response(response, payload)
