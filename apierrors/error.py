from collections.abc import Iterable
from enum import Enum
from functools import partial

from httpx import codes

from apierrors.entity import StructuredError
from apierrors.redact import REDACT_HEADERS, redact
from apierrors.render import render_message

# Status codes from this one on are server or infrastructure failures
INTERNAL_SERVER_ERROR = codes.INTERNAL_SERVER_ERROR


class Severity(str, Enum):
    """How upstream policy should treat a service error."""

    ORDINARY = "ordinary"
    FATAL = "fatal"

    @classmethod
    def from_status(cls, status_code: int) -> "Severity":
        if status_code >= INTERNAL_SERVER_ERROR:
            return cls.FATAL
        return cls.ORDINARY


class ServiceError(Exception):
    """Failed HTTP exchange with a service.

    Holds the request and response context needed to debug the failure. Request headers
    are redacted before they are stored, so nothing read from the error exposes them.
    `str(error)` renders the message in the mode chosen at construction; `message()`
    can override it.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        method: str | None,
        url: str | None,
        request_headers: Iterable[str],
        request_body: str | None,
        response_code: int,
        response_message: str,
        response_headers: Iterable[str],
        payload: StructuredError | None,
        verbose: bool,
        redact_headers: Iterable[str] = REDACT_HEADERS,
    ) -> None:
        if request_headers is None:
            raise TypeError("Expecting `request_headers` to be provided. Got: None")
        if response_message is None:
            raise TypeError("Expecting `response_message` to be provided. Got: None")
        if response_headers is None:
            raise TypeError("Expecting `response_headers` to be provided. Got: None")

        super().__init__(response_message)

        self._method = method or ""
        self._url = url or ""
        self._request_headers = tuple(redact(request_headers, redact_headers))
        self._request_body = request_body
        self._response_code = response_code
        self._response_message = response_message
        self._response_headers = tuple(response_headers)
        self._payload = payload
        self._verbose = verbose
        self._severity = Severity.from_status(response_code)

    @property
    def method(self) -> str:
        return self._method

    @property
    def url(self) -> str:
        return self._url

    @property
    def request_headers(self) -> tuple[str, ...]:
        """Request headers as `"<name> : <value>"`, sensitive values redacted."""
        return self._request_headers

    @property
    def request_body(self) -> str | None:
        return self._request_body

    @property
    def response_code(self) -> int:
        return self._response_code

    @property
    def response_message(self) -> str:
        return self._response_message

    @property
    def response_headers(self) -> tuple[str, ...]:
        return self._response_headers

    @property
    def payload(self) -> StructuredError | None:
        """Copy of the structured error returned by the service."""
        if self._payload is None:
            return None
        return self._payload.model_copy(deep=True)

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def is_fatal(self) -> bool:
        return self._severity is Severity.FATAL

    def message(self, verbose: bool | None = None) -> str:
        if verbose is None:
            verbose = self._verbose
        return render_message(self, verbose=verbose)

    def __str__(self) -> str:
        return self.message()

    def __reduce__(self) -> tuple:
        rebuild = partial(
            type(self),
            method=self._method,
            url=self._url,
            request_headers=self._request_headers,
            request_body=self._request_body,
            response_code=self._response_code,
            response_message=self._response_message,
            response_headers=self._response_headers,
            payload=self._payload,
            verbose=self._verbose,
        )
        return rebuild, ()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(severity={self._severity.value!r}, method={self._method!r}, "
            f"url={self._url!r}, response_code={self._response_code!r})"
        )
