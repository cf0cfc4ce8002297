from collections.abc import Iterable, Mapping

from apierrors.entity import StructuredError
from apierrors.error import ServiceError
from apierrors.redact import REDACT_HEADERS


def format_header(name: str | None, value: str) -> str:
    if name is None:
        return value
    return f"{name} : {value}"


def format_request_headers(headers: Iterable[tuple[str, str]]) -> list[str]:
    return [format_header(name, value) for name, value in headers]


def collapse_headers(headers: Iterable[tuple[str | None, str]]) -> dict[str | None, str]:
    """Collapse header pairs into a case-insensitive name -> value map, sorted by name.

    Later values win. The first spelling of a name is kept.
    A `None` name (status-line pseudo header) sorts first.
    """
    collapsed: dict[str | None, tuple[str | None, str]] = {}
    for name, value in headers:
        key = None if name is None else name.lower()
        first_name = collapsed[key][0] if key in collapsed else name
        collapsed[key] = (first_name, value)

    ordered = sorted(collapsed.items(), key=lambda item: (item[0] is not None, item[0] or ""))
    return dict(pair for _, pair in ordered)


def format_response_headers(headers: Mapping[str | None, str]) -> list[str]:
    """Format response headers as `"<name> : <value>"`, ignoring name case."""
    return [format_header(name, value) for name, value in collapse_headers(headers.items()).items()]


def classify(  # noqa: PLR0913
    *,
    method: str | None,
    url: str | None,
    request_headers: Iterable[str],
    request_body: str | None,
    response_headers: Mapping[str | None, str],
    response_message: str,
    response_code: int,
    error: StructuredError | None,
    verbose: bool,
    redact_headers: Iterable[str] = REDACT_HEADERS,
) -> ServiceError:
    """Build the ordinary or fatal service error for a failed exchange.

    Request headers are `"<name> : <value>"` strings and are redacted on construction.
    The severity tag is fatal for `response_code >= 500` and ordinary otherwise.
    """
    if response_headers is None:
        raise TypeError("Expecting `response_headers` to be provided. Got: None")

    return ServiceError(
        method=method,
        url=url,
        request_headers=request_headers,
        request_body=request_body,
        response_code=response_code,
        response_message=response_message,
        response_headers=format_response_headers(response_headers),
        payload=error,
        verbose=verbose,
        redact_headers=redact_headers,
    )
