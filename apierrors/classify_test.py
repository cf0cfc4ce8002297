from typing import Any

import pytest

from apierrors.classify import classify, collapse_headers, format_request_headers, format_response_headers
from apierrors.entity import StructuredError
from apierrors.error import ServiceError, Severity


def test_classify_fatal() -> None:
    error = _classify(response_code=503, response_message="Service Unavailable")

    assert error.severity is Severity.FATAL
    assert error.is_fatal
    assert error.method == "GET"
    assert error.url == "https://graph.example/v1.0/me"
    assert error.response_code == 503
    assert error.response_message == "Service Unavailable"


def test_classify_ordinary() -> None:
    error = _classify(response_code=404, response_message="Not Found")

    assert error.severity is Severity.ORDINARY
    assert not error.is_fatal


@pytest.mark.parametrize(
    ("response_code", "fatal"),
    [(400, False), (401, False), (429, False), (499, False), (500, True), (502, True), (599, True)],
)
def test_classify_boundary(response_code: int, fatal: bool) -> None:  # noqa: FBT001
    assert _classify(response_code=response_code).is_fatal is fatal


def test_classify_redacts_request_headers() -> None:
    error = _classify(request_headers=["Authorization : Bearer abc123", "Content-Type : application/json"])

    assert error.request_headers == ("Authorization : [PII_REDACTED]", "Content-Type : application/json")


def test_classify_redacts_custom_headers() -> None:
    error = _classify(
        request_headers=["Authorization : Bearer abc123", "Cookie : session=1"],
        redact_headers=["Authorization", "Cookie"],
    )

    assert error.request_headers == ("Authorization : [PII_REDACTED]", "Cookie : [PII_REDACTED]")


def test_classify_default_method_and_url() -> None:
    error = _classify(method=None, url=None)

    assert error.method == ""
    assert error.url == ""


def test_classify_response_headers() -> None:
    error = _classify(
        response_headers={
            "request-id": "1",
            "Content-Type": "application/json",
            "x-ThrowSite": "abc",
            "Date": "Mon, 01 Jan 2024 00:00:00 GMT",
        },
    )

    assert error.response_headers == (
        "Content-Type : application/json",
        "Date : Mon, 01 Jan 2024 00:00:00 GMT",
        "request-id : 1",
        "x-ThrowSite : abc",
    )


@pytest.mark.parametrize("argument", ["request_headers", "response_headers", "response_message"])
def test_classify_missing_argument(argument: str) -> None:
    with pytest.raises(TypeError):
        _classify(**{argument: None})


def test_collapse_headers() -> None:
    headers = [("Vary", "Accept"), ("content-type", "text/plain"), ("Content-Type", "application/json")]

    assert collapse_headers(headers) == {"content-type": "application/json", "Vary": "Accept"}


def test_collapse_headers_status_line() -> None:
    headers = [("Server", "test"), (None, "HTTP/1.1 503 Service Unavailable")]

    assert collapse_headers(headers) == {None: "HTTP/1.1 503 Service Unavailable", "Server": "test"}
    assert format_response_headers(collapse_headers(headers)) == [
        "HTTP/1.1 503 Service Unavailable",
        "Server : test",
    ]


def test_format_request_headers() -> None:
    headers = [("Accept", "*/*"), ("Accept", "application/json")]

    assert format_request_headers(headers) == ["Accept : */*", "Accept : application/json"]


def _classify(**kwargs: Any) -> ServiceError:  # noqa: ANN401
    arguments = {
        "method": "GET",
        "url": "https://graph.example/v1.0/me",
        "request_headers": [],
        "request_body": None,
        "response_headers": {},
        "response_message": "Bad Request",
        "response_code": 400,
        "error": StructuredError(code="badRequest", message="Invalid request"),
        "verbose": False,
    }
    return classify(**(arguments | kwargs))
