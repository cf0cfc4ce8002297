import json
from typing import TYPE_CHECKING

from apierrors.type import JsonTypes

if TYPE_CHECKING:
    from apierrors.error import ServiceError

NEW_LINE = "\n"

# How truncated values are shown
TRUNCATION_MARKER = "[...]"

# Maximum length of a single line when being brief
MAX_BREVITY_LENGTH = 50

# Response headers shown when being brief
THROW_SITE_PREFIX = "x-throwsite"

TRUNCATION_ADVISORY = "[Some information was truncated for brevity, enable debug logging for more details]"
RENDER_WARNING = "[Warning: Unable to parse error message body]"


def truncate(value: str, length: int = MAX_BREVITY_LENGTH) -> str:
    if len(value) <= length:
        return value
    return value[:length] + TRUNCATION_MARKER


def pretty_payload(raw_payload: JsonTypes) -> str:
    try:
        return json.dumps(raw_payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return RENDER_WARNING


def render_message(error: "ServiceError", *, verbose: bool) -> str:
    """Render a human-readable description of `error`.

    Brief mode truncates request headers, hides the request body, keeps only the
    `x-throwsite` response headers and replaces the payload with an advisory.
    Verbose mode shows everything, including the decoded error payload.
    """
    parts = []

    payload = error.payload
    if payload is not None and payload.code is not None and payload.message is not None:
        parts += [f"Error code: {payload.code}", NEW_LINE]
        parts += [f"Error message: {payload.message}", NEW_LINE]
        parts += [NEW_LINE]

    # Request
    parts += [f"{error.method} {error.url}", NEW_LINE]
    for header in error.request_headers:
        parts += [header if verbose else truncate(header), NEW_LINE]
    if error.request_body is not None:
        parts += [error.request_body if verbose else TRUNCATION_MARKER]
    parts += [NEW_LINE, NEW_LINE]

    # Response
    parts += [f"{error.response_code} : {error.response_message}", NEW_LINE]
    for header in error.response_headers:
        if verbose or header.lower().startswith(THROW_SITE_PREFIX):
            parts += [header, NEW_LINE]

    if not verbose:
        parts += [TRUNCATION_MARKER, NEW_LINE, NEW_LINE, TRUNCATION_ADVISORY]
    elif payload is not None and payload.raw_payload is not None:
        parts += [pretty_payload(payload.raw_payload), NEW_LINE]

    return "".join(parts)
