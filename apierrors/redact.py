from collections.abc import Iterable

REDACTION_MARKER = "[PII_REDACTED]"

# Always redacted, whatever else is configured
REDACT_HEADERS = ("Authorization",)


def redact(headers: Iterable[str], names: Iterable[str] = REDACT_HEADERS) -> list[str]:
    """Return a copy of `"<name> : <value>"` headers with sensitive values replaced.

    A header is sensitive when its text starts with `Authorization` or one of the extra
    `names`. The header keeps its own spelling of the name. Redacting twice changes nothing.
    """
    # Header names are case-insensitive, so `authorization : ...` must not slip through
    names = tuple(dict.fromkeys(name.lower() for name in (*REDACT_HEADERS, *names)))

    redacted = []
    for header in headers:
        lowered = header.lower()
        for name in names:
            if lowered.startswith(name):
                header = f"{header[: len(name)]} : {REDACTION_MARKER}"
                break
        redacted.append(header)

    return redacted
