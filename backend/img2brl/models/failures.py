"""Failure taxonomy for a single conversion request.

Every expected failure is a ``ConversionFailure``; ``kind`` is the symbolic
name emitted by the structured renderer. Anything else reaching the request
handler is an internal error.
"""

from __future__ import annotations

# See RFC 2616, section 10
HTTP_REASONS: dict[int, str] = {
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
}
GENERIC_FETCH_REASON = "Fetch Failed"


class ConversionFailure(Exception):
    kind = "ConversionFailure"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FetchFailed(ConversionFailure):
    """Remote acquisition did not produce an image."""

    kind = "FetchFailed"
    status_code = 502


class HttpFetchFailed(FetchFailed):
    kind = "HttpFetchFailed"

    def __init__(self, upstream_status: int) -> None:
        self.upstream_status = upstream_status
        super().__init__(f"HTTP error {upstream_status} ({reason_phrase(upstream_status)})")
        # Surface the upstream status when it is a client or server error
        if 400 <= upstream_status < 600:
            self.status_code = upstream_status


class TransportError(FetchFailed):
    """DNS, TLS, connection, timeout or redirect-cap failure; no usable status."""

    kind = "TransportError"


class UnsupportedFormat(ConversionFailure):
    kind = "UnsupportedFormat"
    status_code = 415


class MalformedTactileOutput(ConversionFailure):
    kind = "MalformedTactileOutput"

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class ConverterFailed(ConversionFailure):
    """The external converter could not be run or exited unsuccessfully."""

    kind = "ConverterFailed"


class InvalidOption(ConversionFailure):
    """A request option could not be parsed. Recovered locally, never rendered."""

    kind = "InvalidOption"

    def __init__(self, field: str, value: object = None) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid value for {field}: {value!r}")


class InternalError(ConversionFailure):
    """Stand-in for an unanticipated exception; details go to the log only."""

    kind = "InternalError"

    def __init__(self, message: str = "internal error") -> None:
        super().__init__(message)


def reason_phrase(status: int) -> str:
    return HTTP_REASONS.get(status, GENERIC_FETCH_REASON)
