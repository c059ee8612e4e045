from __future__ import annotations

from typing import Optional


class SuplAPIError(Exception):
    """Base class for every failure surfaced by the Supla API client."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class HTTPError(SuplAPIError):
    """The transport reported a failure (network error or non-2xx status).

    Transport detail is not part of the message; it is only reachable through
    ``cause`` / ``__cause__``.
    """

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        super().__init__("HTTP Error", cause)


class LocalIOError(SuplAPIError):
    """Local I/O failure unrelated to the network call."""

    def __init__(self, cause: OSError) -> None:
        super().__init__(f"IO Error: {cause}", cause)


class JSONError(SuplAPIError):
    """Response body is not JSON or does not have the expected shape."""

    def __init__(self, diagnostic: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"JSON Error: {diagnostic}", cause)
        self.diagnostic = diagnostic


class JSONPathError(SuplAPIError):
    """Navigation into a JSON value failed."""

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        super().__init__("JSON Path Error", cause)


class InvalidParameter(SuplAPIError):
    """A caller supplied parameter was rejected."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid Parameter: {message}")
        self.parameter_message = message


class TransportError(Exception):
    """Raised by HTTP transports. Converted to HTTPError by the client."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
