"""Error taxonomy shared by the relay endpoint and the stream consumer."""


class RelayError(Exception):
    """Base class for chat relay failures."""

    pass


class ValidationError(RelayError):
    """Raised when a relay request is missing required input."""

    pass


class UpstreamError(RelayError):
    """Raised when the upstream chat service cannot be reached or read.

    Attributes:
        status_code: HTTP status returned by upstream, if one was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(RelayError):
    """Raised when an SSE frame does not carry a JSON object."""

    pass
