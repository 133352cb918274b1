"""Error taxonomy for the minFraud client."""

UNCLASSIFIED = "UNCLASSIFIED"
TRANSPORT_ERROR = "TRANSPORT_ERROR"


class MinfraudError(Exception):
    """Base class for everything the client raises."""


class ValidationError(MinfraudError, ValueError):
    """A transaction attribute is missing or has the wrong type."""


class ProtocolError(MinfraudError):
    """The request did not produce a scored response.

    ``code`` is the provider's error code, or ``UNCLASSIFIED`` when the
    body could not be decoded at all.
    """

    def __init__(self, code: str, message: str = "") -> None:
        self.code = code
        self.message = message or code
        super().__init__(f"{self.code}: {self.message}")


class TransportError(ProtocolError):
    """Network failure, timeout or non-2xx status from the service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(TRANSPORT_ERROR, message)
