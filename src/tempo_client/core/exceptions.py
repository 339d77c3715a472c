"""
Exception hierarchy for the time-series client.

Transport failures happen before a response exists, server failures carry the
status code and raw body of a non-2xx response, and decode failures mean a 2xx
body could not be turned into domain objects.
"""
# [CTX:PBI-1:1-1:ERR]


class TempoError(Exception):
    """Base class for all client errors."""


class TransportError(TempoError):
    """Raised when a request could not be completed (connection, timeout)."""


class ServerError(TempoError):
    """
    Raised when the service answers with a non-2xx status.

    Attributes:
        code: HTTP status code
        message: Raw response body, unparsed
    """

    def __init__(self, code: int, message: str):
        super().__init__(f"HTTP {code}: {message}")
        self.code = code
        self.message = message


class DecodeError(TempoError):
    """Raised when a successful response body is malformed."""


class ConfigValidationError(TempoError, ValueError):
    """Raised when client configuration is invalid."""
