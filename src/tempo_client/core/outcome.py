"""
Single-shot request outcomes.

An Outcome wraps the result of one request: either a decoded value or the
status code and raw body of a failed request.
"""
# [CTX:PBI-1:1-5:OUTCOME]

import logging
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from .decoding import BodyDecoder
from .exceptions import ServerError
from .transport import Response

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of a single request.

    A successful outcome holds a value and an empty message. A failed one
    holds no value and the server's raw response body as message. Equality
    compares value, success and message.

    Attributes:
        value: Decoded value, None on failure
        success: True for 2xx responses
        code: HTTP status code
        message: Raw body of a failed response, empty on success
    """
    value: Optional[T]
    success: bool
    code: int = field(default=200, compare=False)
    message: str = ""

    @classmethod
    def ok(cls, value: T, code: int = 200) -> "Outcome[T]":
        return cls(value=value, success=True, code=code, message="")

    @classmethod
    def failure(cls, code: int, message: str) -> "Outcome[T]":
        return cls(value=None, success=False, code=code, message=message)

    def unwrap(self) -> T:
        """
        Return the value of a successful outcome.

        Raises:
            ServerError: If the outcome is a failure
        """
        if not self.success:
            raise ServerError(self.code, self.message)
        return self.value


def is_success(status_code: int) -> bool:
    """2xx is success, everything else is failure."""
    return status_code // 100 == 2


def classify(response: Response, decoder: BodyDecoder[T]) -> Outcome[T]:
    """
    Turn a response into an Outcome.

    The decoder only runs for 2xx responses; failure bodies are copied into
    the message verbatim, since servers may answer errors with plain text.

    Raises:
        DecodeError: If a 2xx body cannot be decoded
    """
    if not is_success(response.status_code):
        logger.debug(
            f"[CTX:PBI-1:1-5:OUTCOME] Request failed with {response.status_code}"
        )
        return Outcome.failure(response.status_code, response.body)

    return Outcome.ok(decoder.decode(response.body), code=response.status_code)
