"""
Body decoder interface.

Every call site that expects a typed result passes the decoder for that type
explicitly, so nothing has to guess the shape of a body at runtime.
"""
# [CTX:PBI-1:1-6:DECODE]

import json
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from .exceptions import DecodeError

T = TypeVar("T")


class BodyDecoder(ABC, Generic[T]):
    """Turns a successful response body into a typed value."""

    @abstractmethod
    def decode(self, body: str) -> T:
        """
        Decode a response body.

        Raises:
            DecodeError: If the body is not what this decoder expects
        """
        pass


def load_json(body: str) -> Any:
    """Parse JSON, converting parse errors into DecodeError."""
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Malformed JSON body: {e}") from e
