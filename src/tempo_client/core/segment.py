"""
One page of a paginated read.

A Segment is built from a successful response by composing two independent
steps: decoding the body into points, and reading the continuation URL out of
the Link header.
"""
# [CTX:PBI-1:1-3:SEGMENT]

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .decoding import BodyDecoder
from .exceptions import ServerError
from .links import find_next_url
from .transport import Response

P = TypeVar("P")

LINK_HEADER = "Link"


def parse_continuation(headers: Iterable[tuple[str, str]]) -> Optional[str]:
    """
    Find the rel="next" URL in the first Link header, matched case-insensitively.

    Returns:
        The continuation URL, or None when this is the last page
    """
    for name, value in headers:
        if name.lower() == LINK_HEADER.lower():
            return find_next_url(value)
    return None


def decode_body(body: str, decoder: BodyDecoder[list[P]]) -> list[P]:
    """Decode a page body into its points."""
    return list(decoder.decode(body))


@dataclass
class Segment(Generic[P]):
    """
    A single page of points.

    Attributes:
        data: Points in server order
        next_url: Continuation URL, None on the final page
    """
    data: list[P]
    next_url: Optional[str] = None

    def __post_init__(self):
        if not self.next_url:
            self.next_url = None

    @property
    def is_final(self) -> bool:
        return self.next_url is None

    def __iter__(self) -> Iterator[P]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    @classmethod
    def from_response(cls, response: Response, decoder: BodyDecoder[list[P]]) -> "Segment[P]":
        """
        Build a Segment from a successful response.

        Raises:
            ServerError: If the response is not a 2xx
            DecodeError: If the body is malformed
        """
        if not response.ok:
            raise ServerError(response.status_code, response.body)
        return cls(
            data=decode_body(response.body, decoder),
            next_url=parse_continuation(response.headers),
        )
