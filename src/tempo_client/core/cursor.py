"""
Lazy pagination over Link-continued responses.
[CTX:PBI-1:1-4:CURSOR]

A Cursor turns one logical read into a forward-only sequence of points that
may span any number of HTTP responses. It is an explicit state machine:

    FETCHING --2xx--> YIELDING --drained, next url--> FETCHING
    FETCHING --non-2xx--> FAILED
    YIELDING --drained, no next url--> EXHAUSTED

Requests are only sent from advance(), one at a time, so a caller that stops
pulling leaves nothing in flight. Nothing is retried.
"""
import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Generic, Optional, TypeVar
from urllib.parse import parse_qs, urljoin, urlsplit

from .decoding import BodyDecoder
from .exceptions import DecodeError, ServerError, TempoError, TransportError
from .outcome import Outcome, is_success
from .segment import Segment
from .telemetry import TelemetryDecision, create_event, get_recorder
from .transport import RequestSpec, Transport

logger = logging.getLogger(__name__)

P = TypeVar("P")


class CursorState(Enum):
    """Cursor lifecycle states."""
    FETCHING = "fetching"
    YIELDING = "yielding"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class StepKind(Enum):
    POINT = "point"
    END = "end"
    FAILED = "failed"


@dataclass(frozen=True)
class Step(Generic[P]):
    """
    Result of one Cursor.advance() call.

    Attributes:
        kind: What happened
        value: The point, for POINT steps
        failure: The failed Outcome, for FAILED steps
    """
    kind: StepKind
    value: Optional[P] = None
    failure: Optional[Outcome] = None

    @classmethod
    def of(cls, value: P) -> "Step[P]":
        return cls(kind=StepKind.POINT, value=value)

    @classmethod
    def end(cls) -> "Step[P]":
        return cls(kind=StepKind.END)

    @classmethod
    def failed(cls, failure: Outcome) -> "Step[P]":
        return cls(kind=StepKind.FAILED, failure=failure)

    @property
    def is_point(self) -> bool:
        return self.kind is StepKind.POINT


class Cursor(Generic[P]):
    """
    Forward-only, single-pass sequence of points across pages.

    Use advance() for explicit steps where a server failure comes back as a
    FAILED step, or iterate normally, in which case a server failure raises
    ServerError. Transport and decode errors are raised either way.

    Attributes:
        state: Current CursorState
        failure: Failed Outcome once the cursor is FAILED by a server error
        pages: Number of responses decoded so far
    """

    def __init__(
        self,
        transport: Transport,
        request: RequestSpec,
        decoder: BodyDecoder[list[P]],
        reattach_params: bool = False,
    ):
        """
        Args:
            transport: Executes each page request
            request: Request for the first page
            decoder: Decodes a page body into points
            reattach_params: Re-add the first request's query parameters
                to continuation URLs that do not carry them
        """
        self.transport = transport
        self.decoder = decoder
        self.reattach_params = reattach_params
        self.state = CursorState.FETCHING
        self.failure: Optional[Outcome] = None
        self.pages = 0

        self._initial = request
        self._pending: Optional[RequestSpec] = request
        self._segment: Optional[Segment[P]] = None
        self._position = 0
        self._error: Optional[TempoError] = None

    def __repr__(self) -> str:
        return (
            f"Cursor(url={self._initial.url!r}, state={self.state.value}, "
            f"pages={self.pages})"
        )

    def advance(self) -> Step[P]:
        """
        Produce the next step.

        Returns:
            A POINT step, an END step once exhausted, or a FAILED step when a
            page request got a non-2xx response. Terminal steps repeat.

        Raises:
            TransportError: If a page request could not be completed
            DecodeError: If a page body is malformed
        """
        while True:
            if self.state is CursorState.EXHAUSTED:
                return Step.end()

            if self.state is CursorState.FAILED:
                if self._error is not None:
                    raise self._error
                return Step.failed(self.failure)

            if self.state is CursorState.FETCHING:
                self._fetch()
                continue

            segment = self._segment
            if self._position < len(segment.data):
                point = segment.data[self._position]
                self._position += 1
                return Step.of(point)

            self._segment = None
            self._position = 0
            if segment.next_url is None:
                logger.debug(
                    f"[CTX:PBI-1:1-4:CURSOR] Exhausted after {self.pages} page(s)"
                )
                self.state = CursorState.EXHAUSTED
            else:
                self._pending = self._continuation_request(segment.next_url)
                self.state = CursorState.FETCHING

    def __iter__(self) -> "Cursor[P]":
        return self

    def __next__(self) -> P:
        step = self.advance()
        if step.kind is StepKind.POINT:
            return step.value
        if step.kind is StepKind.END:
            raise StopIteration
        raise ServerError(step.failure.code, step.failure.message)

    def _fetch(self) -> None:
        request = self._pending
        self._pending = None
        page = self.pages + 1

        start = time.monotonic()
        try:
            response = self.transport.execute(request)
        except TempoError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = TransportError(f"{type(e).__name__}: {e}")
            self._fail(error)
            raise error from e
        elapsed_ms = (time.monotonic() - start) * 1000

        if not is_success(response.status_code):
            self.failure = Outcome.failure(response.status_code, response.body)
            self.state = CursorState.FAILED
            logger.warning(
                f"[CTX:PBI-1:1-4:CURSOR] Page {page} of {self._initial.url} "
                f"failed with {response.status_code}"
            )
            self._record(request, TelemetryDecision.FAILED, response.status_code,
                         elapsed_ms, page, 0)
            return

        try:
            segment = Segment.from_response(response, self.decoder)
        except TempoError as e:
            self._fail(e)
            raise
        except Exception as e:
            error = DecodeError(f"{type(e).__name__}: {e}")
            self._fail(error)
            raise error from e

        self.pages = page
        self._segment = segment
        self._position = 0
        self.state = CursorState.YIELDING

        decision = TelemetryDecision.FINAL if segment.is_final else TelemetryDecision.PAGE
        self._record(request, decision, response.status_code, elapsed_ms, page, len(segment))

    def _fail(self, error: TempoError) -> None:
        self._error = error
        self.state = CursorState.FAILED
        logger.error(f"[CTX:PBI-1:1-4:CURSOR] Aborting {self._initial.url}: {error}")

    def _continuation_request(self, next_url: str) -> RequestSpec:
        """Build the request for a continuation URL, honoring it verbatim."""
        url = urljoin(self._initial.url, next_url)
        params = {}
        if self.reattach_params:
            parts = urlsplit(url)
            present = parse_qs(parts.query, keep_blank_values=True)
            # Some servers append parameters to the path with "&" and no "?"
            present.update(parse_qs(parts.path.partition("&")[2], keep_blank_values=True))
            params = {
                key: value
                for key, value in self._initial.query_params.items()
                if key not in present
            }
        return replace(
            self._initial,
            url=url,
            headers=dict(self._initial.headers),
            query_params=params,
        )

    @staticmethod
    def _record(request, decision, status, elapsed_ms, page, points) -> None:
        get_recorder().record(
            create_event(
                method=request.method,
                url=request.url,
                decision=decision,
                status=status,
                elapsed_ms=elapsed_ms,
                page=page,
                points=points,
            )
        )


def open_cursor(
    transport: Transport,
    request: RequestSpec,
    decoder: BodyDecoder[list[P]],
    reattach_params: bool = False,
) -> Cursor[P]:
    """Open a lazy cursor; no request is sent until the first pull."""
    return Cursor(transport, request, decoder, reattach_params=reattach_params)
