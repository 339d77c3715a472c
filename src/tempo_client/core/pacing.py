"""
Client-side request pacing with a token bucket.
[CTX:PBI-1:1-10:PACE]

Pacing spreads requests out so a long paginated read does not burst past the
service's limits. It only delays requests before they are sent: it never
retries and never looks at responses.
"""
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

from .telemetry import TelemetryDecision, create_event, get_recorder

if TYPE_CHECKING:
    from .transport import RequestSpec

logger = logging.getLogger(__name__)


# [CTX:PBI-1:1-10:PACE] TimeProvider for testability
class TimeProvider(ABC):
    """Source of time and sleep, swappable for deterministic tests."""

    @abstractmethod
    def now(self) -> float:
        """Return current time in seconds."""
        pass

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block for the given number of seconds."""
        pass


class SystemTimeProvider(TimeProvider):
    """Real time provider using the monotonic clock."""

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class FakeTimeProvider(TimeProvider):
    """Fake time provider; sleeping advances the clock instantly."""

    def __init__(self, initial_time: float = 1000.0):
        self._current_time = initial_time
        self._lock = threading.Lock()
        self.sleep_history: list[float] = []

    def now(self) -> float:
        with self._lock:
            return self._current_time

    def sleep(self, seconds: float) -> None:
        with self._lock:
            self.sleep_history.append(seconds)
            self._current_time += seconds

    def advance(self, seconds: float) -> None:
        """Advance time by given seconds."""
        with self._lock:
            self._current_time += seconds


# [CTX:PBI-1:1-10:PACE] Token bucket
class TokenBucket:
    """
    Token bucket refilled continuously at a fixed rate.

    All time reads go through the injected TimeProvider.
    """

    def __init__(
        self,
        rate: float,
        capacity: int,
        time_provider: TimeProvider,
        initial_tokens: Optional[float] = None,
    ):
        """
        Args:
            rate: Refill rate in tokens per second
            capacity: Maximum tokens held (burst size)
            time_provider: Clock used for refills
            initial_tokens: Starting tokens (defaults to capacity)
        """
        self.rate = rate
        self.capacity = capacity
        self.time_provider = time_provider
        self._tokens = float(capacity if initial_tokens is None else initial_tokens)
        self._last_refill = time_provider.now()
        self._lock = threading.Lock()

    def _refill(self) -> None:
        now = self.time_provider.now()
        elapsed = now - self._last_refill
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._last_refill = now

    def consume(self, tokens: int = 1) -> bool:
        """Take tokens if available; return whether they were taken."""
        with self._lock:
            self._refill()
            if self._tokens >= tokens:
                self._tokens -= tokens
                return True
            return False

    def peek(self) -> float:
        """Current token count, after refilling."""
        with self._lock:
            self._refill()
            return self._tokens

    def time_until_tokens(self, tokens: int = 1) -> float:
        """Seconds until the requested tokens are available (0 if they are)."""
        with self._lock:
            self._refill()
            if self._tokens >= tokens:
                return 0.0
            return (tokens - self._tokens) / self.rate


# [CTX:PBI-1:1-10:PACE] Pacer used by the transport
class RequestPacer:
    """
    Blocks the calling thread until the bucket yields a token.

    One pacer is shared by every request a client sends.
    """

    def __init__(
        self,
        steady_rate: float,
        burst: int,
        time_provider: Optional[TimeProvider] = None,
    ):
        self.time_provider = time_provider or SystemTimeProvider()
        self.bucket = TokenBucket(steady_rate, burst, self.time_provider)

    def wait(self, request: "RequestSpec") -> float:
        """
        Wait for permission to send request.

        Returns:
            Seconds spent waiting
        """
        waited = 0.0
        while not self.bucket.consume(1):
            delay = self.bucket.time_until_tokens(1)
            self.time_provider.sleep(delay)
            waited += delay

        if waited > 0:
            logger.debug(
                f"[CTX:PBI-1:1-10:PACE] Delayed {request.method} {request.url} "
                f"by {waited:.3f}s"
            )
            get_recorder().record(
                create_event(
                    method=request.method,
                    url=request.url,
                    decision=TelemetryDecision.PACED,
                    sleep_s=waited,
                )
            )
        return waited
