"""
Structured telemetry for requests issued by the client.
[CTX:PBI-1:1-9:TELEM]

This module records one event per HTTP round-trip so callers can see:
- How many pages a cursor walked and how many points each page held
- Which requests failed and with what status
- Latency per request
- Delays introduced by request pacing
"""
import json
import logging
import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class TelemetryLevel(Enum):
    """Telemetry verbosity levels."""
    INFO = "info"
    DEBUG = "debug"


class TelemetryDecision(Enum):
    """What the client did with a request."""
    PAGE = "page"        # Segment decoded, continuation follows
    FINAL = "final"      # Segment decoded, no continuation
    FAILED = "failed"    # Non-2xx response
    SINGLE = "single"    # Single-shot execute
    PACED = "paced"      # Request delayed by pacing


# [CTX:PBI-1:1-9:TELEM] Telemetry event structure
@dataclass
class TelemetryEvent:
    """
    A single telemetry event.

    Attributes:
        timestamp: ISO 8601 timestamp of event
        method: HTTP method
        url: Request URL
        status: HTTP status code (None if no response yet)
        elapsed_ms: Request duration in milliseconds
        decision: What the client did (page, final, failed, ...)
        page: 1-based page number within a cursor (0 outside cursors)
        points: Points decoded from the response
        sleep_s: Time slept due to pacing
    """
    timestamp: str
    method: str
    url: str
    status: Optional[int]
    elapsed_ms: float
    decision: str
    page: int = 0
    points: int = 0
    sleep_s: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for logging."""
        return asdict(self)

    def to_json(self) -> str:
        """Convert event to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def to_keyvalue(self) -> str:
        """Convert event to key=value format."""
        return " ".join(f"{key}={value}" for key, value in self.to_dict().items())


# [CTX:PBI-1:1-9:TELEM] In-memory statistics tracker
@dataclass
class TelemetryStats:
    """Aggregated statistics over recorded events."""
    total_requests: int = 0
    total_pages: int = 0
    total_points: int = 0
    total_elapsed_time: float = 0.0
    decisions_by_type: Dict[str, int] = field(default_factory=dict)
    status_codes: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        avg_latency = (
            self.total_elapsed_time / self.total_requests
            if self.total_requests > 0
            else 0.0
        )

        return {
            "total_requests": self.total_requests,
            "total_pages": self.total_pages,
            "total_points": self.total_points,
            "avg_latency_ms": round(avg_latency, 2),
            "decisions_by_type": self.decisions_by_type,
            "status_codes": self.status_codes,
        }


# [CTX:PBI-1:1-9:TELEM] Main telemetry recorder
class TelemetryRecorder:
    """
    Records and emits structured telemetry.

    Features:
    - Structured logging in JSON or key=value format
    - Configurable verbosity (info/debug)
    - Optional in-memory statistics collection
    - Thread-safe operation
    """

    def __init__(
        self,
        level: TelemetryLevel = TelemetryLevel.INFO,
        format_json: bool = True,
        collect_stats: bool = False
    ):
        """
        Initialize telemetry recorder.

        Args:
            level: Logging verbosity level
            format_json: If True, log as JSON; otherwise use key=value
            collect_stats: If True, collect in-memory statistics
        """
        self.level = level
        self.format_json = format_json
        self.collect_stats = collect_stats

        self._stats = TelemetryStats()
        self._stats_lock = threading.Lock()

        self._events: List[TelemetryEvent] = []
        self._events_lock = threading.Lock()

    def record(self, event: TelemetryEvent) -> None:
        """
        Record a telemetry event.

        Args:
            event: Event to record
        """
        if self.format_json:
            log_message = f"[CTX:PBI-1:1-9:TELEM] {event.to_json()}"
        else:
            log_message = f"[CTX:PBI-1:1-9:TELEM] {event.to_keyvalue()}"

        if self.level == TelemetryLevel.DEBUG:
            logger.debug(log_message)
        elif event.decision in (
            TelemetryDecision.FAILED.value,
            TelemetryDecision.PACED.value,
        ):
            logger.info(log_message)
        else:
            logger.debug(log_message)

        if self.collect_stats:
            with self._stats_lock:
                # Pacing events describe a delay, not a round-trip
                if event.decision != TelemetryDecision.PACED.value:
                    self._stats.total_requests += 1
                    self._stats.total_elapsed_time += event.elapsed_ms
                if event.decision in (
                    TelemetryDecision.PAGE.value,
                    TelemetryDecision.FINAL.value,
                ):
                    self._stats.total_pages += 1
                self._stats.total_points += event.points

                self._stats.decisions_by_type[event.decision] = (
                    self._stats.decisions_by_type.get(event.decision, 0) + 1
                )
                if event.status:
                    self._stats.status_codes[event.status] = (
                        self._stats.status_codes.get(event.status, 0) + 1
                    )

        with self._events_lock:
            self._events.append(event)

    def get_stats(self) -> TelemetryStats:
        """Get current statistics snapshot."""
        with self._stats_lock:
            return TelemetryStats(
                total_requests=self._stats.total_requests,
                total_pages=self._stats.total_pages,
                total_points=self._stats.total_points,
                total_elapsed_time=self._stats.total_elapsed_time,
                decisions_by_type=self._stats.decisions_by_type.copy(),
                status_codes=self._stats.status_codes.copy(),
            )

    def reset_stats(self) -> None:
        """Reset statistics."""
        with self._stats_lock:
            self._stats = TelemetryStats()

    def get_events(self) -> List[TelemetryEvent]:
        """Get all recorded events."""
        with self._events_lock:
            return self._events.copy()

    def clear_events(self) -> None:
        """Clear event history."""
        with self._events_lock:
            self._events.clear()


# [CTX:PBI-1:1-9:TELEM] Global telemetry recorder instance
_global_recorder: Optional[TelemetryRecorder] = None
_recorder_lock = threading.Lock()


def get_recorder() -> TelemetryRecorder:
    """
    Get the global telemetry recorder instance.

    Creates a default recorder if none exists.
    """
    global _global_recorder

    if _global_recorder is None:
        with _recorder_lock:
            if _global_recorder is None:
                _global_recorder = TelemetryRecorder()

    return _global_recorder


def set_recorder(recorder: TelemetryRecorder) -> None:
    """
    Set the global telemetry recorder instance.

    Args:
        recorder: Recorder instance to use globally
    """
    global _global_recorder

    with _recorder_lock:
        _global_recorder = recorder


def create_event(
    method: str,
    url: str,
    decision: TelemetryDecision,
    status: Optional[int] = None,
    elapsed_ms: float = 0.0,
    page: int = 0,
    points: int = 0,
    sleep_s: float = 0.0,
) -> TelemetryEvent:
    """Helper to create a telemetry event stamped with the current time."""
    return TelemetryEvent(
        timestamp=datetime.now(timezone.utc).isoformat(),
        method=method,
        url=url,
        status=status,
        elapsed_ms=elapsed_ms,
        decision=decision.value,
        page=page,
        points=points,
        sleep_s=sleep_s,
    )
