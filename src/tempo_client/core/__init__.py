"""Core pagination engine, transport and supporting types."""

from tempo_client.core.config import (
    ClientConfig,
    PacingConfig,
    TelemetryConfig,
    configure_telemetry,
    load_config,
    validate_config,
)
from tempo_client.core.cursor import Cursor, CursorState, Step, StepKind, open_cursor
from tempo_client.core.decoding import BodyDecoder, load_json
from tempo_client.core.exceptions import (
    ConfigValidationError,
    DecodeError,
    ServerError,
    TempoError,
    TransportError,
)
from tempo_client.core.links import LinkDescriptor, find_next_url, index_by_rel, parse_link_header
from tempo_client.core.outcome import Outcome, classify, is_success
from tempo_client.core.pacing import (
    FakeTimeProvider,
    RequestPacer,
    SystemTimeProvider,
    TimeProvider,
    TokenBucket,
)
from tempo_client.core.segment import Segment, decode_body, parse_continuation
from tempo_client.core.transport import RequestSpec, RequestsTransport, Response, Transport

__all__ = [
    # config
    "ClientConfig",
    "PacingConfig",
    "TelemetryConfig",
    "configure_telemetry",
    "load_config",
    "validate_config",
    # cursor
    "Cursor",
    "CursorState",
    "Step",
    "StepKind",
    "open_cursor",
    # decoding
    "BodyDecoder",
    "load_json",
    # exceptions
    "ConfigValidationError",
    "DecodeError",
    "ServerError",
    "TempoError",
    "TransportError",
    # links
    "LinkDescriptor",
    "find_next_url",
    "index_by_rel",
    "parse_link_header",
    # outcome
    "Outcome",
    "classify",
    "is_success",
    # pacing
    "FakeTimeProvider",
    "RequestPacer",
    "SystemTimeProvider",
    "TimeProvider",
    "TokenBucket",
    # segment
    "Segment",
    "decode_body",
    "parse_continuation",
    # transport
    "RequestSpec",
    "RequestsTransport",
    "Response",
    "Transport",
]
