"""Python client for a REST time-series data service."""

from tempo_client.client import TempoClient
from tempo_client.core import (
    ClientConfig,
    Cursor,
    CursorState,
    DecodeError,
    Outcome,
    RequestSpec,
    Response,
    ServerError,
    TempoError,
    Transport,
    TransportError,
    load_config,
)
from tempo_client.models import (
    BulkDataSet,
    BulkIdPoint,
    BulkKeyPoint,
    DataPoint,
    Fold,
    Interpolation,
    InterpolationFunction,
    MultiDataPoint,
    MultiRollup,
    Rollup,
    Series,
)

__version__ = "0.1.0"

__all__ = [
    "TempoClient",
    "ClientConfig",
    "Cursor",
    "CursorState",
    "DecodeError",
    "Outcome",
    "RequestSpec",
    "Response",
    "ServerError",
    "TempoError",
    "Transport",
    "TransportError",
    "load_config",
    "BulkDataSet",
    "BulkIdPoint",
    "BulkKeyPoint",
    "DataPoint",
    "Fold",
    "Interpolation",
    "InterpolationFunction",
    "MultiDataPoint",
    "MultiRollup",
    "Rollup",
    "Series",
]
