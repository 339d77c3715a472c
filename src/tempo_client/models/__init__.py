"""Domain models and their response decoders."""

from tempo_client.models.bulk import BulkDataSet, BulkIdPoint, BulkKeyPoint, BulkPoint
from tempo_client.models.decoders import (
    DataPointDecoder,
    MultiDataPointDecoder,
    NothingDecoder,
    SeriesDecoder,
    parse_timestamp,
)
from tempo_client.models.points import DataPoint, MultiDataPoint
from tempo_client.models.rollup import (
    Fold,
    Interpolation,
    InterpolationFunction,
    MultiRollup,
    Rollup,
    format_period,
)
from tempo_client.models.series import Nothing, Series

__all__ = [
    "BulkDataSet",
    "BulkIdPoint",
    "BulkKeyPoint",
    "BulkPoint",
    "DataPoint",
    "DataPointDecoder",
    "Fold",
    "Interpolation",
    "InterpolationFunction",
    "MultiDataPoint",
    "MultiDataPointDecoder",
    "MultiRollup",
    "Nothing",
    "NothingDecoder",
    "Rollup",
    "Series",
    "SeriesDecoder",
    "format_period",
    "parse_timestamp",
]
