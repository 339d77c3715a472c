"""
Response body decoders for each result type.

Point bodies come either as a flat list of {"t": ..., "v": ...} objects or as
an envelope whose "data" key holds that list:

    {"rollup": {"fold": ["max", "sum"], "period": "PT1H"},
     "tz": "UTC",
     "data": [{"t": "2012-01-01T00:00:00.000+00:00", "v": {"sum": 1, "max": 2}}],
     "series": {...}}

Timestamps keep the instant given by their embedded offset and are converted
to the zone the caller asked for.
"""
# [CTX:PBI-1:1-6:DECODE]

from datetime import datetime, tzinfo
from typing import Any, Iterable, Optional

from tempo_client.core.decoding import BodyDecoder, load_json
from tempo_client.core.exceptions import DecodeError

from .points import DataPoint, MultiDataPoint
from .series import Nothing, Series


def parse_timestamp(text: str, zone: tzinfo) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware datetime in zone.

    Timestamps without an offset are read as wall time in zone.
    """
    try:
        parsed = datetime.fromisoformat(text)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Invalid timestamp {text!r}") from e

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=zone)
    return parsed.astimezone(zone)


def _point_items(payload: Any) -> list:
    if isinstance(payload, dict):
        payload = payload.get("data")
    if not isinstance(payload, list):
        raise DecodeError("Expected a list of points or an envelope with a 'data' list")
    return payload


class DataPointDecoder(BodyDecoder[list[DataPoint]]):
    """Decodes single-valued points."""

    def __init__(self, zone: tzinfo):
        self.zone = zone

    def decode(self, body: str) -> list[DataPoint]:
        points = []
        for item in _point_items(load_json(body)):
            try:
                points.append(
                    DataPoint(parse_timestamp(item["t"], self.zone), float(item["v"]))
                )
            except (KeyError, OverflowError, TypeError, ValueError) as e:
                raise DecodeError(f"Malformed data point {item!r}") from e
        return points


class MultiDataPointDecoder(BodyDecoder[list[MultiDataPoint]]):
    """
    Decodes multi-fold rollup points.

    When folds are given, each point must carry every one of them and only
    those folds are kept.
    """

    def __init__(self, zone: tzinfo, folds: Optional[Iterable[str]] = None):
        self.zone = zone
        self.folds = list(folds) if folds is not None else None

    def decode(self, body: str) -> list[MultiDataPoint]:
        points = []
        for item in _point_items(load_json(body)):
            try:
                timestamp = parse_timestamp(item["t"], self.zone)
                raw = item["v"]
                if self.folds is not None:
                    values = {fold: float(raw[fold]) for fold in self.folds}
                else:
                    values = {fold: float(value) for fold, value in raw.items()}
            except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as e:
                raise DecodeError(f"Malformed rollup point {item!r}") from e
            points.append(MultiDataPoint(timestamp, values))
        return points


class SeriesDecoder(BodyDecoder[Series]):
    """Decodes a series object."""

    def decode(self, body: str) -> Series:
        payload = load_json(body)
        try:
            return Series.from_dict(payload)
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError(f"Malformed series body: {e}") from e


class NothingDecoder(BodyDecoder[Nothing]):
    """Ignores the body of a successful write."""

    def decode(self, body: str) -> Nothing:
        return Nothing()
