"""
Client for the time-series REST service.

Each endpoint method only builds a RequestSpec and hands it to one of the two
core primitives: open() for paginated reads, execute() for single-shot calls.
"""
# [CTX:PBI-1:1-7:CLIENT]

import base64
import logging
import time
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Any, Iterable, Optional, TypeVar, Union
from urllib.parse import quote

from tempo_client.core import (
    BodyDecoder,
    ClientConfig,
    Cursor,
    Outcome,
    RequestPacer,
    RequestSpec,
    RequestsTransport,
    Transport,
    classify,
    configure_telemetry,
    load_config,
    open_cursor,
)
from tempo_client.core.telemetry import TelemetryDecision, create_event, get_recorder
from tempo_client.models import (
    BulkDataSet,
    DataPoint,
    DataPointDecoder,
    Interpolation,
    MultiDataPoint,
    MultiDataPointDecoder,
    MultiRollup,
    Nothing,
    NothingDecoder,
    Rollup,
    Series,
    SeriesDecoder,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
P = TypeVar("P")

SeriesRef = Union[Series, str]


def _series_key(series: SeriesRef) -> str:
    return series.key if isinstance(series, Series) else series


def _zone_name(zone: tzinfo) -> str:
    return getattr(zone, "key", None) or str(zone)


def _format_time(value: datetime, zone: tzinfo) -> str:
    if value.tzinfo is None:
        raise ValueError(f"Timestamps must be timezone-aware: {value!r}")
    return value.astimezone(zone).isoformat()


class TempoClient:
    """
    Typed client for reading and writing series data.

    Example:
        client = TempoClient(ClientConfig(api_key="key", api_secret="secret"))
        for point in client.read_data_points("temp.1", start, end, ZoneInfo("UTC")):
            print(point.timestamp, point.value)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Args:
            config: Client configuration (defaults apply when omitted)
            transport: Request executor; defaults to a requests-backed
                transport honoring the configured timeout and pacing
        """
        self.config = config or ClientConfig()
        if transport is None:
            pacer = None
            if self.config.pacing.enabled:
                pacer = RequestPacer(self.config.pacing.steady_rate, self.config.pacing.burst)
            transport = RequestsTransport(timeout=self.config.timeout, pacer=pacer)
        self.transport = transport

    @classmethod
    def from_config_file(
        cls,
        config_path: Optional[Union[str, Path]] = None,
        transport: Optional[Transport] = None,
    ) -> "TempoClient":
        """Load configuration from YAML and install its telemetry recorder."""
        config = load_config(config_path)
        configure_telemetry(config.telemetry)
        return cls(config, transport=transport)

    # -- request assembly -------------------------------------------------

    def auth(self, initial_headers: Optional[dict[str, str]] = None) -> dict[str, str]:
        """
        Add basic-auth credentials to a copy of the given headers.

        Headers are returned unchanged when no API key is configured.
        """
        headers = initial_headers.copy() if initial_headers else {}
        if self.config.api_key:
            token = f"{self.config.api_key}:{self.config.api_secret}".encode("utf-8")
            headers["Authorization"] = "Basic " + base64.b64encode(token).decode("ascii")
        return headers

    def prepare_request(
        self,
        path: str,
        params: Optional[dict[str, Any]] = None,
        method: str = "GET",
        body: Any = None,
    ) -> RequestSpec:
        """
        Prepare a request against the versioned API root.

        Args:
            path: Endpoint path, e.g. "/series/key/abc/"
            params: Optional query parameters
            method: HTTP method
            body: Optional JSON-serializable body

        Returns:
            RequestSpec with URL, method, headers, query params and body
        """
        url = f"{self.config.base_url.rstrip('/')}/{self.config.version}{path}"
        headers = self.auth({"User-Agent": self.config.user_agent})
        if body is not None:
            headers["Content-Type"] = "application/json"

        return RequestSpec(
            url=url,
            method=method,
            headers=headers,
            query_params=params or {},
            body=body,
        )

    # -- primitives -------------------------------------------------------

    def open(self, request: RequestSpec, decoder: BodyDecoder[list[P]]) -> Cursor[P]:
        """Open a lazy cursor over a paginated read."""
        return open_cursor(
            self.transport,
            request,
            decoder,
            reattach_params=self.config.reattach_continuation_params,
        )

    def execute(self, request: RequestSpec, decoder: BodyDecoder[T]) -> Outcome[T]:
        """
        Send a single request and classify the response.

        Raises:
            TransportError: If no response could be obtained
            DecodeError: If a 2xx body is malformed
        """
        start = time.monotonic()
        response = self.transport.execute(request)
        elapsed_ms = (time.monotonic() - start) * 1000

        outcome = classify(response, decoder)
        if not outcome.success:
            logger.warning(
                f"[CTX:PBI-1:1-7:CLIENT] {request.method} {request.url} "
                f"failed with {outcome.code}"
            )
        get_recorder().record(
            create_event(
                method=request.method,
                url=request.url,
                decision=TelemetryDecision.SINGLE if outcome.success else TelemetryDecision.FAILED,
                status=response.status_code,
                elapsed_ms=elapsed_ms,
            )
        )
        return outcome

    # -- endpoints --------------------------------------------------------

    def get_series(self, key: str) -> Outcome[Series]:
        """Fetch series metadata by key."""
        request = self.prepare_request(f"/series/key/{quote(key, safe='')}/")
        return self.execute(request, SeriesDecoder())

    def read_data_points(
        self,
        series: SeriesRef,
        start: datetime,
        end: datetime,
        zone: tzinfo,
        rollup: Optional[Rollup] = None,
        interpolation: Optional[Interpolation] = None,
    ) -> Cursor[DataPoint]:
        """
        Read raw or single-fold rolled-up points in [start, end).

        Points come back in the requested zone. Nothing is sent until the
        returned cursor is first pulled.
        """
        params = self._read_params(start, end, zone, rollup, interpolation)
        key = quote(_series_key(series), safe="")
        request = self.prepare_request(f"/series/key/{key}/segment/", params)
        return self.open(request, DataPointDecoder(zone))

    def read_multi_rollup_data_points(
        self,
        series: SeriesRef,
        start: datetime,
        end: datetime,
        zone: tzinfo,
        rollup: MultiRollup,
        interpolation: Optional[Interpolation] = None,
    ) -> Cursor[MultiDataPoint]:
        """Read rollup points carrying one value per requested fold."""
        params = self._read_params(start, end, zone, rollup, interpolation)
        key = quote(_series_key(series), safe="")
        request = self.prepare_request(f"/series/key/{key}/data/rollups/segment/", params)
        return self.open(request, MultiDataPointDecoder(zone, rollup.fold_names))

    def write_data_points(self, series: SeriesRef, points: Iterable[DataPoint]) -> Outcome[Nothing]:
        """Write points to one series."""
        key = quote(_series_key(series), safe="")
        request = self.prepare_request(
            f"/series/key/{key}/data/",
            method="POST",
            body=[point.to_json() for point in points],
        )
        return self.execute(request, NothingDecoder())

    def increment_by_key(self, key: str, points: Iterable[DataPoint]) -> Outcome[Nothing]:
        """Add each point's value to the stored value at its timestamp."""
        request = self.prepare_request(
            f"/series/key/{quote(key, safe='')}/increment/",
            method="POST",
            body=[point.to_json() for point in points],
        )
        return self.execute(request, NothingDecoder())

    def write_bulk_data(self, dataset: BulkDataSet) -> Outcome[Nothing]:
        """Write one value to each of several series at one timestamp."""
        request = self.prepare_request("/multi/", method="POST", body=dataset.to_json())
        return self.execute(request, NothingDecoder())

    def increment_bulk_data(self, dataset: BulkDataSet) -> Outcome[Nothing]:
        """Increment several series at one timestamp."""
        request = self.prepare_request("/multi/increment/", method="POST", body=dataset.to_json())
        return self.execute(request, NothingDecoder())

    @staticmethod
    def _read_params(
        start: datetime,
        end: datetime,
        zone: tzinfo,
        rollup: Optional[Union[Rollup, MultiRollup]],
        interpolation: Optional[Interpolation],
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "start": _format_time(start, zone),
            "end": _format_time(end, zone),
            "tz": _zone_name(zone),
        }
        if rollup is not None:
            params.update(rollup.to_params())
        if interpolation is not None:
            params.update(interpolation.to_params())
        return params
