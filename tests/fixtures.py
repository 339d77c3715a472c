"""
Shared response bodies and a scripted transport for tests.
[CTX:PBI-1:1-11:FIXTURES]
"""
from collections import deque
from typing import List, Union

from tempo_client.core import RequestSpec, Response, Transport

ROLLUP_SINGLE = """{
    "rollup": {"fold": ["max", "sum"], "period": "PT1H"},
    "tz": "UTC",
    "data": [
        {"t": "2012-01-01T00:00:00.000+00:00", "v": {"sum": 23.45, "max": 12.34}}
    ],
    "series": {"id": "id1", "key": "key1", "name": "", "tags": [], "attributes": {}}
}"""

ROLLUP_PAGE_1 = """{
    "rollup": {"fold": ["max", "sum"], "period": "PT1H"},
    "tz": "UTC",
    "data": [
        {"t": "2012-03-27T00:00:00.000+00:00", "v": {"sum": 23.45, "max": 12.34}},
        {"t": "2012-03-27T01:00:00.000+00:00", "v": {"sum": 34.56, "max": 23.45}}
    ],
    "series": {"id": "id1", "key": "key1", "name": "", "tags": [], "attributes": {}}
}"""

ROLLUP_PAGE_2 = """{
    "rollup": {"fold": ["max", "sum"], "period": "PT1H"},
    "tz": "UTC",
    "data": [
        {"t": "2012-03-27T02:00:00.000+00:00", "v": {"sum": 45.67, "max": 34.56}}
    ],
    "series": {"id": "id1", "key": "key1", "name": "", "tags": [], "attributes": {}}
}"""

ROLLUP_CHICAGO = """{
    "rollup": {"fold": ["max", "sum"], "period": "PT1H"},
    "tz": "America/Chicago",
    "data": [
        {"t": "2012-03-27T00:00:00.000-05:00", "v": {"sum": 23.45, "max": 12.34}},
        {"t": "2012-03-27T01:00:00.000-05:00", "v": {"sum": 34.56, "max": 23.45}}
    ],
    "series": {"id": "id1", "key": "key1", "name": "", "tags": [], "attributes": {}}
}"""

RAW_PAGE_1 = """[
    {"t": "2012-03-27T00:00:00.000+00:00", "v": 1.5},
    {"t": "2012-03-27T01:00:00.000+00:00", "v": 2.5}
]"""

RAW_PAGE_2 = """[
    {"t": "2012-03-27T02:00:00.000+00:00", "v": 3.5}
]"""

SERIES_BODY = '{"id": "id1", "key": "key1", "name": "Key One", "tags": ["a"], "attributes": {"host": "web1"}}'

NEXT_LINK = (
    "</v1/series/key/key1/data/rollups/segment/&start=2012-03-27T00:02:00.000-05:00"
    "&end=2012-03-28&rollup.period=PT1H&rollup.fold=max&rollup.fold=sum>; rel=\"next\""
)


def response(status: int = 200, body: str = "[]", headers=None) -> Response:
    """Build a Response from a status, body and optional header dict or list."""
    if isinstance(headers, dict):
        headers = list(headers.items())
    return Response(status_code=status, headers=headers or [], body=body)


class FakeTransport(Transport):
    """
    Transport that replays scripted responses in order.

    Entries may be Response objects or exceptions to raise. Every request is
    kept in `requests` for assertions.
    """

    def __init__(self, responses: List[Union[Response, Exception]]):
        self._responses = deque(responses)
        self.requests: List[RequestSpec] = []

    def execute(self, request: RequestSpec) -> Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request to {request.url}")
        item = self._responses.popleft()
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def calls(self) -> int:
        return len(self.requests)
