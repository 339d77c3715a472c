"""
Request/response types and the transport abstraction.

The pagination engine never opens connections itself. It hands a RequestSpec
to a Transport and gets back a Response holding the status code, the ordered
header list and the body text.
"""
# [CTX:PBI-1:1-1:IFACE]

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import requests

from .exceptions import TransportError
from .pacing import RequestPacer

logger = logging.getLogger(__name__)


@dataclass
class RequestSpec:
    """
    Specification for an HTTP request.

    Attributes:
        url: Full URL to request
        method: HTTP method (GET, POST, etc.)
        headers: HTTP headers as key-value pairs
        query_params: Query string parameters; list values repeat the key
        body: Optional JSON-serializable request body for POST/PUT requests
    """
    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    query_params: dict[str, Any] = field(default_factory=dict)
    body: Any = None


@dataclass
class Response:
    """
    A completed HTTP response.

    Attributes:
        status_code: HTTP status code
        headers: Ordered (name, value) pairs; names may repeat
        body: Response body text
    """
    status_code: int
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: str = ""

    @property
    def ok(self) -> bool:
        """True for any 2xx status."""
        return self.status_code // 100 == 2

    def header(self, name: str) -> str | None:
        """Return the first header value matching name, case-insensitively."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None


class Transport(ABC):
    """Executes a RequestSpec and returns the Response."""

    @abstractmethod
    def execute(self, request: RequestSpec) -> Response:
        """
        Perform the request.

        Args:
            request: Request to execute

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: If no response could be obtained
        """
        pass


class RequestsTransport(Transport):
    """Transport backed by a requests.Session."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        pacer: RequestPacer | None = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.pacer = pacer

    def execute(self, request: RequestSpec) -> Response:
        if self.pacer is not None:
            self.pacer.wait(request)

        kwargs: dict[str, Any] = {
            "headers": request.headers,
            "params": request.query_params or None,
            "timeout": self.timeout,
        }
        if request.body is not None:
            kwargs["json"] = request.body

        start = time.monotonic()
        try:
            raw = self.session.request(request.method, request.url, **kwargs)
        except requests.RequestException as e:
            logger.error(
                f"[CTX:PBI-1:1-1:IFACE] {request.method} {request.url} failed: {e}"
            )
            raise TransportError(str(e)) from e

        elapsed_ms = (time.monotonic() - start) * 1000
        logger.debug(
            f"[CTX:PBI-1:1-1:IFACE] {request.method} {raw.url} -> "
            f"{raw.status_code} in {elapsed_ms:.1f}ms"
        )
        return Response(
            status_code=raw.status_code,
            headers=list(raw.headers.items()),
            body=raw.text,
        )

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
