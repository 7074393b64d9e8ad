from typing import Callable, Union

import httpx
import pytest

Route = Union[tuple, Callable[[httpx.Request], httpx.Response]]


class FakeUpstream:
    """
    Stands in for every upstream API.

    ``routes`` maps a full URL to either ``(status, json_body)`` or a
    callable taking the request.  Unknown URLs answer 404.  Every requested
    URL is recorded in ``calls``; request headers in ``headers``.
    """

    def __init__(self, routes: dict[str, Route]) -> None:
        self.routes = routes
        self.calls: list[str] = []
        self.headers: dict[str, httpx.Headers] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        self.headers[url] = request.headers
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream() -> Callable[[dict], FakeUpstream]:
    return FakeUpstream


def connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def refuse() -> Callable[[httpx.Request], httpx.Response]:
    """Route handler that fails at the transport level."""
    return connect_error
