"""In-process stand-in for the upstream backend, built on httpx.MockTransport."""
from typing import Any, Callable, Union

import httpx

from clients import BackendClient

BASE_URL = "http://backend.test/api"

Route = Union[Any, tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeBackend:
    """
    routes maps (method, path-below-/api) to a JSON body, a (status, body)
    pair, or a callable taking the request. Unknown routes answer 404.
    """

    def __init__(self, routes: dict[tuple[str, str], Route]):
        self.routes = dict(routes)
        self.calls: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path
        if path.startswith("/api"):
            path = path[len("/api"):]
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"error": f"No route {request.method} {path}"})
        if callable(route):
            return route(request)
        if isinstance(route, tuple):
            status, body = route
            return httpx.Response(status, json=body)
        return httpx.Response(200, json=route)

    def client(self) -> BackendClient:
        return BackendClient(base_url=BASE_URL, api_key="", transport=httpx.MockTransport(self.handler))

    def called(self, method: str, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.method == method and c.url.path == "/api" + path]
