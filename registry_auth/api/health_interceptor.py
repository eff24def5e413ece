"""
Pure ASGI middleware for fast health check responses.

Health probes are answered before the FastAPI middleware stack and never
reach the gate route.
"""

from starlette.types import ASGIApp, Receive, Scope, Send

HEALTH_CHECK_PATHS: frozenset[str] = frozenset(
    {
        "/healthcheck",
        "/healthz",
        "/readyz",
    }
)


class HealthCheckInterceptor:
    """
    Pure ASGI middleware that intercepts health check requests
    before they reach the FastAPI middleware stack.

    Only GET requests get a 200; other methods get a 405.
    """

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"] in HEALTH_CHECK_PATHS:
            if scope.get("method") == "GET":
                await _send_empty(send, 200, [])
            else:
                await _send_empty(send, 405, [(b"allow", b"GET")])
            return

        await self.app(scope, receive, send)


async def _send_empty(send: Send, status: int, headers: list) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"",
        }
    )
