import uuid
from starlette.types import ASGIApp, Receive, Scope, Send

from core.log_config import request_id_var


class RequestIDMiddleware:
    """Pure ASGI middleware for request ID injection.

    The id is taken from `X-Request-ID` when the caller sends one, echoed
    on the response and exposed to log records through `request_id_var`.
    Avoids BaseHTTPMiddleware, which buffers streaming bodies.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        request_id = headers.get(b"x-request-id", b"").decode() or uuid.uuid4().hex

        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)

        async def send_with_request_id(message):
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + [
                    (b"x-request-id", request_id.encode())
                ]
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            request_id_var.reset(token)
