# =============================================================================
# app/middleware/errors.py - Unexpected Error Conversion
# =============================================================================
# Catches exceptions that no exception handler dealt with and answers with
# the JSON error envelope. Installed directly inside the CORS middleware, so
# a 500 sent to an allowed origin still carries the CORS headers.
# =============================================================================

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import error_to_json_handler


class ErrorEnvelopeMiddleware:
    """Turn any unhandled exception into {statusCode, message}."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            # Too late for an error body once headers are out
            if response_started:
                raise
            response = await error_to_json_handler(Request(scope), exc)
            await response(scope, receive, send)
