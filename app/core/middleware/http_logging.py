"""Request envelope middleware: correlation id, body cap, last-resort errors, access log.

- Questions and birth charts arrive in request bodies and readings leave in
  response bodies, so neither is ever logged; only route template, status,
  duration and the relay outcome recorded by the route.
- The body is read up front with a running byte count, so chunked uploads are
  capped the same way as those declaring a Content-Length.
- Unexpected exceptions become the `{ok: false}` envelope here, inside the CORS
  layer, so browsers can read them.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.domain.exceptions import PayloadTooLargeError

logger = logging.getLogger("app.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def _get_or_create_request_id(*, request: Request) -> str:
    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def _safe_route_label(scope: Scope) -> str:
    path = getattr(scope.get("route"), "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


def _envelope(*, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


async def _read_capped_body(*, request: Request, receive: Receive, limit: int) -> bytes:
    """Drain the request body, raising PayloadTooLargeError once `limit` is passed."""

    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError("Request body too large")

    chunks: list[bytes] = []
    received = 0
    while True:
        message = await receive()
        if message["type"] != "http.request":
            break
        chunk = message.get("body", b"")
        received += len(chunk)
        if received > limit:
            raise PayloadTooLargeError("Request body too large")
        chunks.append(chunk)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


def _replay(body: bytes, receive: Receive) -> Receive:
    sent = False

    async def replay_receive() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay_receive


class HttpLoggingMiddleware:
    def __init__(self, app: ASGIApp, *, max_body_bytes: int | None = None):
        self.app = app
        self._max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request_id = _get_or_create_request_id(request=request)
        # Routes read request.state.request_id and write request.state.relay_outcome.
        request.state.request_id = request_id
        started = time.perf_counter()
        status_code = 500
        response_started = False

        async def send_with_request_id(message: Message) -> None:
            nonlocal status_code, response_started
            if message["type"] == "http.response.start":
                response_started = True
                status_code = message["status"]
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = request_id
            await send(message)

        try:
            if self._max_body_bytes is not None:
                try:
                    body = await _read_capped_body(
                        request=request, receive=receive, limit=self._max_body_bytes
                    )
                except PayloadTooLargeError as exc:
                    response = _envelope(status_code=exc.status_code, message=exc.message)
                    await response(scope, receive, send_with_request_id)
                    self._log_completed(scope, request_id, status_code, started)
                    return
                receive = _replay(body, receive)
            await self.app(scope, receive, send_with_request_id)
        except Exception:  # noqa: BLE001 - we must log unexpected exceptions with stack trace
            logger.exception(
                "Unhandled exception while processing request",
                extra={
                    "request_id": request_id,
                    "http_method": scope["method"],
                    "request_path": _safe_route_label(scope),
                    "status_code": 500,
                    "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                },
            )
            if response_started:
                raise
            response = _envelope(status_code=500, message="Internal server error")
            await response(scope, receive, send_with_request_id)
            return

        self._log_completed(scope, request_id, status_code, started)

    @staticmethod
    def _log_completed(scope: Scope, request_id: str, status_code: int, started: float) -> None:
        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "http_method": scope["method"],
                "request_path": _safe_route_label(scope),
                "status_code": status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
                "outcome": scope.get("state", {}).get("relay_outcome"),
            },
        )
