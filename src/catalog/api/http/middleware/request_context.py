"""Per-request id and access logging for the HTTP layer."""

from __future__ import annotations

import time
import uuid

from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response

REQUEST_ID_HEADER = "X-Request-ID"


def client_address(request: Request) -> str:
    """First hop of ``X-Forwarded-For``, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every log line of a request with its id and log one access record.

    An incoming ``X-Request-ID`` is reused; otherwise a uuid4 is minted. The
    id is echoed on the response. Exceptions that escape the routers become
    a 500 that still carries the id.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        started = time.perf_counter()

        def elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 1)

        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=client_address(request),
        ):
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.bind(
                    status_code=500,
                    duration_ms=elapsed_ms(),
                    error_type=type(exc).__name__,
                ).exception("{} {} failed", request.method, request.url.path)
                return JSONResponse(
                    status_code=500,
                    content={"detail": "Internal Server Error", "request_id": request_id},
                    headers={REQUEST_ID_HEADER: request_id},
                )

            logger.bind(
                status_code=response.status_code, duration_ms=elapsed_ms()
            ).info(
                "{} {} -> {}", request.method, request.url.path, response.status_code
            )
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
            return response
