"""LoggingMiddleware -- 请求级访问日志

每个请求分配 ULID request_id（绑定到 structlog contextvars 并回写 X-Request-ID），
请求结束记录状态码与耗时。探活请求不记访问日志。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

_QUIET_PATHS = frozenset({"/health", "/ready"})


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )
        log = structlog.get_logger()
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            await log.aexception("request_crashed")
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        if path in _QUIET_PATHS:
            return response

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        log_method = log.awarning if response.status_code >= 500 else log.ainfo
        await log_method(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        return response
