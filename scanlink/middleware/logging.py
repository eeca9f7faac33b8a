"""
Request logging middleware for FastAPI using Loguru.

Each request gets an id (echoed in the X-Request-ID header), and a
single REQUEST-level record with method, path, status and latency is
written once the response is ready.
"""

import time
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from scanlink.core.config import settings
from scanlink.core.logging import register_request_level

# Context variable to store request ID across async context
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

register_request_level()


def client_ip_from_request(request: Request) -> Optional[str]:
    """Resolve the caller address, honouring X-Forwarded-For when trusted."""
    if settings.TRUST_PROXY_HEADERS and "X-Forwarded-For" in request.headers:
        forwarded_ips = request.headers["X-Forwarded-For"].split(",")
        first = forwarded_ips[0].strip()
        if first:
            return first
    return request.client.host if request.client else None


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a correlation id and its processing time."""
    
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)
        
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        
        response.headers["X-Request-ID"] = request_id
        
        logger.bind(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
            client_ip=client_ip_from_request(request) or "unknown",
        ).log(
            "REQUEST",
            f"{request.method} {request.url.path} -> {response.status_code} ({process_time_ms}ms)"
        )
        
        return response
