from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from turnero.core.metrics import request_metrics
from turnero.core.request_context import bind_request_context, clear_request_context, current_request_context

logger = logging.getLogger(__name__)


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """Request id propagation plus one access log line per request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        clear_request_context()
        bind_request_context(request_id=request_id, tenant_id=_extract_tenant_id(request))

        status_code = 500
        response = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            context = current_request_context()
            admin_user = getattr(request.state, "admin_user", None)
            tenant_id = context.tenant_id or _admin_tenant_id(admin_user)
            request_metrics.observe(
                method=request.method,
                path=_route_path(request),
                status_code=status_code,
                duration_ms=duration_ms,
                tenant_id=tenant_id,
            )

            logger.info(
                "request completed",
                extra={
                    "request_id": request_id,
                    "tenant_id": tenant_id,
                    "admin_id": str(admin_user.id) if admin_user is not None else None,
                    "endpoint": request.url.path,
                    "method": request.method,
                    "status_code": status_code,
                    "duration_ms": duration_ms,
                },
            )

            if response is not None:
                response.headers["X-Request-ID"] = request_id

            clear_request_context()


def _extract_tenant_id(request: Request) -> str | None:
    tenant = request.query_params.get("tenantId") or request.query_params.get("tenant_id")
    if tenant:
        return str(tenant)
    return request.headers.get("X-Tenant-ID")


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _admin_tenant_id(admin_user) -> str | None:
    if admin_user is None:
        return None
    return str(admin_user.tenant_id)
