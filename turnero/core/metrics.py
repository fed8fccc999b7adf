from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from threading import Lock


@dataclass
class RouteStats:
    requests: int = 0
    errors: int = 0
    duration_ms: float = 0.0

    def record(self, status_code: int, duration_ms: float) -> None:
        self.requests += 1
        self.duration_ms += duration_ms
        if status_code >= 400:
            self.errors += 1

    def as_dict(self) -> dict[str, float | int]:
        average = self.duration_ms / self.requests if self.requests else 0.0
        return {
            "requests": self.requests,
            "errors": self.errors,
            "avg_duration_ms": round(average, 2),
        }


class RequestMetrics:
    """Process-local counters per route and per tenant; reset on restart."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._routes: dict[str, RouteStats] = defaultdict(RouteStats)
        self._tenants: dict[str, RouteStats] = defaultdict(RouteStats)

    def observe(
        self,
        *,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        tenant_id: str | None = None,
    ) -> None:
        with self._lock:
            self._routes[f"{method} {path}"].record(status_code, duration_ms)
            if tenant_id:
                self._tenants[tenant_id].record(status_code, duration_ms)

    def routes(self) -> dict[str, dict[str, float | int]]:
        with self._lock:
            return {key: stats.as_dict() for key, stats in self._routes.items()}

    def tenant(self, tenant_id: str) -> dict[str, float | int]:
        with self._lock:
            stats = self._tenants.get(tenant_id)
            return stats.as_dict() if stats else RouteStats().as_dict()

    def reset(self) -> None:
        with self._lock:
            self._routes.clear()
            self._tenants.clear()


request_metrics = RequestMetrics()
