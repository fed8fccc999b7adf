from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RequestContext:
    request_id: str | None = None
    tenant_id: str | None = None
    admin_id: str | None = None


_EMPTY_CONTEXT = RequestContext()
_REQUEST_CTX: ContextVar[RequestContext] = ContextVar("request_context", default=_EMPTY_CONTEXT)


def bind_request_context(
    *, request_id: str | None = None, tenant_id: str | None = None, admin_id: str | None = None
) -> None:
    """Merge the given values into the current context; None leaves a field as is."""
    updates = {
        key: value
        for key, value in {"request_id": request_id, "tenant_id": tenant_id, "admin_id": admin_id}.items()
        if value is not None
    }
    if updates:
        _REQUEST_CTX.set(replace(_REQUEST_CTX.get(), **updates))


def current_request_context() -> RequestContext:
    return _REQUEST_CTX.get()


def clear_request_context() -> None:
    _REQUEST_CTX.set(_EMPTY_CONTEXT)
