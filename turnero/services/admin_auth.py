"""Signed admin session cookie.

The cookie carries ``{"user_id", "tenant_id", "role"}`` signed with
itsdangerous; expiry is enforced through the signature timestamp.
"""

from __future__ import annotations

from typing import Any

from fastapi import Response
from itsdangerous import BadData, URLSafeTimedSerializer

from turnero.core import config

ADMIN_SESSION_COOKIE = "admin_session"
ADMIN_SESSION_SALT = "turnero-admin-session"


def _signer() -> URLSafeTimedSerializer:
    if not config.ADMIN_SESSION_SECRET:
        raise RuntimeError("ADMIN_SESSION_SECRET no configurado.")
    return URLSafeTimedSerializer(config.ADMIN_SESSION_SECRET, salt=ADMIN_SESSION_SALT)


def create_admin_session(*, user_id: int, tenant_id: int, role: str) -> str:
    return _signer().dumps({"user_id": user_id, "tenant_id": tenant_id, "role": role})


def decode_admin_session(token: str) -> dict[str, Any] | None:
    # Incluye SignatureExpired.
    try:
        data = _signer().loads(token, max_age=config.ADMIN_SESSION_MAX_AGE_SECONDS)
    except BadData:
        return None
    return data if isinstance(data, dict) else None


def _cookie_kwargs() -> dict[str, Any]:
    samesite = config.ADMIN_SESSION_COOKIE_SAMESITE
    # SameSite=None sin Secure lo descarta el navegador.
    if samesite == "none" and not config.ADMIN_SESSION_COOKIE_SECURE:
        samesite = "lax"
    return {
        "path": "/",
        "domain": config.ADMIN_SESSION_COOKIE_DOMAIN,
        "secure": config.ADMIN_SESSION_COOKIE_SECURE,
        "httponly": True,
        "samesite": samesite,
    }


def set_admin_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        ADMIN_SESSION_COOKIE,
        token,
        max_age=config.ADMIN_SESSION_MAX_AGE_SECONDS,
        **_cookie_kwargs(),
    )


def clear_admin_session_cookie(response: Response) -> None:
    response.delete_cookie(ADMIN_SESSION_COOKIE, **_cookie_kwargs())
