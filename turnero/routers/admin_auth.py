from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from turnero.core.database import get_db
from turnero.deps import get_current_admin_user
from turnero.models.admin_user import AdminUser
from turnero.schemas.admin import AdminLoginPayload, AdminUserRead
from turnero.services.admin_auth import (
    clear_admin_session_cookie,
    create_admin_session,
    set_admin_session_cookie,
)
from turnero.services.errors import NotFoundError
from turnero.services.passwords import verify_password
from turnero.services.tenants import get_tenant_by_slug

router = APIRouter(prefix="/api/admin/auth", tags=["admin-auth"])
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Credenciales inválidas"


@router.post("/login", response_model=AdminUserRead)
def admin_login(
    payload: AdminLoginPayload,
    response: Response,
    db: Session = Depends(get_db),
):
    normalized_email = payload.email.strip().lower()
    try:
        tenant = get_tenant_by_slug(db, payload.slug)
    except NotFoundError:
        logger.info("[AUTH] login rejected unknown tenant slug=%s", payload.slug)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    user = (
        db.query(AdminUser)
        .filter(
            AdminUser.tenant_id == tenant.id,
            func.lower(AdminUser.email) == normalized_email,
        )
        .first()
    )
    if not user or not user.active or not verify_password(payload.password, user.password_hash):
        logger.info("[AUTH] login failed tenant_id=%s email=%s", tenant.id, normalized_email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    token = create_admin_session(user_id=user.id, tenant_id=user.tenant_id, role=user.role)
    set_admin_session_cookie(response, token)
    logger.info("[AUTH] login ok tenant_id=%s admin_id=%s", user.tenant_id, user.id)
    return AdminUserRead.model_validate(user)


@router.post("/logout")
def admin_logout(response: Response):
    clear_admin_session_cookie(response)
    return {"ok": True}


@router.get("/me", response_model=AdminUserRead)
def admin_me(user: AdminUser = Depends(get_current_admin_user)):
    return AdminUserRead.model_validate(user)
