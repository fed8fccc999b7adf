# turnero/deps.py
from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from turnero.core.database import get_db
from turnero.core.request_context import bind_request_context
from turnero.models.admin_user import AdminUser
from turnero.models.professional import Professional
from turnero.services.admin_auth import ADMIN_SESSION_COOKIE, decode_admin_session

logger = logging.getLogger(__name__)


def get_current_admin_user(
    request: Request,
    db: Session = Depends(get_db),
) -> AdminUser:
    """Admin autenticado a partir de la cookie firmada de sesión."""
    token = request.cookies.get(ADMIN_SESSION_COOKIE)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin no autenticado")

    payload = decode_admin_session(token)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sesión expirada")

    user_id = payload.get("user_id")
    tenant_id = payload.get("tenant_id")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sesión inválida")

    user = (
        db.query(AdminUser)
        .filter(AdminUser.id == int(user_id), AdminUser.active.is_(True))
        .first()
    )
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Admin no encontrado")

    if tenant_id is not None and int(user.tenant_id) != int(tenant_id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Sesión inválida")

    request.state.admin_user = user
    bind_request_context(tenant_id=str(user.tenant_id), admin_id=str(user.id))
    return user


def require_admin_user(
    request: Request,
    db: Session = Depends(get_db),
) -> AdminUser:
    return get_current_admin_user(request, db)


def get_tenant_professional(db: Session, user: AdminUser, professional_id: int) -> Professional:
    """Professional owned by the admin's tenant; other tenants' rows look like 404."""
    professional = db.query(Professional).filter(Professional.id == professional_id).first()
    if not professional:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profesional no encontrado")

    if int(professional.tenant_id) != int(user.tenant_id):
        logger.warning(
            "Access denied (tenant_mismatch): user_id=%s user_tenant=%s professional_id=%s professional_tenant=%s",
            user.id,
            user.tenant_id,
            professional.id,
            professional.tenant_id,
        )
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profesional no encontrado")
    return professional
