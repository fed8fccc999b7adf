from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from turnero.models.admin_user import AdminUser
from turnero.models.tenant import Tenant
from turnero.services.passwords import hash_password, password_looks_hashed
from utils.slug import normalize_slug

logger = logging.getLogger(__name__)
BOOTSTRAP_PREFIX = "[ADMIN_BOOTSTRAP]"


def _resolve_password_hash(password: str) -> str:
    if password_looks_hashed(password):
        logger.info("%s password already hashed; storing as-is", BOOTSTRAP_PREFIX)
        return password
    return hash_password(password)


def upsert_admin_user(
    db: Session,
    *,
    tenant_id: int,
    email: str,
    name: str,
    role: str = "owner",
    password: str | None = None,
) -> tuple[AdminUser, bool]:
    """Create or refresh an admin; returns (admin, created)."""
    normalized_email = email.strip().lower()
    existing = (
        db.query(AdminUser)
        .filter(AdminUser.tenant_id == tenant_id, AdminUser.email == normalized_email)
        .first()
    )
    if existing:
        existing.name = name
        existing.role = role
        existing.active = True
        if password:
            existing.password_hash = _resolve_password_hash(password)
        db.commit()
        db.refresh(existing)
        logger.info("%s updated id=%s tenant_id=%s", BOOTSTRAP_PREFIX, existing.id, tenant_id)
        return existing, False

    if not password:
        raise ValueError("La contraseña es obligatoria para crear un admin nuevo.")

    admin = AdminUser(
        tenant_id=tenant_id,
        email=normalized_email,
        name=name,
        password_hash=_resolve_password_hash(password),
        role=role,
        active=True,
        created_at=datetime.utcnow(),
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("%s created id=%s tenant_id=%s", BOOTSTRAP_PREFIX, admin.id, tenant_id)
    return admin, True


def bootstrap_dev_admin(db: Session, *, tenant_slug: str, email: str, name: str, password: str) -> AdminUser | None:
    """Create the first admin of a tenant; an existing admin with that email is left alone."""
    tenant = db.query(Tenant).filter(Tenant.slug == normalize_slug(tenant_slug)).first()
    if not tenant:
        logger.warning("%s skipped: tenant slug=%s not found", BOOTSTRAP_PREFIX, tenant_slug)
        return None

    normalized_email = email.strip().lower()
    existing = (
        db.query(AdminUser)
        .filter(AdminUser.tenant_id == tenant.id, AdminUser.email == normalized_email)
        .first()
    )
    if existing:
        logger.info("%s exists id=%s tenant_id=%s", BOOTSTRAP_PREFIX, existing.id, tenant.id)
        return existing

    admin, _ = upsert_admin_user(db, tenant_id=tenant.id, email=normalized_email, name=name, password=password)
    return admin
