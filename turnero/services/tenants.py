from __future__ import annotations

from sqlalchemy.orm import Session

from turnero.models.tenant import Tenant
from turnero.services.errors import NotFoundError
from utils.slug import normalize_slug


def get_tenant_by_slug(db: Session, slug: str) -> Tenant:
    normalized_slug = normalize_slug(slug)
    if not normalized_slug:
        raise NotFoundError("Negocio no encontrado")

    tenant = (
        db.query(Tenant)
        .filter(Tenant.slug == normalized_slug, Tenant.is_active.is_(True))
        .first()
    )
    if not tenant:
        raise NotFoundError("Negocio no encontrado")
    return tenant
