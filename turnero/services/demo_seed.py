from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from turnero.models.professional import Professional
from turnero.models.service import Service
from turnero.models.tenant import Tenant

logger = logging.getLogger(__name__)
SEED_PREFIX = "[SEED]"

DEMO_TENANTS = [
    {
        "slug": "barberia-demo",
        "name": "Barbería Demo",
        "theme_color": "#1e293b",
        "category": "Barbería",
        "address": "Av. Corrientes 1234, CABA",
        "phone": "5491100000000",
        "opening_hour": 10,
        "closing_hour": 20,
        "closed_days": [0],
        "professionals": [
            {"name": "Carlos", "job_title": "Barbero"},
            {"name": "Ana", "job_title": "Estilista"},
        ],
        "services": [
            {"name": "Corte Clásico", "duration_min": 30, "price": Decimal("1500")},
            {"name": "Barba y Toalla", "duration_min": 20, "price": Decimal("1000")},
            {"name": "Completo (Corte + Barba)", "duration_min": 50, "price": Decimal("2200")},
        ],
    },
    {
        "slug": "kine-salud",
        "name": "Kine Salud",
        "theme_color": "#0ea5e9",
        "category": "Kinesiología",
        "address": "Calle 7 456, La Plata",
        "phone": "5492210000000",
        "opening_hour": 8,
        "closing_hour": 18,
        "closed_days": [0, 6],
        "professionals": [
            {"name": "Lic. Martínez", "job_title": "Kinesióloga"},
        ],
        "services": [
            {"name": "Sesión de kinesiología", "duration_min": 45, "price": Decimal("8000")},
            {"name": "Evaluación inicial", "duration_min": 60, "price": Decimal("10000")},
        ],
    },
]


def _upsert_tenant(db: Session, data: dict) -> tuple[Tenant, bool]:
    tenant = db.query(Tenant).filter(Tenant.slug == data["slug"]).first()
    if tenant:
        return tenant, False

    tenant = Tenant(
        slug=data["slug"],
        name=data["name"],
        theme_color=data["theme_color"],
        category=data["category"],
        address=data["address"],
        phone=data["phone"],
        opening_hour=data["opening_hour"],
        closing_hour=data["closing_hour"],
        closed_days=list(data["closed_days"]),
    )
    db.add(tenant)
    db.flush()

    for professional in data["professionals"]:
        db.add(Professional(tenant_id=tenant.id, **professional))
    for service in data["services"]:
        db.add(Service(tenant_id=tenant.id, **service))
    return tenant, True


def seed_demo_tenants(db: Session) -> list[Tenant]:
    """Idempotent: existing tenants (by slug) are left untouched."""
    tenants: list[Tenant] = []
    try:
        for data in DEMO_TENANTS:
            tenant, created = _upsert_tenant(db, data)
            logger.info("%s tenant slug=%s created=%s", SEED_PREFIX, tenant.slug, created)
            tenants.append(tenant)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return tenants
