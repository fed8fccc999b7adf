"""Datos reutilizables para los escenarios de test."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from turnero.core.database import Base
from turnero.models.admin_user import AdminUser
from turnero.models.professional import Professional
from turnero.models.service import Service
from turnero.models.tenant import Tenant
import turnero.models  # noqa: F401

# 2030-01-06 es domingo; 2030-01-07 lunes.
SUNDAY = date(2030, 1, 6)
MONDAY = date(2030, 1, 7)
BEFORE_MONDAY = datetime(2029, 12, 1, 9, 0)

BARBERSHOP = {
    "slug": "barberia-test",
    "name": "Barbería Test",
    "theme_color": "#1e293b",
    "category": "Barbería",
    "address": "Av. Siempre Viva 742",
    "phone": "5491100000000",
    "opening_hour": 10,
    "closing_hour": 18,
    "closed_days": [0],
    "timezone": "America/Argentina/Buenos_Aires",
}

CUSTOMER = {
    "customer_name": "Juan Pérez",
    "customer_email": "juan@example.com",
    "customer_phone": "1155550000",
}

ADMIN_PASSWORD = "clave-segura-123"


def build_session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_tenant(db, *, slug: str = BARBERSHOP["slug"], **overrides) -> dict:
    """Negocio con dos profesionales y servicios de 30 y 50 minutos; devuelve los ids."""
    data = {**BARBERSHOP, "slug": slug, **overrides}
    tenant = Tenant(**data)
    db.add(tenant)
    db.flush()

    carlos = Professional(tenant_id=tenant.id, name="Carlos", job_title="Barbero")
    ana = Professional(tenant_id=tenant.id, name="Ana", job_title="Estilista")
    haircut = Service(tenant_id=tenant.id, name="Corte Clásico", duration_min=30, price=Decimal("1500"))
    full = Service(tenant_id=tenant.id, name="Completo", duration_min=50, price=Decimal("2200"))
    db.add_all([carlos, ana, haircut, full])
    db.commit()
    return {
        "tenant_id": tenant.id,
        "carlos_id": carlos.id,
        "ana_id": ana.id,
        "haircut_id": haircut.id,
        "full_id": full.id,
    }


def seed_admin(db, tenant_id: int, *, email: str = "owner@example.com", password_hash: str = "hashed") -> AdminUser:
    admin = AdminUser(
        tenant_id=tenant_id,
        email=email,
        name="Dueño",
        password_hash=password_hash,
        role="owner",
        active=True,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin
