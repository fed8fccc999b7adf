import sqlalchemy as sa
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from turnero.core.config import DEFAULT_CLOSING_HOUR, DEFAULT_OPENING_HOUR
from turnero.core.database import Base


class Tenant(Base):
    __tablename__ = "tenants"
    __table_args__ = (
        CheckConstraint("opening_hour >= 0 AND opening_hour <= 23", name="ck_tenants_opening_hour"),
        CheckConstraint("closing_hour >= 0 AND closing_hour <= 23", name="ck_tenants_closing_hour"),
        CheckConstraint("closing_hour > opening_hour", name="ck_tenants_hours_order"),
    )

    id = Column(Integer, primary_key=True)
    slug = Column(String(80), unique=True, index=True, nullable=False)
    name = Column(String(120), nullable=False)
    theme_color = Column(String(20), nullable=False, default="#1e293b")
    category = Column(String(60), nullable=False, default="")
    address = Column(String(200), nullable=False, default="")
    phone = Column(String(30), nullable=False, default="")

    # Horario de atención (horas enteras, hora local del negocio)
    opening_hour = Column(Integer, nullable=False, default=DEFAULT_OPENING_HOUR)
    closing_hour = Column(Integer, nullable=False, default=DEFAULT_CLOSING_HOUR)
    # Días cerrados: 0 = domingo ... 6 = sábado
    closed_days = Column(JSONB().with_variant(sa.JSON(), "sqlite"), nullable=False, default=list)
    timezone = Column(String(64), nullable=False, default="America/Argentina/Buenos_Aires")

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    professionals = relationship("Professional", back_populates="tenant")
    services = relationship("Service", back_populates="tenant")
