from sqlalchemy import Boolean, CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from turnero.core.database import Base


class Service(Base):
    __tablename__ = "services"
    __table_args__ = (CheckConstraint("duration_min > 0", name="ck_services_duration_positive"),)

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    duration_min = Column(Integer, nullable=False)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)

    tenant = relationship("Tenant", back_populates="services")
