from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from turnero.core.database import Base


class Professional(Base):
    __tablename__ = "professionals"

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    job_title = Column(String(120), nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    tenant = relationship("Tenant", back_populates="professionals")
    blocked_dates = relationship("BlockedDate", back_populates="professional", cascade="all, delete-orphan")
