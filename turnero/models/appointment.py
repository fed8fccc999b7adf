from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import relationship

from turnero.core.database import Base

STATUS_CONFIRMED = "CONFIRMED"
STATUS_CANCELED = "CANCELED"


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_appointments_interval"),
        Index("ix_appointments_professional_start", "professional_id", "start_time"),
    )

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False, index=True)
    professional_id = Column(Integer, ForeignKey("professionals.id"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)

    # Hora local del negocio, sin tzinfo
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    status = Column(String(20), nullable=False, default=STATUS_CONFIRMED)  # CONFIRMED / CANCELED

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    professional = relationship("Professional")
    service = relationship("Service")
    customer = relationship("Customer", back_populates="appointments")
