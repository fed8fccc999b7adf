"""Recordatorios diarios: un aviso por cada turno confirmado del día siguiente."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy.orm import Session, joinedload

from turnero.models.appointment import STATUS_CONFIRMED, Appointment
from turnero.models.tenant import Tenant
from turnero.services.tenant_time import tenant_now

logger = logging.getLogger(__name__)
REMINDERS_PREFIX = "[REMINDERS]"


def find_appointments_for_day(db: Session, tenant_id: int, day: date) -> list[Appointment]:
    day_start = datetime.combine(day, time.min)
    day_end = day_start + timedelta(days=1)
    return (
        db.query(Appointment)
        .options(
            joinedload(Appointment.customer),
            joinedload(Appointment.service),
            joinedload(Appointment.professional),
        )
        .filter(
            Appointment.tenant_id == tenant_id,
            Appointment.status == STATUS_CONFIRMED,
            Appointment.start_time >= day_start,
            Appointment.start_time < day_end,
        )
        .order_by(Appointment.start_time.asc())
        .all()
    )


def send_daily_reminders(db: Session, *, now: datetime | None = None) -> int:
    """Log tomorrow's reminders for every active tenant; returns how many were sent."""
    sent = 0
    tenants = db.query(Tenant).filter(Tenant.is_active.is_(True)).order_by(Tenant.id.asc()).all()
    for tenant in tenants:
        tomorrow = tenant_now(tenant, now).date() + timedelta(days=1)
        for appointment in find_appointments_for_day(db, tenant.id, tomorrow):
            logger.info(
                "%s tenant=%s customer=%s email=%s service=%s professional=%s at=%s",
                REMINDERS_PREFIX,
                tenant.slug,
                appointment.customer.name,
                appointment.customer.email,
                appointment.service.name,
                appointment.professional.name,
                appointment.start_time.strftime("%Y-%m-%d %H:%M"),
            )
            sent += 1

    logger.info("%s done tenants=%s sent=%s", REMINDERS_PREFIX, len(tenants), sent)
    return sent
