"""Cálculo de horarios libres para un profesional, un servicio y un día."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from turnero.core.config import SLOT_STEP_MINUTES
from turnero.models.appointment import STATUS_CANCELED, Appointment
from turnero.models.blocked_date import BlockedDate
from turnero.models.professional import Professional
from turnero.models.service import Service
from turnero.models.tenant import Tenant
from turnero.services.errors import NotFoundError
from turnero.services.tenant_time import sunday_based_weekday

logger = logging.getLogger(__name__)
AVAILABILITY_PREFIX = "[AVAILABILITY]"


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open [start, end) overlap."""
    return a_start < b_end and b_start < a_end


def is_closed_day(tenant: Tenant, day: date) -> bool:
    closed_days = {int(value) for value in (tenant.closed_days or [])}
    return sunday_based_weekday(day) in closed_days


def generate_candidate_slots(
    day: date,
    *,
    opening_hour: int,
    closing_hour: int,
    duration_min: int,
    step_min: int = SLOT_STEP_MINUTES,
) -> list[tuple[datetime, datetime]]:
    """Every [t, t + duration) starting on a step boundary that ends by closing time."""
    if duration_min <= 0 or step_min <= 0:
        return []

    opening = datetime.combine(day, time(hour=opening_hour))
    closing = datetime.combine(day, time(hour=closing_hour))
    duration = timedelta(minutes=duration_min)
    step = timedelta(minutes=step_min)

    candidates: list[tuple[datetime, datetime]] = []
    current = opening
    while current + duration <= closing:
        candidates.append((current, current + duration))
        current += step
    return candidates


def filter_free_slots(
    candidates: Iterable[tuple[datetime, datetime]],
    busy: Sequence[tuple[datetime, datetime]],
) -> list[datetime]:
    free: list[datetime] = []
    for slot_start, slot_end in candidates:
        if any(intervals_overlap(slot_start, slot_end, busy_start, busy_end) for busy_start, busy_end in busy):
            continue
        free.append(slot_start)
    return free


def load_busy_intervals(db: Session, professional_id: int, day: date) -> list[tuple[datetime, datetime]]:
    day_start = datetime.combine(day, time.min)
    day_end = day_start + timedelta(days=1)
    rows = (
        db.query(Appointment.start_time, Appointment.end_time)
        .filter(
            Appointment.professional_id == professional_id,
            Appointment.status != STATUS_CANCELED,
            Appointment.start_time < day_end,
            Appointment.end_time > day_start,
        )
        .order_by(Appointment.start_time.asc())
        .all()
    )
    return [(row.start_time, row.end_time) for row in rows]


def has_blocked_date(db: Session, professional_id: int, day: date) -> bool:
    return (
        db.query(BlockedDate.id)
        .filter(BlockedDate.professional_id == professional_id, BlockedDate.date == day)
        .first()
        is not None
    )


def get_available_slots(db: Session, professional_id: int, service_id: int, day: date) -> list[str]:
    service = db.query(Service).filter(Service.id == service_id).first()
    if not service:
        raise NotFoundError("Servicio no encontrado")

    tenant = db.query(Tenant).filter(Tenant.id == service.tenant_id).first()
    if not tenant:
        raise NotFoundError("Negocio no encontrado")

    professional = db.query(Professional).filter(Professional.id == professional_id).first()
    if not professional or professional.tenant_id != tenant.id:
        raise NotFoundError("Profesional no encontrado")

    if is_closed_day(tenant, day):
        logger.info(
            "%s closed day tenant_id=%s professional_id=%s date=%s",
            AVAILABILITY_PREFIX,
            tenant.id,
            professional_id,
            day,
        )
        return []

    if has_blocked_date(db, professional_id, day):
        logger.info("%s blocked date professional_id=%s date=%s", AVAILABILITY_PREFIX, professional_id, day)
        return []

    busy = load_busy_intervals(db, professional_id, day)
    candidates = generate_candidate_slots(
        day,
        opening_hour=tenant.opening_hour,
        closing_hour=tenant.closing_hour,
        duration_min=service.duration_min,
    )
    free = filter_free_slots(candidates, busy)

    logger.info(
        "%s professional_id=%s service_id=%s date=%s candidates=%s busy=%s free=%s",
        AVAILABILITY_PREFIX,
        professional_id,
        service_id,
        day,
        len(candidates),
        len(busy),
        len(free),
    )
    return [slot.strftime("%H:%M") for slot in free]
