"""Reserva de turnos: validación, control de superposición e inserción atómica."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import func
from sqlalchemy.orm import Session

from turnero.core.config import MAX_RECURRING_WEEKS
from turnero.models.appointment import STATUS_CANCELED, STATUS_CONFIRMED, Appointment
from turnero.models.professional import Professional
from turnero.models.service import Service
from turnero.models.tenant import Tenant
from turnero.services.availability import has_blocked_date, is_closed_day
from turnero.services.customers import get_or_create_customer
from turnero.services.errors import BookingValidationError, SlotConflictError
from turnero.services.tenant_time import parse_datetime, tenant_now, to_tenant_local

logger = logging.getLogger(__name__)
BOOKING_PREFIX = "[BOOKING]"


@dataclass
class BookingRequest:
    professional_id: int | None
    service_id: int | None
    customer_name: str | None
    customer_email: str | None
    start_time: datetime | str | None
    customer_phone: str | None = None
    recurring_weeks: int | None = 1


def _missing_fields(request: BookingRequest) -> list[str]:
    required = {
        "professional_id": request.professional_id,
        "service_id": request.service_id,
        "customer_name": (request.customer_name or "").strip(),
        "start_time": request.start_time,
        "customer_email": (request.customer_email or "").strip(),
    }
    return [name for name, value in required.items() if value in (None, "")]


def _invalid_fields(request: BookingRequest) -> list[str]:
    try:
        validate_email(request.customer_email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return ["customer_email"]
    return []


def _resolve_recurring_weeks(value: int | None) -> int:
    weeks = 1 if value is None else value
    try:
        weeks = int(weeks)
    except (TypeError, ValueError) as exc:
        raise BookingValidationError("recurring_weeks inválido") from exc
    if weeks < 1 or weeks > MAX_RECURRING_WEEKS:
        raise BookingValidationError(f"recurring_weeks debe estar entre 1 y {MAX_RECURRING_WEEKS}")
    return weeks


def build_occurrences(start: datetime, duration_min: int, weeks: int) -> list[tuple[datetime, datetime]]:
    duration = timedelta(minutes=duration_min)
    occurrences = []
    for offset in range(weeks):
        occurrence_start = start + timedelta(days=7 * offset)
        occurrences.append((occurrence_start, occurrence_start + duration))
    return occurrences


def ensure_within_schedule(
    db: Session,
    tenant: Tenant,
    professional_id: int,
    occurrences: list[tuple[datetime, datetime]],
) -> None:
    """Same calendar rules the availability calculator applies, per occurrence."""
    for occurrence_start, occurrence_end in occurrences:
        day = occurrence_start.date()
        if is_closed_day(tenant, day):
            raise BookingValidationError(f"El negocio no atiende el {day.isoformat()}")
        if has_blocked_date(db, professional_id, day):
            raise BookingValidationError(f"El profesional no atiende el {day.isoformat()}")
        opening = datetime.combine(day, time(hour=tenant.opening_hour))
        closing = datetime.combine(day, time(hour=tenant.closing_hour))
        if occurrence_start < opening or occurrence_end > closing:
            raise BookingValidationError("El turno queda fuera del horario de atención")


def count_overlapping_appointments(db: Session, professional_id: int, start: datetime, end: datetime) -> int:
    return (
        db.query(func.count(Appointment.id))
        .filter(
            Appointment.professional_id == professional_id,
            Appointment.status != STATUS_CANCELED,
            Appointment.start_time < end,
            Appointment.end_time > start,
        )
        .scalar()
        or 0
    )


def _lock_professional(db: Session, professional_id: int) -> Professional | None:
    # Serializa reservas concurrentes del mismo profesional (FOR UPDATE en PostgreSQL).
    return (
        db.query(Professional)
        .filter(Professional.id == professional_id)
        .with_for_update()
        .first()
    )


def create_booking(db: Session, request: BookingRequest, *, now: datetime | None = None) -> list[Appointment]:
    missing = _missing_fields(request)
    if missing:
        raise BookingValidationError(
            f"Faltan datos obligatorios: {', '.join(missing)}",
            missing_fields=missing,
        )
    invalid = _invalid_fields(request)
    if invalid:
        raise BookingValidationError(
            f"Datos inválidos: {', '.join(invalid)}",
            invalid_fields=invalid,
        )
    weeks = _resolve_recurring_weeks(request.recurring_weeks)

    created: list[Appointment] = []
    try:
        service = db.query(Service).filter(Service.id == request.service_id).first()
        if not service or not service.active:
            raise BookingValidationError("El servicio seleccionado no existe")
        tenant = db.query(Tenant).filter(Tenant.id == service.tenant_id).first()
        if not tenant:
            raise BookingValidationError("El servicio seleccionado no existe")

        try:
            start = to_tenant_local(parse_datetime(request.start_time), tenant)
        except (TypeError, ValueError) as exc:
            raise BookingValidationError("Fecha u hora inválida") from exc

        occurrences = build_occurrences(start, service.duration_min, weeks)
        current_time = tenant_now(tenant, now)
        if any(occurrence_start < current_time for occurrence_start, _ in occurrences):
            raise BookingValidationError("No se pueden reservar turnos en el pasado")

        professional = _lock_professional(db, request.professional_id)
        if not professional or not professional.active or professional.tenant_id != service.tenant_id:
            raise BookingValidationError("El profesional seleccionado no existe")
        ensure_within_schedule(db, tenant, professional.id, occurrences)

        customer = get_or_create_customer(
            db,
            tenant_id=tenant.id,
            name=request.customer_name,
            email=request.customer_email,
            phone=request.customer_phone,
        )

        for occurrence_start, occurrence_end in occurrences:
            conflicts = count_overlapping_appointments(db, professional.id, occurrence_start, occurrence_end)
            if conflicts > 0:
                logger.warning(
                    "%s conflict professional_id=%s start=%s end=%s conflicts=%s weeks=%s",
                    BOOKING_PREFIX,
                    professional.id,
                    occurrence_start.isoformat(),
                    occurrence_end.isoformat(),
                    conflicts,
                    weeks,
                )
                raise SlotConflictError()

            appointment = Appointment(
                tenant_id=tenant.id,
                professional_id=professional.id,
                service_id=service.id,
                customer_id=customer.id,
                start_time=occurrence_start,
                end_time=occurrence_end,
                status=STATUS_CONFIRMED,
            )
            db.add(appointment)
            db.flush()
            created.append(appointment)

        db.commit()
    except Exception:
        db.rollback()
        raise

    for appointment in created:
        db.refresh(appointment)

    logger.info(
        "%s created tenant_id=%s professional_id=%s customer_id=%s appointment_ids=%s",
        BOOKING_PREFIX,
        tenant.id,
        professional.id,
        customer.id,
        [appointment.id for appointment in created],
    )
    return created
