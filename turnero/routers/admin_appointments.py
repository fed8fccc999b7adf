from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload

from turnero.core.database import get_db
from turnero.deps import get_tenant_professional, require_admin_user
from turnero.models.admin_user import AdminUser
from turnero.models.appointment import Appointment
from turnero.schemas.booking import AppointmentDetail
from turnero.services.tenant_time import parse_date

router = APIRouter(tags=["admin-appointments"])
logger = logging.getLogger(__name__)


@router.get("/appointments", response_model=list[AppointmentDetail])
def list_appointments(
    date: Optional[str] = Query(default=None),
    professional_id: Optional[int] = Query(default=None, alias="professionalId"),
    db: Session = Depends(get_db),
    user: AdminUser = Depends(require_admin_user),
):
    query = (
        db.query(Appointment)
        .options(
            joinedload(Appointment.service),
            joinedload(Appointment.customer),
            joinedload(Appointment.professional),
        )
        .filter(Appointment.tenant_id == user.tenant_id)
    )

    if professional_id is not None:
        get_tenant_professional(db, user, professional_id)
        query = query.filter(Appointment.professional_id == professional_id)

    if date:
        try:
            day = parse_date(date)
        except ValueError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Fecha inválida") from exc
        day_start = datetime.combine(day, time.min)
        query = query.filter(
            Appointment.start_time >= day_start,
            Appointment.start_time < day_start + timedelta(days=1),
        )

    appointments = query.order_by(Appointment.start_time.asc()).all()
    return [AppointmentDetail.model_validate(appointment) for appointment in appointments]


@router.delete("/appointments/{appointment_id}")
def delete_appointment(
    appointment_id: int,
    db: Session = Depends(get_db),
    user: AdminUser = Depends(require_admin_user),
):
    appointment = (
        db.query(Appointment)
        .filter(Appointment.id == appointment_id, Appointment.tenant_id == user.tenant_id)
        .first()
    )
    if not appointment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Turno no encontrado")

    db.delete(appointment)
    db.commit()
    logger.info(
        "[ADMIN] appointment deleted id=%s tenant_id=%s admin_id=%s",
        appointment_id,
        user.tenant_id,
        user.id,
    )
    return {"ok": True}
