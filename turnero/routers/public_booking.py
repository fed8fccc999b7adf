from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from turnero.core.database import get_db
from turnero.models.professional import Professional
from turnero.models.service import Service
from turnero.schemas.booking import (
    AppointmentRead,
    BookingPayload,
    BookingResponse,
    ProfessionalRead,
    ServiceRead,
    TenantPublic,
)
from turnero.services.availability import get_available_slots
from turnero.services.booking import BookingRequest, create_booking
from turnero.services.errors import BookingValidationError, NotFoundError, SlotConflictError
from turnero.services.tenant_time import parse_date
from turnero.services.tenants import get_tenant_by_slug

logger = logging.getLogger(__name__)
PUBLIC_BOOKING_PREFIX = "[PUBLIC_BOOKING]"

router = APIRouter(tags=["public-booking"])


@router.get("/api/tenant/{slug}", response_model=TenantPublic)
def get_public_tenant(slug: str, db: Session = Depends(get_db)):
    try:
        tenant = get_tenant_by_slug(db, slug)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc
    return TenantPublic.model_validate(tenant)


@router.get("/professionals", response_model=list[ProfessionalRead])
def list_professionals(
    tenant_id: Optional[int] = Query(default=None, alias="tenantId"),
    db: Session = Depends(get_db),
):
    query = db.query(Professional).filter(Professional.active.is_(True))
    if tenant_id is not None:
        query = query.filter(Professional.tenant_id == tenant_id)
    return [ProfessionalRead.model_validate(row) for row in query.order_by(Professional.name.asc()).all()]


@router.get("/services", response_model=list[ServiceRead])
def list_services(
    tenant_id: Optional[int] = Query(default=None, alias="tenantId"),
    db: Session = Depends(get_db),
):
    query = db.query(Service).filter(Service.active.is_(True))
    if tenant_id is not None:
        query = query.filter(Service.tenant_id == tenant_id)
    return [ServiceRead.model_validate(row) for row in query.order_by(Service.name.asc()).all()]


@router.get("/api/availability", response_model=list[str])
def get_availability(
    professional_id: int = Query(..., alias="professionalId"),
    service_id: int = Query(..., alias="serviceId"),
    date: str = Query(...),
    db: Session = Depends(get_db),
):
    try:
        day = parse_date(date)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Fecha inválida") from exc

    try:
        return get_available_slots(db, professional_id, service_id, day)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message) from exc


@router.post("/appointments", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def book_appointment(payload: BookingPayload, db: Session = Depends(get_db)):
    request = BookingRequest(
        professional_id=payload.professional_id,
        service_id=payload.service_id,
        customer_name=payload.customer_name,
        customer_email=payload.customer_email,
        customer_phone=payload.customer_phone,
        start_time=payload.start_time or payload.date,
        recurring_weeks=payload.recurring_weeks,
    )
    try:
        appointments = create_booking(db, request)
    except BookingValidationError as exc:
        detail = {"error": exc.message}
        if exc.missing_fields:
            detail["missing_fields"] = exc.missing_fields
        if exc.invalid_fields:
            detail["invalid_fields"] = exc.invalid_fields
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail) from exc
    except SlotConflictError as exc:
        logger.info(
            "%s conflict professional_id=%s start=%s",
            PUBLIC_BOOKING_PREFIX,
            payload.professional_id,
            request.start_time,
        )
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail={"error": exc.message}) from exc

    return BookingResponse(
        success=True,
        data=[AppointmentRead.model_validate(appointment) for appointment in appointments],
    )
