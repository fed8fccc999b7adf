from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class TenantPublic(CamelModel):
    id: int
    slug: str
    name: str
    theme_color: str = Field(alias="themeColor")
    category: str
    address: str
    phone: str
    opening_hour: int = Field(alias="openingHour")
    closing_hour: int = Field(alias="closingHour")
    closed_days: list[int] = Field(alias="closedDays")
    timezone: str


class ProfessionalRead(CamelModel):
    id: int
    tenant_id: int = Field(alias="tenantId")
    name: str
    job_title: Optional[str] = Field(default=None, alias="jobTitle")


class ServiceRead(CamelModel):
    id: int
    tenant_id: int = Field(alias="tenantId")
    name: str
    duration_min: int = Field(alias="durationMin")
    price: Decimal


class CustomerRead(CamelModel):
    id: int
    name: str
    email: str
    phone: str


class BookingPayload(CamelModel):
    """Todos opcionales: los faltantes se informan juntos como error 400."""

    professional_id: Optional[int] = Field(default=None, alias="professionalId")
    service_id: Optional[int] = Field(default=None, alias="serviceId")
    start_time: Optional[str] = Field(default=None, alias="startTime")
    date: Optional[str] = None
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    customer_email: Optional[str] = Field(default=None, alias="customerEmail")
    customer_phone: Optional[str] = Field(default=None, alias="customerPhone")
    recurring_weeks: Optional[int] = Field(default=1, alias="recurringWeeks")


class AppointmentRead(CamelModel):
    id: int
    tenant_id: int = Field(alias="tenantId")
    professional_id: int = Field(alias="professionalId")
    service_id: int = Field(alias="serviceId")
    customer_id: int = Field(alias="customerId")
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")
    status: str


class BookingResponse(BaseModel):
    success: bool
    data: list[AppointmentRead]


class AppointmentDetail(AppointmentRead):
    service: ServiceRead
    customer: CustomerRead
    professional: ProfessionalRead


class BlockedDateCreate(CamelModel):
    professional_id: int = Field(alias="professionalId")
    date: date
    reason: str = Field(default="", max_length=255)


class BlockedDateRead(CamelModel):
    id: int
    professional_id: int = Field(alias="professionalId")
    date: date
    reason: str
