from __future__ import annotations

import logging
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from turnero.core.config import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)


def tenant_zone(tenant) -> ZoneInfo:
    name = (getattr(tenant, "timezone", None) or DEFAULT_TIMEZONE).strip()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown tenant timezone=%s tenant_id=%s", name, getattr(tenant, "id", None))
        return ZoneInfo(DEFAULT_TIMEZONE)


def to_tenant_local(value: datetime, tenant) -> datetime:
    """Naive wall-clock time in the tenant zone; naive input is assumed to already be local."""
    if value.tzinfo is None:
        return value
    return value.astimezone(tenant_zone(tenant)).replace(tzinfo=None)


def tenant_now(tenant, now: datetime | None = None) -> datetime:
    current = now or datetime.now(tenant_zone(tenant))
    return to_tenant_local(current, tenant)


def sunday_based_weekday(day: date) -> int:
    """0 = domingo ... 6 = sábado."""
    return (day.weekday() + 1) % 7


def parse_datetime(raw: str | datetime) -> datetime:
    if isinstance(raw, datetime):
        return raw
    value = (raw or "").strip()
    if value.endswith("Z") or value.endswith("z"):
        value = f"{value[:-1]}+00:00"
    return datetime.fromisoformat(value)


def parse_date(raw: str | date) -> date:
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    value = (raw or "").strip()
    # Acepta "YYYY-MM-DD" o un datetime ISO completo.
    if len(value) > 10:
        return parse_datetime(value).date()
    return date.fromisoformat(value)
