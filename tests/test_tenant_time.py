from datetime import date, datetime

import pytest

from tests.fixtures_data import build_session_factory
from turnero.core.config import DEFAULT_CLOSING_HOUR, DEFAULT_OPENING_HOUR
from turnero.models.tenant import Tenant
from turnero.services.tenant_time import parse_date, sunday_based_weekday


def test_parse_date_accepts_plain_date_and_full_datetime():
    assert parse_date("2030-01-07") == date(2030, 1, 7)
    assert parse_date(" 2030-01-07T10:00:00 ") == date(2030, 1, 7)
    assert parse_date(datetime(2030, 1, 7, 10)) == date(2030, 1, 7)


@pytest.mark.parametrize("raw", ["2030-01-07basura", "2030-13-45", "", "mañana"])
def test_parse_date_rejects_trailing_garbage_and_bad_values(raw):
    with pytest.raises(ValueError):
        parse_date(raw)


def test_weekday_numbering_starts_on_sunday():
    assert sunday_based_weekday(date(2030, 1, 6)) == 0
    assert sunday_based_weekday(date(2030, 1, 12)) == 6


def test_tenant_hours_default_to_configured_values():
    db = build_session_factory()()
    tenant = Tenant(slug="sin-horario", name="Sin horario")
    db.add(tenant)
    db.commit()

    assert tenant.opening_hour == DEFAULT_OPENING_HOUR
    assert tenant.closing_hour == DEFAULT_CLOSING_HOUR
