import logging
from datetime import datetime

from tests.fixtures_data import BEFORE_MONDAY, CUSTOMER, build_session_factory, seed_tenant
from turnero.models.appointment import STATUS_CANCELED
from turnero.models.tenant import Tenant
from turnero.services.booking import BookingRequest, create_booking
from turnero.services.reminders import find_appointments_for_day, send_daily_reminders


def _book(db, ids, start, email=CUSTOMER["customer_email"]):
    return create_booking(
        db,
        BookingRequest(
            professional_id=ids["carlos_id"],
            service_id=ids["haircut_id"],
            customer_name=CUSTOMER["customer_name"],
            customer_email=email,
            start_time=start,
        ),
        now=BEFORE_MONDAY,
    )[0]


def test_reminders_cover_only_tomorrows_confirmed_appointments(caplog):
    db = build_session_factory()()
    ids = seed_tenant(db)
    _book(db, ids, "2030-01-08T10:00:00")
    _book(db, ids, "2030-01-08T17:30:00", email="maria@example.com")
    canceled = _book(db, ids, "2030-01-08T12:00:00", email="cancelo@example.com")
    canceled.status = STATUS_CANCELED
    db.commit()
    _book(db, ids, "2030-01-09T10:00:00")

    caplog.clear()
    with caplog.at_level(logging.INFO, logger="turnero.services.reminders"):
        sent = send_daily_reminders(db, now=datetime(2030, 1, 7, 20, 0))

    assert sent == 2
    reminder_lines = [
        r.getMessage() for r in caplog.records if r.getMessage().startswith("[REMINDERS] tenant=")
    ]
    assert len(reminder_lines) == 2
    assert "2030-01-08 10:00" in reminder_lines[0]
    assert "maria@example.com" in reminder_lines[1]


def test_reminders_skip_inactive_tenants():
    db = build_session_factory()()
    ids = seed_tenant(db)
    _book(db, ids, "2030-01-08T10:00:00")
    tenant = db.query(Tenant).filter(Tenant.id == ids["tenant_id"]).one()
    tenant.is_active = False
    db.commit()

    assert send_daily_reminders(db, now=datetime(2030, 1, 7, 20, 0)) == 0


def test_find_appointments_for_day_is_tenant_scoped():
    db = build_session_factory()()
    ids = seed_tenant(db)
    other = seed_tenant(db, slug="otro-negocio")
    _book(db, ids, "2030-01-08T10:00:00")
    _book(db, other, "2030-01-08T10:00:00")

    rows = find_appointments_for_day(db, ids["tenant_id"], datetime(2030, 1, 8).date())

    assert [row.tenant_id for row in rows] == [ids["tenant_id"]]
