from datetime import datetime, timedelta

import pytest

from tests.fixtures_data import BEFORE_MONDAY, CUSTOMER, MONDAY, build_session_factory, seed_tenant
from turnero.models.appointment import STATUS_CANCELED, STATUS_CONFIRMED, Appointment
from turnero.models.blocked_date import BlockedDate
from turnero.models.customer import Customer
from turnero.models.professional import Professional
from turnero.services.booking import BookingRequest, build_occurrences, create_booking
from turnero.services.errors import BookingValidationError, SlotConflictError


def _setup():
    session_factory = build_session_factory()
    db = session_factory()
    return db, seed_tenant(db)


def _request(ids, start="2030-01-07T10:00:00", **overrides) -> BookingRequest:
    data = {
        "professional_id": ids["carlos_id"],
        "service_id": ids["haircut_id"],
        "start_time": start,
        **CUSTOMER,
        **overrides,
    }
    return BookingRequest(**data)


def _local(hour: int, minute: int = 0, days: int = 0) -> datetime:
    return datetime(MONDAY.year, MONDAY.month, MONDAY.day, hour, minute) + timedelta(days=days)


def test_build_occurrences_repeats_weekly():
    occurrences = build_occurrences(_local(10), 30, 3)

    assert occurrences == [
        (_local(10), _local(10, 30)),
        (_local(10, days=7), _local(10, 30, days=7)),
        (_local(10, days=14), _local(10, 30, days=14)),
    ]


def test_single_booking_sets_end_from_service_duration():
    db, ids = _setup()

    created = create_booking(db, _request(ids), now=BEFORE_MONDAY)

    assert len(created) == 1
    appointment = created[0]
    assert appointment.id is not None
    assert appointment.tenant_id == ids["tenant_id"]
    assert appointment.start_time == _local(10)
    assert appointment.end_time == _local(10, 30)
    assert appointment.status == STATUS_CONFIRMED


def test_aware_start_time_is_stored_in_tenant_local_time():
    db, ids = _setup()

    created = create_booking(db, _request(ids, start="2030-01-07T13:00:00Z"), now=BEFORE_MONDAY)

    # Buenos Aires es UTC-3.
    assert created[0].start_time == _local(10)


def test_recurring_booking_creates_one_appointment_per_week():
    db, ids = _setup()

    created = create_booking(db, _request(ids, recurring_weeks=3), now=BEFORE_MONDAY)

    assert [appointment.start_time for appointment in created] == [
        _local(10),
        _local(10, days=7),
        _local(10, days=14),
    ]
    assert len({appointment.customer_id for appointment in created}) == 1


def test_overlapping_booking_is_rejected_with_conflict():
    db, ids = _setup()
    create_booking(db, _request(ids), now=BEFORE_MONDAY)

    with pytest.raises(SlotConflictError) as exc_info:
        create_booking(
            db,
            _request(ids, start="2030-01-07T10:15:00", customer_email="otra@example.com"),
            now=BEFORE_MONDAY,
        )

    assert exc_info.value.message == "slot no longer available"
    assert db.query(Appointment).count() == 1


def test_adjacent_booking_is_accepted():
    db, ids = _setup()
    create_booking(db, _request(ids), now=BEFORE_MONDAY)

    created = create_booking(db, _request(ids, start="2030-01-07T10:30:00"), now=BEFORE_MONDAY)

    assert created[0].start_time == _local(10, 30)


def test_canceled_appointment_frees_the_slot():
    db, ids = _setup()
    first = create_booking(db, _request(ids), now=BEFORE_MONDAY)[0]
    first.status = STATUS_CANCELED
    db.commit()

    created = create_booking(db, _request(ids), now=BEFORE_MONDAY)

    assert created[0].start_time == _local(10)


def test_recurring_conflict_in_third_week_creates_nothing():
    db, ids = _setup()
    create_booking(
        db,
        _request(ids, start="2030-01-21T10:00:00", customer_email="ocupado@example.com"),
        now=BEFORE_MONDAY,
    )

    with pytest.raises(SlotConflictError):
        create_booking(db, _request(ids, recurring_weeks=4), now=BEFORE_MONDAY)

    assert db.query(Appointment).count() == 1
    assert db.query(Customer).filter(Customer.email == CUSTOMER["customer_email"]).count() == 0


def _block(db, ids, day):
    db.add(BlockedDate(professional_id=ids["carlos_id"], date=day, reason="Capacitación"))
    db.commit()


def test_blocked_date_cannot_be_booked():
    db, ids = _setup()
    _block(db, ids, MONDAY)

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids), now=BEFORE_MONDAY)

    assert db.query(Appointment).count() == 0


def test_closed_weekday_cannot_be_booked():
    db, ids = _setup()

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids, start="2030-01-06T10:00:00"), now=BEFORE_MONDAY)

    assert db.query(Appointment).count() == 0


@pytest.mark.parametrize("start", ["2030-01-08T03:00:00", "2030-01-08T09:30:00", "2030-01-08T17:45:00"])
def test_booking_outside_opening_hours_is_rejected(start):
    db, ids = _setup()

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids, start=start), now=BEFORE_MONDAY)

    assert db.query(Appointment).count() == 0


def test_last_slot_ending_at_closing_time_is_accepted():
    db, ids = _setup()

    created = create_booking(db, _request(ids, start="2030-01-07T17:30:00"), now=BEFORE_MONDAY)

    assert created[0].end_time == _local(18)


def test_recurring_booking_landing_on_blocked_week_creates_nothing():
    db, ids = _setup()
    _block(db, ids, MONDAY + timedelta(days=14))

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids, recurring_weeks=3), now=BEFORE_MONDAY)

    assert db.query(Appointment).count() == 0
    assert db.query(Customer).count() == 0


@pytest.mark.parametrize("email", ["no-es-un-email", "juan@", "juan pérez@example.com"])
def test_malformed_email_is_rejected(email):
    db, ids = _setup()

    with pytest.raises(BookingValidationError) as exc_info:
        create_booking(db, _request(ids, customer_email=email), now=BEFORE_MONDAY)

    assert exc_info.value.invalid_fields == ["customer_email"]
    assert db.query(Customer).count() == 0

def test_missing_fields_are_reported_together():
    db, ids = _setup()

    with pytest.raises(BookingValidationError) as exc_info:
        create_booking(
            db,
            BookingRequest(
                professional_id=ids["carlos_id"],
                service_id=None,
                customer_name="  ",
                customer_email=None,
                start_time=None,
            ),
            now=BEFORE_MONDAY,
        )

    assert set(exc_info.value.missing_fields) == {"service_id", "customer_name", "customer_email", "start_time"}
    assert db.query(Appointment).count() == 0


def test_unknown_service_is_a_validation_error():
    db, ids = _setup()

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids, service_id=9999), now=BEFORE_MONDAY)


def test_invalid_start_time_is_a_validation_error():
    db, ids = _setup()

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids, start="mañana a las diez"), now=BEFORE_MONDAY)


def test_booking_in_the_past_is_rejected():
    db, ids = _setup()

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids), now=datetime(2030, 1, 8, 9, 0))


@pytest.mark.parametrize("weeks", [0, -1, 53])
def test_recurring_weeks_out_of_range_is_rejected(weeks):
    db, ids = _setup()

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids, recurring_weeks=weeks), now=BEFORE_MONDAY)


def test_professional_from_another_tenant_is_rejected():
    db, ids = _setup()
    other = seed_tenant(db, slug="otro-negocio")

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids, professional_id=other["carlos_id"]), now=BEFORE_MONDAY)

    assert db.query(Appointment).count() == 0


def test_inactive_professional_is_rejected():
    db, ids = _setup()
    professional = db.query(Professional).filter(Professional.id == ids["carlos_id"]).one()
    professional.active = False
    db.commit()

    with pytest.raises(BookingValidationError):
        create_booking(db, _request(ids), now=BEFORE_MONDAY)


def test_customer_is_reused_by_email_within_tenant():
    db, ids = _setup()
    first = create_booking(db, _request(ids), now=BEFORE_MONDAY)[0]

    second = create_booking(
        db,
        _request(ids, start="2030-01-07T11:00:00", customer_email="  JUAN@example.com ", customer_name="Juan P."),
        now=BEFORE_MONDAY,
    )[0]

    assert second.customer_id == first.customer_id
    customer = db.query(Customer).filter(Customer.id == first.customer_id).one()
    assert customer.name == CUSTOMER["customer_name"]
    assert db.query(Customer).count() == 1


def test_same_email_in_another_tenant_creates_separate_customer():
    db, ids = _setup()
    other = seed_tenant(db, slug="otro-negocio")

    first = create_booking(db, _request(ids), now=BEFORE_MONDAY)[0]
    second = create_booking(
        db,
        _request(other, professional_id=other["carlos_id"], service_id=other["haircut_id"]),
        now=BEFORE_MONDAY,
    )[0]

    assert first.customer_id != second.customer_id
    assert db.query(Customer).count() == 2
