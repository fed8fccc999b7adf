import threading

from sqlalchemy.orm import sessionmaker

from tests.fixtures_data import BEFORE_MONDAY, seed_tenant
from turnero.core.database import Base, build_engine
from turnero.models.appointment import Appointment
from turnero.services.booking import BookingRequest, create_booking
from turnero.services.errors import SlotConflictError
import turnero.models  # noqa: F401


def _run_concurrently(session_factory, requests):
    barrier = threading.Barrier(len(requests))
    outcomes = [None] * len(requests)

    def worker(index, request):
        db = session_factory()
        try:
            barrier.wait()
            create_booking(db, request, now=BEFORE_MONDAY)
            outcomes[index] = "ok"
        except SlotConflictError:
            outcomes[index] = "conflict"
        except Exception as exc:  # noqa: BLE001
            outcomes[index] = repr(exc)
        finally:
            db.close()

    threads = [threading.Thread(target=worker, args=(i, request)) for i, request in enumerate(requests)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


def _setup(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'turnos.db'}")
    Base.metadata.create_all(bind=engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = session_factory()
    ids = seed_tenant(db)
    db.close()
    return engine, session_factory, ids


def _request(ids, start, email):
    return BookingRequest(
        professional_id=ids["carlos_id"],
        service_id=ids["haircut_id"],
        customer_name="Cliente",
        customer_email=email,
        start_time=start,
    )


def test_same_slot_booked_twice_concurrently_only_one_wins(tmp_path):
    engine, session_factory, ids = _setup(tmp_path)

    outcomes = _run_concurrently(
        session_factory,
        [
            _request(ids, "2030-01-07T10:00:00", "uno@example.com"),
            _request(ids, "2030-01-07T10:00:00", "dos@example.com"),
        ],
    )

    assert sorted(outcomes) == ["conflict", "ok"]
    db = session_factory()
    try:
        assert db.query(Appointment).count() == 1
    finally:
        db.close()
    engine.dispose()


def test_partially_overlapping_concurrent_bookings_only_one_wins(tmp_path):
    engine, session_factory, ids = _setup(tmp_path)

    outcomes = _run_concurrently(
        session_factory,
        [
            _request(ids, "2030-01-07T10:00:00", "mismo@example.com"),
            _request(ids, "2030-01-07T10:15:00", "mismo@example.com"),
        ],
    )

    assert sorted(outcomes) == ["conflict", "ok"]
    db = session_factory()
    try:
        assert db.query(Appointment).count() == 1
    finally:
        db.close()
    engine.dispose()
