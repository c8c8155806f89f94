"""Tests for booking admission: validation, conflicts and concurrency."""

import threading
from datetime import date

import pytest
from sqlalchemy.orm import sessionmaker

from slotbook.database import make_engine
from slotbook.errors import InvalidSlot, InvalidTimeFormat, NotFound, SlotUnavailable
from slotbook.models.enums import ACTIVE_STATUSES, BookingStatus
from slotbook.models.generated import Base, Bookings
from slotbook.services.booking_admission import admit_booking, find_conflict
from slotbook.services.slots.calculator import blocked_intervals, intervals_overlap

from conftest import NEXT_MONDAY, make_booking, make_service, make_vendor


def admit(db, vendor, service, start_time, target_date=NEXT_MONDAY, customer_id=7):
    return admit_booking(
        db,
        vendor_id=vendor.id,
        service_id=service.id,
        customer_id=customer_id,
        target_date=target_date,
        start_time=start_time,
    )


class TestFindConflict:
    def test_none_without_bookings(self):
        assert find_conflict(600, 630, [], 10) is None

    def test_buffer_extends_existing_tail(self):
        assert find_conflict(635, 665, [("10:00", "10:30")], 10) == (600, 640)
        assert find_conflict(640, 670, [("10:00", "10:30")], 10) is None

    def test_candidate_fully_contains_existing(self):
        assert find_conflict(540, 720, [("10:00", "10:15")], 0) == (600, 615)


class TestAdmitBooking:
    def test_creates_confirmed_booking(self, db):
        vendor = make_vendor(db)
        service = make_service(db, vendor, duration_min=45)

        booking = admit(db, vendor, service, "9:30")

        assert booking.id is not None
        assert booking.status == BookingStatus.CONFIRMED.value
        assert booking.start_time == "09:30"
        assert booking.end_time == "10:15"
        assert booking.date == "2026-10-26"
        assert booking.customer_id == 7

    def test_conflict_respects_existing_buffer(self, db):
        vendor = make_vendor(db, buffer_minutes=10)
        service = make_service(db, vendor, duration_min=30)
        make_booking(db, vendor, service, NEXT_MONDAY, "10:00", "10:30")

        with pytest.raises(SlotUnavailable, match="no longer available"):
            admit(db, vendor, service, "10:35")

        booking = admit(db, vendor, service, "10:40")
        assert booking.start_time == "10:40"

    def test_buffer_not_added_to_candidate(self, db):
        vendor = make_vendor(db, buffer_minutes=30)
        service = make_service(db, vendor, duration_min=30)
        make_booking(db, vendor, service, NEXT_MONDAY, "10:00", "10:30")

        booking = admit(db, vendor, service, "09:30")
        assert booking.end_time == "10:00"

    @pytest.mark.parametrize("start_time,duration", [
        ("09:45", 30),  # ends inside existing
        ("10:15", 30),  # starts inside existing
        ("09:30", 90),  # fully contains existing
        ("10:05", 15),  # fully inside existing
    ])
    def test_all_overlap_shapes_rejected(self, db, start_time, duration):
        vendor = make_vendor(db)
        existing_service = make_service(db, vendor, duration_min=30, name="Trim")
        service = make_service(db, vendor, duration_min=duration, name="Colour")
        make_booking(db, vendor, existing_service, NEXT_MONDAY, "10:00", "10:30")

        with pytest.raises(SlotUnavailable):
            admit(db, vendor, service, start_time)

    @pytest.mark.parametrize("status", ["cancelled", "completed", "no_show"])
    def test_terminal_bookings_do_not_block(self, db, status):
        vendor = make_vendor(db)
        service = make_service(db, vendor)
        make_booking(db, vendor, service, NEXT_MONDAY, "10:00", "10:30", status=status)

        assert admit(db, vendor, service, "10:00").start_time == "10:00"

    def test_pending_blocks(self, db):
        vendor = make_vendor(db)
        service = make_service(db, vendor)
        make_booking(db, vendor, service, NEXT_MONDAY, "10:00", "10:30", status="pending")

        with pytest.raises(SlotUnavailable):
            admit(db, vendor, service, "10:15")

    def test_other_dates_and_vendors_do_not_conflict(self, db):
        vendor = make_vendor(db)
        other = make_vendor(db, business_name="Other")
        service = make_service(db, vendor)
        other_service = make_service(db, other)
        make_booking(db, vendor, service, NEXT_MONDAY, "10:00", "10:30")

        assert admit(db, vendor, service, "10:00", target_date=date(2026, 10, 27))
        assert admit(db, other, other_service, "10:00")

    def test_invalid_time_format(self, db):
        vendor = make_vendor(db)
        service = make_service(db, vendor)

        with pytest.raises(InvalidTimeFormat):
            admit(db, vendor, service, "25:00")

    def test_cannot_cross_midnight(self, db):
        vendor = make_vendor(db)
        service = make_service(db, vendor, duration_min=60)

        with pytest.raises(InvalidSlot):
            admit(db, vendor, service, "23:00")
        assert admit(db, vendor, service, "22:45").end_time == "23:45"

    def test_inactive_vendor(self, db):
        vendor = make_vendor(db, is_active=False)
        service = make_service(db, vendor)

        with pytest.raises(NotFound, match="Vendor"):
            admit(db, vendor, service, "10:00")

    @pytest.mark.parametrize("kwargs", [
        {"is_active": False},
        {"deleted_at": "2026-10-01 12:00:00"},
    ])
    def test_unbookable_service(self, db, kwargs):
        vendor = make_vendor(db)
        service = make_service(db, vendor, **kwargs)

        with pytest.raises(NotFound, match="Service"):
            admit(db, vendor, service, "10:00")

    def test_service_of_other_vendor(self, db):
        vendor = make_vendor(db)
        other = make_vendor(db, business_name="Other")
        service = make_service(db, other)

        with pytest.raises(NotFound, match="Service"):
            admit(db, vendor, service, "10:00")

    def test_failed_admission_leaves_no_row(self, db):
        vendor = make_vendor(db)
        service = make_service(db, vendor)
        make_booking(db, vendor, service, NEXT_MONDAY, "10:00", "10:30")

        with pytest.raises(SlotUnavailable):
            admit(db, vendor, service, "10:00")

        assert db.query(Bookings).count() == 1

    def test_ascending_admissions_keep_padded_intervals_apart(self, db):
        vendor = make_vendor(db, buffer_minutes=10)
        service = make_service(db, vendor, duration_min=40)

        for minutes in range(9 * 60, 17 * 60, 15):
            start = f"{minutes // 60:02d}:{minutes % 60:02d}"
            try:
                admit(db, vendor, service, start)
            except SlotUnavailable:
                pass

        rows = (
            db.query(Bookings)
            .filter(Bookings.status.in_(ACTIVE_STATUSES))
            .order_by(Bookings.start_time)
            .all()
        )
        assert len(rows) > 1
        padded = blocked_intervals([(b.start_time, b.end_time) for b in rows], 10)
        for i, a in enumerate(padded):
            for b in padded[i + 1:]:
                assert not intervals_overlap(*a, *b)

    def test_earlier_booking_may_end_at_later_one(self, db):
        # Buffer pads only the tail of a booking already on the timeline,
        # so admitting backwards leaves no gap before the later booking.
        vendor = make_vendor(db, buffer_minutes=30)
        service = make_service(db, vendor, duration_min=30)

        later = admit(db, vendor, service, "10:00")
        earlier = admit(db, vendor, service, "09:30")

        assert earlier.end_time == later.start_time
        booked = [(earlier.start_time, earlier.end_time), (later.start_time, later.end_time)]
        raw = blocked_intervals(booked, 0)
        padded = blocked_intervals(booked, 30)
        assert not intervals_overlap(*raw[0], *raw[1])
        assert intervals_overlap(*padded[0], *padded[1])

    def test_reverse_order_still_blocks_buffer_tail(self, db):
        vendor = make_vendor(db, buffer_minutes=30)
        service = make_service(db, vendor, duration_min=30)
        admit(db, vendor, service, "10:00")
        admit(db, vendor, service, "09:30")

        # 10:30 falls inside the 10:00 booking's buffer
        with pytest.raises(SlotUnavailable):
            admit(db, vendor, service, "10:30")


class TestConcurrentAdmission:
    def test_only_one_of_two_overlapping_requests_wins(self, tmp_path):
        engine = make_engine(f"sqlite:///{tmp_path / 'race.db'}")
        Base.metadata.create_all(engine)
        Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        with Session() as setup:
            vendor = make_vendor(setup)
            service = make_service(setup, vendor, duration_min=30)
            vendor_id, service_id = vendor.id, service.id

        barrier = threading.Barrier(2)
        outcomes = []
        lock = threading.Lock()

        def worker(start_time, customer_id):
            with Session() as session:
                barrier.wait()
                try:
                    admit_booking(
                        session,
                        vendor_id=vendor_id,
                        service_id=service_id,
                        customer_id=customer_id,
                        target_date=NEXT_MONDAY,
                        start_time=start_time,
                    )
                    result = "ok"
                except SlotUnavailable:
                    result = "conflict"
            with lock:
                outcomes.append(result)

        threads = [
            threading.Thread(target=worker, args=("10:00", 1)),
            threading.Thread(target=worker, args=("10:15", 2)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        assert sorted(outcomes) == ["conflict", "ok"]
        with Session() as check:
            assert check.query(Bookings).count() == 1
        engine.dispose()
