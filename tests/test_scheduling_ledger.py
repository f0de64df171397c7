"""Tests for the scheduling ledger's conflict window and status transitions."""

from datetime import datetime, timedelta

import pytest

from src.errors import RecordNotFound, SlotConflict

TEN_AM = datetime(2030, 3, 18, 10, 0)


class TestAvailability:
    def test_empty_calendar_is_available(self, scheduling):
        assert scheduling.is_available(TEN_AM)

    def test_confirmed_appointment_inside_window_blocks(self, scheduling):
        scheduling.book("Jane Doe", TEN_AM, "0412345678")
        assert not scheduling.is_available(TEN_AM + timedelta(minutes=29))
        assert not scheduling.is_available(TEN_AM - timedelta(minutes=29))

    def test_appointment_at_window_start_blocks(self, scheduling):
        scheduling.book("Jane Doe", TEN_AM, "0412345678")
        assert not scheduling.is_available(TEN_AM + timedelta(minutes=30))
        assert scheduling.is_available(TEN_AM + timedelta(minutes=31))

    def test_appointment_at_window_end_does_not_block(self, scheduling):
        scheduling.book("Jane Doe", TEN_AM, "0412345678")
        assert scheduling.is_available(TEN_AM - timedelta(minutes=30))
        assert not scheduling.is_available(TEN_AM - timedelta(minutes=29))

    def test_cancelled_appointment_does_not_block(self, scheduling):
        booked = scheduling.book("Jane Doe", TEN_AM, "0412345678")
        scheduling.set_status(booked.id, "cancelled")
        assert scheduling.is_available(TEN_AM)

    def test_check_reserves_nothing(self, scheduling):
        assert scheduling.is_available(TEN_AM)
        assert scheduling.find_conflicts(TEN_AM) == []
        assert scheduling.get_appointment(1) is None

    def test_custom_window(self, database):
        from src.tools.scheduling import SchedulingLedger

        ledger = SchedulingLedger(database, conflict_window=timedelta(minutes=60))
        ledger.book("Jane Doe", TEN_AM, "0412345678")
        assert not ledger.is_available(TEN_AM + timedelta(minutes=45))


class TestBooking:
    def test_book_creates_confirmed_appointment(self, scheduling):
        record = scheduling.book("Jane Doe", TEN_AM, "0412345678", notes="First visit")
        assert record.status == "confirmed"
        assert record.date == TEN_AM
        assert record.customer_name == "Jane Doe"
        assert record.notes == "First visit"
        assert scheduling.get_appointment(record.id) == record

    def test_second_identical_booking_conflicts(self, scheduling):
        first = scheduling.book("Jane Doe", TEN_AM, "0412345678")
        with pytest.raises(SlotConflict) as exc_info:
            scheduling.book("Jane Doe", TEN_AM, "0412345678")
        assert exc_info.value.conflicting_ids == [first.id]

    def test_overlapping_booking_conflicts(self, scheduling):
        scheduling.book("Jane Doe", TEN_AM, "0412345678")
        with pytest.raises(SlotConflict):
            scheduling.book("John Roe", TEN_AM + timedelta(minutes=15), "0498765432")

    def test_half_hour_after_existing_conflicts(self, scheduling):
        scheduling.book("Jane Doe", TEN_AM, "0412345678")
        with pytest.raises(SlotConflict):
            scheduling.book("John Roe", TEN_AM + timedelta(minutes=30), "0498765432")

    def test_half_hour_before_existing_allowed(self, scheduling):
        scheduling.book("Jane Doe", TEN_AM, "0412345678")
        earlier = scheduling.book("John Roe", TEN_AM - timedelta(minutes=30), "0498765432")
        assert earlier.status == "confirmed"


class TestStatusTransitions:
    def test_complete_appointment(self, scheduling):
        booked = scheduling.book("Jane Doe", TEN_AM, "0412345678")
        assert scheduling.set_status(booked.id, "completed").status == "completed"

    def test_reconfirm_checks_window(self, scheduling):
        first = scheduling.book("Jane Doe", TEN_AM, "0412345678")
        scheduling.set_status(first.id, "cancelled")
        scheduling.book("John Roe", TEN_AM + timedelta(minutes=10), "0498765432")

        with pytest.raises(SlotConflict):
            scheduling.set_status(first.id, "confirmed")
        assert scheduling.get_appointment(first.id).status == "cancelled"

    def test_reconfirm_when_free(self, scheduling):
        first = scheduling.book("Jane Doe", TEN_AM, "0412345678")
        scheduling.set_status(first.id, "cancelled")
        assert scheduling.set_status(first.id, "confirmed").status == "confirmed"

    def test_invalid_status(self, scheduling):
        booked = scheduling.book("Jane Doe", TEN_AM, "0412345678")
        with pytest.raises(ValueError):
            scheduling.set_status(booked.id, "rescheduled")

    def test_missing_appointment(self, scheduling):
        with pytest.raises(RecordNotFound):
            scheduling.set_status(404, "cancelled")
