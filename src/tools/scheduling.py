"""
Scheduling ledger: the appointment calendar.

A requested instant t conflicts with any confirmed appointment starting in
``[t - window, t + window)``. Booking runs the window check and the insert
in the same transaction, so a check made earlier in the conversation is
advisory only.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.db.database import Database, run_with_retry
from src.db.models import Appointment
from src.errors import RecordNotFound, SlotConflict
from src.schemas.record_schema import AppointmentRecord
from src.utils import format_instant

logger = logging.getLogger(__name__)

APPOINTMENT_STATUSES = frozenset({"confirmed", "cancelled", "completed"})


class SchedulingLedger:
    """Authoritative store for the appointment calendar."""

    def __init__(
        self,
        database: Database,
        conflict_window: timedelta = timedelta(minutes=30),
        max_attempts: int = 3,
    ) -> None:
        self._db = database
        self._window = conflict_window
        self._max_attempts = max_attempts

    @property
    def conflict_window(self) -> timedelta:
        return self._window

    def find_conflicts(self, instant: datetime) -> list[AppointmentRecord]:
        """Confirmed appointments starting in ``[instant - window, instant + window)``."""
        with self._db.transaction() as session:
            rows = self._conflicting(session, instant)
            return [AppointmentRecord.model_validate(row) for row in rows]

    def is_available(self, instant: datetime) -> bool:
        """Read-only check; reserves nothing."""
        return not self.find_conflicts(instant)

    def get_appointment(self, appointment_id: int) -> Optional[AppointmentRecord]:
        with self._db.transaction() as session:
            row = session.get(Appointment, appointment_id)
            return AppointmentRecord.model_validate(row) if row else None

    def book(
        self,
        customer_name: str,
        instant: datetime,
        contact_info: str,
        notes: Optional[str] = None,
    ) -> AppointmentRecord:
        """Insert a confirmed appointment if the window around ``instant`` is free.

        Raises:
            SlotConflict: Another confirmed appointment is inside the window.
        """

        def _op() -> AppointmentRecord:
            with self._db.transaction(serializable=True) as session:
                clashes = self._conflicting(session, instant)
                if clashes:
                    raise SlotConflict(format_instant(instant), [c.id for c in clashes])
                appointment = Appointment(
                    customer_name=customer_name,
                    date=instant,
                    status="confirmed",
                    contact_info=contact_info,
                    notes=notes,
                )
                session.add(appointment)
                session.flush()
                return AppointmentRecord.model_validate(appointment)

        record = run_with_retry(_op, attempts=self._max_attempts)
        logger.info(
            "Appointment %d booked for %s at %s",
            record.id, customer_name, format_instant(instant),
        )
        return record

    def set_status(self, appointment_id: int, status: str) -> AppointmentRecord:
        """Transition an appointment; re-confirming re-checks the window."""
        if status not in APPOINTMENT_STATUSES:
            raise ValueError(f"Invalid appointment status: {status!r}")

        def _op() -> AppointmentRecord:
            with self._db.transaction(serializable=True) as session:
                appointment = session.get(Appointment, appointment_id)
                if appointment is None:
                    raise RecordNotFound(f"Appointment {appointment_id} not found")
                if status == "confirmed" and appointment.status != "confirmed":
                    clashes = self._conflicting(session, appointment.date, exclude_id=appointment.id)
                    if clashes:
                        raise SlotConflict(
                            format_instant(appointment.date), [c.id for c in clashes]
                        )
                appointment.status = status
                session.flush()
                return AppointmentRecord.model_validate(appointment)

        record = run_with_retry(_op, attempts=self._max_attempts)
        logger.info("Appointment %d -> %s", appointment_id, status)
        return record

    def _conflicting(
        self, session: Session, instant: datetime, exclude_id: Optional[int] = None
    ) -> list[Appointment]:
        stmt = select(Appointment).where(
            Appointment.status == "confirmed",
            Appointment.date >= instant - self._window,
            Appointment.date < instant + self._window,
        )
        if exclude_id is not None:
            stmt = stmt.where(Appointment.id != exclude_id)
        return list(session.scalars(stmt).all())
