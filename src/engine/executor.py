"""
Transaction executor — applies a resolved action to the ledgers.

Each action variant has exactly one handler. Recoverable ledger conditions
come back as an ``ExecutionOutcome``; anything else (storage down, bugs)
propagates to the HTTP layer.

Booking re-validates the conflict window inside the ledger transaction, so
an earlier check_availability in the same conversation is advisory only.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from src.errors import DateUnparseable, InsufficientStock, ProductNotFound, SlotConflict
from src.schemas.action_schema import BookAppointment, CheckAvailability, CreateOrder
from src.schemas.record_schema import AppointmentRecord, OrderRecord
from src.tools.inventory import InventoryLedger
from src.tools.scheduling import SchedulingLedger
from src.utils import parse_instant

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    AVAILABLE = "available"
    SLOT_CONFLICT = "slot_conflict"
    DATE_UNPARSEABLE = "date_unparseable"
    APPOINTMENT_BOOKED = "appointment_booked"
    ORDER_PLACED = "order_placed"
    PRODUCT_NOT_FOUND = "product_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    EMPTY_ORDER = "empty_order"
    REPLY = "reply"
    SERVICE_UNAVAILABLE = "service_unavailable"


@dataclass(frozen=True)
class ExecutionOutcome:
    """What happened for one turn, with just enough detail to phrase it."""

    kind: OutcomeKind
    instant: Optional[datetime] = None
    customer_name: Optional[str] = None
    product_name: Optional[str] = None
    remaining_stock: Optional[int] = None
    appointment: Optional[AppointmentRecord] = None
    order: Optional[OrderRecord] = None
    text: Optional[str] = None


ExecutableAction = Union[CheckAvailability, BookAppointment, CreateOrder]


class TransactionExecutor:
    """Dispatches action requests to the inventory and scheduling ledgers."""

    def __init__(self, inventory: InventoryLedger, scheduling: SchedulingLedger) -> None:
        self._inventory = inventory
        self._scheduling = scheduling

    def execute(self, action: ExecutableAction) -> ExecutionOutcome:
        if isinstance(action, CheckAvailability):
            return self.check_availability(action)
        if isinstance(action, BookAppointment):
            return self.book_appointment(action)
        if isinstance(action, CreateOrder):
            return self.create_order(action)
        raise TypeError(f"Unsupported action: {type(action).__name__}")

    def check_availability(self, action: CheckAvailability) -> ExecutionOutcome:
        try:
            instant = parse_instant(action.date)
        except DateUnparseable:
            logger.info("check_availability: unparseable date %r", action.date)
            return ExecutionOutcome(OutcomeKind.DATE_UNPARSEABLE)

        if self._scheduling.is_available(instant):
            return ExecutionOutcome(OutcomeKind.AVAILABLE, instant=instant)
        return ExecutionOutcome(OutcomeKind.SLOT_CONFLICT, instant=instant)

    def book_appointment(self, action: BookAppointment) -> ExecutionOutcome:
        try:
            instant = parse_instant(action.date)
        except DateUnparseable:
            logger.info("book_appointment: unparseable date %r", action.date)
            return ExecutionOutcome(OutcomeKind.DATE_UNPARSEABLE)

        try:
            appointment = self._scheduling.book(
                customer_name=action.customer_name,
                instant=instant,
                contact_info=action.contact_info,
            )
        except SlotConflict as exc:
            logger.info("book_appointment: conflict at %s with %s", exc.requested, exc.conflicting_ids)
            return ExecutionOutcome(OutcomeKind.SLOT_CONFLICT, instant=instant)

        return ExecutionOutcome(
            OutcomeKind.APPOINTMENT_BOOKED,
            instant=instant,
            customer_name=action.customer_name,
            appointment=appointment,
        )

    def create_order(self, action: CreateOrder) -> ExecutionOutcome:
        if not action.items:
            return ExecutionOutcome(OutcomeKind.EMPTY_ORDER, customer_name=action.customer_name)

        try:
            order = self._inventory.place_order(action.customer_name, action.items)
        except ProductNotFound as exc:
            return ExecutionOutcome(
                OutcomeKind.PRODUCT_NOT_FOUND, product_name=exc.product_name
            )
        except InsufficientStock as exc:
            return ExecutionOutcome(
                OutcomeKind.INSUFFICIENT_STOCK,
                product_name=exc.product_name,
                remaining_stock=exc.remaining,
            )

        return ExecutionOutcome(
            OutcomeKind.ORDER_PLACED, customer_name=action.customer_name, order=order
        )
