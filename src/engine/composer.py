"""Response composer: one templated sentence and an action hint per outcome."""

from src.engine.executor import ExecutionOutcome, OutcomeKind
from src.schemas.voice_schema import ActionHint, ActionType, ProcessVoiceResponse
from src.utils import format_instant

SERVICE_UNAVAILABLE_REPLY = "I'm having trouble connecting right now. Please try again later."
DATE_UNPARSEABLE_REPLY = "I couldn't understand that date. Could you please repeat it?"
SLOT_CONFLICT_REPLY = "Sorry, that time is already booked. Please choose another time."
EMPTY_ORDER_REPLY = "Which products would you like to order?"


def compose(outcome: ExecutionOutcome) -> ProcessVoiceResponse:
    """Map an executor outcome to the reply sent to the presentation layer."""
    kind = outcome.kind

    if kind == OutcomeKind.AVAILABLE:
        return _reply(
            f"Yes, {format_instant(outcome.instant)} is available. Would you like me to book it?",
            ActionType.ASK_TIME,
        )
    if kind == OutcomeKind.SLOT_CONFLICT:
        return _reply(SLOT_CONFLICT_REPLY, ActionType.NONE)
    if kind == OutcomeKind.DATE_UNPARSEABLE:
        return _reply(DATE_UNPARSEABLE_REPLY, ActionType.NONE)
    if kind == OutcomeKind.APPOINTMENT_BOOKED:
        return _reply(
            f"I've booked your appointment for {format_instant(outcome.instant)}. "
            f"Thank you, {outcome.customer_name}!",
            ActionType.CONFIRM_APPOINTMENT,
            outcome.appointment,
        )
    if kind == OutcomeKind.ORDER_PLACED:
        return _reply(
            f"Order placed! Total is ${outcome.order.total_amount:.2f}.",
            ActionType.CONFIRM_ORDER,
            outcome.order,
        )
    if kind == OutcomeKind.PRODUCT_NOT_FOUND:
        return _reply(
            f"I couldn't find a product named {outcome.product_name}.", ActionType.NONE
        )
    if kind == OutcomeKind.INSUFFICIENT_STOCK:
        return _reply(
            f"Sorry, we only have {outcome.remaining_stock} of {outcome.product_name} left.",
            ActionType.CHECK_STOCK,
            {"productName": outcome.product_name, "stock": outcome.remaining_stock},
        )
    if kind == OutcomeKind.EMPTY_ORDER:
        return _reply(EMPTY_ORDER_REPLY, ActionType.NONE)
    if kind == OutcomeKind.REPLY:
        return _reply(outcome.text or "", ActionType.NONE)
    if kind == OutcomeKind.SERVICE_UNAVAILABLE:
        return _reply(SERVICE_UNAVAILABLE_REPLY, ActionType.NONE)
    raise ValueError(f"Unhandled outcome kind: {kind}")


def _reply(text: str, action_type: ActionType, data=None) -> ProcessVoiceResponse:
    return ProcessVoiceResponse(text_response=text, action=ActionHint(type=action_type, data=data))
