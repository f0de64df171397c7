"""Action requests the intent resolver can extract from an utterance.

The set is closed: each capability in the tool manifest has exactly one
model here, tagged by ``name``. The resolver parses tool-call arguments
into ``ActionRequest`` and the executor handles every member.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _ActionArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class CheckAvailability(_ActionArgs):
    """Is the requested instant free of confirmed appointments?"""
    name: Literal["check_availability"] = "check_availability"
    date: str


class BookAppointment(_ActionArgs):
    """Book a confirmed appointment for a customer."""
    name: Literal["book_appointment"] = "book_appointment"
    customer_name: str = Field(alias="customerName", min_length=1)
    date: str
    contact_info: str = Field(alias="contactInfo", min_length=1)


class OrderItemRequest(_ActionArgs):
    """One requested line: product by display name, positive whole quantity."""
    product_name: str = Field(alias="productName", min_length=1)
    quantity: int = Field(gt=0)


class CreateOrder(_ActionArgs):
    """Place an order for one or more products."""
    name: Literal["create_order"] = "create_order"
    customer_name: str = Field(alias="customerName", min_length=1)
    items: list[OrderItemRequest] = Field(default_factory=list)


ActionRequest = Annotated[
    Union[CheckAvailability, BookAppointment, CreateOrder],
    Field(discriminator="name"),
]

action_adapter: TypeAdapter[ActionRequest] = TypeAdapter(ActionRequest)


class TextReply(BaseModel):
    """A direct conversational reply with no ledger action."""
    text: str


Resolution = Union[TextReply, CheckAvailability, BookAppointment, CreateOrder]
