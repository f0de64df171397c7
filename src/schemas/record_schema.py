"""Read models for committed ledger records, serialised with camelCase keys."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(
        from_attributes=True, alias_generator=to_camel, populate_by_name=True
    )


class ProductRecord(_Record):
    """Product row as seen by the resolver's catalog context."""
    id: int
    name: str
    description: Optional[str] = None
    price: float
    stock: int
    category: str
    active: bool = True


class LineItem(_Record):
    """One order line with the unit price captured at order time."""
    product_id: int
    quantity: int
    price: float


class OrderRecord(_Record):
    """Committed order."""
    id: int
    customer_name: str
    status: str
    total_amount: float
    items: list[LineItem]
    created_at: datetime


class AppointmentRecord(_Record):
    """Committed appointment."""
    id: int
    customer_name: str
    date: datetime
    status: str
    contact_info: str
    notes: Optional[str] = None
    created_at: datetime
