"""Dynamic prompt construction for context-aware resolver instructions."""

from datetime import datetime, timezone
from typing import Optional

from src.prompts.system_prompts import RECEPTIONIST_SYSTEM_PROMPT
from src.schemas.record_schema import ProductRecord


def build_product_context(products: list[ProductRecord]) -> str:
    """One line per active product: ``Name ($price) - N in stock``."""
    if not products:
        return "No products are currently available."
    return "\n".join(
        f"{p.name} (${p.price:.2f}) - {p.stock} in stock" for p in products
    )


def build_system_prompt(
    products: list[ProductRecord], now: Optional[datetime] = None
) -> str:
    """Fold the live catalog and the current time into the receptionist instructions."""
    now = now or datetime.now(timezone.utc)
    return (
        f"{RECEPTIONIST_SYSTEM_PROMPT}\n"
        f"Current date and time (UTC): {now.strftime('%A %Y-%m-%d %H:%M')}\n\n"
        f"Available Products:\n{build_product_context(products)}"
    )
