"""Starter product catalog loaded into an empty store."""

import logging

from src.tools.inventory import InventoryLedger

logger = logging.getLogger(__name__)

SEED_PRODUCTS: list[dict] = [
    {
        "name": "Premium Widget",
        "description": "High quality widget for all your needs",
        "price": 29.99,
        "stock": 50,
        "category": "Widgets",
    },
    {
        "name": "Super Gadget",
        "description": "The latest gadget in tech",
        "price": 199.99,
        "stock": 15,
        "category": "Gadgets",
    },
    {
        "name": "Consultation Hour",
        "description": "One hour consultation with expert",
        "price": 150.00,
        "stock": 100,
        "category": "Services",
    },
]


def seed_catalog(inventory: InventoryLedger) -> int:
    """Insert the starter catalog when no products exist. Returns rows added."""
    if inventory.has_products():
        return 0
    logger.info("Seeding product catalog...")
    for entry in SEED_PRODUCTS:
        inventory.add_product(**entry)
    logger.info("Product catalog seeded with %d products", len(SEED_PRODUCTS))
    return len(SEED_PRODUCTS)
