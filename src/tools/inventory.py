"""
Inventory ledger: product stock and the orders that consume it.

Stock only moves through conditional decrements
(``stock = stock - n WHERE stock >= n``) and every order reserves all of its
lines and inserts the order row inside one transaction. A failure on any
line rolls back every decrement already applied for that order, so partial
reservations are never observable.
"""

import logging
from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.db.database import Database, run_with_retry
from src.db.models import Order, Product
from src.errors import InsufficientStock, ProductNotFound, RecordNotFound
from src.schemas.action_schema import OrderItemRequest
from src.schemas.record_schema import OrderRecord, ProductRecord
from src.utils import normalize_name

logger = logging.getLogger(__name__)

ORDER_STATUSES = frozenset({"pending", "completed", "cancelled"})
EDITABLE_PRODUCT_FIELDS = frozenset(
    {"name", "description", "price", "stock", "category", "image_url", "active"}
)


class InventoryLedger:
    """Authoritative store for stock levels and order records."""

    def __init__(self, database: Database, max_attempts: int = 3) -> None:
        self._db = database
        self._max_attempts = max_attempts

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def list_active_products(self) -> list[ProductRecord]:
        """Active products ordered by name, as folded into the resolver prompt."""
        with self._db.transaction() as session:
            rows = session.scalars(
                select(Product).where(Product.active.is_(True)).order_by(Product.name)
            ).all()
            return [ProductRecord.model_validate(row) for row in rows]

    def has_products(self) -> bool:
        with self._db.transaction() as session:
            return session.scalar(select(func.count(Product.id))) > 0

    def get_product(self, product_id: int) -> Optional[ProductRecord]:
        with self._db.transaction() as session:
            row = session.get(Product, product_id)
            return ProductRecord.model_validate(row) if row else None

    def get_product_by_name(
        self, name: str, active_only: bool = True
    ) -> Optional[ProductRecord]:
        """Case-insensitive exact name lookup."""
        with self._db.transaction() as session:
            row = self._find_by_name(session, name, active_only)
            return ProductRecord.model_validate(row) if row else None

    def get_order(self, order_id: int) -> Optional[OrderRecord]:
        with self._db.transaction() as session:
            row = session.get(Order, order_id)
            return OrderRecord.model_validate(row) if row else None

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def add_product(
        self,
        name: str,
        price: float,
        stock: int,
        category: str,
        description: Optional[str] = None,
        active: bool = True,
    ) -> ProductRecord:
        """Create a catalog entry (administrative surface and seeding)."""
        if stock < 0:
            raise ValueError(f"stock must be >= 0, got {stock}")
        if price < 0:
            raise ValueError(f"price must be >= 0, got {price}")
        with self._db.transaction() as session:
            product = Product(
                name=name.strip(),
                name_key=normalize_name(name),
                price=price,
                stock=stock,
                category=category,
                description=description,
                active=active,
            )
            session.add(product)
            self._flush_unique(session, name)
            logger.info("Product added: %s (stock %d @ %.2f)", product.name, stock, price)
            return ProductRecord.model_validate(product)

    def update_product(self, product_id: int, **changes: Any) -> ProductRecord:
        """Apply an administrative edit. Price edits never touch existing orders."""
        unknown = set(changes) - EDITABLE_PRODUCT_FIELDS
        if unknown:
            raise ValueError(f"Unknown product fields: {', '.join(sorted(unknown))}")
        if changes.get("stock", 0) < 0:
            raise ValueError(f"stock must be >= 0, got {changes['stock']}")
        with self._db.transaction() as session:
            product = session.get(Product, product_id)
            if product is None:
                raise RecordNotFound(f"Product {product_id} not found")
            for key, value in changes.items():
                setattr(product, key, value)
            if "name" in changes:
                product.name = product.name.strip()
                product.name_key = normalize_name(product.name)
                self._flush_unique(session, product.name)
            else:
                session.flush()
            return ProductRecord.model_validate(product)

    def place_order(
        self, customer_name: str, items: list[OrderItemRequest]
    ) -> OrderRecord:
        """Reserve every line and record a pending order, all or nothing.

        Raises:
            ProductNotFound: A line names no active product.
            InsufficientStock: A line asks for more than what remains.
            ValueError: ``items`` is empty.
        """
        if not items:
            raise ValueError("An order needs at least one item")

        def _op() -> OrderRecord:
            with self._db.transaction() as session:
                lines: list[dict[str, Any]] = []
                total = 0.0
                for item in items:
                    product = self._find_by_name(session, item.product_name)
                    if product is None:
                        raise ProductNotFound(item.product_name)
                    unit_price = product.price
                    self._decrement(session, product, item.quantity)
                    lines.append(
                        {"productId": product.id, "quantity": item.quantity, "price": unit_price}
                    )
                    total += unit_price * item.quantity

                order = Order(
                    customer_name=customer_name,
                    status="pending",
                    total_amount=round(total, 2),
                    items=lines,
                )
                session.add(order)
                session.flush()
                return OrderRecord.model_validate(order)

        record = run_with_retry(_op, attempts=self._max_attempts)
        logger.info(
            "Order %d placed for %s: %d line(s), total %.2f",
            record.id, customer_name, len(record.items), record.total_amount,
        )
        return record

    def set_order_status(self, order_id: int, status: str) -> OrderRecord:
        if status not in ORDER_STATUSES:
            raise ValueError(f"Invalid order status: {status!r}")
        with self._db.transaction() as session:
            order = session.get(Order, order_id)
            if order is None:
                raise RecordNotFound(f"Order {order_id} not found")
            order.status = status
            session.flush()
            logger.info("Order %d -> %s", order_id, status)
            return OrderRecord.model_validate(order)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _find_by_name(
        session: Session, name: str, active_only: bool = True
    ) -> Optional[Product]:
        stmt = select(Product).where(Product.name_key == normalize_name(name))
        if active_only:
            stmt = stmt.where(Product.active.is_(True))
        return session.scalars(stmt).first()

    @staticmethod
    def _flush_unique(session: Session, name: str) -> None:
        try:
            session.flush()
        except IntegrityError:
            raise ValueError(f"A product named {name.strip()!r} already exists") from None

    @staticmethod
    def _decrement(session: Session, product: Product, quantity: int) -> None:
        """Conditionally take ``quantity`` units or raise InsufficientStock."""
        result = session.execute(
            update(Product)
            .where(Product.id == product.id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            remaining = session.scalar(select(Product.stock).where(Product.id == product.id))
            logger.info(
                "Insufficient stock for %s: requested %d, remaining %s",
                product.name, quantity, remaining,
            )
            raise InsufficientStock(product.name, remaining or 0, quantity)
