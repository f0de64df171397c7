from src.db.database import Database, build_engine, run_with_retry
from src.db.models import Appointment, Base, Order, Product

__all__ = [
    "Database", "build_engine", "run_with_retry",
    "Base", "Product", "Order", "Appointment",
]
