"""Tests for resolver prompt construction."""

from datetime import datetime, timezone

from src.prompts.prompt_templates import build_product_context, build_system_prompt
from src.schemas.record_schema import ProductRecord


class TestProductContext:
    def test_one_line_per_product(self):
        products = [
            ProductRecord(id=1, name="Premium Widget", price=29.99, stock=50, category="Widgets"),
            ProductRecord(id=2, name="Consultation Hour", price=150, stock=100, category="Services"),
        ]
        assert build_product_context(products) == (
            "Premium Widget ($29.99) - 50 in stock\n"
            "Consultation Hour ($150.00) - 100 in stock"
        )

    def test_empty_catalog(self):
        assert build_product_context([]) == "No products are currently available."


class TestSystemPrompt:
    def test_includes_time_and_catalog(self):
        now = datetime(2030, 3, 18, 9, 30, tzinfo=timezone.utc)
        prompt = build_system_prompt([], now=now)
        assert "Current date and time (UTC): Monday 2030-03-18 09:30" in prompt
        assert prompt.endswith("Available Products:\nNo products are currently available.")
