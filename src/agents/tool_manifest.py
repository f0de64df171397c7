"""Capability manifest sent with every resolver call (OpenAI tool format)."""

from typing import Any

CHECK_AVAILABILITY_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "check_availability",
        "description": "Check if an appointment slot is available",
        "parameters": {
            "type": "object",
            "properties": {
                "date": {
                    "type": "string",
                    "description": "ISO 8601 date and time, e.g. 2025-03-18T10:00:00",
                },
            },
            "required": ["date"],
        },
    },
}

BOOK_APPOINTMENT_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "book_appointment",
        "description": "Book a confirmed appointment",
        "parameters": {
            "type": "object",
            "properties": {
                "customerName": {"type": "string"},
                "date": {"type": "string", "description": "ISO 8601 date and time"},
                "contactInfo": {
                    "type": "string",
                    "description": "Phone number or email address",
                },
            },
            "required": ["customerName", "date", "contactInfo"],
        },
    },
}

CREATE_ORDER_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "create_order",
        "description": "Place an order for products",
        "parameters": {
            "type": "object",
            "properties": {
                "customerName": {"type": "string"},
                "items": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "productName": {"type": "string"},
                            "quantity": {"type": "integer", "minimum": 1},
                        },
                        "required": ["productName", "quantity"],
                    },
                },
            },
            "required": ["customerName", "items"],
        },
    },
}

TOOL_MANIFEST: list[dict[str, Any]] = [
    CHECK_AVAILABILITY_TOOL,
    BOOK_APPOINTMENT_TOOL,
    CREATE_ORDER_TOOL,
]


def get_tool_names() -> list[str]:
    """Names of every capability the resolver may request."""
    return [tool["function"]["name"] for tool in TOOL_MANIFEST]
