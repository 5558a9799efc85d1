"""Custom scalar handlers for argument literals.

Maps Python values that have no direct GraphQL literal (datetimes,
UUIDs, decimals, ...) to values the serializer can print.

Example usage:
    from decimal import Decimal
    from gqlb.core.scalars import ScalarRegistry

    class MoneyHandler:
        python_type = Decimal

        def serialize(self, value):
            return f"{value:.2f}"

    registry = ScalarRegistry()
    registry.register(MoneyHandler())
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for custom scalar handlers.

    Implement this protocol to define how a Python value is written as
    a GraphQL argument.

    Attributes:
        python_type: The Python type this handler converts
    """

    python_type: type

    def serialize(self, value: Any) -> Any:
        """Convert Python value to a string, number, bool, list or dict."""
        ...


class DateTimeHandler:
    """Handler for datetime values using ISO 8601 format."""

    python_type = datetime

    def serialize(self, value: datetime) -> str:
        """Convert datetime to ISO 8601 string."""
        return value.isoformat()


class DateHandler:
    """Handler for date values using ISO 8601 date format."""

    python_type = date

    def serialize(self, value: date) -> str:
        return value.isoformat()


class TimeHandler:
    python_type = time

    def serialize(self, value: time) -> str:
        return value.isoformat()


class UUIDHandler:
    """Handler for UUID values."""

    python_type = UUID

    def serialize(self, value: UUID) -> str:
        """Convert UUID to string."""
        return str(value)


class DecimalHandler:
    """Handler for Decimal values, sent as strings to keep precision."""

    python_type = Decimal

    def serialize(self, value: Decimal) -> str:
        return str(value)


class EnumValue(str):
    """A string printed bare, as a GraphQL enum value."""


class EnumHandler:
    """Handler for Python Enum members, printed as GraphQL enum values."""

    python_type = Enum

    def serialize(self, value: Enum) -> EnumValue:
        return EnumValue(value.name)


class ScalarRegistry:
    """Registry for custom scalar handlers.

    Handlers are matched by ``isinstance`` in registration order, most
    recently registered first, so a later handler can override a default.

    Example:
        registry = ScalarRegistry()
        registry.serialize(UUID("12345678-1234-5678-1234-567812345678"))
        # "12345678-1234-5678-1234-567812345678"
    """

    def __init__(self):
        self._handlers: list[ScalarHandler] = []
        # Register default handlers
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        # datetime is a subclass of date, so it must be matched first
        self.register(DecimalHandler())
        self.register(UUIDHandler())
        self.register(EnumHandler())
        self.register(TimeHandler())
        self.register(DateHandler())
        self.register(DateTimeHandler())

    def register(self, handler: ScalarHandler):
        """Register a handler; it takes precedence over earlier ones."""
        self._handlers.insert(0, handler)

    def get(self, value: Any) -> ScalarHandler | None:
        """Get the handler for a value, or None if no handler matches."""
        for handler in self._handlers:
            if isinstance(value, handler.python_type):
                return handler
        return None

    def has(self, python_type: type) -> bool:
        """Check if a handler is registered for exactly this type."""
        return any(h.python_type is python_type for h in self._handlers)

    def serialize(self, value: Any) -> Any:
        """Convert a value with its handler; values without one pass through."""
        handler = self.get(value)
        if handler is None:
            return value
        return handler.serialize(value)
