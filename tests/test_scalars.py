"""Tests for custom scalar handlers."""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from uuid import UUID

from gqlb.core.scalars import (
    DateHandler,
    DateTimeHandler,
    DecimalHandler,
    EnumHandler,
    EnumValue,
    ScalarHandler,
    ScalarRegistry,
    UUIDHandler,
)


class Color(Enum):
    RED = "red"
    DARK_BLUE = "blue"


class TestDateTimeHandler:
    """Tests for DateTimeHandler."""

    def test_serialize(self):
        handler = DateTimeHandler()
        dt = datetime(2024, 1, 15, 10, 30, 0)
        assert handler.serialize(dt) == "2024-01-15T10:30:00"


class TestDateHandler:
    """Tests for DateHandler."""

    def test_serialize(self):
        handler = DateHandler()
        d = date(2024, 1, 15)
        assert handler.serialize(d) == "2024-01-15"


class TestUUIDHandler:
    """Tests for UUIDHandler."""

    def test_serialize(self):
        handler = UUIDHandler()
        uid = UUID("12345678-1234-5678-1234-567812345678")
        assert handler.serialize(uid) == "12345678-1234-5678-1234-567812345678"


class TestEnumHandler:
    """Tests for EnumHandler."""

    def test_serialize_uses_member_name(self):
        result = EnumHandler().serialize(Color.DARK_BLUE)
        assert result == "DARK_BLUE"
        assert isinstance(result, EnumValue)


class TestScalarRegistry:
    """Tests for ScalarRegistry."""

    def test_default_handlers_registered(self):
        registry = ScalarRegistry()
        assert registry.has(datetime)
        assert registry.has(date)
        assert registry.has(time)
        assert registry.has(UUID)
        assert registry.has(Decimal)
        assert registry.has(Enum)

    def test_datetime_not_matched_as_date(self):
        registry = ScalarRegistry()
        assert isinstance(registry.get(datetime(2024, 1, 1)), DateTimeHandler)
        assert isinstance(registry.get(date(2024, 1, 1)), DateHandler)

    def test_get_nonexistent(self):
        registry = ScalarRegistry()
        assert registry.get(object()) is None

    def test_serialize_passes_plain_values(self):
        registry = ScalarRegistry()
        assert registry.serialize("text") == "text"
        assert registry.serialize(42) == 42

    def test_serialize_decimal(self):
        assert ScalarRegistry().serialize(Decimal("19.90")) == "19.90"

    def test_register_custom_overrides_default(self):
        registry = ScalarRegistry()

        class MoneyHandler:
            python_type = Decimal

            def serialize(self, value):
                return float(value)

        registry.register(MoneyHandler())
        assert registry.serialize(Decimal("1.5")) == 1.5


class TestScalarHandlerProtocol:
    """Tests for protocol compliance."""

    def test_datetime_handler_is_scalar_handler(self):
        assert isinstance(DateTimeHandler(), ScalarHandler)

    def test_decimal_handler_is_scalar_handler(self):
        assert isinstance(DecimalHandler(), ScalarHandler)

    def test_enum_handler_is_scalar_handler(self):
        assert isinstance(EnumHandler(), ScalarHandler)
