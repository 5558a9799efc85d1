"""Exceptions raised while building GraphQL operations."""

from typing import Any


class GqlbError(Exception):
    """Base class for query builder errors."""


class TypeNotFound(GqlbError, LookupError):
    """A type name is not defined in the schema."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f'Type "{type_name}" does not exist in the schema')


class UnknownField(GqlbError, AttributeError):
    """A field was referenced that the type does not declare."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f'Field "{field_name}" does not exist on type "{type_name}"')


class UnknownArgument(GqlbError):
    """An argument was passed that the field does not declare."""

    def __init__(self, type_name: str, field_name: str, argument_name: str):
        self.type_name = type_name
        self.field_name = field_name
        self.argument_name = argument_name
        super().__init__(
            f'Argument "{argument_name}" does not exist on field "{type_name}.{field_name}"'
        )


class MissingArguments(GqlbError):
    """A leaf field with arguments was referenced without passing them."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(
            f'Field "{type_name}.{field_name}" must be called with its arguments'
        )


class InvalidSelection(GqlbError, TypeError):
    """A selection function returned something that is not a field selection."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid selection: {value!r}")


class EmptySelection(GqlbError):
    """A composite field, or a whole operation, ended up with no subfields.

    ``field_name`` is None when the operation itself selected nothing.
    """

    def __init__(self, type_name: str, field_name: str | None = None):
        self.type_name = type_name
        self.field_name = field_name
        if field_name is None:
            message = f'Operation on root type "{type_name}" needs at least one field'
        else:
            message = f'Field "{field_name}" of type "{type_name}" needs at least one subfield'
        super().__init__(message)


class InvalidArgumentValue(GqlbError, TypeError):
    """A Python value has no GraphQL literal form."""

    def __init__(self, value: Any, reason: str = "no GraphQL literal form"):
        self.value = value
        super().__init__(f"Cannot use {value!r} as an argument value: {reason}")


class VariableTypeUnresolved(GqlbError):
    """The wire type of a variable could not be inferred from the schema.

    Never raised by the builder; the variable is declared with a fallback
    type and this error is only logged.
    """

    def __init__(self, name: str, fallback: str):
        self.name = name
        self.fallback = fallback
        super().__init__(
            f'Could not infer the type of variable "${name}", declaring it as {fallback}'
        )


class MissingVariables(GqlbError):
    """Required variables were not given values."""

    def __init__(self, names: list[str]):
        self.names = names
        super().__init__(f"Missing values for required variables: {', '.join(names)}")
