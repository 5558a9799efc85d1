"""gqlb - runtime, schema-driven GraphQL query builder."""

from .core import (
    BuilderOptions,
    EmptySelection,
    GqlbError,
    InvalidSelection,
    Operation,
    QueryBuilder,
    SchemaParser,
    TypeNotFound,
    UnknownArgument,
    UnknownField,
    create_builder,
    optional,
    required,
)

__version__ = "0.1.0"

__all__ = [
    "BuilderOptions",
    "EmptySelection",
    "GqlbError",
    "InvalidSelection",
    "Operation",
    "QueryBuilder",
    "SchemaParser",
    "TypeNotFound",
    "UnknownArgument",
    "UnknownField",
    "create_builder",
    "optional",
    "required",
]
