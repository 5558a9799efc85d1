"""Core modules for building GraphQL operations."""

from .arguments import ArgumentProcessor
from .builder import (
    BuilderOptions,
    Operation,
    OperationBuilder,
    QueryBuilder,
    create_builder,
)
from .errors import (
    EmptySelection,
    GqlbError,
    InvalidArgumentValue,
    InvalidSelection,
    MissingArguments,
    MissingVariables,
    TypeNotFound,
    UnknownArgument,
    UnknownField,
    VariableTypeUnresolved,
)
from .ir import (
    IRArgument,
    IREnum,
    IREnumValue,
    IRField,
    IRInterface,
    IRScalar,
    IRSchema,
    IRType,
    IRUnion,
)
from .navigator import (
    ArgumentLeafField,
    CompositeField,
    LeafField,
    Navigator,
    TypeAccessor,
)
from .parser import SchemaParser
from .scalars import (
    DateHandler,
    DateTimeHandler,
    DecimalHandler,
    EnumHandler,
    ScalarHandler,
    ScalarRegistry,
    UUIDHandler,
)
from .selection import Selection, merge_selections, normalize_selections
from .serializer import format_value, serialize_operation
from .variables import (
    BuildContext,
    Variable,
    VariableDefinition,
    VariableRef,
    optional,
    required,
)

__all__ = [
    # Builder
    "BuilderOptions",
    "Operation",
    "OperationBuilder",
    "QueryBuilder",
    "create_builder",
    # Errors
    "EmptySelection",
    "GqlbError",
    "InvalidArgumentValue",
    "InvalidSelection",
    "MissingArguments",
    "MissingVariables",
    "TypeNotFound",
    "UnknownArgument",
    "UnknownField",
    "VariableTypeUnresolved",
    # IR types
    "IRArgument",
    "IREnum",
    "IREnumValue",
    "IRField",
    "IRInterface",
    "IRScalar",
    "IRSchema",
    "IRType",
    "IRUnion",
    # Parser
    "SchemaParser",
    # Navigation
    "ArgumentLeafField",
    "CompositeField",
    "LeafField",
    "Navigator",
    "TypeAccessor",
    # Selections
    "Selection",
    "merge_selections",
    "normalize_selections",
    # Arguments and variables
    "ArgumentProcessor",
    "BuildContext",
    "Variable",
    "VariableDefinition",
    "VariableRef",
    "optional",
    "required",
    # Serialization
    "format_value",
    "serialize_operation",
    # Scalars
    "DateHandler",
    "DateTimeHandler",
    "DecimalHandler",
    "EnumHandler",
    "ScalarHandler",
    "ScalarRegistry",
    "UUIDHandler",
]
