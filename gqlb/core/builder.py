"""Operation builders bound to a schema.

Example:
    builder = create_builder(schema)

    op = builder.query(lambda q: [
        q.user({"id": required("userId")}, lambda u: [u.id, u.name]),
    ])
    print(op.text)
    # query($userId: ID!) {
    #   user(id: $userId) {
    #     id
    #     name
    #   }
    # }

    # Named operations
    builder.query("GetUser", lambda q: [...])
    builder.query.GetUser(lambda q: [...])
"""

import logging
from dataclasses import dataclass, field
from functools import cached_property, partial
from typing import Any

from graphql import DocumentNode, GraphQLSchema, parse
from pydantic import BaseModel

from .arguments import DEFAULT_FALLBACK_TYPE, ArgumentProcessor
from .errors import EmptySelection, MissingVariables
from .ir import IRSchema
from .navigator import DEFAULT_MAX_DEPTH, Navigator, SelectionFn
from .parser import SchemaParser
from .scalars import ScalarRegistry
from .selection import Selection
from .serializer import serialize_operation
from .variables import BuildContext, VariableDefinition

logger = logging.getLogger(__name__)

OPERATION_KINDS = ("query", "mutation", "subscription")


@dataclass
class BuilderOptions:
    """Configuration shared by all operations of a builder."""
    max_depth: int = DEFAULT_MAX_DEPTH  # Wildcard expansion depth cap
    fallback_variable_type: str = DEFAULT_FALLBACK_TYPE
    scalars: ScalarRegistry = field(default_factory=ScalarRegistry)
    parse: bool = True  # Parse each operation into a document when built


@dataclass(frozen=True)
class Operation:
    """A built GraphQL operation."""
    kind: str
    name: str | None
    text: str
    selections: tuple[Selection, ...]
    variables: tuple[VariableDefinition, ...]

    @cached_property
    def document(self) -> DocumentNode:
        """The operation parsed by graphql-core; syntax errors propagate."""
        return parse(self.text)

    def variable_values(self, **values: Any) -> dict[str, Any]:
        """Collect values for the declared variables of this operation.

        None values are skipped and pydantic models are converted to
        dicts using their aliases.

        Raises:
            MissingVariables: If a required variable has no value
        """
        missing = [
            v.name for v in self.variables
            if v.required and values.get(v.name) is None
        ]
        if missing:
            raise MissingVariables(missing)

        declared = {v.name for v in self.variables}
        result = {}
        for key, value in values.items():
            if key not in declared or value is None:
                continue
            if isinstance(value, BaseModel):
                result[key] = value.model_dump(by_alias=True, exclude_none=True)
            elif isinstance(value, list):
                result[key] = [
                    v.model_dump(by_alias=True, exclude_none=True) if isinstance(v, BaseModel) else v
                    for v in value
                ]
            else:
                result[key] = value
        return result

    def __str__(self) -> str:
        return self.text


class OperationBuilder:
    """Builds operations of one kind (query, mutation or subscription)."""

    def __init__(self, kind: str, schema: IRSchema, options: BuilderOptions):
        if kind not in OPERATION_KINDS:
            raise ValueError(f"Unknown operation kind: {kind}")
        self.kind = kind
        self.schema = schema
        self.options = options

    def __call__(self, name_or_fn: str | SelectionFn, selection_fn: SelectionFn | None = None) -> Operation:
        return self.build(name_or_fn, selection_fn)

    def __getattr__(self, name: str):
        # builder.query.GetUser(fn) is builder.query("GetUser", fn)
        if name.startswith("_"):
            raise AttributeError(name)
        return partial(self.build, name)

    def build(self, name_or_fn: str | SelectionFn, selection_fn: SelectionFn | None = None) -> Operation:
        """Build an operation.

        Args:
            name_or_fn: Operation name, or the selection function for an
                anonymous operation
            selection_fn: Selection function when a name is given

        Returns:
            The built Operation

        Raises:
            UnknownField: If the selection references a field not in the schema
            InvalidSelection: If the selection function returns something else
                than field selections
        """
        if callable(name_or_fn):
            name, selection_fn = None, name_or_fn
        else:
            name = name_or_fn
            if selection_fn is None:
                raise TypeError(f"{self.kind} {name} needs a selection function")

        root = self.schema.get_root_type(self.kind)
        # Each build declares its variables in its own context
        context = BuildContext(self.schema)
        arguments = ArgumentProcessor(
            context,
            scalars=self.options.scalars,
            fallback_type=self.options.fallback_variable_type,
        )
        navigator = Navigator(self.schema, arguments, max_depth=self.options.max_depth)

        logger.debug("Building %s %s", self.kind, name or "<anonymous>")
        selections = navigator.select(root, selection_fn(navigator.accessor(root)))
        if not selections:
            raise EmptySelection(root.name)

        variables = tuple(context.variables.values())
        text = serialize_operation(self.kind, name, selections, list(variables))
        operation = Operation(
            kind=self.kind,
            name=name,
            text=text,
            selections=tuple(selections),
            variables=variables,
        )
        if self.options.parse:
            operation.document  # noqa: B018
        logger.debug("Built %s %s with %d variables", self.kind, name or "<anonymous>", len(variables))
        return operation

    def __repr__(self):
        return f"<OperationBuilder {self.kind}>"


class QueryBuilder:
    """Entry point: one OperationBuilder per operation kind."""

    def __init__(self, schema: IRSchema, options: BuilderOptions | None = None):
        self.schema = schema
        self.options = options or BuilderOptions()
        self.query = OperationBuilder("query", schema, self.options)
        self.mutation = OperationBuilder("mutation", schema, self.options)
        self.subscription = OperationBuilder("subscription", schema, self.options)


def create_builder(
    schema: IRSchema | GraphQLSchema | str,
    options: BuilderOptions | None = None,
) -> QueryBuilder:
    """Create a query builder.

    Args:
        schema: An IRSchema, a graphql-core GraphQLSchema, or SDL text
        options: Builder configuration

    Returns:
        QueryBuilder with query, mutation and subscription builders
    """
    if isinstance(schema, GraphQLSchema):
        schema = SchemaParser.from_graphql_schema(schema)
    elif isinstance(schema, str):
        schema = SchemaParser.from_sdl(schema)
    return QueryBuilder(schema, options)
