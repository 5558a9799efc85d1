"""Intermediate Representation (IR) for GraphQL schemas.

This module defines the read-only view of a schema that the query
builder navigates: types, their fields, each field's result type and
declared arguments.
"""

from dataclasses import dataclass, field
from typing import Any

from .errors import TypeNotFound, UnknownField

# Types that are considered scalars even if the schema never declares them
BUILTIN_SCALARS = frozenset({"String", "Int", "Float", "Boolean", "ID"})


def named_type(type_ref: str) -> str:
    """Strip list and non-null wrappers: '[ID!]!' -> 'ID'."""
    return type_ref.replace("[", "").replace("]", "").replace("!", "")


def unwrap_list(type_ref: str) -> str | None:
    """Return the item type of a list type, or None: '[ID!]!' -> 'ID!'."""
    inner = type_ref[:-1] if type_ref.endswith("!") else type_ref
    if inner.startswith("[") and inner.endswith("]"):
        return inner[1:-1]
    return None


def _build_type_ref(type_name: str, is_list: bool, is_optional: bool) -> str:
    type_ref = f"[{type_name}]" if is_list else type_name
    return type_ref if is_optional else f"{type_ref}!"


@dataclass
class IRArgument:
    """Represents an argument to a field, or a field of an input type."""
    name: str
    type_name: str
    is_list: bool = False
    is_optional: bool = True
    default_value: Any = None
    description: str | None = None
    # Printed wire type, e.g. "[ID!]!"
    type_ref: str = ""

    def __post_init__(self):
        if not self.type_ref:
            self.type_ref = _build_type_ref(self.type_name, self.is_list, self.is_optional)

    @property
    def is_required(self) -> bool:
        """Non-null arguments without a default must be supplied."""
        return not self.is_optional and self.default_value is None


@dataclass
class IRField:
    """Represents a field in a GraphQL type or interface."""
    name: str
    type_name: str
    is_list: bool = False
    is_optional: bool = True  # True if nullable (no ! in GraphQL)
    description: str | None = None
    arguments: list[IRArgument] = field(default_factory=list)
    type_ref: str = ""
    # Set by IRSchema when the field is attached to a schema
    is_leaf: bool = True

    def __post_init__(self):
        if not self.type_ref:
            self.type_ref = _build_type_ref(self.type_name, self.is_list, self.is_optional)

    def get_argument(self, name: str) -> IRArgument | None:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    @property
    def has_required_arguments(self) -> bool:
        return any(arg.is_required for arg in self.arguments)


@dataclass
class IREnumValue:
    """Represents a single value in a GraphQL enum."""
    name: str
    description: str | None = None


@dataclass
class IREnum:
    """Represents a GraphQL enum type."""
    name: str
    values: list[IREnumValue]
    description: str | None = None


@dataclass
class IRType:
    """Represents a GraphQL object type or input type."""
    name: str
    fields: list[IRField]
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None
    is_input: bool = False

    def get_field(self, name: str) -> IRField | None:
        for ir_field in self.fields:
            if ir_field.name == name:
                return ir_field
        return None


@dataclass
class IRInterface(IRType):
    """Represents a GraphQL interface type."""


@dataclass
class IRUnion:
    """Represents a GraphQL union type.

    Unions have no fields of their own; only ``__typename`` can be
    selected on them without fragments.
    """
    name: str
    members: list[str] = field(default_factory=list)
    description: str | None = None
    fields: list[IRField] = field(default_factory=list)

    def get_field(self, name: str) -> IRField | None:
        return None


@dataclass
class IRScalar:
    """Represents a GraphQL scalar type."""
    name: str
    description: str | None = None


# Meta field available on every composite type
TYPENAME_FIELD = IRField(name="__typename", type_name="String", is_optional=False)


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL schema."""
    scalars: dict[str, IRScalar] = field(default_factory=dict)
    enums: dict[str, IREnum] = field(default_factory=dict)
    types: dict[str, IRType] = field(default_factory=dict)
    inputs: dict[str, IRType] = field(default_factory=dict)
    interfaces: dict[str, IRInterface] = field(default_factory=dict)
    unions: dict[str, IRUnion] = field(default_factory=dict)
    # Operation kind -> root type name
    root_types: dict[str, str] = field(default_factory=lambda: {
        "query": "Query",
        "mutation": "Mutation",
        "subscription": "Subscription",
    })

    def __post_init__(self):
        self.mark_leaves()

    def mark_leaves(self):
        """Flag every output field as leaf or composite.

        Called again by the parser once all definitions are known.
        """
        for type_def in list(self.types.values()) + list(self.interfaces.values()):
            for ir_field in type_def.fields:
                ir_field.is_leaf = self.is_leaf_type(ir_field.type_name)

    def is_leaf_type(self, type_name: str) -> bool:
        """Scalars and enums have no subfields."""
        return (
            type_name in BUILTIN_SCALARS
            or type_name in self.scalars
            or type_name in self.enums
        )

    def get_type_by_name(self, name: str) -> IRType | IRUnion | None:
        """Look up a composite or input type by name."""
        if name in self.types:
            return self.types[name]
        if name in self.inputs:
            return self.inputs[name]
        if name in self.interfaces:
            return self.interfaces[name]
        if name in self.unions:
            return self.unions[name]
        return None

    def get_type(self, name: str) -> IRType | IRUnion:
        """Look up a type by name, raising TypeNotFound if absent."""
        type_def = self.get_type_by_name(name)
        if type_def is None:
            raise TypeNotFound(name)
        return type_def

    def get_field(self, type_name: str, field_name: str) -> IRField:
        """Look up a field of a composite type, raising UnknownField if absent."""
        type_def = self.get_type(type_name)
        if field_name == "__typename":
            return TYPENAME_FIELD
        ir_field = type_def.get_field(field_name)
        if ir_field is None:
            raise UnknownField(type_name, field_name)
        return ir_field

    def get_root_type(self, kind: str) -> IRType:
        """Return the root type for 'query', 'mutation' or 'subscription'."""
        type_name = self.root_types.get(kind)
        if type_name is None or type_name not in self.types:
            raise TypeNotFound(type_name or kind)
        return self.types[type_name]

    def get_all_types(self) -> dict[str, IRType | IRUnion]:
        """Return all output types, interfaces and unions."""
        result = {}
        result.update(self.types)
        result.update(self.interfaces)
        result.update(self.unions)
        return result
