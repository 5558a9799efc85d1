"""GraphQL variable placeholders and the per-build variable registry.

Example:
    user_id = required("userId")
    builder.query(lambda q: [q.user({"id": user_id}, lambda u: [u.name])])
    # query($userId: ID!) { user(id: $userId) { name } }
"""

import logging
from dataclasses import dataclass, field

from .ir import IRSchema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Variable:
    """A placeholder for a value bound when the operation is executed.

    ``type`` overrides the wire type inferred from the schema.
    """
    name: str
    required: bool = False
    type: str | None = None


def required(name: str, type: str | None = None) -> Variable:
    """Create a variable that must be given a value at execution time."""
    return Variable(name=name, required=True, type=type)


def optional(name: str, type: str | None = None) -> Variable:
    """Create a variable that may be omitted or null at execution time."""
    return Variable(name=name, required=False, type=type)


@dataclass(frozen=True)
class VariableRef:
    """Reference to a declared variable inside an argument tree."""
    name: str

    def __str__(self) -> str:
        return f"${self.name}"


@dataclass(frozen=True)
class VariableDefinition:
    """A variable declared in an operation header."""
    name: str
    type: str
    required: bool

    @property
    def declared_type(self) -> str:
        """Wire type with the non-null marker, never doubled."""
        if self.required and not self.type.endswith("!"):
            return f"{self.type}!"
        return self.type

    def __str__(self) -> str:
        return f"${self.name}: {self.declared_type}"


@dataclass
class BuildContext:
    """State for building a single operation.

    A new context is created for every build, so builds never see each
    other's variables.
    """
    schema: IRSchema
    # Insertion order is declaration order
    variables: dict[str, VariableDefinition] = field(default_factory=dict)

    def register(self, variable: Variable, type_ref: str, required: bool = False) -> VariableRef:
        """Declare a variable and return the reference to put in its place.

        Registering a name twice keeps the last type and required flag.
        """
        if variable.type:
            type_ref = variable.type
        definition = VariableDefinition(
            name=variable.name,
            type=type_ref,
            required=required or variable.required,
        )
        previous = self.variables.get(variable.name)
        if previous is not None and previous != definition:
            logger.debug("Variable $%s redeclared: %s -> %s", variable.name, previous, definition)
        self.variables[variable.name] = definition
        return VariableRef(variable.name)
