"""Argument processing for field invocations.

Walks the argument values passed to a field, replaces variable
placeholders with references and declares the variables on the
build context with the wire type taken from the schema.
"""

import logging
import math
from typing import Any

from pydantic import BaseModel

from .errors import InvalidArgumentValue, UnknownArgument, VariableTypeUnresolved
from .ir import IRField, named_type, unwrap_list
from .scalars import ScalarRegistry
from .serializer import check_string
from .variables import BuildContext, Variable

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_TYPE = "String"


class ArgumentProcessor:
    """Turns raw argument values into an argument tree for one build."""

    def __init__(
        self,
        context: BuildContext,
        scalars: ScalarRegistry | None = None,
        fallback_type: str = DEFAULT_FALLBACK_TYPE,
    ):
        self.context = context
        self.scalars = scalars or ScalarRegistry()
        self.fallback_type = fallback_type

    def process(self, raw_args: dict[str, Any], type_name: str, ir_field: IRField) -> dict[str, Any]:
        """Process the arguments of ``type_name.ir_field``.

        Args:
            raw_args: Argument name -> value, as passed by the caller
            type_name: Name of the type declaring the field
            ir_field: The field being invoked

        Returns:
            Argument tree with variables replaced by VariableRef

        Raises:
            UnknownArgument: If the field does not declare an argument
        """
        processed = {}
        for arg_name, value in raw_args.items():
            ir_arg = ir_field.get_argument(arg_name)
            if ir_arg is None:
                raise UnknownArgument(type_name, ir_field.name, arg_name)
            processed[arg_name] = self._process_value(value, ir_arg.type_ref)
        return processed

    def _process_value(self, value: Any, type_ref: str | None) -> Any:
        """Process one value; ``type_ref`` is its schema type when known."""
        if isinstance(value, Variable):
            return self._register(value, type_ref)

        if isinstance(value, BaseModel):
            # Same dump as request variables: wire names, no unset fields
            value = value.model_dump(by_alias=True, exclude_none=True)
        else:
            value = self.scalars.serialize(value)

        if isinstance(value, dict):
            input_type = None
            if type_ref is not None:
                input_type = self.context.schema.inputs.get(named_type(type_ref))
            processed = {}
            for key, item in value.items():
                if not isinstance(key, str):
                    raise InvalidArgumentValue(value, f"object key {key!r} is not a string")
                item_type = None
                if input_type is not None:
                    input_field = input_type.get_field(key)
                    if input_field is not None:
                        item_type = input_field.type_ref
                processed[key] = self._process_value(item, item_type)
            return processed

        if isinstance(value, (list, tuple)):
            item_type = unwrap_list(type_ref) if type_ref is not None else None
            return [self._process_value(item, item_type) for item in value]

        return self._check_literal(value)

    def _register(self, variable: Variable, type_ref: str | None):
        if type_ref is None and variable.type is None:
            logger.warning("%s", VariableTypeUnresolved(variable.name, self.fallback_type))
            type_ref = self.fallback_type
        return self.context.register(
            variable,
            type_ref,
            required=bool(type_ref) and type_ref.endswith("!"),
        )

    @staticmethod
    def _check_literal(value: Any) -> Any:
        if isinstance(value, str):
            return check_string(value)
        if value is None or isinstance(value, (bool, int)):
            return value
        if isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidArgumentValue(value, "GraphQL floats must be finite")
            return value
        raise InvalidArgumentValue(value)
