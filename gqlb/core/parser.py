"""GraphQL schema parser using graphql-core.

Parses SDL files, SDL strings or a built ``GraphQLSchema`` and produces
an IRSchema for the query builder to navigate.
"""

import logging
import os
from typing import Any

from graphql import (
    EnumTypeDefinitionNode,
    GraphQLSchema,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    parse,
    print_ast,
    print_schema,
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

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphqls", ".graphql", ".gql")


class SchemaParser:
    """Parses GraphQL schema files into IR."""

    def __init__(self, schema_path: str | None = None):
        """Initialize a parser with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.ir = IRSchema()
        self.current_file = ""

    @classmethod
    def from_sdl(cls, sdl: str) -> IRSchema:
        """Parse an SDL string into IR."""
        parser = cls()
        parser.current_file = "<sdl>"
        parser._process_ast(parse(sdl))
        return parser._finish()

    @classmethod
    def from_graphql_schema(cls, schema: GraphQLSchema) -> IRSchema:
        """Convert a graphql-core schema (e.g. from build_schema) into IR."""
        ir = cls.from_sdl(print_schema(schema))
        for kind, root in (
            ("query", schema.query_type),
            ("mutation", schema.mutation_type),
            ("subscription", schema.subscription_type),
        ):
            if root is not None:
                ir.root_types[kind] = root.name
        return ir

    def parse_all(self) -> IRSchema:
        """Parse all schema files and return the complete IR."""
        if self.schema_path is None:
            raise ValueError("No schema path given")
        schema_files = self._collect_schema_files()

        for file_path in schema_files:
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                content = f.read()
            try:
                ast = parse(content)
            except Exception:
                logger.error("Error parsing %s", self.current_file)
                raise
            self._process_ast(ast)

        return self._finish()

    def _finish(self) -> IRSchema:
        self.ir.mark_leaves()
        logger.debug(
            "Parsed schema: %d types, %d interfaces, %d inputs, %d enums",
            len(self.ir.types),
            len(self.ir.interfaces),
            len(self.ir.inputs),
            len(self.ir.enums),
        )
        return self.ir

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(SCHEMA_EXTENSIONS):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _process_ast(self, ast):
        """Process GraphQL AST and populate IR."""
        for definition in ast.definitions:
            if isinstance(definition, SchemaDefinitionNode):
                self._process_schema_definition(definition)
            elif isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                self._process_interface(definition)
            elif isinstance(definition, UnionTypeDefinitionNode):
                self._process_union(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(definition)
            elif isinstance(definition, ObjectTypeExtensionNode):
                self._merge_extension_fields(self.ir.types, definition)
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                self._process_input_type(definition)
            elif isinstance(definition, InputObjectTypeExtensionNode):
                self._merge_extension_fields(self.ir.inputs, definition)

    def _process_schema_definition(self, node: SchemaDefinitionNode):
        for op_type in node.operation_types:
            self.ir.root_types[op_type.operation.value] = op_type.type.name.value

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        name = node.name.value
        self.ir.scalars[name] = IRScalar(
            name=name,
            description=node.description.value if node.description else None,
        )

    def _process_enum(self, node: EnumTypeDefinitionNode):
        name = node.name.value
        values = [
            IREnumValue(
                name=v.name.value,
                description=v.description.value if v.description else None,
            )
            for v in node.values or ()
        ]
        self.ir.enums[name] = IREnum(
            name=name,
            values=values,
            description=node.description.value if node.description else None,
        )

    def _process_interface(self, node: InterfaceTypeDefinitionNode):
        name = node.name.value
        self.ir.interfaces[name] = IRInterface(
            name=name,
            fields=self._process_fields(node.fields),
            interfaces=[i.name.value for i in node.interfaces or ()],
            description=node.description.value if node.description else None,
        )

    def _process_union(self, node: UnionTypeDefinitionNode):
        name = node.name.value
        self.ir.unions[name] = IRUnion(
            name=name,
            members=[t.name.value for t in node.types or ()],
            description=node.description.value if node.description else None,
        )

    def _process_object_type(self, node: ObjectTypeDefinitionNode):
        name = node.name.value
        fields = self._process_fields(node.fields)
        interfaces = [i.name.value for i in node.interfaces or ()]

        # Check if the type already exists (from earlier extension processing)
        if name in self.ir.types:
            existing = self.ir.types[name]
            # Merge: add base fields + description, keep existing extension fields
            existing_names = {f.name for f in existing.fields}
            for ir_field in fields:
                if ir_field.name not in existing_names:
                    existing.fields.append(ir_field)
            existing.interfaces = interfaces
            if node.description:
                existing.description = node.description.value
        else:
            self.ir.types[name] = IRType(
                name=name,
                fields=fields,
                interfaces=interfaces,
                description=node.description.value if node.description else None,
            )

    def _process_input_type(self, node: InputObjectTypeDefinitionNode):
        name = node.name.value
        fields = [
            IRField(
                name=arg.name,
                type_name=arg.type_name,
                is_list=arg.is_list,
                is_optional=arg.is_optional,
                description=arg.description,
                type_ref=arg.type_ref,
            )
            for arg in self._process_arguments(node.fields)
        ]
        if name in self.ir.inputs:
            self.ir.inputs[name].fields.extend(fields)
        else:
            self.ir.inputs[name] = IRType(
                name=name,
                fields=fields,
                description=node.description.value if node.description else None,
                is_input=True,
            )

    def _merge_extension_fields(self, registry: dict[str, IRType], node):
        """Merge 'extend type' / 'extend input' fields into an existing type.

        The extended type may be defined later in another file, in which
        case the extension creates it and the definition merges into it.
        """
        if isinstance(node, InputObjectTypeExtensionNode):
            extension_fields = [
                IRField(name=a.name, type_name=a.type_name, is_list=a.is_list,
                        is_optional=a.is_optional, type_ref=a.type_ref)
                for a in self._process_arguments(node.fields)
            ]
        else:
            extension_fields = self._process_fields(node.fields)

        type_name = node.name.value
        if type_name in registry:
            existing_type = registry[type_name]
            # Track existing field names to avoid duplicates
            existing_names = {f.name for f in existing_type.fields}
            for ir_field in extension_fields:
                if ir_field.name not in existing_names:
                    existing_type.fields.append(ir_field)
                    existing_names.add(ir_field.name)
        else:
            registry[type_name] = IRType(
                name=type_name,
                fields=extension_fields,
                is_input=isinstance(node, InputObjectTypeExtensionNode),
            )

    def _process_fields(self, field_nodes) -> list[IRField]:
        """Process field definitions into the IRField list."""
        fields = []
        for node in field_nodes or ():
            type_info = self._get_type_info(node.type)
            fields.append(
                IRField(
                    name=node.name.value,
                    type_name=type_info["name"],
                    is_list=type_info["is_list"],
                    is_optional=type_info["is_optional"],
                    description=node.description.value if node.description else None,
                    arguments=self._process_arguments(getattr(node, "arguments", None)),
                    type_ref=type_info["type_ref"],
                )
            )
        return fields

    def _process_arguments(self, arg_nodes) -> list[IRArgument]:
        args = []
        for arg_node in arg_nodes or ():
            arg_type_info = self._get_type_info(arg_node.type)
            args.append(
                IRArgument(
                    name=arg_node.name.value,
                    type_name=arg_type_info["name"],
                    is_list=arg_type_info["is_list"],
                    is_optional=arg_type_info["is_optional"],
                    default_value=print_ast(arg_node.default_value)
                    if arg_node.default_value
                    else None,
                    description=arg_node.description.value
                    if arg_node.description
                    else None,
                    type_ref=arg_type_info["type_ref"],
                )
            )
        return args

    @staticmethod
    def _get_type_info(type_node: TypeNode) -> dict[str, Any]:
        """Extract the type name, is_list, is_optional and printed type from the type node."""
        type_ref = print_ast(type_node)
        is_optional = True
        is_list = False

        # NonNull wrapper means not optional
        if isinstance(type_node, NonNullTypeNode):
            is_optional = False
            type_node = type_node.type

        # Unwrap any depth of list and non-null wrappers
        while not isinstance(type_node, NamedTypeNode):
            if isinstance(type_node, ListTypeNode):
                is_list = True
            type_node = type_node.type

        return {
            "name": type_node.name.value,
            "is_list": is_list,
            "is_optional": is_optional,
            "type_ref": type_ref,
        }
