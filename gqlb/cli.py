"""Command-line interface for gqlb."""

import json
import logging
import shutil
import tarfile
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path

import click

from .core.builder import OPERATION_KINDS, create_builder
from .core.errors import GqlbError
from .core.ir import IRSchema
from .core.navigator import CompositeField, TypeAccessor
from .core.parser import SchemaParser
from .core.variables import required

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")

schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir)
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


@contextmanager
def load_schema(schema: str):
    """Parse a schema file, directory or archive into IR."""
    schema_path = Path(schema).resolve()
    temp_dir = None
    try:
        if schema_path.is_file() and schema_path.name.lower().endswith(ARCHIVE_SUFFIXES):
            temp_dir = extract_archive(schema_path)
            schema_path = Path(temp_dir)
        yield SchemaParser(str(schema_path)).parse_all()
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


def parse_value(raw: str):
    """Read a --arg value as JSON, or as a plain string if it is not JSON."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def split_assignment(option: str, assignment: str) -> tuple[str, str, str]:
    """Split 'user.id=42' into ('user', 'id', '42')."""
    target, sep, value = assignment.partition("=")
    field_path, dot, arg_name = target.rpartition(".")
    if not sep or not dot or not field_path or not arg_name:
        raise click.BadParameter(f"expected FIELD.ARG=VALUE, got {assignment!r}", param_hint=option)
    return field_path, arg_name, value


def path_selection(accessor: TypeAccessor, parts: list[str], prefix: str, field_args: dict[str, dict]):
    """Select a dotted field path, passing arguments to each segment."""
    key = f"{prefix}{parts[0]}"
    field = accessor[parts[0]]
    args = field_args.get(key, {})
    if len(parts) > 1:
        return field(args, lambda t: [path_selection(t, parts[1:], f"{key}.", field_args)])
    if args or not isinstance(field, CompositeField):
        return field(args)
    return field


@click.group()
@click.version_option(package_name="gqlb")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def main(verbose: bool):
    """Schema-driven GraphQL query builder.

    Build GraphQL operations from a schema without generating code.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@schema_option
def types(schema: str):
    """List the root and composite types of a schema."""
    with load_schema(schema) as ir:
        for kind, type_name in ir.root_types.items():
            if type_name in ir.types:
                click.echo(f"{kind}: {type_name}")
        for type_name in sorted(ir.get_all_types()):
            click.echo(type_name)


@main.command()
@schema_option
@click.argument("type_name")
def fields(schema: str, type_name: str):
    """List the fields of TYPE_NAME with their types and arguments."""
    with load_schema(schema) as ir:
        try:
            type_def = ir.get_type(type_name)
        except GqlbError as e:
            raise click.ClickException(str(e)) from e
        for ir_field in type_def.fields:
            click.echo(_describe_field(ir, ir_field))


def _describe_field(ir: IRSchema, ir_field) -> str:
    args = ", ".join(f"{a.name}: {a.type_ref}" for a in ir_field.arguments)
    kind = "leaf" if ir_field.is_leaf else "composite"
    signature = f"{ir_field.name}({args})" if args else ir_field.name
    return f"{signature}: {ir_field.type_ref}  [{kind}]"


@main.command()
@schema_option
@click.option(
    "--kind",
    "-k",
    type=click.Choice(OPERATION_KINDS),
    default="query",
    show_default=True,
    help="Operation kind.",
)
@click.option("--name", "-n", default=None, help="Operation name.")
@click.option(
    "--arg",
    "-a",
    "arg_options",
    multiple=True,
    help="Field argument as FIELD.ARG=VALUE; VALUE is read as JSON when possible.",
)
@click.option(
    "--var",
    "var_options",
    multiple=True,
    help="Bind a field argument to a required variable: FIELD.ARG=variableName.",
)
@click.argument("field_paths", nargs=-1, required=True)
def select(schema: str, kind: str, name: str | None, arg_options, var_options, field_paths):
    """Print an operation selecting FIELD_PATHS.

    A path ending at an object field selects all of its fields.

    Examples:

        gqlb select -s schema.graphql user.profile -a user.id=42

        gqlb select -s schema.graphql -n GetUser user --var user.id=userId
    """
    field_args: dict[str, dict] = {}
    for option, assignments in (("--arg", arg_options), ("--var", var_options)):
        for assignment in assignments:
            field_path, arg_name, value = split_assignment(option, assignment)
            value = required(value) if option == "--var" else parse_value(value)
            field_args.setdefault(field_path, {})[arg_name] = value

    with load_schema(schema) as ir:
        builder = getattr(create_builder(ir), kind)

        def selection_fn(root):
            return [path_selection(root, p.split("."), "", field_args) for p in field_paths]

        try:
            operation = builder.build(name, selection_fn) if name else builder.build(selection_fn)
        except GqlbError as e:
            raise click.ClickException(str(e)) from e

    click.echo(operation.text)


if __name__ == "__main__":
    main()
