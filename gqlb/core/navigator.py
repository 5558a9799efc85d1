"""Schema navigation for selection functions.

A selection function receives a TypeAccessor for the type it selects
from. Looking up a field on it returns one of:

- LeafField: a scalar/enum field without arguments. Usable bare
  (``u.id``) or called (``u.id()``), both giving the same selection.
- ArgumentLeafField: a scalar/enum field with arguments; must be called
  with them (``u.avatar({"size": 64})``).
- CompositeField: an object/interface/union field. Called with a
  selection function (``u.posts(fn)``, ``u.posts({"first": 10}, fn)``),
  referenced bare to select all its fields recursively (``u.profile``),
  or chained (``q.user.profile.bio``).

Example:
    builder.query(lambda q: [
        q.user({"id": "42"}, lambda u: [
            u.id,
            u.name,
            u.profile,               # profile { bio location { city country } }
        ]),
    ])
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from functools import partial
from typing import Any, Callable

from .arguments import ArgumentProcessor
from .errors import EmptySelection, InvalidSelection, MissingArguments
from .ir import IRField, IRSchema, IRType, IRUnion
from .selection import FieldMarker, Selection, normalize_selections

logger = logging.getLogger(__name__)

WILDCARD = "*"
DEFAULT_MAX_DEPTH = 10

SelectionFn = Callable[["TypeAccessor"], Any]


class Navigator:
    """Resolves fields for one build and expands wildcard selections."""

    def __init__(self, schema: IRSchema, arguments: ArgumentProcessor, max_depth: int = DEFAULT_MAX_DEPTH):
        self.schema = schema
        self.arguments = arguments
        self.max_depth = max_depth

    def accessor(self, type_def: IRType | IRUnion) -> "TypeAccessor":
        return TypeAccessor(self, type_def)

    def resolve(
        self,
        type_def: IRType | IRUnion,
        field_name: str,
        parent: "CompositeField | None" = None,
    ) -> "FieldAccessor":
        """Return the accessor for ``type_def.field_name``.

        Raises:
            UnknownField: If the type has no such field
        """
        ir_field = self.schema.get_field(type_def.name, field_name)
        if not ir_field.is_leaf:
            return CompositeField(self, type_def, ir_field, parent)
        if ir_field.arguments:
            return ArgumentLeafField(self, type_def, ir_field, parent)
        return LeafField(self, type_def, ir_field, parent)

    def select(self, type_def: IRType | IRUnion, raw: Any) -> list[Selection]:
        """Normalize a selection function result taken from ``type_def``."""
        return normalize_selections(raw, partial(self.resolve_mapping, type_def))

    def resolve_mapping(self, type_def: IRType | IRUnion, value: Mapping) -> Selection:
        """Build a Selection from a plain ``{"name", "alias", "args", "children"}`` entry.

        The entry is checked against the schema and its args are processed
        like those of a called field. A composite entry without children
        selects all its fields.
        """
        ir_field = self.schema.get_field(type_def.name, value["name"])
        args = value.get("args")
        processed = self.arguments.process(args, type_def.name, ir_field) if args else None
        raw_children = value.get("children") or value.get("selection")

        if ir_field.is_leaf:
            if raw_children:
                raise InvalidSelection(value)
            if processed is None and ir_field.has_required_arguments:
                raise MissingArguments(type_def.name, ir_field.name)
            children = None
        elif raw_children:
            result_type = self.schema.get_type(ir_field.type_name)
            children = tuple(self.select(result_type, raw_children))
        else:
            children = self.expand(ir_field.type_name)

        return Selection(name=ir_field.name, alias=value.get("alias"), args=processed, children=children)

    def leaves(self, type_def: IRType | IRUnion) -> list[Selection]:
        """Select the leaf fields of a type that can be selected without arguments."""
        return [
            Selection(name=ir_field.name)
            for ir_field in type_def.fields
            if ir_field.is_leaf and not ir_field.has_required_arguments
        ]

    def expand(self, type_name: str, visited: frozenset[str] = frozenset(), depth: int = 1) -> tuple[Selection, ...]:
        """Select every leaf of a type and, recursively, of its object fields.

        Fields needing arguments are skipped, as are object fields that
        would revisit a type already on the path or go past max_depth.
        A type with nothing selectable gets ``__typename``.
        """
        type_def = self.schema.get_type(type_name)
        visited = visited | {type_name}

        children = []
        for ir_field in type_def.fields:
            if ir_field.has_required_arguments:
                continue
            if ir_field.is_leaf:
                children.append(Selection(name=ir_field.name))
            elif ir_field.type_name not in visited and depth < self.max_depth:
                nested = self.expand(ir_field.type_name, visited, depth + 1)
                children.append(Selection(name=ir_field.name, children=nested))

        if not children:
            return (Selection(name="__typename"),)
        return tuple(children)


class TypeAccessor:
    """Field lookup on one composite type.

    Fields are attributes (``t.name``) or items (``t["name"]``); items
    also reach names that are Python keywords or start with an
    underscore, including ``__typename``. ``t["*"]`` is the list of
    the type's leaf fields.
    """

    def __init__(self, navigator: Navigator, type_def: IRType | IRUnion):
        self._navigator = navigator
        self._type = type_def

    def __getattr__(self, name: str) -> "FieldAccessor":
        if name.startswith("_"):
            raise AttributeError(name)
        return self._navigator.resolve(self._type, name)

    def __getitem__(self, name: str):
        if name == WILDCARD:
            return self._navigator.leaves(self._type)
        return self._navigator.resolve(self._type, name)

    def __dir__(self):
        return [f.name for f in self._type.fields]

    def __repr__(self):
        return f"<TypeAccessor {self._type.name}>"


class FieldAccessor(FieldMarker):
    """A field looked up on a TypeAccessor.

    Attributes are underscore-prefixed so they never hide field names
    in path-style chains.
    """

    def __init__(
        self,
        navigator: Navigator,
        type_def: IRType | IRUnion,
        ir_field: IRField,
        parent: "CompositeField | None" = None,
    ):
        self._navigator = navigator
        self._type = type_def
        self._field = ir_field
        self._parent = parent

    def _process_args(self, args: dict[str, Any] | None) -> dict[str, Any] | None:
        if not args:
            return None
        return self._navigator.arguments.process(args, self._type.name, self._field)

    def _wrap(self, selection: Selection) -> Selection:
        """Nest a selection inside the fields it was chained from."""
        parent = self._parent
        while parent is not None:
            selection = Selection(name=parent._field.name, children=(selection,))
            parent = parent._parent
        return selection

    def _aliased(self, alias: str) -> Selection:
        selection = self._selection()
        if alias == self._field.name:
            return selection
        depth, parent = 0, self._parent
        while parent is not None:
            depth, parent = depth + 1, parent._parent
        return _alias_innermost(selection, alias, depth)

    def __repr__(self):
        return f"<{type(self).__name__} {self._type.name}.{self._field.name}>"


class LeafField(FieldAccessor):
    """A scalar or enum field; the same selection bare or called."""

    def __call__(self, args: dict[str, Any] | None = None, **kwargs) -> Selection:
        args = {**(args or {}), **kwargs}
        return self._wrap(Selection(name=self._field.name, args=self._process_args(args)))

    def _selection(self) -> Selection:
        return self()


class ArgumentLeafField(LeafField):
    """A scalar or enum field that declares arguments; must be called."""

    def __call__(self, args: dict[str, Any] | None = None, **kwargs) -> Selection:
        if not args and not kwargs and self._field.has_required_arguments:
            raise MissingArguments(self._type.name, self._field.name)
        return super().__call__(args, **kwargs)

    def _selection(self) -> Selection:
        raise MissingArguments(self._type.name, self._field.name)


class CompositeField(FieldAccessor):
    """An object, interface or union field."""

    def __call__(self, *args, **kwargs) -> Selection:
        field_args, selection_fn = self._parse_call(args)
        if kwargs:
            field_args = {**(field_args or {}), **kwargs}

        processed = self._process_args(field_args)
        if selection_fn is not None:
            children = self._select(selection_fn)
        else:
            logger.debug("Selecting all fields of %s.%s", self._type.name, self._field.name)
            children = self._navigator.expand(self._field.type_name)

        return self._wrap(Selection(name=self._field.name, args=processed, children=children))

    def _parse_call(self, args: tuple) -> tuple[dict[str, Any] | None, SelectionFn | None]:
        """Accept (), (fn), (args) and (args, fn)."""
        if not args:
            return None, None
        if len(args) == 1:
            if callable(args[0]):
                return None, args[0]
            return args[0], None
        if len(args) == 2 and callable(args[1]):
            return args[0], args[1]
        raise TypeError(
            f"{self._type.name}.{self._field.name} takes (selection_fn) or (args, selection_fn)"
        )

    def _select(self, selection_fn: SelectionFn) -> tuple[Selection, ...]:
        result_type = self._navigator.schema.get_type(self._field.type_name)
        children = self._navigator.select(result_type, selection_fn(self._navigator.accessor(result_type)))
        if not children:
            raise EmptySelection(self._type.name, self._field.name)
        return tuple(children)

    def _selection(self) -> Selection:
        return self()

    def __getattr__(self, name: str) -> FieldAccessor:
        if name.startswith("_"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> FieldAccessor:
        result_type = self._navigator.schema.get_type(self._field.type_name)
        return self._navigator.resolve(result_type, name, parent=self)


def _alias_innermost(selection: Selection, alias: str, depth: int) -> Selection:
    """Alias the field ``depth`` levels down a single-child chain."""
    if depth == 0:
        return replace(selection, alias=alias)
    (child,) = selection.children
    return replace(selection, children=(_alias_innermost(child, alias, depth - 1),))
