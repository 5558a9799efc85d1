"""Selection tree nodes and normalization of selection function results.

A selection function returns either a list of field markers, which is
merged by field name, or a dict of response key -> field marker, where a
key different from the field name becomes an alias.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Callable

from .errors import InvalidSelection

logger = logging.getLogger(__name__)

# Resolves a plain {"name": ...} entry against the type being selected from
MappingResolver = Callable[[Mapping], "Selection"]


@dataclass(frozen=True)
class Selection:
    """A selected field: ``alias: name(args) { children }``."""
    name: str
    alias: str | None = None
    args: dict[str, Any] | None = None
    children: tuple["Selection", ...] | None = None

    @property
    def response_key(self) -> str:
        return self.alias or self.name


class FieldMarker:
    """Base for values a selection function may return in place of a Selection."""

    def _selection(self) -> Selection:
        raise NotImplementedError

    def _aliased(self, alias: str) -> Selection:
        selection = self._selection()
        if alias == selection.name:
            return selection
        return replace(selection, alias=alias)


def is_plain_marker(value: Any) -> bool:
    return isinstance(value, Mapping) and isinstance(value.get("name"), str)


def to_selection(value: Any, resolve: MappingResolver | None = None) -> Selection:
    """Convert one entry of a selection result to a Selection.

    Plain ``{"name": ...}`` entries go through ``resolve`` when given, so
    they are checked against the schema like field markers. Without it
    they are taken as they are.
    """
    if isinstance(value, Selection):
        return value
    if isinstance(value, FieldMarker):
        return value._selection()
    if is_plain_marker(value):
        if resolve is not None:
            return resolve(value)
        children = value.get("children") or value.get("selection")
        return Selection(
            name=value["name"],
            alias=value.get("alias"),
            args=value.get("args"),
            children=tuple(normalize_selections(children)) if children else None,
        )
    raise InvalidSelection(value)


def normalize_selections(raw: Any, resolve: MappingResolver | None = None) -> list[Selection]:
    """Convert a selection function result to a list of Selections.

    Raises:
        InvalidSelection: If an entry is not a field marker
    """
    if isinstance(raw, (Selection, FieldMarker)) or is_plain_marker(raw):
        raw = [raw]

    if isinstance(raw, Mapping):
        selections = []
        for key, value in raw.items():
            if isinstance(value, FieldMarker):
                # A chained marker aliases its own field, not the chain
                selection = value._aliased(key)
            else:
                selection = to_selection(value, resolve)
                if key != selection.name:
                    selection = replace(selection, alias=key)
            selections.append(selection)
        return selections

    if isinstance(raw, (str, bytes)) or not hasattr(raw, "__iter__"):
        raise InvalidSelection(raw)

    return merge_selections([to_selection(value, resolve) for value in raw])


def merge_selections(
    selections: list[Selection],
    key: Callable[[Selection], Any] = lambda s: s.name,
) -> list[Selection]:
    """Merge selections of the same field.

    The first occurrence keeps its position, alias and args; the
    children of all occurrences are concatenated in order and merged
    again by response key and args, so repeated leaves are kept once
    while the same field selected with different args is kept twice.
    """
    groups: list[tuple[Any, list[Selection]]] = []
    for selection in selections:
        selection_key = key(selection)
        for group_key, group in groups:
            if group_key == selection_key:
                group.append(selection)
                break
        else:
            groups.append((selection_key, [selection]))

    merged = []
    for _, group in groups:
        first = group[0]
        if len(group) == 1:
            merged.append(first)
            continue
        logger.debug("Merging %d selections of field %s", len(group), first.name)
        children = [child for selection in group for child in selection.children or ()]
        if children:
            children = merge_selections(children, key=lambda s: (s.name, s.alias, s.args))
            first = replace(first, children=tuple(children))
        merged.append(first)
    return merged
