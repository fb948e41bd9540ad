"""
SimpleGrid Core — Column Registry

ColumnBuilder configures one column; the helpers below operate on the
ordered column list held by GridBuilder. Nothing here runs at render time
except display() / header resolution on already-frozen Columns.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any

from simplegrid.core.sources import field_getter
from simplegrid.core.types import (
    Column,
    FieldDescriptor,
    GridConfigError,
    HeaderKind,
    SortOrder,
    SortSpec,
)

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|_+|\.")


def humanize(name: str) -> str:
    """release_date -> 'Release Date', boxOffice -> 'Box Office'."""
    words = [w for w in _WORD_BOUNDARY.split(name) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def grid_fields(row_type: type) -> tuple[FieldDescriptor, ...]:
    """The static field descriptors a row type declares in `__grid_fields__`."""
    fields = getattr(row_type, "__grid_fields__", None)
    if fields is None:
        raise GridConfigError(f"{row_type.__name__} declares no __grid_fields__")
    result = tuple(fields)
    for f in result:
        if not isinstance(f, FieldDescriptor):
            raise GridConfigError(f"{row_type.__name__}.__grid_fields__ contains {f!r}, expected FieldDescriptor")
    return result


def known_fields(row_type: type) -> set[str] | None:
    """Field names a row type is known to expose, or None if it can't be told."""
    declared = getattr(row_type, "__grid_fields__", None)
    if declared is not None:
        return {f.name for f in declared}
    names: set[str] = set()
    for klass in getattr(row_type, "__mro__", (row_type,)):
        names.update(getattr(klass, "__annotations__", {}))
        names.update(getattr(klass, "__dataclass_fields__", {}))
    if not names:
        return None
    names.update(n for n in dir(row_type) if not n.startswith("_"))
    return names


def check_field(row_type: type | None, name: str) -> None:
    if not name:
        raise GridConfigError("Column field name must be non-empty")
    if row_type is None:
        return
    names = known_fields(row_type)
    root = name.split(".", 1)[0]
    if names is not None and root not in names:
        raise GridConfigError(f"{row_type.__name__} has no field {root!r}")


def descriptor_for(row_type: type | None, name: str) -> FieldDescriptor | None:
    if row_type is None:
        return None
    for f in getattr(row_type, "__grid_fields__", None) or ():
        if f.name == name:
            return f
    return None


# ---------------------------------------------------------------------------
# ColumnBuilder
# ---------------------------------------------------------------------------


class ColumnBuilder:
    """
    Fluent configuration for a single column.

    Usage:
        grid.add_column(lambda col: col.for_field("title").header("Movie").sortable())
    """

    def __init__(self, row_type: type | None = None, order: int = 0) -> None:
        self._row_type = row_type
        self._accessor: Callable[[Any], Any] | None = None
        self._field: str | None = None
        self._header: str | None = None
        self._header_kind = HeaderKind.TEXT
        self._markup = False
        self._order = order
        self._sort: SortSpec | None = None
        self._sort_enabled = True
        self._sort_explicit = False

    def for_field(self, name: str) -> ColumnBuilder:
        """Display a field, take its header from model metadata, and make it sort-capable."""
        check_field(self._row_type, name)
        self._field = name
        if self._accessor is None:
            self._accessor = field_getter(name)
        if self._header is None:
            self._header_kind = HeaderKind.MODEL
        return self

    def header(self, text: str) -> ColumnBuilder:
        self._header = text
        self._header_kind = HeaderKind.TEXT
        return self

    def header_markup(self, html: str) -> ColumnBuilder:
        self._header = html
        self._header_kind = HeaderKind.MARKUP
        return self

    def display(self, accessor: Callable[[Any], Any]) -> ColumnBuilder:
        self._accessor = accessor
        self._markup = False
        return self

    def display_markup(self, accessor: Callable[[Any], Any]) -> ColumnBuilder:
        """Cell content is trusted markup; the template will not escape it."""
        self._accessor = accessor
        self._markup = True
        return self

    def order(self, value: int) -> ColumnBuilder:
        self._order = value
        return self

    def sortable(self, enable: bool = True) -> ColumnBuilder:
        """Sort by sort_by()'s key, else the column's field. Explicit: grid-wide set_sortable won't override."""
        self._sort_enabled = enable
        self._sort_explicit = True
        return self

    def sort_by(self, key: Any, order: SortOrder = SortOrder.ASCENDING) -> ColumnBuilder:
        """Sort by an arbitrary key; `order` is the direction offered before the column is active."""
        if key is None:
            raise GridConfigError("sort_by needs a key")
        self._sort = SortSpec(key, SortOrder(order))
        self._sort_enabled = True
        self._sort_explicit = True
        return self

    def build(self) -> Column:
        if self._accessor is None:
            raise GridConfigError("Column has no accessor; call for_field() or display()")
        return Column(
            accessor=self._accessor,
            header=self._resolve_header(),
            header_kind=self._header_kind,
            order=self._order,
            field=self._field,
            sort=self._resolve_sort(),
            sort_enabled=self._sort_enabled,
            sort_explicit=self._sort_explicit,
            markup=self._markup,
        )

    def _resolve_sort(self) -> SortSpec | None:
        if not (self._sort_explicit and self._sort_enabled) or self._sort is not None:
            return self._sort
        if self._field is None:
            raise GridConfigError("sortable() needs a sort key; call for_field() or sort_by()")
        return SortSpec(self._field)

    def _resolve_header(self) -> str:
        if self._header is not None:
            return self._header
        if self._field is None:
            return ""
        descriptor = descriptor_for(self._row_type, self._field)
        if descriptor is not None and descriptor.display_name:
            return descriptor.display_name
        return humanize(self._field)


# ---------------------------------------------------------------------------
# Registry helpers (operate on GridBuilder's column list)
# ---------------------------------------------------------------------------


def columns_from_model(row_type: type, start: int) -> list[Column]:
    """Build one column per displayable descriptor. Default order = declaration position."""
    columns = []
    for f in grid_fields(row_type):
        if not f.auto_generate:
            continue
        builder = ColumnBuilder(row_type, order=start + len(columns)).for_field(f.name)
        if f.order is not None:
            builder.order(f.order)
        columns.append(builder.build())
    return columns


def order_columns(columns: Sequence[Column]) -> list[Column]:
    """Stable sort by Column.order; equal orders keep insertion order."""
    return sorted(columns, key=lambda c: c.order)


def set_sortable(columns: Sequence[Column], enable: bool) -> list[Column]:
    """
    Grid-wide sort toggle. Columns configured with sortable()/sort_by()
    keep their own setting.
    """
    result = []
    for column in columns:
        if column.sort_explicit:
            result.append(column)
        elif enable:
            sort = column.sort
            if sort is None and column.field is not None:
                sort = SortSpec(column.field)
            result.append(replace(column, sort=sort, sort_enabled=True))
        else:
            result.append(replace(column, sort_enabled=False))
    return result


def display_value(column: Column, row: Any) -> str:
    value = column.accessor(row)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)
