"""
SimpleGrid Core — Sort Composer

Selects the active column sort from request state, composes it with the
grid's default sort, and applies the sequence to a data source as one
primary ordering followed by then-by tie-breakers.

The active column's configured SortSpec is never modified: the request's
direction lives only in the spec returned for the current render.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from simplegrid.core.sources import DataSource
from simplegrid.core.types import (
    Column,
    GridConfig,
    GridConfigError,
    GridState,
    SortOrder,
    SortSpec,
)


def flip(order: SortOrder) -> SortOrder:
    """ascending <-> descending. Anything else is a programming error."""
    if order is SortOrder.ASCENDING:
        return SortOrder.DESCENDING
    if order is SortOrder.DESCENDING:
        return SortOrder.ASCENDING
    raise GridConfigError(f"Unexpected sort order {order!r}")


def active_column(columns: Sequence[Column], state: GridState) -> Column | None:
    """The column the request selected, if the index is in range and the column sorts."""
    if not 1 <= state.sort_column <= len(columns):
        return None
    column = columns[state.sort_column - 1]
    if not column.is_sortable:
        return None
    return column


def active_column_sort(columns: Sequence[Column], state: GridState) -> SortSpec | None:
    column = active_column(columns, state)
    if column is None:
        return None
    return SortSpec(column.sort.key, state.sort_order)


def compose_sorts(config: GridConfig, state: GridState) -> tuple[SortSpec, ...]:
    """[active column sort?, grid default]. The default always applies."""
    sorts: list[SortSpec] = []
    active = active_column_sort(config.columns, state)
    if active is not None:
        sorts.append(active)
    if not config.default_sort.is_empty:
        sorts.append(config.default_sort)
    return tuple(sorts)


def apply_sorts(sorts: Sequence[SortSpec], source: DataSource) -> Any:
    """First non-empty spec orders; each later one breaks ties of the ones before it."""
    ordered = False
    for spec in sorts:
        if spec.is_empty:
            continue
        if ordered:
            source = source.then_by(spec.key, descending=spec.descending)
        else:
            source = source.order_by(spec.key, descending=spec.descending)
            ordered = True
    return source


def sort_link_order(column: Column, column_index: int, state: GridState) -> SortOrder:
    """
    Direction a header link requests: the flip of the current direction for
    the active column, the column's own default direction otherwise.
    """
    if column_index == state.sort_column:
        return flip(state.sort_order)
    return column.sort.order if column.sort is not None else SortOrder.ASCENDING
