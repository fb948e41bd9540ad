"""
SimpleGrid Core — GridBuilder

Setup-time, single-threaded, fluent configuration. build() freezes the
result into a GridConfig; render functions only ever see the frozen form.

Usage:
    config = (
        GridBuilder(Movie)
        .add_columns_from_model()
        .order_columns()
        .set_sortable()
        .default_sort_by("name")
        .add_search("Name", lambda src, q: src.where(lambda m: q.lower() in m.name.lower()))
        .add_pager(rows_per_page=10)
        .build()
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Any

from simplegrid.core.columns import (
    ColumnBuilder,
    columns_from_model,
    order_columns,
    set_sortable,
)
from simplegrid.core.css import CssBuilder, GridCss
from simplegrid.core.types import (
    Column,
    GridConfig,
    GridConfigError,
    GridOptions,
    PagerConfig,
    RowDecorationRule,
    SearchDefinition,
    SortOrder,
    SortSpec,
)


class GridBuilder:
    """Mutable grid configuration. Every method returns the builder."""

    def __init__(self, row_type: type | None = None) -> None:
        self.row_type = row_type
        self._columns: list[Column] = []
        self._default_sort = SortSpec()
        self._searches: list[SearchDefinition] = []
        self._row_rules: list[RowDecorationRule] = []
        self._pager = PagerConfig()
        self._options = GridOptions()
        self._css = GridCss()

    # -- columns ------------------------------------------------------------

    def add_column(self, configure: Callable[[ColumnBuilder], Any]) -> GridBuilder:
        builder = ColumnBuilder(self.row_type, order=len(self._columns))
        configure(builder)
        self._columns.append(builder.build())
        return self

    def add_column_for(self, field: str) -> GridBuilder:
        return self.add_column(lambda col: col.for_field(field))

    def add_columns_from_model(self) -> GridBuilder:
        if self.row_type is None:
            raise GridConfigError("add_columns_from_model needs a row type: GridBuilder(RowType)")
        self._columns.extend(columns_from_model(self.row_type, start=len(self._columns)))
        return self

    def order_columns(self) -> GridBuilder:
        self._columns = order_columns(self._columns)
        return self

    def set_sortable(self, enable: bool = True) -> GridBuilder:
        self._columns = set_sortable(self._columns, enable)
        return self

    # -- sorting / searching ------------------------------------------------

    def default_sort_by(self, key: Any, order: SortOrder = SortOrder.ASCENDING) -> GridBuilder:
        """Grid-level sort. Primary when no column is selected, tie-breaker otherwise."""
        if key is None:
            raise GridConfigError("default_sort_by needs a key")
        self._default_sort = SortSpec(key, SortOrder(order))
        return self

    def add_search(self, name: str, search_filter: Callable[[Any, str], Any]) -> GridBuilder:
        """Register a named search. The first one makes the search form appear."""
        if not callable(search_filter):
            raise GridConfigError(f"Search {name!r} filter must be callable")
        self._searches.append(SearchDefinition(name=name, filter=search_filter))
        return self

    # -- rows / css ---------------------------------------------------------

    def add_row_modifier(self, predicate: Callable[[Any], bool], css: CssBuilder) -> GridBuilder:
        """Apply `css` to rows matching `predicate`. First matching modifier wins."""
        if not callable(predicate):
            raise GridConfigError("Row modifier predicate must be callable")
        self._row_rules.append(RowDecorationRule(predicate=predicate, css=css))
        return self

    def add_css(
        self,
        table: CssBuilder | None = None,
        header: CssBuilder | None = None,
        row: CssBuilder | None = None,
    ) -> GridBuilder:
        self._css = GridCss(
            table=self._css.table.merge(table),
            header=self._css.header.merge(header),
            row=self._css.row.merge(row),
        )
        return self

    def add_css_class(self, css_class: str) -> GridBuilder:
        return self.add_css(table=CssBuilder().add_class(css_class))

    def add_css_style(self, css_style: str) -> GridBuilder:
        return self.add_css(table=CssBuilder().add_style(css_style))

    # -- pager / options ----------------------------------------------------

    def add_pager(
        self,
        rows_per_page: int | None = None,
        hide_if_too_few_rows: bool | None = None,
        display_total: bool | None = None,
        rows_per_page_options: Iterable[int] | None = None,
    ) -> GridBuilder:
        changes: dict[str, Any] = {"enabled": True}
        if rows_per_page is not None:
            _check_positive("rows_per_page", rows_per_page)
            changes["rows_per_page"] = rows_per_page
        if hide_if_too_few_rows is not None:
            changes["hide_if_too_few_rows"] = hide_if_too_few_rows
        if display_total is not None:
            changes["display_total"] = display_total
        if rows_per_page_options is not None:
            options = tuple(rows_per_page_options)
            for value in options:
                _check_positive("rows_per_page_options", value)
            changes["rows_per_page_options"] = options
        self._pager = replace(self._pager, **changes)
        return self

    def set_options(
        self,
        max_rows: int | None = None,
        no_records_message: str | None = None,
        show_headers: bool | None = None,
        template: str | None = None,
    ) -> GridBuilder:
        changes: dict[str, Any] = {}
        if max_rows is not None:
            _check_positive("max_rows", max_rows)
            changes["max_rows"] = max_rows
        if no_records_message is not None:
            changes["no_records_message"] = no_records_message
        if show_headers is not None:
            changes["show_headers"] = show_headers
        if template is not None:
            changes["template"] = template
        self._options = replace(self._options, **changes)
        return self

    # -- freeze -------------------------------------------------------------

    def build(self) -> GridConfig:
        return GridConfig(
            columns=tuple(self._columns),
            default_sort=self._default_sort,
            searches=tuple(self._searches),
            row_rules=tuple(self._row_rules),
            pager=self._pager,
            options=self._options,
            css=self._css,
        )


def _check_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise GridConfigError(f"{name} must be a positive integer, got {value!r}")
