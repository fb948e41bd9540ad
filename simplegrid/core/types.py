"""
SimpleGrid Core — Shared Types

Data classes used across the state resolver, column registry, sort composer,
pager, and assembler. These are the contracts that bind the core together.

Everything produced at render time is frozen. Configuration is frozen once
GridBuilder.build() returns.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from simplegrid.core.css import CssBuilder, GridCss

# ---------------------------------------------------------------------------
# Wire parameter names
# ---------------------------------------------------------------------------

PARAM_PAGE = "page"
PARAM_SORT_COLUMN = "sortcol"
PARAM_SORT_ORDER = "sortdir"
PARAM_ROWS = "rows"
PARAM_SEARCH_INDEX = "searchndx"
PARAM_SEARCH_QUERY = "searchqry"

GRID_PARAMS: tuple[str, ...] = (
    PARAM_PAGE,
    PARAM_SORT_COLUMN,
    PARAM_SORT_ORDER,
    PARAM_ROWS,
    PARAM_SEARCH_INDEX,
    PARAM_SEARCH_QUERY,
)

DEFAULT_MAX_ROWS = 500
DEFAULT_ROWS_PER_PAGE = 20
DEFAULT_ROWS_PER_PAGE_OPTIONS: tuple[int, ...] = (10, 20, 50)
DEFAULT_NO_RECORDS_MESSAGE = "No records found."


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class GridConfigError(ValueError):
    """A programmer error in grid configuration. Raised at setup time, never coerced."""


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


# A sort key is a field name, a Python callable, or a source-specific expression
# (e.g. a SQLAlchemy column). The data source decides what it accepts.
SortKey = Any
RowPredicate = Callable[[Any], bool]


@dataclass(frozen=True)
class SortSpec:
    """
    A key-extraction expression plus an order.

    A spec with no key is a no-op. It may only ever close a sort sequence
    as the final tie-breaker.
    """

    key: SortKey | None = None
    order: SortOrder = SortOrder.ASCENDING

    @property
    def is_empty(self) -> bool:
        return self.key is None

    @property
    def descending(self) -> bool:
        return self.order is SortOrder.DESCENDING


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


class HeaderKind(str, Enum):
    TEXT = "text"
    MARKUP = "markup"
    MODEL = "model"  # resolved from field metadata at build time


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Display metadata for one field of a row type.

    Row types opt into add_columns_from_model() by exposing a static
    `__grid_fields__` tuple of these.
    """

    name: str
    display_name: str | None = None
    order: int | None = None
    auto_generate: bool = True


@dataclass(frozen=True)
class Column:
    """One column definition. Built by ColumnBuilder, frozen thereafter."""

    accessor: Callable[[Any], Any]
    header: str = ""
    header_kind: HeaderKind = HeaderKind.TEXT
    order: int = 0
    field: str | None = None
    sort: SortSpec | None = None
    sort_enabled: bool = True
    sort_explicit: bool = False
    markup: bool = False

    @property
    def is_sortable(self) -> bool:
        return self.sort_enabled and self.sort is not None and not self.sort.is_empty

    def header_is_markup(self) -> bool:
        return self.header_kind is HeaderKind.MARKUP


# ---------------------------------------------------------------------------
# Search, decoration, pager, options
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SearchDefinition:
    """A named filter: (source, query) -> filtered source."""

    name: str
    filter: Callable[[Any, str], Any]


@dataclass(frozen=True)
class RowDecorationRule:
    predicate: RowPredicate
    css: CssBuilder


@dataclass(frozen=True)
class PagerConfig:
    enabled: bool = False
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE
    hide_if_too_few_rows: bool = True
    display_total: bool = True
    rows_per_page_options: tuple[int, ...] = DEFAULT_ROWS_PER_PAGE_OPTIONS


@dataclass(frozen=True)
class GridOptions:
    """Grid-wide options. max_rows is a hard ceiling no request can lift."""

    max_rows: int = DEFAULT_MAX_ROWS
    no_records_message: str = DEFAULT_NO_RECORDS_MESSAGE
    show_headers: bool = True
    template: str | None = None  # Mustache override for the default table


@dataclass(frozen=True)
class GridConfig:
    """
    The frozen configuration of one grid. Produced by GridBuilder.build().
    Safe to share between concurrent renders.
    """

    columns: tuple[Column, ...] = ()
    default_sort: SortSpec = field(default_factory=SortSpec)
    searches: tuple[SearchDefinition, ...] = ()
    row_rules: tuple[RowDecorationRule, ...] = ()
    pager: PagerConfig = field(default_factory=PagerConfig)
    options: GridOptions = field(default_factory=GridOptions)
    css: GridCss = field(default_factory=GridCss)


# ---------------------------------------------------------------------------
# Request state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GridState:
    """
    Per-request grid state. Derived once from the request snapshot.

    sort_column and search_index are 1-based; 0 means none.
    """

    page: int = 1
    sort_column: int = 0
    sort_order: SortOrder = SortOrder.ASCENDING
    rows_per_page: int | None = None
    search_index: int = 0
    search_query: str = ""
    path: str = ""


# ---------------------------------------------------------------------------
# Render model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageWindow:
    """Skip/take bounds for one page of a counted source."""

    total_records: int
    rows_per_page: int
    page: int
    page_count: int
    skip: int
    take: int
    pager_visible: bool


@dataclass(frozen=True)
class RowsOption:
    rows: int
    url: str
    selected: bool


@dataclass(frozen=True)
class PagerModel:
    total_records: int
    rows_per_page: int
    current_page: int
    page_count: int
    display_total: bool
    rows_per_page_options: tuple[RowsOption, ...] = ()
    prev_url: str | None = None
    next_url: str | None = None

    @property
    def has_prev(self) -> bool:
        return self.prev_url is not None

    @property
    def has_next(self) -> bool:
        return self.next_url is not None


@dataclass(frozen=True)
class SearchOption:
    name: str
    value: int
    selected: bool


@dataclass(frozen=True)
class SearchViewModel:
    options: tuple[SearchOption, ...]
    search_index: int
    query: str
    reset_url: str


@dataclass(frozen=True)
class ColumnView:
    """A column header as the template sees it."""

    index: int  # 1-based, matches the sortcol wire value
    header: str
    header_markup: bool
    sortable: bool
    sort_url: str | None = None
    current_sort: SortOrder | None = None


@dataclass(frozen=True)
class Cell:
    value: str
    markup: bool = False


@dataclass(frozen=True)
class RowView:
    item: Any
    cells: tuple[Cell, ...]
    css: CssBuilder | None = None


@dataclass(frozen=True)
class GridViewModel:
    """The terminal render model. Built fresh per render; never mutated."""

    columns: tuple[ColumnView, ...]
    rows: tuple[RowView, ...]
    pager: PagerModel | None
    search: SearchViewModel | None
    css: GridCss
    options: GridOptions
    active_sort: tuple[SortSpec, ...] = ()

    @property
    def items(self) -> list[Any]:
        return [row.item for row in self.rows]

    @property
    def is_empty(self) -> bool:
        return not self.rows
