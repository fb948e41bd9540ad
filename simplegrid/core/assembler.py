"""
SimpleGrid Core — View Model Assembler

Pure pipeline: (config, state, source) → GridViewModel.
No templating. No IO of its own: the only queries are the two the source runs
on our behalf: one count of the filtered source, one fetch of the page slice.

    search → sort → count (once) → page window → slice → headers / rows / pager

prepare_render() and prepare_render_async() share every stage. They differ
only in whether counting and row materialization block or are awaited.
"""

from __future__ import annotations

import logging
from typing import Any

from simplegrid.core.columns import display_value
from simplegrid.core.pager import build_pager_model, plan_page
from simplegrid.core.rows import decorate_row
from simplegrid.core.search import build_search_view, select_search
from simplegrid.core.sorting import active_column, apply_sorts, compose_sorts, sort_link_order
from simplegrid.core.sources import DataSource
from simplegrid.core.state import build_sort_url
from simplegrid.core.types import (
    Cell,
    ColumnView,
    GridConfig,
    GridState,
    GridViewModel,
    PageWindow,
    RowView,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_query(config: GridConfig, state: GridState, source: DataSource) -> Any:
    """Filter, then order. Filtering always precedes sorting and paging."""
    query = select_search(config.searches, state, source)
    return apply_sorts(compose_sorts(config, state), query)


def prepare_render(config: GridConfig, state: GridState, source: DataSource) -> GridViewModel:
    """Blocking render: counts and fetches on the calling thread."""
    query = build_query(config, state, source)
    window = plan_page(config, state, query.count())
    rows = query.skip(window.skip).take(window.take).to_list()
    return assemble(config, state, window, rows)


async def prepare_render_async(config: GridConfig, state: GridState, source: DataSource) -> GridViewModel:
    """Same pipeline as prepare_render(); counting and fetching are awaited."""
    query = build_query(config, state, source)
    window = plan_page(config, state, await query.count_async())
    rows = await query.skip(window.skip).take(window.take).to_list_async()
    return assemble(config, state, window, rows)


def assemble(
    config: GridConfig,
    state: GridState,
    window: PageWindow,
    rows: list[Any],
) -> GridViewModel:
    """Package a fetched page into the frozen render model."""
    logger.debug(
        "grid render: total=%d page=%d/%d rows=%d sortcol=%d searchndx=%d",
        window.total_records,
        window.page,
        window.page_count,
        len(rows),
        state.sort_column,
        state.search_index,
    )
    return GridViewModel(
        columns=build_column_views(config, state),
        rows=tuple(build_row_view(config, row) for row in rows),
        pager=build_pager_model(config, state, window),
        search=build_search_view(config.searches, state),
        css=config.css,
        options=config.options,
        active_sort=compose_sorts(config, state),
    )


# ---------------------------------------------------------------------------
# Stages
# ---------------------------------------------------------------------------


def build_column_views(config: GridConfig, state: GridState) -> tuple[ColumnView, ...]:
    active = active_column(config.columns, state)
    views = []
    for index, column in enumerate(config.columns, start=1):
        if not column.is_sortable:
            views.append(
                ColumnView(
                    index=index,
                    header=column.header,
                    header_markup=column.header_is_markup(),
                    sortable=False,
                )
            )
            continue
        views.append(
            ColumnView(
                index=index,
                header=column.header,
                header_markup=column.header_is_markup(),
                sortable=True,
                sort_url=build_sort_url(state, index, sort_link_order(column, index, state)),
                current_sort=state.sort_order if column is active else None,
            )
        )
    return tuple(views)


def build_row_view(config: GridConfig, row: Any) -> RowView:
    return RowView(
        item=row,
        cells=tuple(Cell(value=display_value(c, row), markup=c.markup) for c in config.columns),
        css=decorate_row(config.row_rules, row),
    )
