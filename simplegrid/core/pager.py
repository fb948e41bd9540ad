"""
SimpleGrid Core — Pager Calculator

Effective rows-per-page, skip/take bounds, page count and visibility.
The grid's max_rows is a hard ceiling: no request override can exceed it.
"""

from __future__ import annotations

from simplegrid.core.state import build_page_url, build_rows_url
from simplegrid.core.types import (
    GridConfig,
    GridState,
    PagerModel,
    PageWindow,
    RowsOption,
)


def effective_rows_per_page(config: GridConfig, state: GridState) -> int:
    """Request override, else the pager's page size, else max_rows, clamped to max_rows."""
    max_rows = config.options.max_rows
    if state.rows_per_page is not None:
        rows = state.rows_per_page
    elif config.pager.enabled:
        rows = config.pager.rows_per_page
    else:
        rows = max_rows
    return max(1, min(rows, max_rows))


def page_count(total_records: int, rows_per_page: int) -> int:
    """ceil(total / rows), with an empty source still one (empty) page."""
    if total_records <= 0:
        return 1
    return -(-total_records // rows_per_page)


def plan_page(config: GridConfig, state: GridState, total_records: int) -> PageWindow:
    rows = effective_rows_per_page(config, state)
    pages = page_count(total_records, rows)
    visible = config.pager.enabled and (rows < total_records or not config.pager.hide_if_too_few_rows)
    # Pages past the end all fetch the same empty slice, one page beyond the last.
    fetch_page = min(state.page, pages + 1)
    return PageWindow(
        total_records=total_records,
        rows_per_page=rows,
        page=state.page,
        page_count=pages,
        skip=(fetch_page - 1) * rows,
        take=rows,
        pager_visible=visible,
    )


def build_pager_model(config: GridConfig, state: GridState, window: PageWindow) -> PagerModel | None:
    """Pager view model, or None when the pager is hidden."""
    if not window.pager_visible:
        return None

    options = tuple(
        RowsOption(rows=rows, url=build_rows_url(state, rows), selected=rows == window.rows_per_page)
        for rows in config.pager.rows_per_page_options
        if rows <= config.options.max_rows
    )

    prev_url = None
    if window.page > 1:
        prev_url = build_page_url(state, min(window.page - 1, window.page_count))
    next_url = None
    if window.page < window.page_count:
        next_url = build_page_url(state, window.page + 1)

    return PagerModel(
        total_records=window.total_records,
        rows_per_page=window.rows_per_page,
        current_page=window.page,
        page_count=window.page_count,
        display_total=config.pager.display_total,
        rows_per_page_options=options,
        prev_url=prev_url,
        next_url=next_url,
    )
