"""
SimpleGrid Core — Request State

Pure functions: request snapshot → GridState, and GridState → URLs.

The request is untrusted. resolve_state() never raises: anything missing or
malformed falls back to its default. URL builders are deterministic: the same
state always yields byte-identical query strings.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from simplegrid.core.types import (
    PARAM_PAGE,
    PARAM_ROWS,
    PARAM_SEARCH_INDEX,
    PARAM_SEARCH_QUERY,
    PARAM_SORT_COLUMN,
    PARAM_SORT_ORDER,
    GridState,
    SortOrder,
)

logger = logging.getLogger(__name__)

_ORDER_ALIASES: dict[str, SortOrder] = {
    "ascending": SortOrder.ASCENDING,
    "asc": SortOrder.ASCENDING,
    "0": SortOrder.ASCENDING,
    "descending": SortOrder.DESCENDING,
    "desc": SortOrder.DESCENDING,
    "1": SortOrder.DESCENDING,
}

# ---------------------------------------------------------------------------
# Snapshot → GridState
# ---------------------------------------------------------------------------


def resolve_state(params: Mapping[str, Any], path: str = "") -> GridState:
    """
    Parse a flat key/value request snapshot into a GridState.

    Accepts any mapping, including Starlette QueryParams. List values
    (e.g. from parse_qs) use their last element.
    """
    page = _int_param(params, PARAM_PAGE)
    sort_column = _int_param(params, PARAM_SORT_COLUMN)
    rows = _int_param(params, PARAM_ROWS)
    search_index = _int_param(params, PARAM_SEARCH_INDEX)

    if page is None or page < 1:
        page = 1
    if sort_column is None or sort_column < 0:
        sort_column = 0
    if rows is not None and rows < 1:
        logger.debug("grid state: ignoring non-positive rows=%d", rows)
        rows = None
    if search_index is None or search_index < 0:
        search_index = 0

    return GridState(
        page=page,
        sort_column=sort_column,
        sort_order=_order_param(params),
        rows_per_page=rows,
        search_index=search_index,
        search_query=(_str_param(params, PARAM_SEARCH_QUERY) or "").strip(),
        path=path,
    )


def parse_sort_order(value: Any) -> SortOrder | None:
    """Map a wire value to a SortOrder. None if unrecognized."""
    if isinstance(value, SortOrder):
        return value
    if value is None:
        return None
    return _ORDER_ALIASES.get(str(value).strip().lower())


def _str_param(params: Mapping[str, Any], name: str) -> str | None:
    value = params.get(name)
    if isinstance(value, (list, tuple)):
        value = value[-1] if value else None
    if value is None:
        return None
    return str(value)


def _int_param(params: Mapping[str, Any], name: str) -> int | None:
    raw = _str_param(params, name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw.strip())
    except ValueError:
        logger.debug("grid state: ignoring malformed %s=%r", name, raw[:50])
        return None


def _order_param(params: Mapping[str, Any]) -> SortOrder:
    raw = _str_param(params, PARAM_SORT_ORDER)
    order = parse_sort_order(raw)
    if order is None:
        if raw:
            logger.debug("grid state: ignoring malformed %s=%r", PARAM_SORT_ORDER, raw[:50])
        return SortOrder.ASCENDING
    return order


# ---------------------------------------------------------------------------
# GridState → URLs
# ---------------------------------------------------------------------------


def build_sort_url(state: GridState, column_index: int, order: SortOrder) -> str:
    """URL selecting a column sort. Sorting always returns to page 1."""
    params: list[tuple[str, Any]] = [
        (PARAM_PAGE, 1),
        (PARAM_SORT_COLUMN, column_index),
        (PARAM_SORT_ORDER, order.value),
    ]
    params.extend(_rows_params(state))
    params.extend(_search_params(state))
    return _url(state.path, params)


def build_page_url(state: GridState, page: int) -> str:
    """URL for another page of the current sort/search."""
    params: list[tuple[str, Any]] = [(PARAM_PAGE, page)]
    params.extend(_sort_params(state))
    params.extend(_rows_params(state))
    params.extend(_search_params(state))
    return _url(state.path, params)


def build_rows_url(state: GridState, rows: int) -> str:
    """URL changing rows-per-page. Returns to page 1."""
    params: list[tuple[str, Any]] = [(PARAM_PAGE, 1)]
    params.extend(_sort_params(state))
    params.append((PARAM_ROWS, rows))
    params.extend(_search_params(state))
    return _url(state.path, params)


def build_reset_url(state: GridState) -> str:
    """URL dropping every grid parameter, back to defaults."""
    return state.path or "?"


def _sort_params(state: GridState) -> list[tuple[str, Any]]:
    if state.sort_column <= 0:
        return []
    return [(PARAM_SORT_COLUMN, state.sort_column), (PARAM_SORT_ORDER, state.sort_order.value)]


def _rows_params(state: GridState) -> list[tuple[str, Any]]:
    if state.rows_per_page is None:
        return []
    return [(PARAM_ROWS, state.rows_per_page)]


def _search_params(state: GridState) -> list[tuple[str, Any]]:
    if state.search_index <= 0 or not state.search_query:
        return []
    return [(PARAM_SEARCH_INDEX, state.search_index), (PARAM_SEARCH_QUERY, state.search_query)]


def _url(path: str, params: list[tuple[str, Any]]) -> str:
    return f"{path}?{urlencode(params)}"
