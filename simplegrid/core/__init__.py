"""
SimpleGrid Core — the pure grid engine.

Configure once, render many:
  builder    — fluent setup, frozen into a GridConfig
  state      — request snapshot → GridState, GridState → URLs
  assembler  — (config, state, source) → GridViewModel  (pure, deterministic)

Data sources:
  ListSource (in-memory), SelectSource (SQLAlchemy, in simplegrid.core.sql)
"""

from simplegrid.core.assembler import build_query, prepare_render, prepare_render_async
from simplegrid.core.builder import GridBuilder
from simplegrid.core.columns import ColumnBuilder
from simplegrid.core.css import CssBuilder, GridCss, css
from simplegrid.core.sorting import flip
from simplegrid.core.sources import DataSource, ListSource
from simplegrid.core.state import build_reset_url, build_sort_url, resolve_state
from simplegrid.core.types import (
    GRID_PARAMS,
    PARAM_PAGE,
    PARAM_ROWS,
    PARAM_SEARCH_INDEX,
    PARAM_SEARCH_QUERY,
    PARAM_SORT_COLUMN,
    PARAM_SORT_ORDER,
    FieldDescriptor,
    GridConfig,
    GridConfigError,
    GridState,
    GridViewModel,
    SortOrder,
    SortSpec,
)

__all__ = [
    "GridBuilder",
    "ColumnBuilder",
    "GridConfig",
    "GridConfigError",
    "GridState",
    "GridViewModel",
    "FieldDescriptor",
    "SortOrder",
    "SortSpec",
    "CssBuilder",
    "GridCss",
    "css",
    "DataSource",
    "ListSource",
    "flip",
    "resolve_state",
    "build_sort_url",
    "build_reset_url",
    "build_query",
    "prepare_render",
    "prepare_render_async",
    "GRID_PARAMS",
    "PARAM_PAGE",
    "PARAM_SORT_COLUMN",
    "PARAM_SORT_ORDER",
    "PARAM_ROWS",
    "PARAM_SEARCH_INDEX",
    "PARAM_SEARCH_QUERY",
]
