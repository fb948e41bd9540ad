"""Grid routes — GET /grids/{name} (HTML) and GET /api/grids/{name} (JSON)."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from backend.models.grid import GridResponse
from backend.services.grid_renderer import render_grid
from backend.services.movies import MOVIE_GRID, movie_source
from simplegrid.core import GridConfig, GridState, GridViewModel, prepare_render_async, resolve_state
from simplegrid.core.sources import DataSource

logger = logging.getLogger(__name__)

router = APIRouter(tags=["grids"])


@dataclass(frozen=True)
class GridEndpoint:
    """A published grid: frozen config, a source factory, and how to dump a row item."""

    config: GridConfig
    source: Callable[[], DataSource]
    dump: Callable[[Any], dict[str, Any]] = dataclasses.asdict


GRIDS: dict[str, GridEndpoint] = {
    "movies": GridEndpoint(config=MOVIE_GRID, source=movie_source),
}


def _endpoint(name: str) -> GridEndpoint:
    endpoint = GRIDS.get(name)
    if endpoint is None:
        raise HTTPException(status_code=404, detail=f"Unknown grid: {name}")
    return endpoint


def grid_state(request: Request) -> GridState:
    """Request snapshot → GridState. URLs in the render model point back at this path."""
    return resolve_state(request.query_params, path=request.url.path)


async def _render(name: str, request: Request) -> tuple[GridEndpoint, GridViewModel]:
    endpoint = _endpoint(name)
    state = grid_state(request)
    vm = await prepare_render_async(endpoint.config, state, endpoint.source())
    logger.info(
        "grid %s: page=%d sortcol=%d searchndx=%d rows=%d",
        name,
        state.page,
        state.sort_column,
        state.search_index,
        len(vm.rows),
    )
    return endpoint, vm


@router.get("/grids/{name}", response_class=HTMLResponse)
async def grid_page(name: str, request: Request) -> HTMLResponse:
    """Serve a grid as an HTML fragment rendered by the default template."""
    _, vm = await _render(name, request)
    return HTMLResponse(content=render_grid(vm))


@router.get("/api/grids/{name}", response_model=GridResponse)
async def grid_json(name: str, request: Request) -> GridResponse:
    """Serve a grid's render model as JSON."""
    endpoint, vm = await _render(name, request)
    return GridResponse.from_view_model(vm, item_dump=endpoint.dump)
