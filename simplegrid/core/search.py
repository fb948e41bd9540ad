"""SimpleGrid Core — Search Selector. At most one named filter per render."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from simplegrid.core.state import build_reset_url
from simplegrid.core.types import GridState, SearchDefinition, SearchOption, SearchViewModel


def selected_search(searches: Sequence[SearchDefinition], state: GridState) -> SearchDefinition | None:
    if not state.search_query:
        return None
    if not 1 <= state.search_index <= len(searches):
        return None
    return searches[state.search_index - 1]


def select_search(searches: Sequence[SearchDefinition], state: GridState, source: Any) -> Any:
    """Apply the selected search to `source`; return `source` itself when none applies."""
    search = selected_search(searches, state)
    if search is None:
        return source
    return search.filter(source, state.search_query)


def build_search_view(searches: Sequence[SearchDefinition], state: GridState) -> SearchViewModel | None:
    """Search form model. None when the grid has no searches."""
    if not searches:
        return None
    return SearchViewModel(
        options=tuple(
            SearchOption(name=search.name, value=i, selected=state.search_index == i)
            for i, search in enumerate(searches, start=1)
        ),
        search_index=state.search_index,
        query=state.search_query,
        reset_url=build_reset_url(state),
    )
