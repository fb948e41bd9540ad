"""
SimpleGrid Search -- named filter selection and the search form model

At most one search applies per render. An out-of-range index or an empty
query leaves the source untouched (the very same object comes back).
"""

from dataclasses import dataclass

import pytest

from simplegrid.core.builder import GridBuilder
from simplegrid.core.search import build_search_view, select_search, selected_search
from simplegrid.core.sources import ListSource
from simplegrid.core.types import GridState


@dataclass(frozen=True)
class City:
    name: str
    country: str


CITIES = [
    City("Lisbon", "Portugal"),
    City("Porto", "Portugal"),
    City("Lyon", "France"),
    City("Paris", "France"),
]


def contains(field):
    def search(source, query):
        q = query.lower()
        return source.where(lambda c: q in getattr(c, field).lower())

    return search


CONFIG = (
    GridBuilder(City)
    .add_column_for("name")
    .add_column_for("country")
    .add_search("City", contains("name"))
    .add_search("Country", contains("country"))
    .build()
)


class TestSelectSearch:
    @pytest.mark.parametrize("index", [0, 3, 42])
    def test_index_out_of_range_is_identity(self, index):
        source = ListSource(CITIES)
        state = GridState(search_index=index, search_query="por")
        assert select_search(CONFIG.searches, state, source) is source

    def test_empty_query_is_identity(self):
        source = ListSource(CITIES)
        state = GridState(search_index=1, search_query="")
        assert select_search(CONFIG.searches, state, source) is source

    def test_first_search(self):
        state = GridState(search_index=1, search_query="L")
        result = select_search(CONFIG.searches, state, ListSource(CITIES))
        assert [c.name for c in result.to_list()] == ["Lisbon", "Lyon"]

    def test_second_search(self):
        state = GridState(search_index=2, search_query="france")
        result = select_search(CONFIG.searches, state, ListSource(CITIES))
        assert [c.name for c in result.to_list()] == ["Lyon", "Paris"]

    def test_only_one_search_applies(self):
        assert selected_search(CONFIG.searches, GridState(search_index=2, search_query="x")).name == "Country"

    def test_no_searches(self):
        source = ListSource(CITIES)
        assert select_search((), GridState(search_index=1, search_query="x"), source) is source


class TestSearchView:
    def test_none_without_searches(self):
        assert build_search_view((), GridState()) is None

    def test_options_are_one_based(self):
        view = build_search_view(CONFIG.searches, GridState(search_index=2, search_query="france", path="/c"))
        assert [(o.name, o.value, o.selected) for o in view.options] == [
            ("City", 1, False),
            ("Country", 2, True),
        ]
        assert view.query == "france"
        assert view.search_index == 2

    def test_reset_url(self):
        view = build_search_view(CONFIG.searches, GridState(search_index=1, search_query="x", path="/c"))
        assert view.reset_url == "/c"
