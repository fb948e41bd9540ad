"""
SimpleGrid Assembler -- end-to-end render model

prepare_render() counts the filtered source exactly once and fetches one
page slice. The async path produces an identical view model. Rendering
never mutates the config, so one config serves any number of requests.
"""

from dataclasses import dataclass

import pytest

from simplegrid.core.assembler import build_query, prepare_render, prepare_render_async
from simplegrid.core.builder import GridBuilder
from simplegrid.core.css import css
from simplegrid.core.sources import ListSource
from simplegrid.core.state import resolve_state
from simplegrid.core.types import GridState, SortOrder, SortSpec

TEAMS = ("red", "blue", "green")


@dataclass(frozen=True)
class Player:
    name: str
    team: str
    score: int


PLAYERS = [Player(f"P{i:02d}", TEAMS[(i - 1) % 3], i % 5) for i in range(1, 38)]


def make_config():
    return (
        GridBuilder(Player)
        .add_column_for("name")
        .add_column_for("team")
        .add_column_for("score")
        .add_column(lambda col: col.header("Badge").display_markup(lambda p: f"<b>{p.score}</b>"))
        .set_sortable()
        .default_sort_by("name")
        .add_search("Team", lambda src, q: src.where(lambda p: p.team == q.lower()))
        .add_row_modifier(lambda p: p.score == 4, css("top"))
        .add_pager(rows_per_page=10)
        .set_options(max_rows=50)
        .build()
    )


def names(vm):
    return [p.name for p in vm.items]


class CountingSource:
    """Delegates to a ListSource and records how often it is counted."""

    def __init__(self, inner, calls):
        self.inner = inner
        self.calls = calls

    def _wrap(self, inner):
        return CountingSource(inner, self.calls)

    def where(self, predicate):
        return self._wrap(self.inner.where(predicate))

    def order_by(self, key, descending=False):
        return self._wrap(self.inner.order_by(key, descending))

    def then_by(self, key, descending=False):
        return self._wrap(self.inner.then_by(key, descending))

    def skip(self, count):
        return self._wrap(self.inner.skip(count))

    def take(self, count):
        return self._wrap(self.inner.take(count))

    def count(self):
        self.calls["count"] += 1
        return self.inner.count()

    def to_list(self):
        self.calls["to_list"] += 1
        return self.inner.to_list()

    async def count_async(self):
        return self.count()

    async def to_list_async(self):
        return self.to_list()


class BrokenSource(CountingSource):
    def _wrap(self, inner):
        return BrokenSource(inner, self.calls)

    def to_list(self):
        raise RuntimeError("database went away")


# ============================================================================
# Paging
# ============================================================================


class TestPaging:
    def test_first_page(self):
        vm = prepare_render(make_config(), GridState(path="/players"), ListSource(PLAYERS))
        assert names(vm) == [f"P{i:02d}" for i in range(1, 11)]
        assert vm.pager.page_count == 4
        assert vm.pager.total_records == 37

    def test_last_partial_page(self):
        vm = prepare_render(make_config(), GridState(page=4), ListSource(PLAYERS))
        assert names(vm) == [f"P{i:02d}" for i in range(31, 38)]

    def test_past_the_end(self):
        vm = prepare_render(make_config(), GridState(page=5), ListSource(PLAYERS))
        assert vm.is_empty
        assert vm.pager.current_page == 5

    def test_row_override_is_capped(self):
        vm = prepare_render(make_config(), resolve_state({"rows": "100000"}), ListSource(PLAYERS))
        assert len(vm.rows) == 37
        assert vm.pager is None

    def test_empty_source(self):
        vm = prepare_render(make_config(), GridState(), ListSource([]))
        assert vm.is_empty
        assert vm.pager is None
        assert vm.options.no_records_message == "No records found."


# ============================================================================
# Sorting
# ============================================================================


class TestSorting:
    def test_default_sort_only(self):
        vm = prepare_render(make_config(), GridState(), ListSource(reversed(PLAYERS)))
        assert names(vm)[0] == "P01"
        assert vm.active_sort == (SortSpec("name"),)

    def test_column_sort_with_tie_breaker(self):
        state = GridState(sort_column=2, sort_order=SortOrder.DESCENDING, path="/players")
        vm = prepare_render(make_config(), state, ListSource(PLAYERS))
        assert {p.team for p in vm.items} == {"red"}
        assert names(vm) == ["P01", "P04", "P07", "P10", "P13", "P16", "P19", "P22", "P25", "P28"]
        assert vm.active_sort == (SortSpec("team", SortOrder.DESCENDING), SortSpec("name"))

    def test_tie_breaker_continues_on_next_page(self):
        state = GridState(page=2, sort_column=2, sort_order=SortOrder.DESCENDING)
        vm = prepare_render(make_config(), state, ListSource(PLAYERS))
        assert names(vm)[:4] == ["P31", "P34", "P37", "P03"]

    def test_header_links(self):
        state = GridState(page=3, sort_column=2, sort_order=SortOrder.DESCENDING, path="/players")
        columns = prepare_render(make_config(), state, ListSource(PLAYERS)).columns
        assert [c.header for c in columns] == ["Name", "Team", "Score", "Badge"]
        assert columns[1].sort_url == "/players?page=1&sortcol=2&sortdir=ascending"
        assert columns[1].current_sort is SortOrder.DESCENDING
        assert columns[0].sort_url == "/players?page=1&sortcol=1&sortdir=ascending"
        assert columns[0].current_sort is None
        assert not columns[3].sortable
        assert columns[3].sort_url is None

    def test_unsortable_column_request_falls_back(self):
        vm = prepare_render(make_config(), GridState(sort_column=4), ListSource(PLAYERS))
        assert names(vm)[0] == "P01"
        assert all(c.current_sort is None for c in vm.columns)

    def test_config_not_mutated_across_renders(self):
        config = make_config()
        sorts_before = [c.sort for c in config.columns]
        prepare_render(config, GridState(sort_column=2, sort_order=SortOrder.DESCENDING), ListSource(PLAYERS))
        assert [c.sort for c in config.columns] == sorts_before
        vm = prepare_render(config, GridState(sort_column=2), ListSource(PLAYERS))
        assert vm.items[0].team == "blue"
        assert vm.columns[1].sort_url.endswith("sortdir=descending")


# ============================================================================
# Search, cells, decoration
# ============================================================================


class TestContent:
    def test_search_filters_before_counting(self):
        state = GridState(search_index=1, search_query="Blue")
        vm = prepare_render(make_config(), state, ListSource(PLAYERS))
        assert vm.pager.total_records == 12
        assert vm.pager.page_count == 2
        assert {p.team for p in vm.items} == {"blue"}
        assert vm.search.options[0].selected

    def test_search_without_matches(self):
        vm = prepare_render(make_config(), GridState(search_index=1, search_query="purple"), ListSource(PLAYERS))
        assert vm.is_empty
        assert vm.pager is None

    def test_cells(self):
        vm = prepare_render(make_config(), GridState(), ListSource(PLAYERS))
        first = vm.rows[0]
        assert [cell.value for cell in first.cells] == ["P01", "red", "1", "<b>1</b>"]
        assert [cell.markup for cell in first.cells] == [False, False, False, True]

    def test_row_decoration(self):
        vm = prepare_render(make_config(), GridState(), ListSource(PLAYERS))
        decorated = [row.item.name for row in vm.rows if row.css is not None]
        assert decorated == ["P04", "P09"]
        assert vm.rows[3].css.classes == ("top",)


# ============================================================================
# Source interaction
# ============================================================================


class TestSourceInteraction:
    def test_counts_exactly_once(self):
        calls = {"count": 0, "to_list": 0}
        prepare_render(make_config(), GridState(page=2), CountingSource(ListSource(PLAYERS), calls))
        assert calls == {"count": 1, "to_list": 1}

    def test_build_query_runs_nothing(self):
        calls = {"count": 0, "to_list": 0}
        state = GridState(sort_column=1, search_index=1, search_query="red")
        build_query(make_config(), state, CountingSource(ListSource(PLAYERS), calls))
        assert calls == {"count": 0, "to_list": 0}

    def test_source_errors_propagate(self):
        calls = {"count": 0, "to_list": 0}
        with pytest.raises(RuntimeError, match="database went away"):
            prepare_render(make_config(), GridState(), BrokenSource(ListSource(PLAYERS), calls))

    @pytest.mark.asyncio
    async def test_async_matches_sync(self):
        config = make_config()
        state = GridState(page=2, sort_column=3, sort_order=SortOrder.DESCENDING, search_index=1, search_query="red")
        sync_vm = prepare_render(config, state, ListSource(PLAYERS))
        async_vm = await prepare_render_async(config, state, ListSource(PLAYERS))
        assert async_vm == sync_vm

    @pytest.mark.asyncio
    async def test_async_counts_once(self):
        calls = {"count": 0, "to_list": 0}
        await prepare_render_async(make_config(), GridState(), CountingSource(ListSource(PLAYERS), calls))
        assert calls == {"count": 1, "to_list": 1}
