"""
SimpleGrid Sources -- in-memory ListSource

Every operation returns a new source; nothing runs until count() or
to_list(). Multi-key ordering is stable and None sorts first ascending.
"""

import pytest

from simplegrid.core.sources import DataSource, ListSource, field_getter
from simplegrid.core.types import GridConfigError

ROWS = [
    {"name": "b", "size": 2},
    {"name": "a", "size": None},
    {"name": "c", "size": 2},
    {"name": "d", "size": 1},
]


def names(source):
    return [r["name"] for r in source.to_list()]


class TestComposition:
    def test_is_a_data_source(self):
        assert isinstance(ListSource(ROWS), DataSource)

    def test_operations_return_new_sources(self):
        base = ListSource(ROWS)
        filtered = base.where(lambda r: r["name"] != "a")
        assert filtered is not base
        assert base.count() == 4
        assert filtered.count() == 3

    def test_deferred_until_materialized(self):
        seen = []

        def predicate(row):
            seen.append(row["name"])
            return True

        source = ListSource(ROWS).where(predicate).order_by("name")
        assert seen == []
        source.to_list()
        assert seen == ["b", "a", "c", "d"]

    def test_generators_can_be_read_twice(self):
        source = ListSource(r for r in ROWS)
        assert source.count() == 4
        assert len(source.to_list()) == 4


class TestOrdering:
    def test_none_sorts_first_ascending(self):
        assert names(ListSource(ROWS).order_by("size")) == ["a", "d", "b", "c"]

    def test_none_sorts_last_descending(self):
        assert names(ListSource(ROWS).order_by("size", descending=True)) == ["b", "c", "d", "a"]

    def test_then_by(self):
        source = ListSource(ROWS).order_by("size", descending=True).then_by("name", descending=True)
        assert names(source) == ["c", "b", "d", "a"]

    def test_then_by_needs_order_by(self):
        with pytest.raises(GridConfigError):
            ListSource(ROWS).then_by("name")
        with pytest.raises(GridConfigError):
            ListSource(ROWS).order_by("name").skip(1).then_by("size")

    @pytest.mark.parametrize("key", [42, None, object()])
    def test_bad_keys(self, key):
        with pytest.raises(GridConfigError):
            ListSource(ROWS).order_by(key)

    def test_bad_predicate(self):
        with pytest.raises(GridConfigError):
            ListSource(ROWS).where("size > 1")


class TestSlicing:
    def test_skip_take(self):
        source = ListSource(ROWS).order_by("name").skip(1).take(2)
        assert names(source) == ["b", "c"]

    def test_negative_bounds_clamp_to_zero(self):
        assert names(ListSource(ROWS).skip(-3).take(1)) == ["b"]
        assert ListSource(ROWS).take(-1).to_list() == []

    @pytest.mark.asyncio
    async def test_async_twins(self):
        source = ListSource(ROWS).order_by("name").take(3)
        assert await source.count_async() == 3
        assert await source.to_list_async() == source.to_list()


def test_field_getter_reads_mappings_and_attributes():
    class Row:
        title = "x"

    assert field_getter("title")(Row()) == "x"
    assert field_getter("title")({"title": "y"}) == "y"
