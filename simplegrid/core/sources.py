"""
SimpleGrid Core — Data Sources

The grid never touches storage directly. It talks to a deferred,
composable query: every operation returns a new source and nothing runs
until count() or to_list() (or their async twins) is called.

ListSource is the in-memory implementation. It records operations and
replays them on materialization, sorting with chained stable passes.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from simplegrid.core.types import GridConfigError


@runtime_checkable
class DataSource(Protocol):
    """What the grid needs from a query provider."""

    def where(self, predicate: Any) -> DataSource: ...

    def order_by(self, key: Any, descending: bool = False) -> DataSource: ...

    def then_by(self, key: Any, descending: bool = False) -> DataSource: ...

    def skip(self, count: int) -> DataSource: ...

    def take(self, count: int) -> DataSource: ...

    def count(self) -> int: ...

    def to_list(self) -> list[Any]: ...

    async def count_async(self) -> int: ...

    async def to_list_async(self) -> list[Any]: ...


def field_getter(name: str) -> Callable[[Any], Any]:
    """Read `name` from a row: mapping key first, attribute otherwise."""
    attr = operator.attrgetter(name)

    def get(row: Any) -> Any:
        if isinstance(row, Mapping):
            return row.get(name)
        return attr(row)

    get.__name__ = f"get_{name.replace('.', '_')}"
    return get


# ---------------------------------------------------------------------------
# In-memory source
# ---------------------------------------------------------------------------

_WHERE = "where"
_ORDER = "order"
_SKIP = "skip"
_TAKE = "take"


class ListSource:
    """
    Deferred query over an in-memory iterable.

    Keys and predicates are plain callables; string keys are field names.
    """

    __slots__ = ("_items", "_ops")

    def __init__(self, items: Iterable[Any], _ops: tuple[tuple[str, Any], ...] = ()) -> None:
        self._items = items if isinstance(items, Sequence) else tuple(items)
        self._ops = _ops

    def __repr__(self) -> str:
        return f"ListSource(ops={[op for op, _ in self._ops]!r})"

    def _with(self, op: str, arg: Any) -> ListSource:
        return ListSource(self._items, self._ops + ((op, arg),))

    # -- composition --------------------------------------------------------

    def where(self, predicate: Callable[[Any], bool]) -> ListSource:
        if not callable(predicate):
            raise GridConfigError(f"ListSource.where needs a callable predicate, got {predicate!r}")
        return self._with(_WHERE, predicate)

    def order_by(self, key: Any, descending: bool = False) -> ListSource:
        return self._with(_ORDER, ((_resolve_key(key), descending),))

    def then_by(self, key: Any, descending: bool = False) -> ListSource:
        if not self._ops or self._ops[-1][0] != _ORDER:
            raise GridConfigError("then_by requires a preceding order_by")
        keys = self._ops[-1][1] + ((_resolve_key(key), descending),)
        return ListSource(self._items, self._ops[:-1] + ((_ORDER, keys),))

    def skip(self, count: int) -> ListSource:
        return self._with(_SKIP, max(0, count))

    def take(self, count: int) -> ListSource:
        return self._with(_TAKE, max(0, count))

    # -- materialization ----------------------------------------------------

    def count(self) -> int:
        return len(self.to_list())

    def to_list(self) -> list[Any]:
        rows = list(self._items)
        for op, arg in self._ops:
            if op == _WHERE:
                rows = [row for row in rows if arg(row)]
            elif op == _ORDER:
                rows = _sort_rows(rows, arg)
            elif op == _SKIP:
                rows = rows[arg:]
            elif op == _TAKE:
                rows = rows[:arg]
        return rows

    async def count_async(self) -> int:
        return self.count()

    async def to_list_async(self) -> list[Any]:
        return self.to_list()


def _resolve_key(key: Any) -> Callable[[Any], Any]:
    if isinstance(key, str):
        return field_getter(key)
    if callable(key) and not hasattr(key, "__clause_element__"):
        return key
    raise GridConfigError(f"ListSource cannot sort by {key!r}: expected a field name or callable")


def _none_first(key: Callable[[Any], Any]) -> Callable[[Any], tuple[bool, Any]]:
    def wrapped(row: Any) -> tuple[bool, Any]:
        value = key(row)
        return (value is not None, value)

    return wrapped


def _sort_rows(rows: list[Any], keys: tuple[tuple[Callable[[Any], Any], bool], ...]) -> list[Any]:
    # Lowest precedence first; each pass is stable so earlier keys win ties.
    # None sorts before any value ascending, after any value descending.
    result = list(rows)
    for key, descending in reversed(keys):
        result.sort(key=_none_first(key), reverse=descending)
    return result
