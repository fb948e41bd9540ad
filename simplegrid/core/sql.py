"""
SimpleGrid Core — SQLAlchemy data source

Wraps a SQLAlchemy `Select` so filtering, ordering and paging compile into
the statement and run in the database. Blocking renders use a `Session`;
async renders use an `AsyncSession`.

Keys are SQL expressions (e.g. `Movie.title`) or field names resolved
against `entity`. Python callables cannot be pushed into SQL and are
rejected as configuration errors.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from simplegrid.core.types import GridConfigError


class SelectSource:
    """Deferred query over a SQLAlchemy `Select` statement."""

    __slots__ = ("session", "statement", "entity", "_ordered", "_paged")

    def __init__(
        self,
        session: Session | AsyncSession,
        statement: Select,
        entity: Any = None,
        _ordered: bool = False,
        _paged: bool = False,
    ) -> None:
        self.session = session
        self.statement = statement
        self.entity = entity
        self._ordered = _ordered
        self._paged = _paged

    def __repr__(self) -> str:
        return f"SelectSource({self.statement!s})"

    def _with(self, statement: Select, ordered: bool | None = None, paged: bool | None = None) -> SelectSource:
        return SelectSource(
            self.session,
            statement,
            self.entity,
            self._ordered if ordered is None else ordered,
            self._paged if paged is None else paged,
        )

    # -- composition --------------------------------------------------------

    def where(self, predicate: Any) -> SelectSource:
        if not hasattr(predicate, "__clause_element__") and callable(predicate):
            raise GridConfigError("SelectSource.where needs a SQL expression, not a Python callable")
        return self._with(self.statement.where(predicate))

    def order_by(self, key: Any, descending: bool = False) -> SelectSource:
        column = self._resolve_key(key)
        ordering = column.desc() if descending else column.asc()
        return self._with(self.statement.order_by(None).order_by(ordering), ordered=True)

    def then_by(self, key: Any, descending: bool = False) -> SelectSource:
        if not self._ordered or self._paged:
            raise GridConfigError("then_by requires a preceding order_by")
        column = self._resolve_key(key)
        ordering = column.desc() if descending else column.asc()
        return self._with(self.statement.order_by(ordering))

    def skip(self, count: int) -> SelectSource:
        return self._with(self.statement.offset(max(0, count)), paged=True)

    def take(self, count: int) -> SelectSource:
        return self._with(self.statement.limit(max(0, count)), paged=True)

    # -- materialization ----------------------------------------------------

    def _count_statement(self) -> Select:
        return select(func.count()).select_from(self.statement.order_by(None).subquery())

    def count(self) -> int:
        return self._sync_session().scalar(self._count_statement()) or 0

    def to_list(self) -> list[Any]:
        return list(self._sync_session().scalars(self.statement).all())

    async def count_async(self) -> int:
        return (await self._async_session().scalar(self._count_statement())) or 0

    async def to_list_async(self) -> list[Any]:
        result = await self._async_session().scalars(self.statement)
        return list(result.all())

    # -- helpers ------------------------------------------------------------

    def _resolve_key(self, key: Any) -> Any:
        if isinstance(key, str):
            if self.entity is not None:
                column = getattr(self.entity, key, None)
                if column is None:
                    raise GridConfigError(f"{self.entity.__name__} has no column {key!r}")
                return column
            try:
                return self.statement.selected_columns[key]
            except KeyError:
                raise GridConfigError(f"Statement selects no column {key!r}") from None
        if hasattr(key, "__clause_element__") or hasattr(key, "asc"):
            return key
        raise GridConfigError(f"SelectSource cannot sort by {key!r}: expected a column or field name")

    def _sync_session(self) -> Session:
        if isinstance(self.session, AsyncSession):
            raise GridConfigError("SelectSource bound to an AsyncSession; use the async render path")
        return self.session

    def _async_session(self) -> AsyncSession:
        if not isinstance(self.session, AsyncSession):
            raise GridConfigError("SelectSource bound to a blocking Session; use the blocking render path")
        return self.session
