"""Grid API models — the JSON shape of a rendered GridViewModel."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from simplegrid.core.types import GridViewModel


class ColumnResponse(BaseModel):
    index: int
    header: str
    header_markup: bool = False
    sortable: bool = False
    sort_url: str | None = None
    current_sort: str | None = None  # "ascending" | "descending" on the active column


class RowResponse(BaseModel):
    cells: list[str]
    css_class: str | None = None
    css_style: str | None = None
    item: dict[str, Any] = Field(default_factory=dict)


class RowsOptionResponse(BaseModel):
    rows: int
    url: str
    selected: bool


class PagerResponse(BaseModel):
    total_records: int
    rows_per_page: int
    current_page: int
    page_count: int
    display_total: bool
    prev_url: str | None = None
    next_url: str | None = None
    rows_per_page_options: list[RowsOptionResponse] = Field(default_factory=list)


class SearchOptionResponse(BaseModel):
    name: str
    value: int
    selected: bool


class SearchResponse(BaseModel):
    search_index: int
    query: str
    reset_url: str
    options: list[SearchOptionResponse]


class GridResponse(BaseModel):
    """What GET /api/grids/{name} returns."""

    columns: list[ColumnResponse]
    rows: list[RowResponse]
    pager: PagerResponse | None = None
    search: SearchResponse | None = None
    no_records_message: str

    @classmethod
    def from_view_model(cls, vm: GridViewModel, item_dump=None) -> GridResponse:
        """
        Convert a view model to the public API response.

        item_dump turns a row item into a JSON-safe dict; rows carry only
        their display cells when it is omitted.
        """
        rows = []
        for row in vm.rows:
            row_css = vm.css.row.merge(row.css)
            rows.append(
                RowResponse(
                    cells=[cell.value for cell in row.cells],
                    css_class=row_css.class_attr or None,
                    css_style=row_css.style_attr or None,
                    item=item_dump(row.item) if item_dump else {},
                )
            )

        pager = None
        if vm.pager is not None:
            pager = PagerResponse(
                total_records=vm.pager.total_records,
                rows_per_page=vm.pager.rows_per_page,
                current_page=vm.pager.current_page,
                page_count=vm.pager.page_count,
                display_total=vm.pager.display_total,
                prev_url=vm.pager.prev_url,
                next_url=vm.pager.next_url,
                rows_per_page_options=[
                    RowsOptionResponse(rows=o.rows, url=o.url, selected=o.selected)
                    for o in vm.pager.rows_per_page_options
                ],
            )

        search = None
        if vm.search is not None:
            search = SearchResponse(
                search_index=vm.search.search_index,
                query=vm.search.query,
                reset_url=vm.search.reset_url,
                options=[SearchOptionResponse(name=o.name, value=o.value, selected=o.selected) for o in vm.search.options],
            )

        return cls(
            columns=[
                ColumnResponse(
                    index=c.index,
                    header=c.header,
                    header_markup=c.header_markup,
                    sortable=c.sortable,
                    sort_url=c.sort_url,
                    current_sort=c.current_sort.value if c.current_sort else None,
                )
                for c in vm.columns
            ],
            rows=rows,
            pager=pager,
            search=search,
            no_records_message=vm.options.no_records_message,
        )
