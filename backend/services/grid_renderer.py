"""
Grid renderer — GridViewModel → HTML via a Mustache template.

Pure function: same view model in, same HTML out. The core never sees
markup; everything it hands over is flattened into a plain context dict
here, and chevron escapes every {{value}}. Only headers/cells flagged as
markup are emitted raw via {{{value}}}.
"""

from __future__ import annotations

from typing import Any

import chevron

from simplegrid.core.css import CssBuilder
from simplegrid.core.types import GridViewModel, SortOrder

GRID_TEMPLATE = """\
<div class="sg-grid">
{{#search}}
  <form class="sg-search" method="get" action="{{reset_url}}">
    <select name="searchndx">
    {{#options}}
      <option value="{{value}}"{{#selected}} selected{{/selected}}>{{name}}</option>
    {{/options}}
    </select>
    <input type="search" name="searchqry" value="{{query}}">
    <button type="submit">Search</button>
    <a class="sg-reset" href="{{reset_url}}">Reset</a>
  </form>
{{/search}}
  <table{{#table_class}} class="{{table_class}}"{{/table_class}}{{#table_style}} style="{{table_style}}"{{/table_style}}>
{{#show_headers}}
    <thead>
      <tr{{#header_class}} class="{{header_class}}"{{/header_class}}{{#header_style}} style="{{header_style}}"{{/header_style}}>
      {{#columns}}
        <th{{#sort_class}} class="{{sort_class}}"{{/sort_class}}>{{#sort_url}}<a href="{{sort_url}}">{{/sort_url}}{{#header_markup}}{{{header}}}{{/header_markup}}{{^header_markup}}{{header}}{{/header_markup}}{{#sort_url}}</a>{{/sort_url}}</th>
      {{/columns}}
      </tr>
    </thead>
{{/show_headers}}
    <tbody>
    {{#rows}}
      <tr{{#row_class}} class="{{row_class}}"{{/row_class}}{{#row_style}} style="{{row_style}}"{{/row_style}}>
      {{#cells}}
        <td>{{#markup}}{{{value}}}{{/markup}}{{^markup}}{{value}}{{/markup}}</td>
      {{/cells}}
      </tr>
    {{/rows}}
    {{^rows}}
      <tr class="sg-empty"><td colspan="{{column_count}}">{{no_records_message}}</td></tr>
    {{/rows}}
    </tbody>
  </table>
{{#pager}}
  <nav class="sg-pager">
    {{#prev_url}}<a class="sg-prev" href="{{prev_url}}">&laquo; Prev</a>{{/prev_url}}
    <span class="sg-page">Page {{current_page}} of {{page_count}}</span>
    {{#next_url}}<a class="sg-next" href="{{next_url}}">Next &raquo;</a>{{/next_url}}
    {{#display_total}}<span class="sg-total">{{total_records}} records</span>{{/display_total}}
    {{#rows_per_page_options}}
    <a class="sg-rows{{#selected}} sg-selected{{/selected}}" href="{{url}}">{{rows}}</a>
    {{/rows_per_page_options}}
  </nav>
{{/pager}}
</div>
"""

_SORT_CLASSES = {
    SortOrder.ASCENDING: "sg-sorted sg-asc",
    SortOrder.DESCENDING: "sg-sorted sg-desc",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_grid(vm: GridViewModel) -> str:
    """
    Render a grid view model to an HTML fragment.
    Uses the grid's template override when one is configured.
    """
    template = vm.options.template or GRID_TEMPLATE
    return chevron.render(template, grid_context(vm))


def grid_context(vm: GridViewModel) -> dict[str, Any]:
    """Flatten a view model into a Mustache context of plain values."""
    return {
        "show_headers": vm.options.show_headers,
        "no_records_message": vm.options.no_records_message,
        "column_count": max(1, len(vm.columns)),
        **_css_context("table", vm.css.table),
        **_css_context("header", vm.css.header),
        "columns": [
            {
                "index": col.index,
                "header": col.header,
                "header_markup": col.header_markup,
                "sort_url": col.sort_url,
                "sort_class": _SORT_CLASSES.get(col.current_sort, ""),
            }
            for col in vm.columns
        ],
        "rows": [
            {
                **_css_context("row", vm.css.row.merge(row.css)),
                "cells": [{"value": cell.value, "markup": cell.markup} for cell in row.cells],
            }
            for row in vm.rows
        ],
        "pager": _pager_context(vm),
        "search": _search_context(vm),
    }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _css_context(prefix: str, builder: CssBuilder) -> dict[str, str]:
    return {f"{prefix}_class": builder.class_attr, f"{prefix}_style": builder.style_attr}


def _pager_context(vm: GridViewModel) -> dict[str, Any] | None:
    pager = vm.pager
    if pager is None:
        return None
    return {
        "current_page": pager.current_page,
        "page_count": pager.page_count,
        "total_records": pager.total_records,
        "display_total": pager.display_total,
        "prev_url": pager.prev_url,
        "next_url": pager.next_url,
        "rows_per_page_options": [
            {"rows": opt.rows, "url": opt.url, "selected": opt.selected} for opt in pager.rows_per_page_options
        ],
    }


def _search_context(vm: GridViewModel) -> dict[str, Any] | None:
    search = vm.search
    if search is None:
        return None
    return {
        "reset_url": search.reset_url,
        "query": search.query,
        "options": [{"name": opt.name, "value": opt.value, "selected": opt.selected} for opt in search.options],
    }
