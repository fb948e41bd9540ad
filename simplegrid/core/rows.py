"""SimpleGrid Core — Row Decorator. First matching rule wins; rules never merge."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from simplegrid.core.css import CssBuilder
from simplegrid.core.types import RowDecorationRule


def decorate_row(rules: Sequence[RowDecorationRule], row: Any) -> CssBuilder | None:
    for rule in rules:
        if rule.predicate(row):
            return rule.css
    return None
