"""CSS class/style value types for grid elements."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CssBuilder:
    """
    An immutable bag of CSS classes and inline styles.

    add_class / add_style return a new builder, so a shared instance
    can never be changed underneath a render.
    """

    classes: tuple[str, ...] = ()
    styles: tuple[str, ...] = ()

    def add_class(self, *names: str) -> CssBuilder:
        new = [n for name in names for n in name.split() if n not in self.classes]
        return CssBuilder(classes=self.classes + tuple(dict.fromkeys(new)), styles=self.styles)

    def add_style(self, *rules: str) -> CssBuilder:
        new = [r.strip().rstrip(";").strip() for r in rules]
        return CssBuilder(classes=self.classes, styles=self.styles + tuple(r for r in new if r))

    def merge(self, other: CssBuilder | None) -> CssBuilder:
        """Cascade `other` on top of this builder."""
        if other is None:
            return self
        return self.add_class(*other.classes).add_style(*other.styles)

    @property
    def class_attr(self) -> str:
        return " ".join(self.classes)

    @property
    def style_attr(self) -> str:
        return "; ".join(self.styles)

    def __bool__(self) -> bool:
        return bool(self.classes or self.styles)

    def __str__(self) -> str:
        parts = []
        if self.classes:
            parts.append(f'class="{self.class_attr}"')
        if self.styles:
            parts.append(f'style="{self.style_attr}"')
        return " ".join(parts)


def css(classes: str = "", style: str = "") -> CssBuilder:
    """Shorthand: css("table table-sm", "width: 100%")."""
    builder = CssBuilder()
    if classes:
        builder = builder.add_class(classes)
    if style:
        builder = builder.add_style(*style.split(";"))
    return builder


@dataclass(frozen=True)
class GridCss:
    """Cascading CSS for the table, its header row, and its body rows."""

    table: CssBuilder = field(default_factory=CssBuilder)
    header: CssBuilder = field(default_factory=CssBuilder)
    row: CssBuilder = field(default_factory=CssBuilder)
