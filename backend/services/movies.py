"""Sample movie catalog and its grid definition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from backend.config import settings
from simplegrid.core import CssBuilder, FieldDescriptor, GridBuilder, GridConfig, ListSource, css


@dataclass(frozen=True)
class Movie:
    id: int
    name: str
    director: str
    genre: str
    released: int
    rating: float
    internal_notes: str = ""

    __grid_fields__: ClassVar[tuple[FieldDescriptor, ...]] = (
        FieldDescriptor("id", auto_generate=False),
        FieldDescriptor("name", display_name="Movie Name", order=1),
        FieldDescriptor("director", order=3),
        FieldDescriptor("genre", order=3),
        FieldDescriptor("released", display_name="Year", order=2),
        FieldDescriptor("rating", order=4),
        FieldDescriptor("internal_notes", auto_generate=False),
    )


MOVIES: tuple[Movie, ...] = (
    Movie(1, "The Godfather", "Francis Ford Coppola", "Crime", 1972, 9.2),
    Movie(2, "The Shawshank Redemption", "Frank Darabont", "Drama", 1994, 9.3),
    Movie(3, "Schindler's List", "Steven Spielberg", "Drama", 1993, 9.0),
    Movie(4, "Raging Bull", "Martin Scorsese", "Drama", 1980, 8.1),
    Movie(5, "Casablanca", "Michael Curtiz", "Romance", 1942, 8.5),
    Movie(6, "Citizen Kane", "Orson Welles", "Drama", 1941, 8.3),
    Movie(7, "Gone with the Wind", "Victor Fleming", "Romance", 1939, 8.2),
    Movie(8, "The Wizard of Oz", "Victor Fleming", "Family", 1939, 8.1),
    Movie(9, "One Flew Over the Cuckoo's Nest", "Milos Forman", "Drama", 1975, 8.7),
    Movie(10, "Lawrence of Arabia", "David Lean", "Adventure", 1962, 8.3),
    Movie(11, "Vertigo", "Alfred Hitchcock", "Mystery", 1958, 8.3),
    Movie(12, "Psycho", "Alfred Hitchcock", "Horror", 1960, 8.5),
    Movie(13, "The Godfather Part II", "Francis Ford Coppola", "Crime", 1974, 9.0),
    Movie(14, "On the Waterfront", "Elia Kazan", "Crime", 1954, 8.1),
    Movie(15, "Sunset Boulevard", "Billy Wilder", "Drama", 1950, 8.4),
    Movie(16, "Forrest Gump", "Robert Zemeckis", "Drama", 1994, 8.8),
    Movie(17, "The Sound of Music", "Robert Wise", "Family", 1965, 8.1),
    Movie(18, "12 Angry Men", "Sidney Lumet", "Drama", 1957, 9.0),
    Movie(19, "West Side Story", "Robert Wise", "Romance", 1961, 7.5),
    Movie(20, "Star Wars", "George Lucas", "Adventure", 1977, 8.6),
    Movie(21, "2001: A Space Odyssey", "Stanley Kubrick", "Adventure", 1968, 8.3),
    Movie(22, "E.T. the Extra-Terrestrial", "Steven Spielberg", "Family", 1982, 7.9),
    Movie(23, "The Silence of the Lambs", "Jonathan Demme", "Thriller", 1991, 8.6),
    Movie(24, "Chinatown", "Roman Polanski", "Mystery", 1974, 8.1),
    Movie(25, "Jaws", "Steven Spielberg", "Thriller", 1975, 8.1),
)


def movie_source() -> ListSource:
    return ListSource(MOVIES)


def _contains(field: str):
    def search(source, query: str):
        needle = query.lower()
        return source.where(lambda movie: needle in getattr(movie, field).lower())

    return search


def movie_grid() -> GridConfig:
    """The catalog grid. Built once at import; GridConfig is safe to share."""
    return (
        GridBuilder(Movie)
        .add_columns_from_model()
        .order_columns()
        .set_sortable()
        .default_sort_by("name")
        .add_search("Name", _contains("name"))
        .add_search("Director", _contains("director"))
        .add_search("Genre", _contains("genre"))
        .add_row_modifier(lambda m: m.rating >= 9.0, css("sg-classic"))
        .add_row_modifier(lambda m: m.released < 1950, css("sg-vintage", "font-style: italic"))
        .add_css(table=css("sg-table"), header=CssBuilder().add_class("sg-head"))
        .add_pager(
            rows_per_page=settings.GRID_ROWS_PER_PAGE,
            rows_per_page_options=settings.GRID_ROWS_PER_PAGE_OPTIONS,
        )
        .set_options(
            max_rows=settings.GRID_MAX_ROWS,
            no_records_message=settings.GRID_NO_RECORDS_MESSAGE,
        )
        .build()
    )


MOVIE_GRID: GridConfig = movie_grid()

__all__ = ["Movie", "MOVIES", "MOVIE_GRID", "movie_grid", "movie_source"]
