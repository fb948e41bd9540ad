"""
Pydantic models for SimpleGrid's HTTP API.

All response shapes defined here. No imports from routes.
"""

from backend.models.grid import (
    ColumnResponse,
    GridResponse,
    PagerResponse,
    RowResponse,
    SearchResponse,
)

__all__ = [
    "ColumnResponse",
    "GridResponse",
    "PagerResponse",
    "RowResponse",
    "SearchResponse",
]
