"""Shared schema types used across both requests and responses."""

from __future__ import annotations

from fastapi import Query


def listing_params(
    q: str | None = Query(default=None, description='Case-insensitive title substring.'),
    genre: str | None = Query(default=None, description='Only movies tagged with this genre.'),
    category: str | None = Query(default=None, description='Alias for genre.'),
    sort: str | None = Query(
        default=None, description='title, releaseDate, rating or votes. Unknown keys sort by title.'
    ),
    order: str | None = Query(
        default=None, description='"desc" for descending; anything else is ascending.'
    ),
    page: str | None = Query(
        default=None, description='1-based page number. Invalid values mean page 1.'
    ),
) -> dict[str, str | None]:
    """Dependency that collects the raw catalog listing parameters.

    Every parameter is taken as an untyped string so that malformed values
    are normalized by the listing builder instead of failing validation.
    """
    return {
        'q': q,
        'genre': genre,
        'category': category,
        'sort': sort,
        'order': order,
        'page': page,
    }
