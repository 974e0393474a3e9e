"""Canonicalization of raw catalog query parameters.

Every raw value is normalized to a safe default rather than rejected, so a
malformed query string degrades to the first page, default sort and an
unfiltered listing instead of an error.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType


class SortDirection(StrEnum):
    asc = 'asc'
    desc = 'desc'


@dataclass(frozen=True)
class SortWhitelist:
    """Public sort keys mapped to the internal fields they sort by."""

    fields: Mapping[str, str]
    default_key: str

    def __post_init__(self) -> None:
        if not self.fields:
            msg = 'Sort whitelist must contain at least one key'
            raise ValueError(msg)
        if self.default_key not in self.fields:
            msg = f'Default sort key {self.default_key!r} is not in the whitelist'
            raise ValueError(msg)
        object.__setattr__(self, 'fields', MappingProxyType(dict(self.fields)))

    @property
    def default_field(self) -> str:
        return self.fields[self.default_key]


MOVIE_SORT_WHITELIST = SortWhitelist(
    fields={
        'title': 'title',
        'releaseDate': 'release_date',
        'rating': 'rating',
        'votes': 'votes',
    },
    default_key='title',
)


@dataclass(frozen=True)
class QueryDescriptor:
    """Sanitized listing query, safe to hand to the data store."""

    search_text: str
    category: str | None
    sort_key: str
    sort_field: str
    sort_direction: SortDirection
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


# ── Parsing ──────────────────────────────────────────────────────────────────

_LEADING_INT = re.compile(r'\s*([+-]?)([0-9]+)')

MAX_PAGE = sys.maxsize


def max_page_for(page_size: int) -> int:
    """Largest page whose row offset still fits a signed 64-bit integer."""
    return max(1, MAX_PAGE // max(page_size, 1))


def parse_sort_key(raw: str | None, whitelist: SortWhitelist) -> str:
    """Return ``raw`` if it is a whitelisted key, else the default key."""
    if raw is not None and raw in whitelist.fields:
        return raw
    return whitelist.default_key


def parse_sort_direction(raw: str | None) -> SortDirection:
    """Only the exact string ``'desc'`` selects descending order."""
    if raw == SortDirection.desc.value:
        return SortDirection.desc
    return SortDirection.asc


def parse_page(raw: str | None, max_page: int = MAX_PAGE) -> int:
    """Parse a 1-based page number; anything unparseable or below 1 becomes 1.

    Leading-integer semantics: ``'3abc'`` and ``'3.7'`` both parse as 3.
    Only ASCII digits count, and values above ``max_page`` are capped to it.
    """
    if raw is None:
        return 1
    match = _LEADING_INT.match(raw)
    if not match:
        return 1
    sign, digits = match.groups()
    digits = digits.lstrip('0')
    if sign == '-' or not digits:
        return 1
    # Compare lengths first so huge digit runs never reach int().
    if len(digits) > len(str(max_page)):
        return max_page
    return min(max_page, int(digits))


def _first_non_empty(*values: str | None) -> str | None:
    for value in values:
        if value:
            return value
    return None


# ── Builder ──────────────────────────────────────────────────────────────────


def build_query_descriptor(
    raw_params: Mapping[str, str | None],
    *,
    whitelist: SortWhitelist,
    page_size: int,
) -> QueryDescriptor:
    """Build the canonical descriptor for a catalog listing request.

    Recognized parameters are ``q``, ``genre`` (or its alias ``category``),
    ``sort``, ``order`` and ``page``. Unknown parameters are ignored.
    """
    sort_key = parse_sort_key(raw_params.get('sort'), whitelist)
    return QueryDescriptor(
        search_text=raw_params.get('q') or '',
        category=_first_non_empty(raw_params.get('genre'), raw_params.get('category')),
        sort_key=sort_key,
        sort_field=whitelist.fields[sort_key],
        sort_direction=parse_sort_direction(raw_params.get('order')),
        page=parse_page(raw_params.get('page'), max_page_for(page_size)),
        page_size=page_size,
    )


def descriptor_to_params(descriptor: QueryDescriptor) -> dict[str, str]:
    """Serialize a descriptor back into URL query parameters."""
    params: dict[str, str] = {}
    if descriptor.search_text:
        params['q'] = descriptor.search_text
    if descriptor.category:
        params['genre'] = descriptor.category
    params['sort'] = descriptor.sort_key
    params['order'] = descriptor.sort_direction.value
    params['page'] = str(descriptor.page)
    return params
