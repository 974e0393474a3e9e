"""Windowed page-index computation for the catalog pagination control."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Final
from urllib.parse import urlencode


@dataclass(frozen=True)
class PageNumber:
    number: int
    is_current: bool = False


class PageGap(StrEnum):
    """Marker for a run of hidden page numbers."""

    ellipsis = 'ellipsis'


ELLIPSIS: Final = PageGap.ellipsis

PageToken = PageNumber | PageGap


@dataclass(frozen=True)
class PaginationPlan:
    total_pages: int
    items: tuple[PageToken, ...]
    previous_target: int
    next_target: int
    previous_disabled: bool
    next_disabled: bool


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp ``page`` into ``[1, max(total_pages, 1)]``."""
    return min(max(page, 1), max(total_pages, 1))


def _gap(start: int, end: int, min_ellipsis_gap: int) -> list[PageToken]:
    """Tokens for the hidden pages strictly between ``start`` and ``end``."""
    hidden = range(start + 1, end)
    if not hidden:
        return []
    if len(hidden) >= min_ellipsis_gap:
        return [ELLIPSIS]
    return [PageNumber(n) for n in hidden]


def compute_page_window(
    total_pages: int,
    current_page: int,
    sibling_count: int,
    *,
    min_ellipsis_gap: int = 1,
) -> tuple[PageToken, ...]:
    """Return the page tokens to render, anchors and ellipses included.

    The first and last pages are always shown. Pages within ``sibling_count``
    of the current page are shown. A hidden run of at least
    ``min_ellipsis_gap`` pages collapses to a single ellipsis; shorter runs
    are listed page by page.
    """
    total_pages = max(total_pages, 0)
    sibling_count = max(sibling_count, 0)
    min_ellipsis_gap = max(min_ellipsis_gap, 1)
    if total_pages <= 1:
        return ()

    center = clamp_page(current_page, total_pages)
    window_start = max(center - sibling_count, 1)
    window_end = min(center + sibling_count, total_pages)

    numbers: list[PageToken] = []
    if window_start > 1:
        numbers.append(PageNumber(1))
        numbers.extend(_gap(1, window_start, min_ellipsis_gap))
    numbers.extend(PageNumber(n) for n in range(window_start, window_end + 1))
    if window_end < total_pages:
        numbers.extend(_gap(window_end, total_pages, min_ellipsis_gap))
        numbers.append(PageNumber(total_pages))

    return tuple(_mark_current(numbers, current_page))


def _mark_current(tokens: Iterable[PageToken], current_page: int) -> Iterable[PageToken]:
    for token in tokens:
        if isinstance(token, PageNumber) and token.number == current_page:
            yield PageNumber(token.number, is_current=True)
        else:
            yield token


def total_pages_for(total_count: int, page_size: int) -> int:
    if total_count <= 0 or page_size <= 0:
        return 0
    return math.ceil(total_count / page_size)


def build_pagination_plan(
    total_count: int,
    page_size: int,
    current_page: int,
    sibling_count: int,
    *,
    min_ellipsis_gap: int = 1,
) -> PaginationPlan:
    """Compute page tokens and previous/next targets for a listing page."""
    total_pages = total_pages_for(total_count, page_size)
    return PaginationPlan(
        total_pages=total_pages,
        items=compute_page_window(
            total_pages, current_page, sibling_count, min_ellipsis_gap=min_ellipsis_gap
        ),
        previous_target=clamp_page(current_page - 1, total_pages),
        next_target=clamp_page(current_page + 1, total_pages),
        previous_disabled=current_page == 1,
        next_disabled=current_page == total_pages,
    )


def page_href(params: Iterable[tuple[str, str | None]], page: int) -> str:
    """Build a relative link to ``page``, keeping every other non-empty parameter."""
    kept = [(key, value) for key, value in params if value and key != 'page']
    kept.append(('page', str(page)))
    return f'?{urlencode(kept)}'
