from __future__ import annotations

import pytest

from moviestore.listing import (
    MAX_PAGE,
    MOVIE_SORT_WHITELIST,
    QueryDescriptor,
    SortDirection,
    SortWhitelist,
    build_query_descriptor,
    descriptor_to_params,
    max_page_for,
    parse_page,
    parse_sort_direction,
    parse_sort_key,
)


def _build(**raw: str | None) -> QueryDescriptor:
    return build_query_descriptor(raw, whitelist=MOVIE_SORT_WHITELIST, page_size=24)


# ── Defaults ──────────────────────────────────────────────────────────────────


def test_empty_params_use_defaults():
    descriptor = _build()
    assert descriptor == QueryDescriptor(
        search_text='',
        category=None,
        sort_key='title',
        sort_field='title',
        sort_direction=SortDirection.asc,
        page=1,
        page_size=24,
    )
    assert descriptor.offset == 0
    assert descriptor.limit == 24


def test_offset_is_derived_from_page():
    descriptor = _build(page='3')
    assert descriptor.offset == 48
    assert descriptor.limit == 24


def test_search_text_is_used_verbatim():
    assert _build(q='  The Matrix ').search_text == '  The Matrix '


def test_unknown_params_are_ignored():
    assert _build(foo='bar') == _build()


# ── Genre / category ──────────────────────────────────────────────────────────


def test_genre_filter_applied_when_non_empty():
    assert _build(genre='Horror').category == 'Horror'


def test_empty_genre_means_no_filter():
    assert _build(genre='').category is None


def test_category_is_an_alias_for_genre():
    assert _build(category='Comedy').category == 'Comedy'


def test_genre_wins_over_category():
    assert _build(genre='Horror', category='Comedy').category == 'Horror'


def test_empty_genre_falls_back_to_category():
    assert _build(genre='', category='Comedy').category == 'Comedy'


# ── Sort ──────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ('sort', 'field'),
    [
        ('title', 'title'),
        ('releaseDate', 'release_date'),
        ('rating', 'rating'),
        ('votes', 'votes'),
    ],
)
def test_whitelisted_sort_keys_map_to_fields(sort: str, field: str):
    descriptor = _build(sort=sort)
    assert descriptor.sort_key == sort
    assert descriptor.sort_field == field


@pytest.mark.parametrize(
    'sort', [None, '', 'price', 'release_date', 'TITLE', 'title; DROP TABLE movie']
)
def test_unknown_sort_keys_fall_back_to_default(sort: str | None):
    descriptor = _build(sort=sort)
    assert descriptor.sort_key == 'title'
    assert descriptor.sort_field == 'title'


def test_parse_sort_key_uses_given_whitelist():
    whitelist = SortWhitelist(fields={'newest': 'created_at', 'name': 'name'}, default_key='name')
    assert parse_sort_key('newest', whitelist) == 'newest'
    assert parse_sort_key('title', whitelist) == 'name'


def test_builder_uses_alternate_whitelist():
    whitelist = SortWhitelist(fields={'newest': 'created_at', 'name': 'name'}, default_key='newest')
    descriptor = build_query_descriptor({'sort': 'rating'}, whitelist=whitelist, page_size=10)
    assert descriptor.sort_key == 'newest'
    assert descriptor.sort_field == 'created_at'
    assert descriptor.page_size == 10


def test_whitelist_rejects_unknown_default():
    with pytest.raises(ValueError, match='not in the whitelist'):
        SortWhitelist(fields={'title': 'title'}, default_key='rating')


def test_whitelist_rejects_empty_mapping():
    with pytest.raises(ValueError, match='at least one key'):
        SortWhitelist(fields={}, default_key='title')


def test_whitelist_is_not_mutable_through_source_dict():
    fields = {'title': 'title'}
    whitelist = SortWhitelist(fields=fields, default_key='title')
    fields['evil'] = 'password_hash'
    assert 'evil' not in whitelist.fields


# ── Order ─────────────────────────────────────────────────────────────────────


def test_exact_desc_is_descending():
    assert parse_sort_direction('desc') is SortDirection.desc
    assert _build(order='desc').sort_direction is SortDirection.desc


@pytest.mark.parametrize('order', [None, '', 'asc', 'DESC', 'Desc', ' desc', 'desc ', 'descending'])
def test_anything_but_exact_desc_is_ascending(order: str | None):
    assert parse_sort_direction(order) is SortDirection.asc


# ── Page ──────────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ('raw', 'expected'),
    [
        (None, 1),
        ('', 1),
        ('1', 1),
        ('7', 7),
        (' 2', 2),
        ('3abc', 3),
        ('2.9', 2),
        ('+4', 4),
        ('0', 1),
        ('-5', 1),
        ('abc', 1),
        ('NaN', 1),
        ('007', 7),
        ('-0', 1),
        ('\u0663', 1),
        ('\uff15', 1),
    ],
)
def test_parse_page(raw: str | None, expected: int):
    assert parse_page(raw) == expected


def test_non_numeric_page_matches_zero_page():
    assert _build(page='not-a-number') == _build(page='0')


def test_parse_page_caps_at_max_page():
    assert parse_page('1000', max_page=50) == 50
    assert parse_page('50', max_page=50) == 50
    assert parse_page('49', max_page=50) == 49


def test_digit_run_beyond_int_conversion_limit_is_capped():
    assert parse_page('9' * 5000) == MAX_PAGE
    assert parse_page('-' + '9' * 5000) == 1


@pytest.mark.parametrize('page_size', [1, 24, 1000])
def test_huge_page_keeps_offset_in_64_bit_range(page_size: int):
    descriptor = build_query_descriptor(
        {'page': '99999999999999999999'}, whitelist=MOVIE_SORT_WHITELIST, page_size=page_size
    )
    assert descriptor.page == max_page_for(page_size)
    assert 0 <= descriptor.offset <= 2**63 - 1


def test_capped_page_round_trips():
    descriptor = _build(page='9' * 5000)
    assert _build(**descriptor_to_params(descriptor)) == descriptor


# ── Round trip ────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    'raw',
    [
        {},
        {'q': 'star', 'genre': 'Sci-Fi', 'sort': 'rating', 'order': 'desc', 'page': '4'},
        {'category': 'Drama', 'sort': 'bogus', 'order': 'DESC', 'page': '-1'},
        {'q': '', 'genre': '', 'page': 'x'},
    ],
)
def test_descriptor_round_trips_through_params(raw: dict[str, str]):
    descriptor = _build(**raw)
    assert _build(**descriptor_to_params(descriptor)) == descriptor


def test_descriptor_to_params_omits_empty_filters():
    params = descriptor_to_params(_build(sort='votes', order='desc', page='2'))
    assert params == {'sort': 'votes', 'order': 'desc', 'page': '2'}


def test_build_is_idempotent():
    raw = {'q': 'alien', 'genre': 'Horror', 'sort': 'releaseDate', 'order': 'desc', 'page': '2'}
    assert _build(**raw) == _build(**raw)
