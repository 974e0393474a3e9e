"""Catalog browsing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from moviestore.config import Settings, get_settings
from moviestore.db import get_session
from moviestore.dependencies import get_movie
from moviestore.listing import MOVIE_SORT_WHITELIST, build_query_descriptor
from moviestore.models.catalog import Movie
from moviestore.pagination import build_pagination_plan
from moviestore.queries import list_movie_credits
from moviestore.queries import list_movies as query_list_movies
from moviestore.schemas.common import listing_params
from moviestore.schemas.response import (
    ListingQuery,
    MovieDetail,
    MovieListResponse,
    MovieSummary,
    PaginationResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/movies', tags=['movies'])


@router.get('', response_model=MovieListResponse)
def list_movies(
    raw_params: dict[str, str | None] = Depends(listing_params),
    settings: Settings = Depends(get_settings),
    session: Session = Depends(get_session),
) -> MovieListResponse:
    """Search, filter, sort and paginate the catalog.

    Malformed parameters fall back to defaults: page 1, title ascending, no filter.
    """
    descriptor = build_query_descriptor(
        raw_params,
        whitelist=MOVIE_SORT_WHITELIST,
        page_size=settings.page_size,
    )
    try:
        movies, total_count = query_list_movies(session, descriptor)
    except SQLAlchemyError:
        logger.exception('Catalog listing query failed')
        raise HTTPException(status_code=503, detail='Catalog is temporarily unavailable.') from None

    plan = build_pagination_plan(
        total_count,
        descriptor.page_size,
        descriptor.page,
        settings.pagination_siblings,
        min_ellipsis_gap=settings.pagination_min_ellipsis_gap,
    )
    return MovieListResponse(
        items=[MovieSummary.from_model(m) for m in movies],
        total_count=total_count,
        query=ListingQuery.from_descriptor(descriptor),
        pagination=PaginationResponse.from_plan(plan, raw_params.items()),
    )


@router.get('/{movie_id}', response_model=MovieDetail)
def get_movie_detail(
    movie: Movie = Depends(get_movie),
    session: Session = Depends(get_session),
) -> MovieDetail:
    """Movie page with genres and credits."""
    assert movie.id is not None
    credits = list_movie_credits(session, movie.id)
    return MovieDetail.from_model_with_credits(movie, credits)
