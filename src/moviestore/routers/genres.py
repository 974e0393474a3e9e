"""Genre lookup endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from moviestore.db import get_session
from moviestore.queries import list_genres as query_list_genres
from moviestore.schemas.response import GenreResponse

router = APIRouter(prefix='/genres', tags=['genres'])


@router.get('', response_model=list[GenreResponse])
def list_genres(session: Session = Depends(get_session)) -> list[GenreResponse]:
    """All genres by name, for the catalog filter."""
    return [GenreResponse.from_model(g) for g in query_list_genres(session)]
