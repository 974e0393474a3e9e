"""Shared FastAPI dependencies for the moviestore API."""

from __future__ import annotations

import logging
import secrets

from fastapi import Depends, Header, HTTPException, Path
from sqlmodel import Session

from moviestore.config import Settings, get_settings
from moviestore.db import get_session
from moviestore.models.catalog import Movie
from moviestore.models.orders import Order
from moviestore.queries import get_movie as query_get_movie
from moviestore.queries import get_order as query_get_order

logger = logging.getLogger(__name__)


def require_admin(
    x_admin_token: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject the request unless the X-Admin-Token header matches the configured token."""
    if x_admin_token is None:
        raise HTTPException(status_code=401, detail='Admin token required.')
    if not secrets.compare_digest(x_admin_token.encode(), settings.admin_token.encode()):
        logger.warning('Rejected admin request with an invalid token')
        raise HTTPException(status_code=403, detail='Invalid admin token.')


def get_movie(
    movie_id: int = Path(),
    session: Session = Depends(get_session),
) -> Movie:
    """Resolve movie_id path param to a Movie, or 404."""
    movie = query_get_movie(session, movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail='Movie not found.')
    return movie


def get_order(
    order_id: int = Path(),
    session: Session = Depends(get_session),
) -> Order:
    """Resolve order_id path param to an Order, or 404."""
    order = query_get_order(session, order_id)
    if not order:
        raise HTTPException(status_code=404, detail='Order not found.')
    return order
