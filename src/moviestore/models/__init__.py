from __future__ import annotations

from moviestore.models.catalog import Genre, Movie, MovieCrew, MovieGenreLink, Person
from moviestore.models.orders import Order, OrderItem, User
from moviestore.models.types import CrewRole, OrderStatus

__all__ = [
    # Table models
    'Genre',
    'Movie',
    'MovieCrew',
    'MovieGenreLink',
    'Order',
    'OrderItem',
    'Person',
    'User',
    # Enums
    'CrewRole',
    'OrderStatus',
]
