from __future__ import annotations

import os

os.environ.setdefault('MOVIESTORE_DATABASE_URL', 'sqlite://')

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

import moviestore.models  # noqa: E402, F401  registers all tables on metadata
from moviestore.config import Settings, get_settings  # noqa: E402
from moviestore.db import get_session  # noqa: E402
from moviestore.main import app  # noqa: E402
from moviestore.models.catalog import Genre, Movie, MovieCrew, Person  # noqa: E402
from moviestore.models.orders import Order, User  # noqa: E402
from moviestore.models.types import CrewRole, OrderStatus  # noqa: E402

ADMIN_TOKEN = 'test-admin-token'
ADMIN_HEADERS = {'X-Admin-Token': ADMIN_TOKEN}


@pytest.fixture
def session() -> Generator[Session, None, None]:
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture
def settings() -> Settings:
    return Settings(admin_token=ADMIN_TOKEN, page_size=24, pagination_siblings=2)


@pytest.fixture
def client(session: Session, settings: Settings) -> Generator[TestClient, None, None]:
    def _override_get_session() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = _override_get_session
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


# ── Factory functions ─────────────────────────────────────────────────────────


def create_genre(session: Session, **overrides: Any) -> Genre:
    defaults: dict[str, Any] = {'name': 'Drama'}
    defaults.update(overrides)
    genre = Genre(**defaults)
    session.add(genre)
    session.commit()
    session.refresh(genre)
    return genre


def create_movie(session: Session, *, genres: list[Genre] | None = None, **overrides: Any) -> Movie:
    defaults: dict[str, Any] = {
        'title': 'Test Movie',
        'price': 9.99,
        'votes': 0,
    }
    defaults.update(overrides)
    movie = Movie(**defaults)
    movie.genres = list(genres or [])
    session.add(movie)
    session.commit()
    session.refresh(movie)
    return movie


def create_person(session: Session, **overrides: Any) -> Person:
    defaults: dict[str, Any] = {'name': 'Test Person'}
    defaults.update(overrides)
    person = Person(**defaults)
    session.add(person)
    session.commit()
    session.refresh(person)
    return person


def create_credit(session: Session, movie: Movie, person: Person, **overrides: Any) -> MovieCrew:
    defaults: dict[str, Any] = {
        'movie_id': movie.id,
        'person_id': person.id,
        'role': CrewRole.cast,
        'job': None,
        'character': None,
        'order': None,
    }
    defaults.update(overrides)
    credit = MovieCrew(**defaults)
    session.add(credit)
    session.commit()
    session.refresh(credit)
    return credit


def create_user(session: Session, **overrides: Any) -> User:
    defaults: dict[str, Any] = {
        'email': f'user-{os.urandom(4).hex()}@example.com',
        'name': 'Test User',
    }
    defaults.update(overrides)
    user = User(**defaults)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def create_order(session: Session, **overrides: Any) -> Order:
    if 'user_id' not in overrides:
        overrides['user_id'] = create_user(session).id
    defaults: dict[str, Any] = {
        'status': OrderStatus.pending,
        'total_amount': 0,
    }
    defaults.update(overrides)
    order = Order(**defaults)
    session.add(order)
    session.commit()
    session.refresh(order)
    return order
