from datetime import date

import sqlalchemy as sa
from sqlmodel import Field, Relationship, SQLModel

from moviestore.models.types import CrewRole


class MovieGenreLink(SQLModel, table=True):
    __tablename__ = 'movie_genre'  # type: ignore[assignment]

    movie_id: int | None = Field(default=None, foreign_key='movie.id', primary_key=True)
    genre_id: int | None = Field(default=None, foreign_key='genre.id', primary_key=True)


class Genre(SQLModel, table=True):
    __tablename__ = 'genre'  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(sa_column_kwargs={'unique': True, 'index': True})

    movies: list['Movie'] = Relationship(back_populates='genres', link_model=MovieGenreLink)


class Movie(SQLModel, table=True):
    __tablename__ = 'movie'  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    title: str = Field(index=True)
    description: str | None = None
    price: float = Field(default=0, ge=0)
    release_date: date | None = None
    rating: float | None = None
    votes: int = 0
    poster_path: str | None = None
    runtime_min: int | None = None

    genres: list[Genre] = Relationship(back_populates='movies', link_model=MovieGenreLink)
    credits: list['MovieCrew'] = Relationship(
        back_populates='movie',
        sa_relationship_kwargs={'cascade': 'all, delete-orphan'},
    )


class Person(SQLModel, table=True):
    __tablename__ = 'person'  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    biography: str | None = None
    birth_date: date | None = None
    profile_path: str | None = None

    credits: list['MovieCrew'] = Relationship(
        back_populates='person',
        sa_relationship_kwargs={'cascade': 'all, delete-orphan'},
    )


class MovieCrew(SQLModel, table=True):
    """A person credited on a movie. ``job`` and ``character`` are part of the identity."""

    __tablename__ = 'movie_crew'  # type: ignore[assignment]
    __table_args__ = (sa.Index('ix_movie_crew_identity', 'movie_id', 'person_id', 'role'),)

    id: int | None = Field(default=None, primary_key=True)
    movie_id: int = Field(foreign_key='movie.id')
    person_id: int = Field(foreign_key='person.id')
    role: CrewRole
    job: str | None = None
    character: str | None = None
    order: int | None = None  # billing position

    movie: Movie = Relationship(back_populates='credits')
    person: Person = Relationship(back_populates='credits')
