"""Database query functions. Return SQLModel objects; callers handle transformation."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from moviestore.listing import QueryDescriptor, SortDirection
from moviestore.models.catalog import Genre, Movie, MovieCrew, Person
from moviestore.models.orders import Order, OrderItem, User
from moviestore.models.types import CrewRole, OrderStatus

logger = logging.getLogger(__name__)

# Internal sort fields the catalog listing may order by.
SORTABLE_MOVIE_COLUMNS: dict[str, Any] = {
    'title': Movie.title,
    'release_date': Movie.release_date,
    'rating': Movie.rating,
    'votes': Movie.votes,
}

# ── Catalog ───────────────────────────────────────────────────────────────────


def _movie_filters(descriptor: QueryDescriptor) -> list[Any]:
    filters: list[Any] = []
    if descriptor.search_text:
        filters.append(col(Movie.title).icontains(descriptor.search_text, autoescape=True))
    if descriptor.category:
        filters.append(col(Movie.genres).any(Genre.name == descriptor.category))
    return filters


def list_movies(session: Session, descriptor: QueryDescriptor) -> tuple[list[Movie], int]:
    """Return one page of movies matching ``descriptor`` and the total match count."""
    column = SORTABLE_MOVIE_COLUMNS.get(descriptor.sort_field)
    if column is None:
        msg = f'Unsupported sort field {descriptor.sort_field!r}'
        raise ValueError(msg)

    filters = _movie_filters(descriptor)
    if descriptor.sort_direction is SortDirection.desc:
        ordering = (col(column).desc(), col(Movie.id).desc())
    else:
        ordering = (col(column).asc(), col(Movie.id).asc())

    stmt = (
        select(Movie)
        .where(*filters)
        .order_by(*ordering)
        .offset(descriptor.offset)
        .limit(descriptor.limit)
    )
    movies = list(session.exec(stmt).all())

    total = session.exec(select(func.count()).select_from(Movie).where(*filters)).one()
    logger.debug(
        'Listed %d of %d movies (q=%r, genre=%r, sort=%s %s, page=%d)',
        len(movies),
        total,
        descriptor.search_text,
        descriptor.category,
        descriptor.sort_field,
        descriptor.sort_direction,
        descriptor.page,
    )
    return movies, total


def get_movie(session: Session, movie_id: int) -> Movie | None:
    """Return a single movie by ID, or None."""
    return session.get(Movie, movie_id)


def list_movie_credits(session: Session, movie_id: int) -> list[MovieCrew]:
    """Return a movie's credits: cast before crew, then billing order (unset last)."""
    return list(
        session.exec(
            select(MovieCrew)
            .where(MovieCrew.movie_id == movie_id)
            .options(selectinload(MovieCrew.person))  # type: ignore[arg-type]
            .order_by(
                col(MovieCrew.role),
                col(MovieCrew.order).is_(None),
                col(MovieCrew.order),
                col(MovieCrew.id),
            )
        ).all()
    )


def list_genres(session: Session) -> list[Genre]:
    """Return all genres ordered by name."""
    return list(session.exec(select(Genre).order_by(col(Genre.name))).all())


# ── Orders ────────────────────────────────────────────────────────────────────


def get_user(session: Session, user_id: uuid.UUID) -> User | None:
    """Return a single user by ID."""
    return session.get(User, user_id)


def list_orders(session: Session) -> list[Order]:
    """Return all orders newest-first, with their customer loaded."""
    return list(
        session.exec(
            select(Order)
            .options(selectinload(Order.user))  # type: ignore[arg-type]
            .order_by(col(Order.created_at).desc(), col(Order.id).desc())
        ).all()
    )


def list_user_orders(session: Session, user_id: uuid.UUID) -> list[Order]:
    """Return a user's orders newest-first, with items and their movies loaded."""
    items_with_movies = selectinload(Order.items).selectinload(OrderItem.movie)  # type: ignore[arg-type]
    return list(
        session.exec(
            select(Order)
            .where(Order.user_id == user_id)
            .options(items_with_movies)
            .order_by(col(Order.created_at).desc(), col(Order.id).desc())
        ).all()
    )


def get_order(session: Session, order_id: int) -> Order | None:
    """Return a single order by ID."""
    return session.get(Order, order_id)


def create_order(session: Session, *, user_id: uuid.UUID) -> Order:
    """Create an empty pending order for a user, commit, and return it."""
    order = Order(
        user_id=user_id,
        total_amount=0,
        status=OrderStatus.pending,
        order_date=datetime.now(UTC),
    )
    session.add(order)
    session.commit()
    session.refresh(order)
    logger.info('Created order %s for user %s', order.id, user_id)
    return order


def delete_order(session: Session, order: Order) -> None:
    """Delete an order and its items, and commit."""
    order_id = order.id
    session.delete(order)
    session.commit()
    logger.info('Deleted order %s', order_id)


def update_order_status(session: Session, order: Order, status: OrderStatus) -> Order:
    """Update an order's status, commit, and return it."""
    previous = order.status
    order.status = status
    session.add(order)
    session.commit()
    session.refresh(order)
    logger.info('Order %s status %s -> %s', order.id, previous, status)
    return order


def _recompute_order_total(session: Session, order_id: int) -> None:
    items = session.exec(select(OrderItem).where(OrderItem.order_id == order_id)).all()
    order = session.get(Order, order_id)
    assert order is not None
    order.total_amount = sum(item.price_at_purchase * item.quantity for item in items)
    session.add(order)


def add_order_item(session: Session, order: Order, movie: Movie, *, quantity: int) -> Order:
    """Add a movie to an order at its current price and recompute the total."""
    assert order.id is not None and movie.id is not None
    item = OrderItem(
        order_id=order.id,
        movie_id=movie.id,
        quantity=quantity,
        price_at_purchase=movie.price,
    )
    session.add(item)
    session.flush()
    _recompute_order_total(session, order.id)
    session.commit()
    session.refresh(order)
    logger.info('Added %d x movie %s to order %s', quantity, movie.id, order.id)
    return order


def get_order_item(session: Session, item_id: int) -> OrderItem | None:
    """Return a single order item by ID."""
    return session.get(OrderItem, item_id)


def remove_order_item(session: Session, order: Order, item: OrderItem) -> Order:
    """Remove an item from an order and recompute the total."""
    assert order.id is not None
    item_id = item.id
    order.items.remove(item)
    session.flush()
    _recompute_order_total(session, order.id)
    session.commit()
    session.refresh(order)
    logger.info('Removed item %s from order %s', item_id, order.id)
    return order


# ── Cast & crew ───────────────────────────────────────────────────────────────


def get_person(session: Session, person_id: int) -> Person | None:
    """Return a single person by ID."""
    return session.get(Person, person_id)


def _matches(column: Any, value: str | None) -> Any:
    return column.is_(None) if value is None else column == value


def find_credit(
    session: Session,
    *,
    movie_id: int,
    person_id: int,
    role: CrewRole,
    job: str | None,
    character: str | None,
) -> MovieCrew | None:
    """Find a credit by its full identity. Null ``job``/``character`` match only null."""
    return session.exec(
        select(MovieCrew).where(
            MovieCrew.movie_id == movie_id,
            MovieCrew.person_id == person_id,
            MovieCrew.role == role,
            _matches(col(MovieCrew.job), job),
            _matches(col(MovieCrew.character), character),
        )
    ).first()


def upsert_credit(
    session: Session,
    *,
    movie_id: int,
    person_id: int,
    role: CrewRole,
    job: str | None,
    character: str | None,
    order: int | None,
) -> tuple[MovieCrew, bool]:
    """Create a credit, or update the billing order of an identical one.

    Returns the credit and whether it was newly created. An existing credit
    keeps its billing order when ``order`` is None.
    """
    credit = find_credit(
        session,
        movie_id=movie_id,
        person_id=person_id,
        role=role,
        job=job,
        character=character,
    )
    created = credit is None
    if credit is None:
        credit = MovieCrew(
            movie_id=movie_id,
            person_id=person_id,
            role=role,
            job=job,
            character=character,
            order=order,
        )
    elif order is not None:
        credit.order = order

    session.add(credit)
    session.commit()
    session.refresh(credit)
    logger.info(
        '%s credit %s: person %s on movie %s as %s',
        'Created' if created else 'Updated',
        credit.id,
        person_id,
        movie_id,
        role,
    )
    return credit, created


def delete_credit(session: Session, credit: MovieCrew) -> None:
    """Delete a credit and commit."""
    credit_id = credit.id
    session.delete(credit)
    session.commit()
    logger.info('Deleted credit %s', credit_id)
