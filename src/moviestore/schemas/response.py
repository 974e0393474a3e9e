"""Response schemas for the moviestore API."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import date, datetime
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, Field

from moviestore.models.types import CrewRole, OrderStatus
from moviestore.pagination import PageNumber, PaginationPlan, page_href

if TYPE_CHECKING:
    from moviestore.listing import QueryDescriptor
    from moviestore.models.catalog import Genre as GenreModel
    from moviestore.models.catalog import Movie as MovieModel
    from moviestore.models.catalog import MovieCrew as MovieCrewModel
    from moviestore.models.orders import Order as OrderModel
    from moviestore.models.orders import OrderItem as OrderItemModel


def _by_name(genre: GenreModel) -> str:
    return genre.name


def _by_id(item: OrderItemModel) -> int:
    return item.id or 0


# ── Catalog ───────────────────────────────────────────────────────────────────


class GenreResponse(BaseModel):
    id: int
    name: str

    @staticmethod
    def from_model(genre: GenreModel) -> GenreResponse:
        assert genre.id is not None
        return GenreResponse(id=genre.id, name=genre.name)


class MovieSummary(BaseModel):
    """A movie card in the catalog grid."""

    id: int
    title: str
    price: float
    release_date: date | None
    rating: float | None
    votes: int
    poster_path: str | None

    @staticmethod
    def from_model(movie: MovieModel) -> MovieSummary:
        assert movie.id is not None
        return MovieSummary(
            id=movie.id,
            title=movie.title,
            price=movie.price,
            release_date=movie.release_date,
            rating=movie.rating,
            votes=movie.votes,
            poster_path=movie.poster_path,
        )


class CreditResponse(BaseModel):
    """A person credited on a movie."""

    id: int
    movie_id: int
    person_id: int
    person_name: str
    role: CrewRole
    job: str | None
    character: str | None
    order: int | None = Field(description='Billing position; null when unranked.')

    @staticmethod
    def from_model(credit: MovieCrewModel) -> CreditResponse:
        assert credit.id is not None
        return CreditResponse(
            id=credit.id,
            movie_id=credit.movie_id,
            person_id=credit.person_id,
            person_name=credit.person.name,
            role=credit.role,
            job=credit.job,
            character=credit.character,
            order=credit.order,
        )


class MovieDetail(MovieSummary):
    """Full movie page: summary fields plus genres and credits."""

    description: str | None
    runtime_min: int | None
    genres: list[GenreResponse]
    credits: list[CreditResponse] = Field(description='Cast before crew, then billing order.')

    @staticmethod
    def from_model_with_credits(
        movie: MovieModel, credits: Iterable[MovieCrewModel]
    ) -> MovieDetail:
        summary = MovieSummary.from_model(movie)
        return MovieDetail(
            **summary.model_dump(),
            description=movie.description,
            runtime_min=movie.runtime_min,
            genres=[GenreResponse.from_model(g) for g in sorted(movie.genres, key=_by_name)],
            credits=[CreditResponse.from_model(c) for c in credits],
        )


# ── Listing & pagination ──────────────────────────────────────────────────────


class ListingQuery(BaseModel):
    """The canonical query the listing was produced from."""

    q: str
    genre: str | None
    sort: str = Field(description='Resolved public sort key.')
    order: Literal['asc', 'desc']
    page: int
    page_size: int

    @staticmethod
    def from_descriptor(descriptor: QueryDescriptor) -> ListingQuery:
        return ListingQuery(
            q=descriptor.search_text,
            genre=descriptor.category,
            sort=descriptor.sort_key,
            order=descriptor.sort_direction.value,
            page=descriptor.page,
            page_size=descriptor.page_size,
        )


class PageLink(BaseModel):
    kind: Literal['page'] = 'page'
    number: int
    is_current: bool
    href: str


class PageEllipsis(BaseModel):
    kind: Literal['ellipsis'] = 'ellipsis'


PaginationItem = Annotated[PageLink | PageEllipsis, Field(discriminator='kind')]


class PageTarget(BaseModel):
    """A previous/next control. Disabled controls still point at an in-range page."""

    page: int
    href: str
    disabled: bool


class PaginationResponse(BaseModel):
    total_pages: int
    items: list[PaginationItem] = Field(description='Empty when there is at most one page.')
    previous: PageTarget
    next: PageTarget

    @staticmethod
    def from_plan(
        plan: PaginationPlan, params: Iterable[tuple[str, str | None]]
    ) -> PaginationResponse:
        params = list(params)
        items: list[PageLink | PageEllipsis] = []
        for token in plan.items:
            if isinstance(token, PageNumber):
                items.append(
                    PageLink(
                        number=token.number,
                        is_current=token.is_current,
                        href=page_href(params, token.number),
                    )
                )
            else:
                items.append(PageEllipsis())
        return PaginationResponse(
            total_pages=plan.total_pages,
            items=items,
            previous=PageTarget(
                page=plan.previous_target,
                href=page_href(params, plan.previous_target),
                disabled=plan.previous_disabled,
            ),
            next=PageTarget(
                page=plan.next_target,
                href=page_href(params, plan.next_target),
                disabled=plan.next_disabled,
            ),
        )


class MovieListResponse(BaseModel):
    """One page of the catalog plus everything needed to render its pagination."""

    items: list[MovieSummary]
    total_count: int
    query: ListingQuery
    pagination: PaginationResponse


# ── Orders ────────────────────────────────────────────────────────────────────


class OrderItemResponse(BaseModel):
    id: int
    movie_id: int
    movie_title: str
    quantity: int
    price_at_purchase: float
    line_total: float

    @staticmethod
    def from_model(item: OrderItemModel) -> OrderItemResponse:
        assert item.id is not None
        return OrderItemResponse(
            id=item.id,
            movie_id=item.movie_id,
            movie_title=item.movie.title,
            quantity=item.quantity,
            price_at_purchase=item.price_at_purchase,
            line_total=item.price_at_purchase * item.quantity,
        )


class OrderSummary(BaseModel):
    """An order row in the admin list."""

    id: int
    user_id: uuid.UUID
    customer_email: str | None
    status: OrderStatus
    order_date: datetime
    total_amount: float

    @staticmethod
    def from_model(order: OrderModel) -> OrderSummary:
        assert order.id is not None
        return OrderSummary(
            id=order.id,
            user_id=order.user_id,
            customer_email=order.user.email if order.user else None,
            status=order.status,
            order_date=order.order_date,
            total_amount=order.total_amount,
        )


class OrderDetail(OrderSummary):
    items: list[OrderItemResponse]

    @staticmethod
    def from_model_with_items(order: OrderModel) -> OrderDetail:
        summary = OrderSummary.from_model(order)
        return OrderDetail(
            **summary.model_dump(),
            items=[OrderItemResponse.from_model(i) for i in sorted(order.items, key=_by_id)],
        )
