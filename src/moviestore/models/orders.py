import uuid
from datetime import UTC, datetime

from sqlmodel import Field, Relationship, SQLModel

from moviestore.models.types import OrderStatus


def _utcnow() -> datetime:
    return datetime.now(UTC)


class User(SQLModel, table=True):
    __tablename__ = 'user_account'  # type: ignore[assignment]

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(sa_column_kwargs={'unique': True, 'index': True})
    name: str | None = None

    orders: list['Order'] = Relationship(back_populates='user')


class Order(SQLModel, table=True):
    __tablename__ = 'customer_order'  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key='user_account.id', index=True)
    total_amount: float = 0
    status: OrderStatus = OrderStatus.pending
    order_date: datetime = Field(default_factory=_utcnow)
    created_at: datetime = Field(default_factory=_utcnow)

    user: 'User' = Relationship(back_populates='orders')
    items: list['OrderItem'] = Relationship(
        back_populates='order',
        sa_relationship_kwargs={'cascade': 'all, delete-orphan'},
    )


class OrderItem(SQLModel, table=True):
    __tablename__ = 'order_item'  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key='customer_order.id', index=True)
    movie_id: int = Field(foreign_key='movie.id')
    quantity: int = 1
    price_at_purchase: float

    order: 'Order' = Relationship(back_populates='items')
    movie: 'Movie' = Relationship()


# Avoid circular imports; resolved at runtime by SQLModel.
from moviestore.models.catalog import Movie  # noqa: E402

__all__ = ['Order', 'OrderItem', 'User', 'Movie']
