"""Request body schemas for the moviestore API."""

from __future__ import annotations

import uuid

from pydantic import BaseModel, Field, field_validator

from moviestore.models.types import CrewRole, OrderStatus

# ── Orders ────────────────────────────────────────────────────────────────────


class CreateOrderRequest(BaseModel):
    """Open an empty pending order for a customer."""

    user_id: uuid.UUID = Field(description='Customer the order belongs to.')


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus = Field(description='New fulfilment status.')


class AddOrderItemRequest(BaseModel):
    """Add a movie to an order at its current price."""

    movie_id: int = Field(description='Movie to add.')
    quantity: int = Field(default=1, ge=1, description='Number of copies. Defaults to 1.')


# ── Cast & crew ───────────────────────────────────────────────────────────────


class CreditIdentity(BaseModel):
    """Identifies a credit. Blank ``job``/``character`` are treated as absent."""

    person_id: int
    movie_id: int
    role: CrewRole
    job: str | None = Field(default=None, description='Crew job, e.g. "Director".')
    character: str | None = Field(default=None, description='Character played (cast only).')

    @field_validator('job', 'character')
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class LinkCreditRequest(CreditIdentity):
    """Link a person to a movie. Re-linking an existing credit updates its billing order."""

    order: int | None = Field(default=None, description='Billing position; lower comes first.')
