"""Order administration endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from moviestore.db import get_session
from moviestore.dependencies import get_order, require_admin
from moviestore.models.orders import Order
from moviestore.queries import (
    add_order_item,
    get_movie,
    get_order_item,
    get_user,
    list_orders,
    list_user_orders,
    remove_order_item,
    update_order_status,
)
from moviestore.queries import (
    create_order as query_create_order,
)
from moviestore.queries import (
    delete_order as query_delete_order,
)
from moviestore.schemas.request import (
    AddOrderItemRequest,
    CreateOrderRequest,
    UpdateOrderStatusRequest,
)
from moviestore.schemas.response import OrderDetail, OrderSummary

router = APIRouter(prefix='/admin', tags=['orders'], dependencies=[Depends(require_admin)])


@router.get('/orders', response_model=list[OrderSummary])
def list_all_orders(session: Session = Depends(get_session)) -> list[OrderSummary]:
    """All orders, newest first."""
    return [OrderSummary.from_model(o) for o in list_orders(session)]


@router.get('/users/{user_id}/orders', response_model=list[OrderDetail])
def list_orders_for_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
) -> list[OrderDetail]:
    """A customer's orders with their items, newest first."""
    if not get_user(session, user_id):
        raise HTTPException(status_code=404, detail='User not found.')
    return [OrderDetail.from_model_with_items(o) for o in list_user_orders(session, user_id)]


@router.post('/orders', response_model=OrderDetail, status_code=201)
def create_order(
    body: CreateOrderRequest,
    session: Session = Depends(get_session),
) -> OrderDetail:
    """Open an empty pending order for a customer."""
    if not get_user(session, body.user_id):
        raise HTTPException(status_code=404, detail='User not found.')
    order = query_create_order(session, user_id=body.user_id)
    return OrderDetail.from_model_with_items(order)


@router.get('/orders/{order_id}', response_model=OrderDetail)
def get_order_detail(order: Order = Depends(get_order)) -> OrderDetail:
    """Order with customer and line items."""
    return OrderDetail.from_model_with_items(order)


@router.delete('/orders/{order_id}', status_code=204)
def delete_order(
    order: Order = Depends(get_order),
    session: Session = Depends(get_session),
) -> Response:
    """Delete an order and its items."""
    query_delete_order(session, order)
    return Response(status_code=204)


@router.patch('/orders/{order_id}/status', response_model=OrderDetail)
def patch_order_status(
    body: UpdateOrderStatusRequest,
    order: Order = Depends(get_order),
    session: Session = Depends(get_session),
) -> OrderDetail:
    """Move an order to a new fulfilment status."""
    order = update_order_status(session, order, body.status)
    return OrderDetail.from_model_with_items(order)


@router.post('/orders/{order_id}/items', response_model=OrderDetail, status_code=201)
def post_order_item(
    body: AddOrderItemRequest,
    order: Order = Depends(get_order),
    session: Session = Depends(get_session),
) -> OrderDetail:
    """Add a movie at its current price and recompute the order total."""
    movie = get_movie(session, body.movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail='Movie not found.')
    order = add_order_item(session, order, movie, quantity=body.quantity)
    return OrderDetail.from_model_with_items(order)


@router.delete('/orders/{order_id}/items/{item_id}', response_model=OrderDetail)
def delete_order_item(
    item_id: int,
    order: Order = Depends(get_order),
    session: Session = Depends(get_session),
) -> OrderDetail:
    """Remove a line item and recompute the order total."""
    item = get_order_item(session, item_id)
    if not item or item.order_id != order.id:
        raise HTTPException(status_code=404, detail='Order item not found in this order.')
    order = remove_order_item(session, order, item)
    return OrderDetail.from_model_with_items(order)
